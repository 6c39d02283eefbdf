"""
Field validation for the onboarding form.

Each :class:`.FieldSpec` is turned into a WTForms field carrying the
validators for its :class:`.FieldKind`. A single value can be checked with
:func:`validate`, which runs that field's validator chain in isolation; the
whole form is checked by instantiating the form class from
:func:`build_form` and calling ``validate()`` on it.

Form classes are built from the password length, short-code pattern and
date format in :mod:`onboarding.config`, and cached per combination of those
values, so a change in configuration yields a freshly built class.
"""

import re
from datetime import date
from functools import lru_cache
from typing import Any, Dict, Mapping, NamedTuple, Optional, Tuple, Type

from werkzeug.datastructures import MultiDict
from wtforms import DateField, Form, PasswordField, StringField, validators
from wtforms.fields import Field

from onboarding import config
from onboarding.domain import FieldKind, FieldSpec, ValidationResult

REQUIRED = 'required'


class Policy(NamedTuple):
    """The configurable rules that form classes are built from."""

    password_min_length: int
    short_code_pattern: str
    date_format: str


def current_policy() -> Policy:
    """Read the policy from :mod:`onboarding.config`."""
    return Policy(config.PASSWORD_MIN_LENGTH, config.SHORT_CODE_PATTERN,
                  config.DATE_FORMAT)


def _kind_validators(kind: FieldKind, policy: Policy) -> list:
    if kind is FieldKind.EMAIL:
        return [validators.Email(message='not a valid email address')]
    if kind is FieldKind.PASSWORD:
        minimum = policy.password_min_length
        return [validators.Length(
            min=minimum, message=f'must be at least {minimum} characters'
        )]
    if kind is FieldKind.SHORT_CODE:
        # ASCII only, so that other scripts' digits are not accepted.
        return [validators.Regexp(policy.short_code_pattern, flags=re.ASCII,
                                  message='not a valid code')]
    return []


def make_field(spec: FieldSpec, policy: Policy) -> Any:
    """Build the unbound WTForms field for ``spec``."""
    label = spec.label or spec.name
    kinds = _kind_validators(spec.kind, policy)
    if not spec.required:
        presence = validators.Optional()
    elif spec.kind is FieldKind.DATE:
        # DataRequired would hide the parse error of a non-empty value.
        presence = validators.InputRequired(message=REQUIRED)
    else:
        presence = validators.DataRequired(message=REQUIRED)

    if spec.kind is FieldKind.DATE:
        return DateField(label, validators=[presence],
                         format=policy.date_format,
                         description=spec.placeholder)
    field_class = PasswordField if spec.kind is FieldKind.PASSWORD \
        else StringField
    return field_class(label, validators=[presence] + kinds,
                       description=spec.placeholder)


@lru_cache(maxsize=None)
def _build_form(specs: Tuple[FieldSpec, ...], name: str,
                policy: Policy) -> Type[Form]:
    attrs = {spec.name: make_field(spec, policy) for spec in specs}
    return type(name, (Form,), attrs)


def build_form(specs: Tuple[FieldSpec, ...],
               name: str = 'SchemaForm') -> Type[Form]:
    """Get a :class:`wtforms.Form` subclass with one field per spec."""
    return _build_form(tuple(specs), name, current_policy())


def formdata(values: Mapping[str, Optional[str]]) -> MultiDict:
    """Wrap raw values as form data, leaving absent values out."""
    return MultiDict({name: value for name, value in values.items()
                      if value is not None})


def field_result(field: Field) -> ValidationResult:
    """Read the outcome of a field that has already been validated."""
    if field.errors:
        return ValidationResult.invalid(field.errors[0])
    return ValidationResult.ok()


def cleaned_data(form: Form) -> Dict[str, str]:
    """Field values as strings, with dates rewritten in the form's format."""
    data = {}
    for field in form:
        if isinstance(field.data, date):
            data[field.name] = field.data.strftime(field.format[0])
        else:
            data[field.name] = field.data
    return data


def validate(spec: FieldSpec, raw_value: Optional[str]) -> ValidationResult:
    """Check a single value against its spec, independent of other fields."""
    form = build_form((spec,))(formdata({spec.name: raw_value}))
    field = form[spec.name]
    field.validate(form)
    return field_result(field)


def validate_form(form_cls: Type[Form],
                  values: Mapping[str, Optional[str]]) \
        -> Dict[str, ValidationResult]:
    """Check every field of ``form_cls`` at once, in declaration order."""
    form = form_cls(formdata(values))
    form.validate()
    return {field.name: field_result(field) for field in form}
