"""Resolves the field set for each :class:`.FlowMode`."""

from typing import Tuple, Type

from wtforms import Form

from onboarding.domain import FieldKind, FieldSpec, FlowMode
from onboarding.validation import build_form

CREDENTIALS: Tuple[FieldSpec, ...] = (
    FieldSpec('email', FieldKind.EMAIL, label='Email',
              placeholder='Enter your email'),
    FieldSpec('password', FieldKind.PASSWORD, label='Password',
              placeholder='Enter your password'),
)

PROFILE: Tuple[FieldSpec, ...] = (
    FieldSpec('firstName', FieldKind.TEXT, label='First Name',
              placeholder='Enter your first name'),
    FieldSpec('lastName', FieldKind.TEXT, label='Last Name',
              placeholder='Enter your last name'),
    FieldSpec('address1', FieldKind.TEXT, label='Address',
              placeholder='Enter your specific address'),
    FieldSpec('city', FieldKind.TEXT, label='City',
              placeholder='Enter your city'),
    FieldSpec('state', FieldKind.TEXT, label='State',
              placeholder='Example: NY'),
    FieldSpec('postalCode', FieldKind.TEXT, label='Postal Code',
              placeholder='Example: 11101'),
    FieldSpec('dateOfBirth', FieldKind.DATE, label='Date of Birth',
              placeholder='YYYY-MM-DD'),
    FieldSpec('ssn', FieldKind.SHORT_CODE, label='SSN',
              placeholder='Example: 1234'),
)

_SCHEMAS = {
    FlowMode.SIGN_IN: CREDENTIALS,
    FlowMode.SIGN_UP: PROFILE + CREDENTIALS,
}

_FORM_NAMES = {
    FlowMode.SIGN_IN: 'SignInForm',
    FlowMode.SIGN_UP: 'SignUpForm',
}


def resolve(mode: FlowMode) -> Tuple[FieldSpec, ...]:
    """Get the ordered fields that ``mode`` collects, all required."""
    return _SCHEMAS[mode]


def form_class(mode: FlowMode) -> Type[Form]:
    """Get the WTForms form class for ``mode``."""
    return build_form(resolve(mode), _FORM_NAMES[mode])
