"""
Form session: values, per-field validation and submission status.

A :class:`FormSession` is created for one :class:`.FlowMode` and starts in
:class:`.Editing`. Field edits are validated one field at a time for quick
feedback; :meth:`FormSession.submit` checks the whole schema, assembles the
mode-specific payload (dates rewritten in :data:`.config.DATE_FORMAT`) and
locks the form in :class:`.Submitting`. The
orchestrator then settles the session with :meth:`FormSession.fail`,
:meth:`FormSession.authenticate` or :meth:`FormSession.redirect`.
"""

import logging
from typing import Dict, Optional, Tuple

from onboarding import schema
from onboarding.domain import AuthSession, Authenticated, EDITABLE_STATES, \
    Editing, Failed, FieldSpec, FlowMode, Identity, Redirected, \
    SessionState, SignInCredentials, SignUpProfile, SubmitRequest, \
    Submitting, ValidationResult
from onboarding.exceptions import PreconditionError, UnknownField
from onboarding.validation import cleaned_data, formdata, validate, \
    validate_form

logger = logging.getLogger(__name__)

PROFILE_FIELDS = {
    'first_name': 'firstName',
    'last_name': 'lastName',
    'address1': 'address1',
    'city': 'city',
    'state': 'state',
    'postal_code': 'postalCode',
    'date_of_birth': 'dateOfBirth',
    'ssn': 'ssn',
    'email': 'email',
    'password': 'password',
}
""":class:`.SignUpProfile` attributes and the form fields they come from."""


class FormSession:
    """Holds the state of one mounted sign-in or sign-up form."""

    def __init__(self, mode: FlowMode) -> None:
        self.generation = 0
        self.disposed = False
        self._mount(mode)

    def _mount(self, mode: FlowMode) -> None:
        self.mode = mode
        self.schema: Tuple[FieldSpec, ...] = schema.resolve(mode)
        self.values: Dict[str, str] = {}
        self.results: Dict[str, ValidationResult] = {}
        self.state: SessionState = Editing()

    @property
    def is_editable(self) -> bool:
        """Whether field edits are currently accepted."""
        return not self.disposed and isinstance(self.state, EDITABLE_STATES)

    @property
    def is_loading(self) -> bool:
        return isinstance(self.state, Submitting)

    @property
    def error(self) -> Optional[str]:
        """The failure message to display, if any."""
        return getattr(self.state, 'error', None)

    def spec(self, name: str) -> FieldSpec:
        """Get the spec for ``name`` in the active schema."""
        for spec in self.schema:
            if spec.name == name:
                return spec
        raise UnknownField(f'{name} is not a {self.mode.value} field')

    def set_field(self, name: str, value: str) -> Optional[ValidationResult]:
        """
        Update one field and revalidate it.

        Returns ``None`` without changing anything if the form is locked
        (submitting, or finished).
        """
        if not self.is_editable:
            logger.debug('Ignoring edit to %s in state %s', name,
                         type(self.state).__name__)
            return None
        spec = self.spec(name)
        if isinstance(self.state, Failed):
            self.state = Editing()
        self.values[name] = value
        result = validate(spec, value)
        self.results[name] = result
        return result

    def validate_all(self) -> Dict[str, ValidationResult]:
        """Validate every field in the schema and record the results."""
        results = validate_form(schema.form_class(self.mode), self.values)
        if self.is_editable:
            self.results.update(results)
        return results

    def can_submit(self) -> bool:
        """Whether :meth:`submit` is allowed right now."""
        if not self.is_editable:
            return False
        return all(result.valid for result
                   in validate_form(schema.form_class(self.mode),
                                    self.values).values())

    def submit(self) -> SubmitRequest:
        """Lock the form and assemble the request for the identity provider."""
        if not self.can_submit():
            raise PreconditionError(
                f'Cannot submit {self.mode.value} form in state'
                f' {type(self.state).__name__}'
            )
        form = schema.form_class(self.mode)(formdata(self.values))
        data = cleaned_data(form)
        if self.mode is FlowMode.SIGN_UP:
            payload = SignUpProfile(**{
                attr: data[name] for attr, name in PROFILE_FIELDS.items()
            })
        else:
            payload = SignInCredentials(email=data['email'],
                                        password=data['password'])
        request = SubmitRequest(self.mode, payload)
        self.state = Submitting(request)
        logger.debug('Submitting %s form', self.mode.value)
        return request

    def _settle(self, state: SessionState) -> None:
        if not isinstance(self.state, Submitting):
            raise PreconditionError(
                f'Cannot move to {type(state).__name__} from'
                f' {type(self.state).__name__}'
            )
        logger.debug('%s form is now %s', self.mode.value,
                     type(state).__name__)
        self.state = state

    def fail(self, error: str, cause: Optional[Exception] = None) -> None:
        """The submit failed; unlock the form with a message for display."""
        self._settle(Failed(error, cause))

    def authenticate(self, identity: Identity) -> None:
        """Sign-up succeeded; the form is finished."""
        self._settle(Authenticated(identity))

    def redirect(self, session: AuthSession) -> None:
        """Sign-in succeeded; the user leaves the form."""
        self._settle(Redirected(session))

    def reset(self, mode: Optional[FlowMode] = None) -> None:
        """Remount, optionally with a different mode; all values are lost."""
        self.generation += 1
        self.disposed = False
        self._mount(self.mode if mode is None else mode)
        logger.debug('Remounted as %s form', self.mode.value)

    def dispose(self) -> None:
        """Unmount; results that arrive later are discarded."""
        self.generation += 1
        self.disposed = True
