"""Defines the core data structures for the onboarding form."""

from enum import Enum
from typing import NamedTuple, Optional, Union


class FlowMode(Enum):
    """Which of the two supported flows governs the active schema."""

    SIGN_IN = 'sign-in'
    SIGN_UP = 'sign-up'


class FieldKind(Enum):
    """Kinds of input, each carrying its own validation rule."""

    TEXT = 'text'
    EMAIL = 'email'
    PASSWORD = 'password'
    DATE = 'date'
    SHORT_CODE = 'short_code'


class FieldSpec(NamedTuple):
    """A single field in the form schema for a :class:`FlowMode`."""

    name: str
    """Field name, as used in the submitted form values."""

    kind: FieldKind
    """Determines which rule the value is checked against."""

    required: bool = True

    label: str = ''
    """Human-readable label for the input."""

    placeholder: str = ''
    """Example text shown in an empty input."""


class ValidationResult(NamedTuple):
    """Outcome of checking one field value."""

    valid: bool
    reason: Optional[str] = None
    """Why the value was rejected; ``None`` when :attr:`valid`."""

    @classmethod
    def ok(cls) -> 'ValidationResult':
        """The value is acceptable."""
        return cls(True)

    @classmethod
    def invalid(cls, reason: str) -> 'ValidationResult':
        """The value is rejected for ``reason``."""
        return cls(False, reason)


class SignInCredentials(NamedTuple):
    """Payload for the identity provider's sign-in operation."""

    email: str
    password: str


class SignUpProfile(NamedTuple):
    """Payload for the identity provider's sign-up operation."""

    first_name: str
    last_name: str
    address1: str
    city: str
    state: str
    postal_code: str
    date_of_birth: str
    ssn: str
    email: str
    password: str


Payload = Union[SignInCredentials, SignUpProfile]


class SubmitRequest(NamedTuple):
    """A validated, mode-specific request ready for the identity provider."""

    mode: FlowMode
    payload: Payload


class Identity(NamedTuple):
    """Opaque handle for a newly created user."""

    user_id: str
    email: str = ''
    full_name: str = ''


class AuthSession(NamedTuple):
    """Handle returned by the identity provider after a sign-in."""

    session_id: str
    user_id: str = ''


class Editing(NamedTuple):
    """Values are mutable; the initial state."""

    error: Optional[str] = None


class Submitting(NamedTuple):
    """A request is in flight; values are locked."""

    request: SubmitRequest


class Failed(NamedTuple):
    """The last submit failed; editable, with a message for display."""

    error: str
    cause: Optional[Exception] = None


class Authenticated(NamedTuple):
    """Sign-up succeeded; the identity is handed off for account linking."""

    identity: Identity


class Redirected(NamedTuple):
    """Sign-in succeeded; the user is sent away from the form."""

    session: AuthSession


SessionState = Union[Editing, Submitting, Failed, Authenticated, Redirected]

EDITABLE_STATES = (Editing, Failed)
