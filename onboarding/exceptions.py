"""Exceptions raised by the onboarding form and its collaborators."""


class PreconditionError(RuntimeError):
    """An operation was called in a state that does not allow it."""


class UnknownField(PreconditionError, KeyError):
    """The field is not part of the active schema."""


class AuthError(RuntimeError):
    """The identity provider rejected or failed a sign-in or sign-up."""
