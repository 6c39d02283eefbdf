"""
Collaborators of the onboarding form.

The form does not own any transport. Hosts supply an identity provider that
performs the actual sign-up and sign-in, an account-linking provider that
takes over once a new user exists, and a navigator that leaves the form after
a sign-in. Provider failures must be raised as
:class:`onboarding.exceptions.AuthError`.
"""

from typing import Optional, Protocol

from onboarding.domain import AuthSession, Identity, SignInCredentials, \
    SignUpProfile


class IdentityProvider(Protocol):
    """Creates and authenticates users."""

    async def sign_up(self, profile: SignUpProfile) -> Optional[Identity]:
        """Create a user from ``profile``."""

    async def sign_in(self, credentials: SignInCredentials) \
            -> Optional[AuthSession]:
        """Authenticate with an email address and password."""


class LinkProvider(Protocol):
    """Runs its own account-linking protocol for an authenticated user."""

    def open(self, identity: Identity, variant: str) -> None:
        """Start linking an external account for ``identity``."""


class Navigator(Protocol):
    """Moves the user away from the form."""

    def go_home(self) -> None:
        """Leave the form for the home page."""
