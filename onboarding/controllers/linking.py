"""Hands a newly created identity to the account-linking provider."""

import logging
from typing import Optional

from onboarding import config
from onboarding.domain import Identity
from onboarding.exceptions import PreconditionError
from onboarding.services.collaborators import LinkProvider

logger = logging.getLogger(__name__)


class LinkingHandoff:
    """Notification boundary between the form and account linking."""

    def __init__(self, provider: LinkProvider,
                 variant: Optional[str] = None) -> None:
        self.provider = provider
        self.variant = variant or config.LINK_VARIANT
        self.identity: Optional[Identity] = None

    def on_authenticated(self, identity: Identity) -> None:
        """Pass ``identity`` to the linking provider; allowed only once."""
        if self.identity is not None:
            raise PreconditionError(
                f'Identity {self.identity.user_id} was already handed off'
            )
        self.identity = identity
        logger.debug('Handing off %s for account linking', identity.user_id)
        self.provider.open(identity, self.variant)

    def reset(self) -> None:
        """Forget the handed-off identity, for a remounted form."""
        self.identity = None
