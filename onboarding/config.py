"""Onboarding configuration."""
import os

#################### Validation policy ####################
PASSWORD_MIN_LENGTH = int(os.environ.get('PASSWORD_MIN_LENGTH', '8'))
"""Minimum number of characters in a password."""

SHORT_CODE_PATTERN = os.environ.get('SHORT_CODE_PATTERN', r'^[0-9]{4}\Z')
r"""Regex that the short SSN-like code must match, in ASCII mode.

The default accepts exactly four digits, e.g. ``1234``. Anchor with ``\Z``,
not ``$``, so that a trailing newline is rejected.
"""

DATE_FORMAT = os.environ.get('DATE_FORMAT', '%Y-%m-%d')
"""``strptime`` format for the date of birth, shown to users as
``YYYY-MM-DD``."""

#################### Navigation ####################
HOME_URL = os.environ.get('HOME_URL', '/')
"""Where the router sends the user after a successful sign-in."""

SIGN_IN_URL = os.environ.get('SIGN_IN_URL', '/sign-in')
SIGN_UP_URL = os.environ.get('SIGN_UP_URL', '/sign-up')
"""Targets of the footer link that switches between the two flows."""

#################### Account linking ####################
LINK_VARIANT = os.environ.get('LINK_VARIANT', 'primary')
"""Presentation variant passed to the account-linking provider."""

#################### Logging ####################
LOGLEVEL = int(os.environ.get('LOGLEVEL', 20))
"""Root log level used by :func:`onboarding.app_logging.setup_logger`."""
