"""Controllers for the onboarding form."""

from . import authentication, linking, view
