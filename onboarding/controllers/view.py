"""Display data for rendering the onboarding form."""

from typing import Any, Dict, Optional

from onboarding import config
from onboarding.controllers.linking import LinkingHandoff
from onboarding.domain import Authenticated, FieldKind, FlowMode
from onboarding.session import FormSession

TITLES = {FlowMode.SIGN_IN: 'Sign In', FlowMode.SIGN_UP: 'Sign Up'}

FOOTERS = {
    FlowMode.SIGN_IN: {'prompt': "Don't have an account?",
                       'label': 'Sign up', 'url': config.SIGN_UP_URL},
    FlowMode.SIGN_UP: {'prompt': 'Already have an account?',
                       'label': 'Sign in', 'url': config.SIGN_IN_URL},
}


def render(session: FormSession,
           handoff: Optional[LinkingHandoff] = None) -> Dict[str, Any]:
    """
    Build the template context for the current state of ``session``.

    Once the user is authenticated the form fields are replaced by the
    account-linking panel.
    """
    if isinstance(session.state, Authenticated):
        variant = handoff.variant if handoff else config.LINK_VARIANT
        return {
            'title': 'Link Account',
            'subtitle': 'Link your account to get started',
            'fields': [],
            'link': {'identity': session.state.identity, 'variant': variant},
        }

    fields = []
    for spec in session.schema:
        result = session.results.get(spec.name)
        fields.append({
            'name': spec.name,
            'label': spec.label,
            'placeholder': spec.placeholder,
            'type': 'password' if spec.kind is FieldKind.PASSWORD else 'text',
            'value': session.values.get(spec.name, ''),
            'error': result.reason if result else None,
        })
    title = TITLES[session.mode]
    return {
        'title': title,
        'subtitle': 'Please enter your details',
        'fields': fields,
        'error': session.error,
        'is_loading': session.is_loading,
        'submit_label': 'Processing...' if session.is_loading else title,
        'submit_disabled': not session.is_editable,
        'footer': FOOTERS[session.mode],
    }
