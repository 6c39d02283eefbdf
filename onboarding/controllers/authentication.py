"""
Controller for submitting the onboarding form.

The :class:`AuthOrchestrator` is the state machine around a
:class:`.FormSession`. On submit it locks the form, calls the identity
provider's ``sign_up`` or ``sign_in`` depending on the flow mode, and settles
the session:

- a new identity from ``sign_up`` moves the session to
  :class:`.Authenticated` and is handed to the :class:`.LinkingHandoff`;
- a session from ``sign_in`` moves it to :class:`.Redirected` and asks the
  navigator to go home;
- any failure moves it to :class:`.Failed`, which keeps the values and
  accepts edits so the user can try again. Nothing is retried
  automatically.

The provider call is the only point where the orchestrator waits. If the
form is reset or disposed while the call is outstanding, the result is
discarded when it arrives. Remount through :meth:`AuthOrchestrator.reset`,
which also clears the linking handoff so a later sign-up is handed off.
"""

import logging
from typing import Optional

from onboarding.controllers.linking import LinkingHandoff
from onboarding.domain import FlowMode, SessionState, SubmitRequest
from onboarding.exceptions import AuthError
from onboarding.services.collaborators import IdentityProvider, Navigator
from onboarding.session import FormSession

logger = logging.getLogger(__name__)

SIGN_IN_FAILED = 'Invalid email or password.'
SIGN_UP_FAILED = 'Could not create your account; please try again.'


class AuthOrchestrator:
    """Drives a :class:`.FormSession` through a sign-in or sign-up."""

    def __init__(self, session: FormSession, provider: IdentityProvider,
                 navigator: Navigator, handoff: LinkingHandoff) -> None:
        self.session = session
        self.provider = provider
        self.navigator = navigator
        self.handoff = handoff

    @property
    def state(self) -> SessionState:
        return self.session.state

    def reset(self, mode: Optional[FlowMode] = None) -> SessionState:
        """Remount the form, optionally in another mode, with a new handoff."""
        self.session.reset(mode)
        self.handoff.reset()
        return self.state

    async def on_submit(self) -> SessionState:
        """
        Handle the user pressing the submit button.

        Invalid forms are not submitted; every field is validated so that all
        inline errors are shown.
        """
        self.session.validate_all()
        if not self.session.can_submit():
            logger.debug('%s form is not valid', self.session.mode.value)
            return self.state
        return await self.submit()

    async def submit(self) -> SessionState:
        """
        Submit the form to the identity provider and settle the session.

        Raises
        ------
        :class:`.PreconditionError`
            If the form cannot be submitted in its current state.

        """
        request = self.session.submit()
        generation = self.session.generation
        try:
            result = await self._call_provider(request)
        except AuthError as e:
            logger.debug('%s failed: %s', request.mode.value, e)
            return self._fail(generation, request, e)
        except Exception as e:
            logger.exception('Error during %s', request.mode.value)
            return self._fail(generation, request, e)

        if self._is_stale(generation):
            return self.state
        if result is None:
            logger.debug('%s returned nothing', request.mode.value)
            return self._fail(
                generation, request,
                AuthError(f'{request.mode.value} returned no result')
            )

        if request.mode is FlowMode.SIGN_UP:
            self.session.authenticate(result)
            self.handoff.on_authenticated(result)
        else:
            self.session.redirect(result)
            self.navigator.go_home()
        return self.state

    async def _call_provider(self, request: SubmitRequest):
        if request.mode is FlowMode.SIGN_UP:
            return await self.provider.sign_up(request.payload)
        return await self.provider.sign_in(request.payload)

    def _fail(self, generation: int, request: SubmitRequest,
              cause: Exception) -> SessionState:
        if self._is_stale(generation):
            return self.state
        message = SIGN_UP_FAILED if request.mode is FlowMode.SIGN_UP \
            else SIGN_IN_FAILED
        self.session.fail(message, cause)
        return self.state

    def _is_stale(self, generation: int) -> bool:
        if self.session.disposed or generation != self.session.generation:
            logger.debug('Discarding result for a form that is gone')
            return True
        return False
