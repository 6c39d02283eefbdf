"""Tests for :mod:`onboarding.controllers.authentication`."""

import asyncio
from unittest import IsolatedAsyncioTestCase, mock

from onboarding.controllers.authentication import AuthOrchestrator, \
    SIGN_IN_FAILED, SIGN_UP_FAILED
from onboarding.controllers.linking import LinkingHandoff
from onboarding.domain import AuthSession, Authenticated, Editing, Failed, \
    FlowMode, Identity, Redirected, SignInCredentials, SignUpProfile, \
    Submitting
from onboarding.exceptions import AuthError, PreconditionError
from onboarding.session import FormSession

PROFILE = {
    'firstName': 'Jane',
    'lastName': 'Doe',
    'address1': '123 Main St',
    'city': 'Ithaca',
    'state': 'NY',
    'postalCode': '14850',
    'dateOfBirth': '1990-01-31',
    'ssn': '1234',
    'email': 'jane@example.com',
    'password': 'thepassword',
}

CREDENTIALS = {'email': 'a@b.com', 'password': '12345678'}


def raise_auth_error(*args, **kwargs):
    """Simulate the identity provider rejecting the request."""
    raise AuthError('bad credentials')


class OrchestratorTestCase(IsolatedAsyncioTestCase):
    """Wires an orchestrator to mock collaborators."""

    mode = FlowMode.SIGN_IN

    def setUp(self):
        self.session = FormSession(self.mode)
        self.provider = mock.Mock()
        self.provider.sign_in = mock.AsyncMock(
            return_value=AuthSession('s1', 'u1')
        )
        self.provider.sign_up = mock.AsyncMock(return_value=Identity('u1'))
        self.navigator = mock.Mock()
        self.link_provider = mock.Mock()
        self.handoff = LinkingHandoff(self.link_provider)
        self.orchestrator = AuthOrchestrator(self.session, self.provider,
                                             self.navigator, self.handoff)

    def fill(self, values):
        for name, value in values.items():
            self.session.set_field(name, value)


class TestSignIn(OrchestratorTestCase):
    """Submitting a sign-in form."""

    async def test_success(self):
        """A successful sign-in sends the user home."""
        self.fill(CREDENTIALS)
        state = await self.orchestrator.submit()

        self.provider.sign_in.assert_awaited_once_with(
            SignInCredentials(email='a@b.com', password='12345678')
        )
        self.provider.sign_up.assert_not_called()
        self.assertEqual(state, Redirected(AuthSession('s1', 'u1')))
        self.navigator.go_home.assert_called_once_with()
        self.link_provider.open.assert_not_called()
        self.assertIsNone(self.handoff.identity)

    async def test_rejected(self):
        """Bad credentials unlock the form with a message to show."""
        self.provider.sign_in.side_effect = raise_auth_error
        self.fill(CREDENTIALS)
        state = await self.orchestrator.submit()

        self.assertIsInstance(state, Failed)
        self.assertEqual(self.session.error, SIGN_IN_FAILED)
        self.assertIsInstance(state.cause, AuthError)
        self.assertEqual(str(state.cause), 'bad credentials')
        self.navigator.go_home.assert_not_called()

        self.session.set_field('password', '87654321')
        self.assertEqual(self.session.state, Editing())
        self.assertTrue(self.session.can_submit())

    async def test_retry_after_failure(self):
        """Nothing is retried automatically; the user can resubmit."""
        self.provider.sign_in.side_effect = [
            AuthError('bad credentials'),
            AuthSession('s2', 'u1'),
        ]
        self.fill(CREDENTIALS)
        await self.orchestrator.submit()
        self.assertEqual(self.provider.sign_in.await_count, 1)

        state = await self.orchestrator.submit()
        self.assertEqual(state, Redirected(AuthSession('s2', 'u1')))
        self.assertEqual(self.provider.sign_in.await_count, 2)

    async def test_unexpected_error(self):
        """Any other error is logged and handled like a rejection."""
        self.provider.sign_in.side_effect = ConnectionError('down')
        self.fill(CREDENTIALS)
        with self.assertLogs('onboarding.controllers.authentication',
                             level='ERROR'):
            state = await self.orchestrator.submit()
        self.assertEqual(state.error, SIGN_IN_FAILED)
        self.assertIsInstance(state.cause, ConnectionError)
        self.assertTrue(self.session.can_submit())

    async def test_no_session(self):
        """A provider that returns nothing did not sign the user in."""
        self.provider.sign_in.return_value = None
        self.fill(CREDENTIALS)
        state = await self.orchestrator.submit()
        self.assertIsInstance(state, Failed)
        self.assertIsInstance(state.cause, AuthError)
        self.navigator.go_home.assert_not_called()

    async def test_submit_invalid(self):
        """Calling submit on an invalid form is a programming error."""
        self.fill({'email': 'not-an-email', 'password': 'x'})
        with self.assertRaises(PreconditionError):
            await self.orchestrator.submit()
        self.provider.sign_in.assert_not_called()

    async def test_on_submit_invalid(self):
        """The submit handler shows every error instead of submitting."""
        self.session.set_field('email', 'not-an-email')
        state = await self.orchestrator.on_submit()
        self.assertEqual(state, Editing())
        self.provider.sign_in.assert_not_called()
        self.assertEqual(self.session.results['password'].reason, 'required')
        self.assertFalse(self.session.results['email'].valid)

    async def test_on_submit_valid(self):
        """The submit handler submits a valid form."""
        self.fill(CREDENTIALS)
        state = await self.orchestrator.on_submit()
        self.assertIsInstance(state, Redirected)
        self.provider.sign_in.assert_awaited_once()


class TestSignUp(OrchestratorTestCase):
    """Submitting a sign-up form."""

    mode = FlowMode.SIGN_UP

    async def test_success(self):
        """A new identity is handed off for account linking, once."""
        self.fill(PROFILE)
        state = await self.orchestrator.submit()

        payload = self.provider.sign_up.await_args.args[0]
        self.assertIsInstance(payload, SignUpProfile)
        self.assertEqual(payload.ssn, '1234')
        self.provider.sign_in.assert_not_called()

        self.assertEqual(state, Authenticated(Identity('u1')))
        self.assertEqual(self.handoff.identity, Identity('u1'))
        self.link_provider.open.assert_called_once_with(Identity('u1'),
                                                        'primary')
        self.navigator.go_home.assert_not_called()
        self.assertFalse(self.session.can_submit())

    async def test_rejected(self):
        """A failed sign-up keeps the profile for another try."""
        self.provider.sign_up.side_effect = raise_auth_error
        self.fill(PROFILE)
        state = await self.orchestrator.submit()
        self.assertEqual(state.error, SIGN_UP_FAILED)
        self.assertEqual(self.session.values, PROFILE)
        self.link_provider.open.assert_not_called()
        self.assertTrue(self.session.can_submit())

    async def test_sign_up_after_remount(self):
        """A remounted form hands off the next new identity as well."""
        self.fill(PROFILE)
        await self.orchestrator.submit()

        state = self.orchestrator.reset()
        self.assertEqual(state, Editing())
        self.assertIsNone(self.handoff.identity)

        self.provider.sign_up.return_value = Identity('u2')
        self.fill(PROFILE)
        state = await self.orchestrator.submit()
        self.assertEqual(state, Authenticated(Identity('u2')))
        self.assertEqual(self.link_provider.open.call_args_list, [
            mock.call(Identity('u1'), 'primary'),
            mock.call(Identity('u2'), 'primary'),
        ])

    async def test_no_identity(self):
        """A provider that returns nothing did not create a user."""
        self.provider.sign_up.return_value = None
        self.fill(PROFILE)
        state = await self.orchestrator.submit()
        self.assertIsInstance(state, Failed)
        self.link_provider.open.assert_not_called()


class TestInFlight(OrchestratorTestCase):
    """Events that happen while the provider call is outstanding."""

    mode = FlowMode.SIGN_UP

    def setUp(self):
        super().setUp()
        self.released = asyncio.Event()

        async def sign_up(profile):
            await self.released.wait()
            return Identity('u1')

        self.provider.sign_up.side_effect = sign_up
        self.fill(PROFILE)

    async def test_no_overlapping_submit(self):
        """A second submit is refused and edits are ignored."""
        task = asyncio.create_task(self.orchestrator.submit())
        await asyncio.sleep(0)
        self.assertIsInstance(self.session.state, Submitting)
        self.assertFalse(self.session.can_submit())
        with self.assertRaises(PreconditionError):
            await self.orchestrator.submit()
        self.assertIsNone(self.session.set_field('city', 'Albany'))

        self.released.set()
        state = await task
        self.assertIsInstance(state, Authenticated)
        self.assertEqual(self.provider.sign_up.await_count, 1)

    async def test_disposed(self):
        """A result for a disposed form is discarded."""
        task = asyncio.create_task(self.orchestrator.submit())
        await asyncio.sleep(0)
        self.session.dispose()

        self.released.set()
        await task
        self.assertIsInstance(self.session.state, Submitting)
        self.link_provider.open.assert_not_called()
        self.assertIsNone(self.handoff.identity)

    async def test_reset(self):
        """A result for a form that was remounted is discarded."""
        task = asyncio.create_task(self.orchestrator.submit())
        await asyncio.sleep(0)
        self.session.reset(FlowMode.SIGN_IN)

        self.released.set()
        state = await task
        self.assertEqual(state, Editing())
        self.assertEqual(self.session.values, {})
        self.link_provider.open.assert_not_called()

    async def test_failure_after_dispose(self):
        """A failure for a disposed form is discarded too."""
        async def sign_up(profile):
            await self.released.wait()
            raise AuthError('bad credentials')

        self.provider.sign_up.side_effect = sign_up
        task = asyncio.create_task(self.orchestrator.submit())
        await asyncio.sleep(0)
        self.session.dispose()

        self.released.set()
        await task
        self.assertIsInstance(self.session.state, Submitting)
