"""
Onboarding form.

Collects credentials from returning users, and credentials plus KYC-style
profile data from new users, submits them to an identity provider, and on a
successful sign-up hands the new identity to an account-linking provider so
the user can connect a bank account.

The pieces, leaves first:

- :mod:`onboarding.schema` resolves the fields for a :class:`.FlowMode`;
- :mod:`onboarding.validation` checks a value against its field's rule;
- :mod:`onboarding.session` holds values, validation results and the
  submission state of one mounted form;
- :mod:`onboarding.controllers.authentication` is the state machine that
  calls the identity provider and settles the session;
- :mod:`onboarding.controllers.linking` passes the new identity on.

Presentation, routing and the concrete provider SDKs are supplied by the
host, through the interfaces in :mod:`onboarding.services.collaborators`.
:mod:`onboarding.controllers.view` derives the data a template needs to
render the form.
"""
