"""Tests for :mod:`onboarding.controllers`."""
