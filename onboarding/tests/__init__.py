"""Tests for :mod:`onboarding`."""
