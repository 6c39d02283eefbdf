"""Interfaces for the external services the onboarding form relies on."""
