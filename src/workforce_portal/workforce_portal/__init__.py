"""Workforce portal: onboarding, gated dashboard, attendance clocking."""

__version__ = "0.1.0"
