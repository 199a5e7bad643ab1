"""Validation and sanity checks for perturbation analyses."""

from .sanity_checks import SanityChecker, ValidationWarning, validate_session

__all__ = [
    "SanityChecker",
    "ValidationWarning",
    "validate_session"
]
