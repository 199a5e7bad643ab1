"""Moments and sensitivity curves."""

from .moments import Moment, moment
from .sensitivity import (
    SensitivityCurve,
    lookup_perturbation,
    moment_sensitivities,
    moment_sensitivity,
)

__all__ = [
    "Moment",
    "moment",
    "SensitivityCurve",
    "lookup_perturbation",
    "moment_sensitivity",
    "moment_sensitivities",
]
