"""Sensitivity of simulation moments to perturbations of model fields.

Typical use::

    results = perturbation_results(model, simulate)
    results.push(perturbation("sigma", AttributeLens("sigma"), RELATIVE))
    curve = moment_sensitivity(results, "sigma", moment("mean", lambda r: r.mean, ABSOLUTE))
"""

from .analysis import (
    Moment,
    SensitivityCurve,
    lookup_perturbation,
    moment,
    moment_sensitivities,
    moment_sensitivity,
)
from .config import Settings, load_settings
from .engine import (
    ABSOLUTE,
    FAILURE,
    RELATIVE,
    Absolute,
    AttributeLens,
    ChangeStrategy,
    KeyLens,
    Lens,
    Perturbation,
    Relative,
    perturbation,
    perturbation_with,
)
from .errors import AmbiguousLabel, DomainError, LabelLookupError, NoMatchingLabel
from .simulation import PerturbationResults, perturbation_results

__version__ = "0.1.0"

__all__ = [
    # Changes
    "ChangeStrategy",
    "Relative",
    "Absolute",
    "RELATIVE",
    "ABSOLUTE",
    # Perturbations
    "Lens",
    "AttributeLens",
    "KeyLens",
    "Perturbation",
    "FAILURE",
    "perturbation",
    "perturbation_with",
    # Sessions
    "PerturbationResults",
    "perturbation_results",
    # Moments and sensitivity
    "Moment",
    "moment",
    "SensitivityCurve",
    "lookup_perturbation",
    "moment_sensitivity",
    "moment_sensitivities",
    # Settings
    "Settings",
    "load_settings",
    # Errors
    "DomainError",
    "LabelLookupError",
    "NoMatchingLabel",
    "AmbiguousLabel",
]
