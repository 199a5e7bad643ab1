"""Change strategies, lenses and perturbation descriptors."""

from .changes import ABSOLUTE, RELATIVE, Absolute, ChangeStrategy, Relative
from .lenses import AttributeLens, KeyLens, Lens
from .perturbations import FAILURE, Perturbation, perturbation, perturbation_with

__all__ = [
    "ChangeStrategy",
    "Relative",
    "Absolute",
    "RELATIVE",
    "ABSOLUTE",
    "Lens",
    "AttributeLens",
    "KeyLens",
    "FAILURE",
    "Perturbation",
    "perturbation",
    "perturbation_with",
]
