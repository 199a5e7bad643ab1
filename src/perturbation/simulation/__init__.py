"""Analysis sessions and concurrent evaluation of perturbations."""

from .runner import PerturbationResults, perturbation_results

__all__ = ["PerturbationResults", "perturbation_results"]
