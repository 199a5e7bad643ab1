"""Sanity checks on a perturbation analysis session."""

import math
from collections import Counter
from dataclasses import dataclass
from typing import List, Optional

from ..simulation.runner import PerturbationResults


@dataclass
class ValidationWarning:
    """A validation warning with severity and message."""
    severity: str  # "warning" or "error"
    category: str  # "labels" or "results"
    message: str
    details: Optional[str] = None


class SanityChecker:
    """Run sanity checks on the perturbations registered with a session."""

    def __init__(self, results: PerturbationResults):
        """Initialize with an analysis session."""
        self.results = results

    def check_labels(self) -> List[ValidationWarning]:
        """
        Check that every perturbation can be looked up by its label.

        Returns:
            List of validation warnings
        """
        warnings = []
        labels = self.results.keys()

        for label, count in Counter(labels).items():
            if count > 1:
                warnings.append(ValidationWarning(
                    severity="error",
                    category="labels",
                    message=f"Label {label!r} is registered {count} times",
                    details="Lookup by this label will be ambiguous; use the index"
                ))

        # A label contained in another one cannot be resolved by itself
        unique = sorted(set(labels))
        for label in unique:
            containing = [other for other in unique if other != label and label in other]
            if containing:
                warnings.append(ValidationWarning(
                    severity="warning",
                    category="labels",
                    message=f"Label {label!r} is part of other labels",
                    details=f"Also matched by: {', '.join(containing)}"
                ))

        return warnings

    def check_results(self) -> List[ValidationWarning]:
        """
        Check stored results for failed points and missing baseline points.

        Returns:
            List of validation warnings
        """
        warnings = []

        for p, raw in self.results.entries:
            domain = self.results.effective_domain(p)
            failed = [d for d, r in zip(domain, raw) if r is None]

            if raw and len(failed) == len(raw):
                warnings.append(ValidationWarning(
                    severity="error",
                    category="results",
                    message=f"All {len(raw)} points of {p.label!r} failed",
                    details="The sensitivity curve will be entirely NaN"
                ))
            elif failed:
                warnings.append(ValidationWarning(
                    severity="warning",
                    category="results",
                    message=f"{len(failed)} of {len(raw)} points of {p.label!r} failed",
                    details=f"Failed at: {', '.join(f'{d:g}' for d in failed)}"
                ))

            if not any(math.isclose(d, 0.0, abs_tol=1e-12) for d in domain):
                warnings.append(ValidationWarning(
                    severity="warning",
                    category="results",
                    message=f"Domain of {p.label!r} does not include 0",
                    details="No point reproduces the baseline"
                ))

        return warnings

    def run_all_checks(self) -> List[ValidationWarning]:
        """Run all checks and return combined warnings."""
        return self.check_labels() + self.check_results()


def validate_session(results: PerturbationResults) -> List[ValidationWarning]:
    """
    Run all sanity checks on a session.

    Args:
        results: Analysis session

    Returns:
        List of validation warnings (errors first)
    """
    warnings = SanityChecker(results).run_all_checks()
    return sorted(warnings, key=lambda w: w.severity != "error")
