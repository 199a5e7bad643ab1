"""Sensitivity of moments to registered perturbations."""

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Union

import numpy as np

from ..errors import AmbiguousLabel, NoMatchingLabel
from ..simulation.runner import PerturbationResults
from .moments import Moment

logger = logging.getLogger(__name__)

Reference = Union[int, str, re.Pattern]


@dataclass
class SensitivityCurve:
    """Change in a moment as a function of perturbation magnitude."""
    label: str
    x: np.ndarray  # perturbation magnitudes
    y: np.ndarray  # change of the moment from baseline, NaN at failed points
    metadata: Any = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dictionary of plain lists."""
        return {
            'label': self.label,
            'x': self.x.tolist(),
            'y': self.y.tolist(),
            'metadata': self.metadata,
        }


def _label_matches(label: str, ref: Union[str, re.Pattern]) -> bool:
    if isinstance(ref, re.Pattern):
        return ref.search(label) is not None
    return ref in label


def lookup_perturbation(results: PerturbationResults, ref: Reference) -> int:
    """
    Resolve a reference to an index into ``results.entries``.

    Args:
        results: Analysis session
        ref: Index (returned unchanged), substring, or compiled regex matched
            against perturbation labels

    Returns:
        Entry index

    Raises:
        NoMatchingLabel: No label matches ref
        AmbiguousLabel: More than one label matches ref
    """
    if isinstance(ref, (int, np.integer)) and not isinstance(ref, bool):
        return ref

    matches = [
        i for i, (p, _) in enumerate(results.entries)
        if _label_matches(p.label, ref)
    ]
    pattern = ref.pattern if isinstance(ref, re.Pattern) else ref
    if len(matches) > 1:
        labels = [results.entries[i][0].label for i in matches]
        raise AmbiguousLabel(f"multiple labels match {pattern!r}: {labels}")
    if not matches:
        raise NoMatchingLabel(f"no labels match {pattern!r}")

    logger.debug("Resolved %r to entry %d", pattern, matches[0])
    return matches[0]


def _moment_changes(moment: Moment, baseline_result: Any, results: List[Any]) -> np.ndarray:
    m0 = moment.extract(baseline_result)
    return np.array([
        np.nan if r is None else moment.change.measure(moment.extract(r), m0)
        for r in results
    ], dtype=float)


def moment_sensitivity(
    results: PerturbationResults,
    ref: Reference,
    moment: Moment
) -> SensitivityCurve:
    """
    Compute the sensitivity curve of a moment to a registered perturbation.

    Nothing is cached; every call recomputes from the stored raw results.

    Args:
        results: Analysis session
        ref: Entry index, label substring, or compiled regex
        moment: Moment to compare against its baseline value

    Returns:
        SensitivityCurve with x the effective domain and y the moment changes
    """
    index = lookup_perturbation(results, ref)
    perturbation, raw = results.entries[index]
    return SensitivityCurve(
        label=str(moment),
        x=np.asarray(results.effective_domain(perturbation), dtype=float),
        y=_moment_changes(moment, results.baseline_result, raw),
        metadata=moment.metadata
    )


def moment_sensitivities(
    results: PerturbationResults,
    ref: Reference,
    moments: Iterable[Moment]
) -> List[SensitivityCurve]:
    """Sensitivity curves of several moments to the same perturbation."""
    return [moment_sensitivity(results, ref, m) for m in moments]
