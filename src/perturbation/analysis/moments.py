"""Moments: scalar statistics of a simulation result."""

from dataclasses import dataclass
from typing import Any, Callable

from ..engine.changes import ChangeStrategy


@dataclass(frozen=True)
class Moment:
    """A named statistic and the change strategy used to compare it to baseline."""
    label: str
    metadata: Any
    extract: Callable[[Any], float]
    change: ChangeStrategy

    def __str__(self) -> str:
        return f"{self.label} ({self.change})"


def moment(
    label: str,
    extract: Callable[[Any], float],
    change: ChangeStrategy,
    *,
    metadata: Any = None
) -> Moment:
    """Create a moment from a label, an extraction function and a change strategy."""
    return Moment(label=label, metadata=metadata, extract=extract, change=change)
