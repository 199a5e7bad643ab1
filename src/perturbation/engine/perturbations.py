"""Perturbation descriptors and their application to a baseline object."""

import logging
from dataclasses import dataclass
from typing import Any, FrozenSet, Iterable, Optional, Tuple, Type, Union

from ..errors import DomainError
from .changes import ChangeStrategy
from .lenses import Lens

logger = logging.getLogger(__name__)

# Returned by perturbation_with when a captured error prevents building the object
FAILURE = None

ErrorKinds = Union[Type[BaseException], Iterable[Type[BaseException]]]


def format_domain(domain: Tuple[float, ...]) -> str:
    """Render a domain by its extremes."""
    if not domain:
        return "empty domain"
    return f"({min(domain)}, {max(domain)})"


@dataclass(frozen=True)
class Perturbation:
    """One field of an object to vary, and how to vary it."""
    label: str
    metadata: Any
    lens: Lens
    change: ChangeStrategy
    captured_errors: FrozenSet[Type[BaseException]]
    domain: Optional[Tuple[float, ...]] = None  # None: use the session default

    def __str__(self) -> str:
        if self.domain is None:
            domain = "default domain"
        else:
            domain = format_domain(self.domain)
        errors = ", ".join(sorted(e.__name__ for e in self.captured_errors))
        return f"perturb {self.label} on {domain}, {self.change} [capturing {errors}]"


def _error_kinds(captured_errors: ErrorKinds) -> FrozenSet[Type[BaseException]]:
    if isinstance(captured_errors, type):
        return frozenset([captured_errors])
    return frozenset(captured_errors)


def perturbation(
    label: str,
    lens: Lens,
    change: ChangeStrategy,
    *,
    metadata: Any = None,
    domain: Optional[Iterable[float]] = None,
    captured_errors: ErrorKinds = DomainError
) -> Perturbation:
    """
    Create a perturbation descriptor.

    Args:
        label: Non-empty label, used to look the perturbation up later
        lens: Accessor for the field to perturb
        change: Change strategy (RELATIVE or ABSOLUTE)
        metadata: Arbitrary data carried along for the caller
        domain: Perturbation magnitudes; None uses the session default
        captured_errors: Exception class or classes raised while building
            the perturbed object that mark the point as failed instead of
            propagating

    Returns:
        Perturbation descriptor
    """
    if not label:
        raise ValueError("perturbation label must be non-empty")

    return Perturbation(
        label=label,
        metadata=metadata,
        lens=lens,
        change=change,
        captured_errors=_error_kinds(captured_errors),
        domain=None if domain is None else tuple(float(d) for d in domain)
    )


def perturbation_with(obj: Any, perturbation: Perturbation, delta: float) -> Any:
    """
    Return a copy of obj with the perturbation applied at magnitude delta.

    Errors whose class is one of ``perturbation.captured_errors`` yield
    FAILURE; any other error propagates. obj is not modified.
    """
    lens = perturbation.lens
    try:
        new_value = perturbation.change.apply(lens.get(obj), delta)
        return lens.with_replaced(obj, new_value)
    except BaseException as e:
        if type(e) not in perturbation.captured_errors:
            raise
        logger.debug("Captured %s perturbing %s at %s: %s",
                     type(e).__name__, perturbation.label, delta, e)
        return FAILURE
