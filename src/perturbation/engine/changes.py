"""Change strategies: how a perturbation magnitude is applied and measured."""

import numpy as np


def _broadcast(base):
    """Return base unchanged for scalars, as a float array for containers."""
    if np.isscalar(base):
        return base
    return np.asarray(base, dtype=float)


class ChangeStrategy:
    """Base class for change strategies.

    ``apply`` and ``measure`` are inverse with respect to the magnitude:
    ``measure(apply(x, delta), x) == delta``.
    """

    name = "change"

    def apply(self, base, delta):
        raise NotImplementedError

    def measure(self, changed, base):
        raise NotImplementedError

    def __call__(self, base, delta):
        return self.apply(base, delta)

    def __repr__(self) -> str:
        return self.name

    def __eq__(self, other) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))


class Relative(ChangeStrategy):
    """Scale the base value: ``x * (1 + delta)``."""

    name = "relative change"

    def apply(self, base, delta):
        return _broadcast(base) * (1 + delta)

    def measure(self, changed, base):
        return changed / base - 1


class Absolute(ChangeStrategy):
    """Shift the base value: ``x + delta``."""

    name = "absolute change"

    def apply(self, base, delta):
        return _broadcast(base) + delta

    def measure(self, changed, base):
        return changed - base


RELATIVE = Relative()
ABSOLUTE = Absolute()
