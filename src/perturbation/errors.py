"""Exception types raised and captured by the perturbation workbench."""


class DomainError(ValueError):
    """A value lies outside the domain where a field or model is defined.

    Model objects raise this from their constructors to reject invalid
    parameter values. It is the error kind captured by default when a
    perturbation is applied.
    """


class LabelLookupError(LookupError):
    """A perturbation reference could not be resolved to a single entry."""


class NoMatchingLabel(LabelLookupError):
    """No registered perturbation label matches the reference."""


class AmbiguousLabel(LabelLookupError):
    """More than one registered perturbation label matches the reference."""
