"""Analysis session: a baseline, a simulation, and perturbation results.

Registering a perturbation with :meth:`PerturbationResults.push` evaluates
the simulation at every point of its domain right away, on a thread pool.

``simulate`` is called concurrently from several worker threads, each time
on a freshly built object. It must not mutate shared state (module globals,
a shared random generator, caches) without its own locking; violations are
not detected and show up as silently wrong results.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Iterable, List, Optional, Tuple

from ..config.schema import Settings
from ..engine.perturbations import FAILURE, Perturbation, format_domain, perturbation_with

logger = logging.getLogger(__name__)

_UNSET = object()


class PerturbationResults:
    """Baseline object, simulation, and the results of each registered perturbation.

    Entries are append-only and kept in registration order. Each entry pairs
    a perturbation with one result per point of its effective domain; a
    ``None`` result marks a point where the perturbed object could not be
    built.

    Only one ``push`` may run on a session at a time, and reads should not
    overlap with a ``push``; callers sharing a session across threads must
    lock around it.
    """

    def __init__(
        self,
        baseline: Any,
        simulate: Callable[[Any], Any],
        baseline_result: Any,
        default_domain: Tuple[float, ...],
        label: Optional[str] = None,
        max_workers: Optional[int] = None
    ):
        self.label = label
        self.baseline = baseline
        self.simulate = simulate
        self.baseline_result = baseline_result
        self.default_domain = default_domain
        self.max_workers = max_workers
        self.entries: List[Tuple[Perturbation, List[Any]]] = []

    def effective_domain(self, perturbation: Perturbation) -> Tuple[float, ...]:
        """The perturbation's own domain, or the session default."""
        if perturbation.domain is not None:
            return perturbation.domain
        return self.default_domain

    def push(self, *perturbations: Perturbation) -> 'PerturbationResults':
        """
        Evaluate and register perturbations, in order.

        Each perturbation's results are appended only once every point has
        been evaluated. An error from ``simulate``, or an error not captured
        by the perturbation, propagates and leaves that perturbation
        unregistered.

        Returns:
            The session itself, for chaining
        """
        for p in perturbations:
            results = self._evaluate(p)
            self.entries.append((p, results))
        return self

    def _evaluate_point(self, perturbation: Perturbation, delta: float) -> Any:
        modified = perturbation_with(self.baseline, perturbation, delta)
        if modified is FAILURE:
            return None
        return self.simulate(modified)

    def _evaluate(self, perturbation: Perturbation) -> List[Any]:
        domain = self.effective_domain(perturbation)
        logger.info("Evaluating %s at %d points", perturbation.label, len(domain))

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [
                executor.submit(self._evaluate_point, perturbation, delta)
                for delta in domain
            ]
            try:
                # Collected in submission order, so results line up with domain
                results = [future.result() for future in futures]
            except Exception:
                for future in futures:
                    future.cancel()
                logger.error("Evaluation of %s aborted", perturbation.label)
                raise

        failures = sum(r is None for r in results)
        if failures:
            logger.info("%s: %d of %d points failed", perturbation.label, failures, len(results))
        return results

    def keys(self) -> List[str]:
        """Labels of the registered perturbations, in registration order."""
        return [p.label for p, _ in self.entries]

    def __len__(self) -> int:
        return len(self.entries)

    def __str__(self) -> str:
        header = "perturbation results"
        if self.label is not None:
            header += f" for {self.label}"
        if self.default_domain:
            header += f" with default domain {format_domain(self.default_domain)}"
        else:
            header += " with empty default domain"
        lines = [header] + [f"  {p}" for p, _ in self.entries]
        return "\n".join(lines)


def perturbation_results(
    baseline: Any,
    simulate: Callable[[Any], Any],
    *,
    baseline_result: Any = _UNSET,
    label: Optional[str] = None,
    default_domain: Optional[Iterable[float]] = None,
    settings: Optional[Settings] = None
) -> PerturbationResults:
    """
    Create an analysis session.

    Args:
        baseline: Object perturbations are applied to
        simulate: Simulation, called on perturbed copies of baseline
        baseline_result: Result for the baseline (computed if omitted)
        label: Optional session label
        default_domain: Magnitudes for perturbations without their own
            domain (defaults to settings.domain)
        settings: Analysis settings (defaults to Settings())

    Returns:
        PerturbationResults with no entries
    """
    settings = settings or Settings()

    if baseline_result is _UNSET:
        baseline_result = simulate(baseline)

    if default_domain is None:
        domain = settings.domain.values()
    else:
        domain = tuple(float(d) for d in default_domain)

    return PerturbationResults(
        baseline=baseline,
        simulate=simulate,
        baseline_result=baseline_result,
        default_domain=domain,
        label=label,
        max_workers=settings.execution.max_workers
    )
