"""Tests for analysis sessions and concurrent registration."""

import threading
import time
from dataclasses import dataclass

import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from perturbation.config.schema import Settings
from perturbation.engine.changes import ABSOLUTE, RELATIVE
from perturbation.engine.lenses import AttributeLens, KeyLens
from perturbation.engine.perturbations import perturbation
from perturbation.errors import DomainError
from perturbation.simulation.runner import PerturbationResults, perturbation_results


@dataclass(frozen=True)
class Positive:
    value: float

    def __post_init__(self):
        if self.value <= 0:
            raise DomainError("value must be positive")


def square(obj: Positive) -> float:
    return obj.value ** 2


class TestSessionConstruction:
    """Creating a session."""

    def test_baseline_result_computed(self):
        results = perturbation_results(Positive(3.0), square)
        assert results.baseline_result == 9.0
        assert results.entries == []
        assert len(results) == 0

    def test_baseline_result_supplied(self):
        """A supplied baseline result is used without simulating."""
        calls = []

        def simulate(obj):
            calls.append(obj)
            return 0.0

        results = perturbation_results(Positive(3.0), simulate, baseline_result=42.0)
        assert results.baseline_result == 42.0
        assert calls == []

    def test_default_domain_from_settings(self):
        settings = Settings.from_dict({'domain': {'lower': -1, 'upper': 1, 'points': 3}})
        results = perturbation_results(Positive(1.0), square, settings=settings)
        assert results.default_domain == (-1.0, 0.0, 1.0)

    def test_explicit_default_domain(self):
        results = perturbation_results(Positive(1.0), square, default_domain=[0, 0.5])
        assert results.default_domain == (0.0, 0.5)

    def test_rendering(self):
        results = perturbation_results(Positive(1.0), square, label="squares",
                                       default_domain=[-0.1, 0.0, 0.1])
        results.push(perturbation("value", AttributeLens('value'), RELATIVE))
        assert str(results) == (
            "perturbation results for squares with default domain (-0.1, 0.1)\n"
            "  perturb value on default domain, relative change [capturing DomainError]"
        )

    def test_rendering_without_label(self):
        results = perturbation_results(Positive(1.0), square, default_domain=[0.0, 1.0])
        assert str(results) == "perturbation results with default domain (0.0, 1.0)"

    def test_rendering_empty_default_domain(self):
        results = perturbation_results(Positive(1.0), square, default_domain=[])
        results.push(perturbation("value", AttributeLens('value'), ABSOLUTE))
        assert results.entries[0][1] == []
        assert str(results).splitlines()[0] == "perturbation results with empty default domain"


class TestPush:
    """Registering perturbations."""

    def test_results_align_with_domain(self):
        results = perturbation_results(Positive(2.0), square, default_domain=[-0.5, 0.0, 0.5])
        results.push(perturbation("value", AttributeLens('value'), ABSOLUTE))
        p, raw = results.entries[0]
        assert p.label == "value"
        assert raw == pytest.approx([2.25, 4.0, 6.25])

    def test_own_domain_wins(self):
        results = perturbation_results(Positive(2.0), square, default_domain=[0.0])
        p = perturbation("value", AttributeLens('value'), ABSOLUTE, domain=[1, 2, 3, 4])
        results.push(p)
        assert results.effective_domain(p) == (1.0, 2.0, 3.0, 4.0)
        assert len(results.entries[0][1]) == 4

    def test_push_returns_session(self):
        results = perturbation_results(Positive(2.0), square, default_domain=[0.0])
        assert results.push(perturbation("value", AttributeLens('value'), ABSOLUTE)) is results

    def test_push_several_in_order(self):
        results = perturbation_results({'a': 1.0, 'b': 2.0}, lambda d: d['a'] + d['b'],
                                       default_domain=[0.0, 1.0])
        results.push(
            perturbation("a", KeyLens('a'), ABSOLUTE),
            perturbation("b", KeyLens('b'), RELATIVE)
        )
        assert results.keys() == ["a", "b"]
        assert results.entries[0][1] == [3.0, 4.0]
        assert results.entries[1][1] == [3.0, 5.0]

    def test_captured_failures_are_none(self):
        """simulate is not called for points that failed to build."""
        seen = []
        lock = threading.Lock()

        def simulate(obj):
            with lock:
                seen.append(obj.value)
            return obj.value

        results = perturbation_results(Positive(1.0), simulate, baseline_result=1.0,
                                       default_domain=[-2.0, -1.0, 0.0, 1.0])
        results.push(perturbation("value", AttributeLens('value'), ABSOLUTE))
        assert results.entries[0][1] == [None, None, 1.0, 2.0]
        assert sorted(seen) == [1.0, 2.0]

    def test_baseline_untouched(self):
        baseline = {'a': 1.0}
        results = perturbation_results(baseline, lambda d: d['a'], default_domain=[0.5, 1.0])
        results.push(perturbation("a", KeyLens('a'), ABSOLUTE))
        assert baseline == {'a': 1.0}
        assert results.baseline is baseline


class TestFailureAtomicity:
    """Uncaptured errors abort the registration and leave entries unchanged."""

    def test_simulate_error_propagates(self):
        def simulate(obj):
            if obj.value > 1.5:
                raise RuntimeError("simulation diverged")
            return obj.value

        results = perturbation_results(Positive(1.0), simulate, default_domain=[0.0, 1.0])
        results.push(perturbation("first", AttributeLens('value'), ABSOLUTE, domain=[0.0, 0.1]))

        with pytest.raises(RuntimeError, match="diverged"):
            results.push(perturbation("second", AttributeLens('value'), ABSOLUTE))
        assert results.keys() == ["first"]

    def test_simulate_errors_are_not_captured(self):
        """Captured kinds only apply while building the perturbed object."""
        def simulate(obj):
            raise DomainError("raised by the simulation")

        results = perturbation_results(Positive(1.0), simulate, baseline_result=None,
                                       default_domain=[0.0])
        with pytest.raises(DomainError):
            results.push(perturbation("value", AttributeLens('value'), ABSOLUTE))
        assert len(results) == 0

    def test_uncaptured_build_error_propagates(self):
        results = perturbation_results(Positive(1.0), square, default_domain=[-5.0])
        p = perturbation("value", AttributeLens('value'), ABSOLUTE, captured_errors=ZeroDivisionError)
        with pytest.raises(DomainError):
            results.push(p)
        assert len(results) == 0


class TestConcurrency:
    """Points run concurrently but results keep domain order."""

    def test_order_preserved_when_later_points_finish_first(self):
        domain = [float(i) for i in range(8)]
        completed = []
        lock = threading.Lock()

        def simulate(obj):
            # Later domain points sleep less and complete first
            time.sleep((len(domain) - obj['i']) * 0.02)
            with lock:
                completed.append(obj['i'])
            return obj['i'] * 10

        settings = Settings.from_dict({'execution': {'max_workers': len(domain)}})
        results = perturbation_results({'i': 0.0}, simulate, baseline_result=0.0,
                                       default_domain=domain, settings=settings)
        results.push(perturbation("i", KeyLens('i'), ABSOLUTE))

        assert results.entries[0][1] == [d * 10 for d in domain]
        assert completed != sorted(completed)

    def test_max_workers_from_settings(self):
        settings = Settings.from_dict({'execution': {'max_workers': 2}})
        results = perturbation_results(Positive(1.0), square, settings=settings)
        assert isinstance(results, PerturbationResults)
        assert results.max_workers == 2
