"""Tests for configuration, bounded retry and timing accounting."""

import itertools

import pytest

from polycert.config import Config
from polycert.errors import NoGoodEvaluationPoint, PolyCertError
from polycert.retry import retry_until
from polycert.timings import Timings, count, timed


class TestRetryUntil:
    def test_first_accepted_value(self):
        counter = itertools.count()
        assert retry_until(lambda: next(counter), lambda v: v >= 3, 10) == 3

    def test_exhaustion(self):
        calls = []

        def draw():
            calls.append(1)
            return 0

        with pytest.raises(NoGoodEvaluationPoint) as excinfo:
            retry_until(draw, lambda v: False, 4, description="test point")
        assert len(calls) == 4
        assert excinfo.value.attempts == 4
        assert "test point" in str(excinfo.value)
        assert isinstance(excinfo.value, PolyCertError)

    def test_invalid_attempt_count(self):
        with pytest.raises(ValueError):
            retry_until(lambda: 0, lambda v: True, 0)

    def test_custom_error(self):
        class Exhausted(NoGoodEvaluationPoint):
            pass

        with pytest.raises(Exhausted):
            retry_until(lambda: 0, lambda v: False, 2, error=Exhausted)


class TestTimings:
    def test_timed_accumulates(self):
        timings = Timings()
        with timings.timed("step"):
            pass
        with timings.timed("step"):
            pass
        assert timings.elapsed["step"] >= 0.0
        assert list(timings.elapsed) == ["step"]

    def test_timed_records_on_error(self):
        timings = Timings()
        with pytest.raises(RuntimeError):
            with timings.timed("failing"):
                raise RuntimeError("boom")
        assert "failing" in timings.elapsed

    def test_count_and_reset(self):
        timings = Timings()
        timings.count("calls")
        timings.count("calls", 4)
        assert timings.counters == {"calls": 5}
        timings.reset()
        assert timings.as_dict() == {"elapsed": {}, "counters": {}}

    def test_merge(self):
        a = Timings(elapsed={"x": 1.0}, counters={"n": 2})
        b = Timings(elapsed={"x": 0.5, "y": 2.0}, counters={"n": 3, "m": 1})
        merged = a.merge(b)
        assert merged is a
        assert a.elapsed == {"x": 1.5, "y": 2.0}
        assert a.counters == {"n": 5, "m": 1}
        # other side untouched
        assert b.counters == {"n": 3, "m": 1}

    def test_module_helpers_accept_none(self):
        with timed(None, "ignored"):
            pass
        count(None, "ignored")
        timings = Timings()
        with timed(timings, "used"):
            count(timings, "used")
        assert timings.counters == {"used": 1}
        assert "used" in timings.elapsed


class TestConfig:
    def test_defaults(self):
        config = Config()
        assert (config.factor_eval_low, config.factor_eval_high) == (5, 10)
        assert config.monomial_order == "grevlex"

    def test_frozen(self):
        with pytest.raises(AttributeError):
            Config().seed = 3

    def test_invalid(self):
        for kwargs in [
            {"factor_eval_low": 11},
            {"primality_coeff_low": 5, "primality_coeff_high": 4},
            {"generic_point_high": 0},
            {"max_evaluation_attempts": 0},
            {"max_generic_point_attempts": -1},
            {"monomial_order": "revlex"},
        ]:
            with pytest.raises(ValueError):
                Config(**kwargs)

    def test_seeded_rng_reproducible(self):
        first = Config(seed=42).make_rng()
        second = Config(seed=42).make_rng()
        assert [first.randint(0, 1000) for _ in range(5)] == [second.randint(0, 1000) for _ in range(5)]
