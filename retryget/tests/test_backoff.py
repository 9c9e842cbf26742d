import math
import random

import pytest
from tenacity import RetryCallState, Retrying

from retryget.backoff import BackoffSchedule, stop_before_budget, wait_jittered_exponential
from retryget.exceptions import ConfigError


def _retry_state(attempt_number=1, upcoming_sleep=0.0):
    state = RetryCallState(Retrying(), None, (), {})
    state.attempt_number = attempt_number
    state.upcoming_sleep = upcoming_sleep
    return state


class TestBackoffSchedule:
    def test_defaults(self, schedule):
        assert schedule.initial_interval == 0.5
        assert schedule.multiplier == 1.5
        assert schedule.randomization_factor == 0.5
        assert schedule.max_interval == 60.0
        assert schedule.max_elapsed_time == 2.0

    def test_is_immutable(self, schedule):
        with pytest.raises(AttributeError):
            schedule.max_elapsed_time = 10

    def test_jitter_stays_within_randomization_factor(self, schedule):
        rng = random.Random(7)
        delays = [schedule.jittered(1.0, rng) for _ in range(500)]
        assert min(delays) >= 0.5
        assert max(delays) <= 1.5
        assert len(set(delays)) > 1

    def test_no_jitter_when_factor_is_zero(self):
        schedule = BackoffSchedule(randomization_factor=0)
        assert schedule.jittered(0.8) == 0.8

    @pytest.mark.parametrize(
        "kwargs, message",
        [
            ({"initial_interval": 0}, "initial_interval"),
            ({"multiplier": 0.5}, "multiplier"),
            ({"randomization_factor": 1.0}, "randomization_factor"),
            ({"randomization_factor": -0.1}, "randomization_factor"),
            ({"initial_interval": 5, "max_interval": 1}, "max_interval"),
            ({"max_elapsed_time": 0}, "max_elapsed_time"),
            ({"max_elapsed_time": math.nan}, "max_elapsed_time"),
            ({"max_elapsed_time": math.inf}, "max_elapsed_time"),
            ({"initial_interval": math.nan}, "initial_interval"),
            ({"max_interval": math.nan}, "max_interval"),
            ({"multiplier": math.nan}, "multiplier"),
            ({"multiplier": math.inf}, "multiplier"),
            ({"randomization_factor": math.nan}, "randomization_factor"),
        ],
    )
    def test_rejects_invalid_values(self, kwargs, message):
        with pytest.raises(ConfigError, match=message):
            BackoffSchedule(**kwargs)


# ---------------------------------------------------------------------------
# wait_jittered_exponential
# ---------------------------------------------------------------------------
class TestWaitStrategy:
    def test_returns_tenacity_wait(self, schedule):
        assert isinstance(schedule.wait(), wait_jittered_exponential)

    def test_interval_grows_by_multiplier(self):
        wait = BackoffSchedule(randomization_factor=0).wait()

        delays = [wait(_retry_state(n)) for n in (1, 2, 3)]

        assert delays == pytest.approx([0.5, 0.75, 1.125])

    def test_interval_caps_at_max(self):
        wait = BackoffSchedule(
            initial_interval=1, multiplier=2, randomization_factor=0, max_interval=3
        ).wait()

        assert [wait(_retry_state(n)) for n in range(1, 6)] == [1, 2, 3, 3, 3]

    def test_jitter_applies_to_capped_interval(self):
        wait = BackoffSchedule(initial_interval=1, multiplier=2, max_interval=4).wait(
            random.Random(3)
        )

        delays = [wait(_retry_state(10)) for _ in range(200)]

        assert min(delays) >= 2.0
        assert max(delays) <= 6.0


# ---------------------------------------------------------------------------
# stop_before_budget
# ---------------------------------------------------------------------------
class TestStopStrategy:
    def test_keeps_going_within_budget(self, fake_clock):
        stop = stop_before_budget(2.0, fake_clock)
        fake_clock.now = 1.5

        assert not stop(_retry_state(upcoming_sleep=0.5))

    def test_stops_when_sleep_would_overrun_budget(self, fake_clock):
        stop = stop_before_budget(2.0, fake_clock)
        fake_clock.now = 1.6

        assert stop(_retry_state(upcoming_sleep=0.5))

    def test_stops_when_budget_already_spent(self, fake_clock):
        stop = stop_before_budget(2.0, fake_clock)
        fake_clock.now = 2.01

        assert stop(_retry_state(upcoming_sleep=0.0))

    def test_measures_from_construction(self, fake_clock):
        fake_clock.now = 100.0
        stop = BackoffSchedule().stop(fake_clock)
        fake_clock.now = 101.0

        assert not stop(_retry_state(upcoming_sleep=0.5))
        assert stop(_retry_state(upcoming_sleep=1.5))
