"""Unittests for cycletimer/timer_lifecycle.py"""
import unittest
from unittest.mock import Mock

from helpers import FakeTimerScheduler

from cycletimer.timer_lifecycle import TimerLifecycle
from cycletimer.utils import AlreadyActiveError, InvalidConfigurationError, SchedulingError


class TimerLifecycleTestCase(unittest.TestCase):
    def setUp(self):
        self.timer_scheduler = FakeTimerScheduler()
        self.lifecycle = TimerLifecycle(self.timer_scheduler, "cycletimer.TimerLifecycle")
        self.tick_counter = 0

    def on_tick(self):
        self.tick_counter += 1

    def test_starts_unbound(self):
        self.assertEqual(self.lifecycle.state, TimerLifecycle.UNBOUND)
        self.assertFalse(self.lifecycle.is_bound())
        self.assertEqual(self.timer_scheduler.jobs, [])

    def test_activate_binds_one_repeating_job(self):
        self.lifecycle.activate(1, self.on_tick)
        self.assertTrue(self.lifecycle.is_bound())
        self.assertEqual(len(self.timer_scheduler.live_jobs()), 1)
        job = self.timer_scheduler.jobs[0]
        self.assertEqual(job.period, 1)
        self.assertIs(self.lifecycle.job, job)

        self.timer_scheduler.run_jobs(3)
        self.assertEqual(self.tick_counter, 3)

    def test_activate_twice_is_rejected(self):
        self.lifecycle.activate(1, self.on_tick)
        job = self.lifecycle.job
        with self.assertRaises(AlreadyActiveError):
            self.lifecycle.activate(1, self.on_tick)
        self.assertIs(self.lifecycle.job, job)
        self.assertFalse(job.cancelled())
        self.assertEqual(len(self.timer_scheduler.jobs), 1)

    def test_activate_requires_callable(self):
        with self.assertRaises(InvalidConfigurationError):
            self.lifecycle.activate(1, None)
        self.assertFalse(self.lifecycle.is_bound())

    def test_activate_requires_positive_period(self):
        for period in ("1", None, 0, -2, True):
            with self.assertRaises(InvalidConfigurationError):
                self.lifecycle.activate(period, self.on_tick)
        self.assertFalse(self.lifecycle.is_bound())
        self.assertEqual(self.timer_scheduler.jobs, [])
        self.assertEqual(self.lifecycle.generation, 0)

    def test_deactivate_cancels_once(self):
        self.lifecycle.activate(1, self.on_tick)
        job = self.lifecycle.job
        self.assertTrue(self.lifecycle.deactivate())
        self.assertFalse(self.lifecycle.deactivate())
        self.assertEqual(job.cancel_count, 1)
        self.assertIsNone(self.lifecycle.job)
        self.assertEqual(self.lifecycle.state, TimerLifecycle.UNBOUND)

    def test_deactivate_when_never_activated_is_noop(self):
        self.assertFalse(self.lifecycle.deactivate())
        self.assertEqual(self.lifecycle.state, TimerLifecycle.UNBOUND)

    def test_firing_in_flight_after_deactivate_is_dropped(self):
        self.lifecycle.activate(1, self.on_tick)
        job = self.lifecycle.job
        self.lifecycle.deactivate()
        job.fire()
        self.assertEqual(self.tick_counter, 0)

    def test_firing_from_previous_generation_is_dropped(self):
        self.lifecycle.activate(1, self.on_tick)
        old_job = self.lifecycle.job
        self.lifecycle.deactivate()
        self.lifecycle.activate(1, self.on_tick)
        self.assertEqual(self.lifecycle.generation, 2)

        old_job.fire()
        self.assertEqual(self.tick_counter, 0)
        self.lifecycle.job.fire()
        self.assertEqual(self.tick_counter, 1)

    def test_scheduling_error_leaves_unbound(self):
        timer_scheduler = Mock(**{'call_repeating.side_effect': SchedulingError('full')})
        lifecycle = TimerLifecycle(timer_scheduler, "cycletimer.TimerLifecycle")
        with self.assertRaises(SchedulingError):
            lifecycle.activate(1, self.on_tick)
        self.assertFalse(lifecycle.is_bound())
        self.assertIsNone(lifecycle.job)
        self.assertFalse(lifecycle.deactivate())
        # the failed attempt does not consume a generation
        self.assertEqual(lifecycle.generation, 0)
