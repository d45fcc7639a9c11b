"""Homebrew Event scheduler, runs one-shot and repeating jobs on an eventlet green thread"""
import heapq
import itertools
import time

import eventlet

from cycletimer.utils import SchedulingError


def _job_name(func):
    return getattr(func, '__name__', repr(func))


class TimerJob:
    """Represents a job for TimerScheduler, same api as asyncio.TimerHandle"""

    expiry_time = 0
    is_cancelled = False
    func = None
    args = None
    period = None

    def __init__(self, expiry_time, func, args, period=None):
        self.expiry_time = expiry_time
        self.func = func
        self.args = args
        self.period = period

    def cancel(self):
        """Cancel the callback."""
        self.is_cancelled = True

    def cancelled(self):
        """
        Returns:
            True if callback was cancelled
        """
        return self.is_cancelled

    def when(self):
        """
        Returns:
            scheduled callback time as float seconds
        """
        return self.expiry_time

    def repeating(self):
        """
        Returns:
            True if the job is rescheduled after every run
        """
        return self.period is not None


class TimerScheduler:
    """wraps a heapbased queue with a similar api to asyncio.loop"""

    MAX_IDLE_SLEEP = 1

    def __init__(self, logger, sleep=None, clock=None, max_jobs=None):
        """
        Args:
            logger: where scheduling and job failures are logged
            sleep (callable): how to wait between checks, defaults to eventlet.sleep
            clock (callable): returns the current time in seconds, defaults to time.time
            max_jobs (int): number of live jobs accepted before call_later is refused
        """
        self.logger = logger
        self.timer_heap = []
        self.max_jobs = max_jobs
        self._sequence = itertools.count()
        self._running = True

        self.sleep = eventlet.sleep
        if sleep:
            self.sleep = sleep

        self.clock = time.time
        if clock:
            self.clock = clock

    def call_later(self, timeout, func, *args):
        """Scheduler callback.

        Args:
            timeout: number of seconds to delay executing func
            func: function to execute
            *args: arguments for func

        Returns:
            TimerJob - can be used for cancelling the job
        """
        self._check_accepting(func)
        self.logger.debug("submitted job %s expire in %s, args: %s",
                          _job_name(func), timeout, args)
        job = TimerJob(self.clock() + timeout, func, args)
        self._push(job)
        return job

    def call_repeating(self, period, func, *args):
        """Schedule func to run every period seconds until its job is cancelled.

        Args:
            period: number of seconds between executions, first one is a period from now
            func: function to execute
            *args: arguments for func

        Returns:
            TimerJob - can be used for cancelling the job
        """
        if period is None or period <= 0:
            raise SchedulingError("period must be positive, got %r" % (period,))
        self._check_accepting(func)
        self.logger.debug("submitted repeating job %s every %s, args: %s",
                          _job_name(func), period, args)
        job = TimerJob(self.clock() + period, func, args, period)
        self._push(job)
        return job

    def pending(self):
        """
        Returns:
            number of jobs that are scheduled and not cancelled
        """
        return sum(1 for _, _, job in self.timer_heap if not job.cancelled())

    def running(self):
        """Used to nicely exit the event loop"""
        return self._running

    def shutdown(self):
        """Stop the main loop and refuse any further jobs"""
        self.logger.info('timer_scheduler shutting down with %d pending jobs', self.pending())
        self._running = False

    def run_pending(self):
        """Run every job that has expired.

        Returns:
            number of jobs that were run
        """
        now = self.clock()
        ran = 0
        while self.timer_heap and self.timer_heap[0][0] <= now:
            _, _, job = heapq.heappop(self.timer_heap)
            if job.cancelled():
                self.logger.debug('job %s has been cancelled', _job_name(job.func))
                continue
            self.logger.debug('running job %s %s', _job_name(job.func), job.args)
            try:
                job.func(*job.args)
            except Exception as e:  # pylint: disable=broad-except
                self.logger.exception(e)
            ran += 1
            if job.repeating() and not job.cancelled():
                self._reschedule(job, now)
        return ran

    def run(self):
        """Main loop. runs until shutdown"""
        while self.running():
            self.run_pending()
            self.sleep(self._idle_time())
        self.logger.warning('timer_scheduler finished queue')

    def _reschedule(self, job, now):
        next_expiry = job.expiry_time + job.period
        if next_expiry <= now:
            # missed periods are coalesced into the firing that just ran
            self.logger.debug('job %s fell behind, skipping to next period', _job_name(job.func))
            next_expiry = now + job.period
        job.expiry_time = next_expiry
        self._push(job)

    def _discard_cancelled_heads(self):
        while self.timer_heap and self.timer_heap[0][2].cancelled():
            _, _, job = heapq.heappop(self.timer_heap)
            self.logger.debug('dropped cancelled job %s', _job_name(job.func))

    def _idle_time(self):
        self._discard_cancelled_heads()
        if not self.timer_heap:
            return self.MAX_IDLE_SLEEP
        return min(self.MAX_IDLE_SLEEP, max(0, self.timer_heap[0][0] - self.clock()))

    def _check_accepting(self, func):
        self._discard_cancelled_heads()
        if not self._running:
            raise SchedulingError("scheduler is shut down, cannot schedule %s" % _job_name(func))
        if self.max_jobs is not None and self.pending() >= self.max_jobs:
            raise SchedulingError("scheduler is full (%d jobs), cannot schedule %s"
                                  % (self.max_jobs, _job_name(func)))

    def _push(self, job):
        heapq.heappush(self.timer_heap, (job.expiry_time, next(self._sequence), job))
