""" Host binding for a cyclic countdown timer. """
from eventlet import GreenPool

from cycletimer.timer_scheduler import TimerScheduler
from cycletimer.timer_core import TimerCore, check_cycle_length
from cycletimer.timer_lifecycle import TimerLifecycle, check_period
from cycletimer.utils import get_logger, AlreadyActiveError


class CyclicTimer:
    """Ties a TimerCore to a TimerLifecycle and to the mount/unmount lifecycle of its host"""

    DEFAULT_PERIOD = 1

    # pylint: disable=too-many-arguments
    def __init__(self, cycle_length=TimerCore.DEFAULT_CYCLE_LENGTH, logger=None,
                 timer_scheduler=None, period=DEFAULT_PERIOD, update_handler=None):
        """
        Args:
            cycle_length (int): upper bound and reset target of the counter
            logger (Logger): parent logger, our logs are named below it
            timer_scheduler (TimerScheduler): shared scheduler, one is created if None
            period (float): seconds between ticks
            update_handler (callable): called with count_left after every tick and reset
        """
        self.log_name = CyclicTimer.__name__
        if logger:
            self.log_name = logger.name + "." + CyclicTimer.__name__
        self.logger = get_logger(self.log_name)

        check_period(period)
        self.period = period
        self.core = TimerCore(cycle_length, "%s.TimerCore" % self.log_name)

        self.timer_scheduler = timer_scheduler
        if not self.timer_scheduler:
            self.timer_scheduler = TimerScheduler(self.logger)
        self.lifecycle = TimerLifecycle(self.timer_scheduler,
                                        "%s.TimerLifecycle" % self.log_name)
        self.update_handler = update_handler

        self.pool = None
        self.eventlets = []

    @property
    def count_left(self):
        """count_left property returns the remaining count of the current cycle"""
        return self.core.count_left

    @property
    def cycle_length(self):
        """cycle_length property returns the cycle length in force"""
        return self.core.cycle_length

    @property
    def mounted(self):
        """mounted property is True while the time source is bound"""
        return self.lifecycle.is_bound()

    def mount(self, cycle_length=None):
        """Start ticking.

        Args:
            cycle_length (int): if given, replaces the cycle length and restarts the count
        Raises:
            AlreadyActiveError: already mounted, the count is left alone
            SchedulingError: the scheduler refused the job, the count is left alone
        """
        if cycle_length is not None:
            check_cycle_length(cycle_length)
        if self.lifecycle.is_bound():
            raise AlreadyActiveError("already mounted with %d/%d left"
                                     % (self.core.count_left, self.core.cycle_length))

        self.lifecycle.activate(self.period, self._tick)

        # no tick can run before this returns, the scheduler is cooperative
        if cycle_length is not None:
            self.core.configure(cycle_length)
        if self.core.pending_cycle_length is not None:
            self.core.reset()
        self.logger.info("mounted with %d/%d left", self.core.count_left,
                         self.core.cycle_length)

    def unmount(self):
        """Stop ticking. Safe to call more than once."""
        if self.lifecycle.deactivate():
            self.logger.info("unmounted with %d/%d left", self.core.count_left,
                             self.core.cycle_length)

    def reset(self):
        """Restart the current cycle"""
        self.core.reset()
        self._notify()

    def _tick(self):
        self.core.tick()
        self._notify()

    def _notify(self):
        if self.update_handler:
            self.update_handler(self.core.count_left)

    def __enter__(self):
        self.mount()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.unmount()
        return False

    def run(self):
        """mount and run the scheduler until shutdown"""
        self.logger.info("Starting")
        self.mount()
        try:
            self._start_threads_and_wait()
        finally:
            self.unmount()

    def shutdown(self):
        """stop the scheduler, kill eventlets and unmount"""
        self.timer_scheduler.shutdown()
        for eventlet in self.eventlets:
            eventlet.kill()
        self.unmount()

    def _start_threads_and_wait(self):
        """Start the thread and wait until they complete"""
        self.pool = GreenPool()
        self.eventlets.append(self.pool.spawn(self.timer_scheduler.run))
        self.pool.waitall()
