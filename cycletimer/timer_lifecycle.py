"""This Module owns the repeating time source that drives a TimerCore"""

from transitions import State, Machine

from cycletimer.utils import get_logger, log_method, AlreadyActiveError, \
    InvalidConfigurationError


def check_period(period):
    """Raise InvalidConfigurationError unless period is a positive number of seconds."""
    if isinstance(period, bool) or not isinstance(period, (int, float)) or period <= 0:
        raise InvalidConfigurationError("period must be a positive number, got %r" % (period,))


class TimerLifecycle:
    """Binds a callback to a repeating TimerScheduler job and guarantees its release.

    At most one job is bound at a time. Every activation starts a new
    generation, firings from any other generation are dropped.
    """

    UNBOUND = "UNBOUND"
    BOUND = "BOUND"

    INITIAL_STATE = UNBOUND
    STATES = [
        State(UNBOUND, "unbound_state"),
        State(BOUND, "bound_state"),
    ]

    TRANSITIONS = [
        {"trigger": "bind", "source": UNBOUND, "dest": BOUND},
        {"trigger": "unbind", "source": BOUND, "dest": UNBOUND},
    ]

    state = None

    def __init__(self, timer_scheduler, log_prefix):
        """
        Args:
            timer_scheduler (TimerScheduler): where the repeating job is registered
            log_prefix (String): the prefix used when outputting logs
        """
        self.timer_scheduler = timer_scheduler
        self.logger = get_logger(log_prefix)
        self.job = None
        self.period = None
        self.on_tick = None
        self.generation = 0
        self.machine = Machine(
            model=self,
            states=TimerLifecycle.STATES,
            transitions=TimerLifecycle.TRANSITIONS,
            queued=True,
            initial=TimerLifecycle.INITIAL_STATE,
        )

    def is_bound(self):
        """Returns true if a repeating job is currently registered"""
        return self.state == self.BOUND

    #
    # State Functionality
    #
    @log_method
    def bound_state(self):  # pylint: disable=missing-docstring
        self.logger.info("generation %d bound, firing every %s",
                         self.generation, self.period)

    @log_method
    def unbound_state(self):  # pylint: disable=missing-docstring
        self.job.cancel()
        self.job = None
        self.on_tick = None
        self.logger.info("generation %d released", self.generation)

    def activate(self, period, on_tick):
        """Register on_tick to be called every period seconds.

        Args:
            period (float): seconds between firings
            on_tick (callable): called with no arguments on each firing
        Raises:
            AlreadyActiveError: a job is already bound, it is left untouched
            SchedulingError: the scheduler refused the job, nothing is bound
        """
        if not callable(on_tick):
            raise InvalidConfigurationError("on_tick must be callable, got %r" % (on_tick,))
        check_period(period)
        if self.is_bound():
            raise AlreadyActiveError(
                "generation %d is still bound, deactivate first" % self.generation)

        generation = self.generation + 1
        job = self.timer_scheduler.call_repeating(period, self._fire, generation)

        self.generation = generation
        self.job = job
        self.period = period
        self.on_tick = on_tick
        self.bind()  # pylint: disable=no-member # pytype: disable=attribute-error

    def deactivate(self):
        """Cancel the bound job. Safe to call when nothing is bound.

        Returns:
            True if a job was released, False if already unbound
        """
        if not self.is_bound():
            self.logger.debug("deactivate called while unbound, nothing to release")
            return False
        self.unbind()  # pylint: disable=no-member # pytype: disable=attribute-error
        return True

    def _fire(self, generation):
        if generation != self.generation or not self.is_bound():
            self.logger.debug("dropping firing from generation %d (current %d, state %s)",
                              generation, self.generation, self.state)
            return
        self.on_tick()
