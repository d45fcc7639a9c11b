"""This module holds the counter of a cyclic countdown timer and its transitions"""
from cycletimer.utils import get_logger, InvalidConfigurationError


def check_cycle_length(cycle_length):
    """Raise InvalidConfigurationError unless cycle_length is a positive integer."""
    if isinstance(cycle_length, bool) or not isinstance(cycle_length, int):
        raise InvalidConfigurationError(
            "cycle length must be an integer, got %r" % (cycle_length,))
    if cycle_length <= 0:
        raise InvalidConfigurationError(
            "cycle length must be positive, got %d" % cycle_length)


class TimerCore:
    """Counts down from cycle_length and wraps back to it instead of reaching zero.

    States are Counting(n) for n in [1, cycle_length]:
        Counting(n) --tick--> Counting(n - 1)          for n > 1
        Counting(1) --tick--> Counting(cycle_length)
        Counting(n) --reset--> Counting(cycle_length)

    count_left is only ever written by tick() and reset().
    """

    DEFAULT_CYCLE_LENGTH = 60

    def __init__(self, cycle_length=DEFAULT_CYCLE_LENGTH, log_prefix=None):
        """
        Args:
            cycle_length (int): upper bound and reset target of the counter.
            log_prefix (str): the prefix used when outputting logs
        """
        check_cycle_length(cycle_length)
        self.logger = get_logger(log_prefix or TimerCore.__name__)
        self._cycle_length = cycle_length
        self._pending_cycle_length = None
        self._count_left = cycle_length
        self.tick_count = 0
        self.wrap_count = 0

    @property
    def count_left(self):
        """Remaining count in the current cycle, always in [1, cycle_length]"""
        return self._count_left

    @property
    def cycle_length(self):
        """Cycle length in force for the current cycle"""
        return self._cycle_length

    @property
    def pending_cycle_length(self):
        """Cycle length staged by configure() and not yet applied, or None"""
        return self._pending_cycle_length

    def configure(self, cycle_length):
        """Stage a new cycle length.

        The current cycle is left alone. The new value is picked up by the
        next reset(), the next wrap-around, or the next activation.
        Args:
            cycle_length (int): new upper bound and reset target.
        """
        check_cycle_length(cycle_length)
        self.logger.info("staging cycle length %d (current %d)",
                         cycle_length, self._cycle_length)
        self._pending_cycle_length = cycle_length

    def tick(self):
        """Decrement the counter in place, wrapping to cycle_length instead of reaching 0."""
        self._count_left -= 1
        self.tick_count += 1
        if self._count_left <= 0:
            self.wrap_count += 1
            self._restart_cycle()
            self.logger.debug("cycle %d complete, wrapped to %d",
                              self.wrap_count, self._count_left)

    def reset(self):
        """Set the counter back to the cycle length in force now."""
        self._restart_cycle()
        self.logger.debug("reset to %d", self._count_left)

    def _restart_cycle(self):
        if self._pending_cycle_length is not None:
            self.logger.info("applying cycle length %d", self._pending_cycle_length)
            self._cycle_length = self._pending_cycle_length
            self._pending_cycle_length = None
        self._count_left = self._cycle_length
