import argparse
import logging
import signal
import sys

from cycletimer.cyclic_timer import CyclicTimer
from cycletimer.timer_core import TimerCore
from cycletimer.utils import InvalidConfigurationError


def get_logger(name, log_level=logging.INFO):
    """Create and return a logger object"""

    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.setLevel(log_level)
        logger_handler = logging.StreamHandler(sys.stdout)
        logger_handler.setLevel(log_level)
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        logger_handler.setFormatter(formatter)
        logger.addHandler(logger_handler)
    return logger


def update_handler(count_left):
    """Render the counter"""

    print("%d" % count_left, flush=True)


def install_reset_signal(timer):
    """Reset the timer on SIGUSR1, through the scheduler so it is ordered with ticks"""

    reset_signal = getattr(signal, 'SIGUSR1', None)
    if reset_signal is None:
        return

    def request_reset(_signum, _frame):
        timer.timer_scheduler.call_later(0, timer.reset)

    signal.signal(reset_signal, request_reset)


def parse_args(argv=None):
    """Parse command line arguments"""

    parser = argparse.ArgumentParser(
        description='Run a cyclic countdown timer and print the count on every change. '
                    'Send SIGUSR1 to reset the count.')

    parser.add_argument(
        '-c',
        '--cycle-length',
        dest='cycle_length',
        type=int,
        help='Count to start each cycle from - Default: %d' % TimerCore.DEFAULT_CYCLE_LENGTH,
        default=TimerCore.DEFAULT_CYCLE_LENGTH)
    parser.add_argument(
        '-p',
        '--period',
        dest='period',
        type=float,
        help='Seconds between ticks - Default: %s' % CyclicTimer.DEFAULT_PERIOD,
        default=float(CyclicTimer.DEFAULT_PERIOD))
    parser.add_argument(
        '-l',
        '--log-level',
        dest='log_level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Set the log level - Default: INFO',
        default='INFO')
    return parser, parser.parse_args(argv)


def main(argv=None):
    """cycletimer main function, configure and run one timer until interrupted"""

    parser, args = parse_args(argv)

    logger = get_logger("CYCLETIMER", getattr(logging, args.log_level))
    logger.info('Starting cycletimer...')

    try:
        timer = CyclicTimer(args.cycle_length, logger, period=args.period,
                            update_handler=update_handler)
    except InvalidConfigurationError as exception:
        parser.error(str(exception))

    install_reset_signal(timer)
    update_handler(timer.count_left)
    try:
        timer.run()
    except KeyboardInterrupt:
        logger.info('Interrupted, shutting down')
        timer.shutdown()


if __name__ == '__main__':
    main()
