"""Mock TimerScheduler and clock
"""


class FakeTimerJob:
    """Behaves like TimerJob"""
    def __init__(self, function, args, timeout, period=None):
        self.function = function
        self.args = args
        self.timeout = timeout
        self.period = period
        self.is_cancelled = False
        self.cancel_count = 0

    def cancel(self):
        """Clones TimerJob.cancel()"""
        self.is_cancelled = True
        self.cancel_count += 1

    def cancelled(self):
        """Clones TimerJob.cancelled()"""
        return self.is_cancelled

    def repeating(self):
        """Clones TimerJob.repeating()"""
        return self.period is not None

    def run(self):
        """Runs job"""
        if not self.is_cancelled:
            self.function(*self.args)

    def fire(self):
        """Runs job even if cancelled, like a firing already in flight"""
        self.function(*self.args)


class FakeTimerScheduler:
    """Behaves like TimerScheduler"""
    def __init__(self):
        self.jobs = []
        self.is_shutdown = False

    def call_later(self, timeout, func, *args):
        """Clones TimerScheduler.call_later()"""
        job = FakeTimerJob(func, args, timeout)
        self.jobs.append(job)
        return job

    def call_repeating(self, period, func, *args):
        """Clones TimerScheduler.call_repeating()"""
        job = FakeTimerJob(func, args, period, period)
        self.jobs.append(job)
        return job

    def live_jobs(self):
        """Jobs that have not been cancelled"""
        return [job for job in self.jobs if not job.cancelled()]

    def run_jobs(self, num_jobs=1):
        """Runs every live job num_jobs times, one-shot jobs only once"""
        for _ in range(num_jobs):
            jobs = sorted(self.live_jobs(), key=lambda x: x.timeout)
            for job in jobs:
                job.run()
                if not job.repeating():
                    self.jobs.remove(job)

    def run(self):
        """Clones TimerScheduler.run()"""
        pass

    def shutdown(self):
        """Clones TimerScheduler.shutdown()"""
        self.is_shutdown = True


class FakeClock:
    """Manually advanced clock, its sleep moves time forward"""
    def __init__(self, now=10000.0):
        self.now = now
        self.sleeps = []

    def time(self):
        """Clones time.time()"""
        return self.now

    def sleep(self, seconds):
        """Clones eventlet.sleep()"""
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds):
        """Move the clock forward"""
        self.now += seconds
