import itertools
from abc import ABC, abstractmethod

# Repeating-callback capability injected into a Stopwatch. All a stopwatch ever asks for is "call this every
# N ms" and "stop calling it". The Qt-backed implementation lives in sw.ui.scheduler, keeping core free of Qt.
class Scheduler(ABC):

    # Calls callback() every interval_ms until cancelled, returning a handle for cancel().
    @abstractmethod
    def schedule_repeating(self, callback, interval_ms):
        ...

    # Stops the registration behind the handle. Cancelling twice is harmless.
    @abstractmethod
    def cancel(self, handle):
        ...


class _Registration:
    __slots__ = ("seq", "callback", "interval", "due", "active")

    def __init__(self, seq, callback, interval, due):
        self.seq = seq
        self.callback = callback
        self.interval = interval
        self.due = due
        self.active = True


# Deterministic clock for tests and headless use. Time starts at 0 ms and only moves through advance(). Callbacks
# that come due during an advance fire in due-time order (registration order on ties), with `now` set to their
# due time while they run.
class VirtualScheduler(Scheduler):

    def __init__(self):
        self.now = 0
        self._seq = itertools.count()
        self._registrations = []

    def schedule_repeating(self, callback, interval_ms):
        if interval_ms <= 0:
            raise ValueError(f"Interval must be positive, got {interval_ms}")
        registration = _Registration(next(self._seq), callback, interval_ms, self.now + interval_ms)
        self._registrations.append(registration)
        return registration

    def cancel(self, handle):
        handle.active = False
        if handle in self._registrations:
            self._registrations.remove(handle)

    def pending(self):
        return len(self._registrations)

    def _next_due(self, until):
        due = [r for r in self._registrations if r.due <= until]
        if not due:
            return None
        return min(due, key=lambda r: (r.due, r.seq))

    # Fires everything due within the next `ms` milliseconds. Callbacks may cancel or add registrations,
    # so the candidate set is re-evaluated after every single firing.
    def advance(self, ms):
        if ms < 0:
            raise ValueError(f"Cannot advance the clock backwards ({ms}ms)")
        until = self.now + ms
        while True:
            registration = self._next_due(until)
            if registration is None:
                break
            self.now = registration.due
            registration.due += registration.interval
            registration.callback()
        self.now = until
