from enum import Enum
from sw.common.logger import log
from sw.core.events import EventEmitter
from sw.core.timespec import parse_time_spec

DEFAULT_MAX_TIME = 300
TICK_INTERVAL_MS = 1000
EVENTS = ("start", "stop", "pause", "restart", "tick")


class RunState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


# Countdown timer with start/pause/stop/restart controls. Time is counted in whole seconds by a repeating
# callback from the injected scheduler, and every state change is announced through named events.
class Stopwatch:

    def __init__(self, scheduler=None, max_time=None):
        self._scheduler = scheduler
        self._handle = None
        self._finished = False
        self._events = EventEmitter(EVENTS)
        self._state = RunState.IDLE
        self.elapsed = 0
        self.max = DEFAULT_MAX_TIME
        if max_time is not None:
            self.max_time(max_time)

    @property
    def state(self):
        return self._state

    # True once the countdown has run out by itself, until something starts a new run or seeks.
    @property
    def finished(self):
        return self._finished

    # The real Qt scheduler is only built on first start, so the core works without Qt when one is injected.
    def _get_scheduler(self):
        if self._scheduler is None:
            from sw.ui.scheduler import QtScheduler
            self._scheduler = QtScheduler()
        return self._scheduler

    #region === Listeners ===

    def on(self, event, callback):
        self._events.on(event, callback)
    def off(self, event, callback):
        self._events.off(event, callback)

    #endregion === Listeners ===

    #region === Lifecycle ===

    def start(self):
        if self._state is RunState.RUNNING:
            return
        # A countdown that already ran out starts a new run, even if the max was raised in the meantime.
        if self._state is RunState.IDLE and (self._finished or self.elapsed >= self.max):
            self.elapsed = 0
        self._finished = False
        self._state = RunState.RUNNING
        self._arm()
        log.debug(f"Started stopwatch at {self.elapsed}/{self.max}s")
        self._events.emit("start")
        self._events.emit("tick")

    def pause(self):
        if self._state is not RunState.RUNNING:
            return
        self._disarm()
        self._state = RunState.PAUSED
        log.debug(f"Paused stopwatch at {self.elapsed}/{self.max}s")
        self._events.emit("pause")

    def stop(self):
        if self._state is RunState.IDLE:
            return
        self._disarm()
        self._state = RunState.IDLE
        self.elapsed = 0
        log.debug("Stopped stopwatch")
        self._events.emit("stop")

    # Stop-and-start in one go, announced only as "restart" regardless of what state we came from.
    def restart(self):
        self._disarm()
        self.elapsed = 0
        self._finished = False
        self._state = RunState.RUNNING
        self._arm()
        log.debug(f"Restarted stopwatch with max {self.max}s")
        self._events.emit("restart")
        self._events.emit("tick")

    #endregion === Lifecycle ===

    #region === Accessors ===

    def max_time(self, spec=None):
        if spec is not None:
            self.max = parse_time_spec(spec)
            log.debug(f"Set stopwatch max time to {self.max}s from '{spec}'")
        return self.max

    # Sets elapsed directly, whatever the current state. The max bound is only enforced by the next tick.
    def current_time(self, value=None):
        if value is not None:
            self.elapsed = max(0, int(value))
            self._finished = False
            log.debug(f"Manually set stopwatch time to {self.elapsed}s")
        return self.elapsed

    def remaining_time(self):
        return max(0, self.max - self.elapsed)

    def is_running(self):
        return self._state is RunState.RUNNING

    def is_paused(self):
        return self._state is RunState.PAUSED

    #endregion === Accessors ===

    #region === Ticking ===

    def _arm(self):
        self._handle = self._get_scheduler().schedule_repeating(self._tick, TICK_INTERVAL_MS)

    def _disarm(self):
        if self._handle is not None:
            self._get_scheduler().cancel(self._handle)
            self._handle = None

    def _tick(self):
        if self._state is not RunState.RUNNING:
            return
        self.elapsed += 1
        if self.elapsed >= self.max:
            self._finish()
        else:
            self._events.emit("tick")

    # Auto-stop on reaching max. Unlike stop(), the counter is left at max so the countdown reads as finished.
    def _finish(self):
        self._disarm()
        self._state = RunState.IDLE
        self.elapsed = self.max
        self._finished = True
        log.info(f"Stopwatch reached its max time of {self.max}s")
        self._events.emit("stop")

    #endregion === Ticking ===
