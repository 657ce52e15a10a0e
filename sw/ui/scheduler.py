from PySide6.QtCore import QTimer
from sw.common.logger import log
from sw.core.scheduler import Scheduler

# One QTimer per registration, fired from the running Qt event loop.
class QtScheduler(Scheduler):

    def __init__(self, parent=None):
        self._parent = parent

    def schedule_repeating(self, callback, interval_ms):
        timer = QTimer(self._parent)
        timer.setInterval(interval_ms)
        timer.timeout.connect(callback)
        timer.start()
        log.debug(f"Armed QTimer every {interval_ms}ms for {callback!r}")
        return timer

    # Always releases the timer, even one that has already stopped on its own.
    def cancel(self, handle):
        handle.stop()
        handle.deleteLater()
        log.debug("Cancelled QTimer")
