import sys
from PySide6.QtCore import Qt
from PySide6.QtGui import QFont
from PySide6.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)
from sw.common.logger import log
from sw.core import config
from sw.core.stopwatch import Stopwatch
from sw.core.timespec import InvalidFormat
from sw.ui.scheduler import QtScheduler
from sw.util import format_time


# ---------------------------------------------------------------------------
# Main window
# ---------------------------------------------------------------------------

# Main window of the stopwatch. Shows the remaining time and drives a single Stopwatch purely through its
# public controls, redrawing whenever the stopwatch announces something.
class StopwatchWindow(QMainWindow):

    def __init__(self, settings=None):
        super().__init__()
        self.setWindowTitle("Stopwatch")
        self.settings = settings if settings is not None else config.load_settings()

        if self.settings.get("always_on_top", True):
            self.setWindowFlags(self.windowFlags() | Qt.WindowStaysOnTopHint)

        # -- Stopwatch, ticking off this window's event loop --
        self.stopwatch = Stopwatch(scheduler=QtScheduler(self))
        self.stopwatch.max_time(self.settings["max_time"])
        for event in ("start", "stop", "pause", "restart", "tick"):
            self.stopwatch.on(event, self._refresh)
        self.stopwatch.on("stop", self._on_stop)

        # -- Layout --
        central = QWidget()
        self.setCentralWidget(central)
        main_lay = QVBoxLayout(central)

        self._time_label = QLabel()
        self._time_label.setAlignment(Qt.AlignCenter)
        time_font = QFont()
        time_font.setPointSize(36)
        time_font.setBold(True)
        self._time_label.setFont(time_font)
        main_lay.addWidget(self._time_label)

        duration_lay = QHBoxLayout()
        duration_lay.addWidget(QLabel("Duration:"))
        self._duration_edit = QLineEdit(self.settings["max_time"])
        self._duration_edit.setPlaceholderText("e.g. 90s, 5m, 1.5h")
        self._duration_edit.returnPressed.connect(self._apply_duration)
        duration_lay.addWidget(self._duration_edit)
        apply_btn = QPushButton("Set")
        apply_btn.clicked.connect(self._apply_duration)
        duration_lay.addWidget(apply_btn)
        main_lay.addLayout(duration_lay)

        btn_lay = QHBoxLayout()
        self._start_btn = QPushButton("Start")
        self._start_btn.clicked.connect(self.stopwatch.start)
        self._pause_btn = QPushButton("Pause")
        self._pause_btn.clicked.connect(self.stopwatch.pause)
        self._stop_btn = QPushButton("Stop")
        self._stop_btn.clicked.connect(self.stopwatch.stop)
        self._restart_btn = QPushButton("Restart")
        self._restart_btn.clicked.connect(self.stopwatch.restart)
        for btn in (self._start_btn, self._pause_btn, self._stop_btn, self._restart_btn):
            btn_lay.addWidget(btn)
        main_lay.addLayout(btn_lay)

        self._status = QLabel()
        main_lay.addWidget(self._status)

        self._refresh()

    # Redraws the countdown and enables only the controls that would actually do something.
    def _refresh(self):
        sw = self.stopwatch
        self._time_label.setText(format_time(sw.remaining_time()))
        self._start_btn.setEnabled(not sw.is_running())
        self._pause_btn.setEnabled(sw.is_running())
        self._stop_btn.setEnabled(sw.is_running() or sw.is_paused())
        if sw.is_running():
            self._status.setText("Running")
        elif sw.is_paused():
            self._status.setText("Paused")

    def _on_stop(self):
        if self.stopwatch.finished:
            self._status.setText("Time's up!")
            QApplication.beep()
        else:
            self._status.setText("Stopped")

    # Applies the typed duration. Bad input keeps the old max and just reports why.
    def _apply_duration(self):
        text = self._duration_edit.text().strip()
        try:
            seconds = self.stopwatch.max_time(text)
        except InvalidFormat as e:
            log.info(f"Rejected duration '{text}': {e}")
            self._status.setText(str(e))
            return
        self.settings["max_time"] = text
        config.save_settings(self.settings)
        self._status.setText(f"Duration set to {format_time(seconds)}")
        self._refresh()


def main(settings=None):
    app = QApplication(sys.argv)
    window = StopwatchWindow(settings)
    window.show()
    sys.exit(app.exec())
