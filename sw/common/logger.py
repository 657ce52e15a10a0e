import logging
from pathlib import Path
from logging.handlers import RotatingFileHandler
from sw.common.setup import PATHS, ensure_directory
from datetime import datetime

LOGGER_NAME = "stopwatch"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s:%(filename)s:%(lineno)d] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
ROTATE_BYTES = 5 * 1024 * 1024
ROTATE_COUNT = 5

# Builds a handler with our shared format and a stable name, so later calls can find it again.
def _named_handler(handler, name, level):
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
    handler.set_name(name)
    return handler

# Attaches this run's handlers to the package logger. Handlers are looked up by name, so calling this again only
# adds what's missing and moves the existing ones to the new level.
def get_logger(
        name = LOGGER_NAME,
        level = logging.INFO,
        log_dir: Path | None = None,
        persistent = True,
        console = False,
        historical_debugs: int = 10
) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.propagate = False
    existing = {h.get_name(): h for h in logger.handlers}
    debug_name = f"{name}:historical_debug"

    if persistent or historical_debugs > 0:
        log_dir = ensure_directory(log_dir or PATHS.logs)

    # Rotating log across runs, plus latest.log which gets overwritten each run
    if persistent and f"{name}:persistent" not in existing:
        logger.addHandler(_named_handler(
            RotatingFileHandler(log_dir / f"{name}.log", maxBytes=ROTATE_BYTES, backupCount=ROTATE_COUNT, encoding="utf-8"),
            f"{name}:persistent", level))
        logger.addHandler(_named_handler(
            logging.FileHandler(log_dir / "latest.log", mode="w", encoding="utf-8"),
            f"{name}:latest", level))

    # Full debug log for this run only, keeping the newest `historical_debugs` runs around
    if historical_debugs > 0 and debug_name not in existing:
        debug_dir = ensure_directory(log_dir / "debug")
        this_run_path = debug_dir / f"{name}_{datetime.now():%Y-%m-%d_%H-%M-%S}.log"
        logger.addHandler(_named_handler(logging.FileHandler(this_run_path, encoding="utf-8"), debug_name, logging.DEBUG))

        runs = sorted(debug_dir.glob(f"{name}_*.log"),key=lambda p: p.stat().st_mtime,reverse=True)
        for run in runs[historical_debugs:]:
            try: run.unlink()
            except OSError: pass

    if console and f"{name}:console" not in existing:
        logger.addHandler(_named_handler(logging.StreamHandler(), f"{name}:console", level))

    # Re-level everything except the per-run debug file, which always records DEBUG
    for handler in logger.handlers:
        if handler.get_name() != debug_name:
            handler.setLevel(level)
    has_debug_file = any(h.get_name() == debug_name for h in logger.handlers)
    logger.setLevel(min(level, logging.DEBUG) if has_debug_file else level)
    return logger

# Bare package logger. Importing the core must not create log files, so handlers only get attached once the
# entry point calls get_logger().
log = logging.getLogger(LOGGER_NAME)
