import sys
from sw.common.logger import get_logger, log
from sw.core import config
from sw.ui.app import main

# Entry point for `python -m sw`
def run() -> None:
    try:
        # Default handlers first so the settings load itself gets logged, then re-level from those settings
        get_logger()
        log.info("=== INITIALIZED NEW SESSION ===")
        settings = config.load_settings()
        get_logger(level=config.log_level(settings), console=settings["console_log"])
        main(settings)
    except SystemExit:
        raise
    except Exception:
        # Full stack trace, always
        log.exception("Uncaught exception in entrypoint, exiting")
        sys.exit(1)

if __name__ == "__main__":
    run()
