from TableOPS_V1.core.app import build_app
from TableOPS_V1.core.settings import load_settings
from TableOPS_V1.logger import get_logger, setup_logger
from TableOPS_V1.ui.login import run as run_login


def run():
    settings = load_settings()
    setup_logger(level=settings.log_level, log_file=settings.diagnostic_log_file)
    logger = get_logger()

    app = build_app(settings)
    logger.info(
        "Starting with %d tables, reference clock %s %s",
        settings.table_count,
        settings.reference_clock.date,
        settings.reference_clock.time,
    )
    try:
        run_login(app)
    except (EOFError, KeyboardInterrupt):
        # stdin closed or Ctrl-C at a prompt
        print()
    logger.info("Shutting down")


if __name__ == "__main__":
    run()
