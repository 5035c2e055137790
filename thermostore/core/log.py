import logging
from logging.handlers import RotatingFileHandler

from .config import settings


def configure_logging() -> None:
    """Attach console and rotating-file handlers to the root logger.

    Safe to call more than once (e.g. a lifespan that runs again in tests);
    handlers are only added the first time.
    """
    root = logging.getLogger()
    root.setLevel(settings.log_level.upper())

    if any(isinstance(h, RotatingFileHandler) for h in root.handlers):
        return

    fmt = logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s - %(message)s"
    )

    console = logging.StreamHandler()
    console.setFormatter(fmt)
    root.addHandler(console)

    measurements_log = RotatingFileHandler(
        settings.log_file, maxBytes=5_000_000, backupCount=3
    )
    measurements_log.setFormatter(fmt)
    root.addHandler(measurements_log)

    # httpx logs every request to the search engine at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
