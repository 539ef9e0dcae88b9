import logging
from pathlib import Path
from datetime import datetime

LOGGER_NAME = "candle_pricing"
LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def setup_file_logger(log_dir: Path, front_end: str = "app", level: int = logging.INFO,
                      keep: int = 20) -> logging.Logger:
    """
    Attach one file handler to the package logger.

    Each front end (Streamlit page, API) writes its own timestamped file;
    only the newest ``keep`` files for that front end are left on disk.
    Calling this again in the same process returns the configured logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        return logger

    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    _prune_logs(log_dir, front_end, keep - 1)

    log_file = log_dir / f"{LOGGER_NAME}_{front_end}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
    fh = logging.FileHandler(log_file, encoding="utf-8")
    fh.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(fh)

    logger.info("Logging %s to %s", front_end, log_file)
    return logger


def _prune_logs(log_dir: Path, front_end: str, keep: int):
    old = sorted(log_dir.glob(f"{LOGGER_NAME}_{front_end}_*.log"))
    for path in old[:max(len(old) - keep, 0)]:
        try:
            path.unlink()
        except OSError as e:
            # still open elsewhere (Windows) or already gone
            logging.getLogger(LOGGER_NAME).debug("Could not remove old log %s: %s", path, e)
