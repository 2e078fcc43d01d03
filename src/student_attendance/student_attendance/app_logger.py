import logging
import os

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOGGER_NAME = "student_attendance"
_DEFAULT_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def setup_logging(level: str | None = None) -> logging.Logger:
    level_value = getattr(logging, (level or _DEFAULT_LEVEL).upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level_value)

    # Avoid duplicate console handlers when create_app() runs more than once
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        ch = logging.StreamHandler()
        ch.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(ch)
    for h in logger.handlers:
        h.setLevel(level_value)

    logger.propagate = False
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    base = logging.getLogger(LOGGER_NAME)
    if not name or name == LOGGER_NAME or name.endswith("." + LOGGER_NAME):
        return base
    # __name__ may be "student_attendance.x" or "src.student_attendance.student_attendance.x"
    marker = LOGGER_NAME + "."
    idx = name.rfind(marker)
    if idx != -1 and (idx == 0 or name[idx - 1] == "."):
        name = name[idx + len(marker):]
    return base.getChild(name)
