import logging
import sys

HANDLER_NAME = "pinpoint-console"


def setup_logging(log_level=logging.WARNING, logger_name: str = "pinpoint_planner") -> logging.Logger:
    formatter = logging.Formatter(
        fmt="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    if isinstance(log_level, str):
        log_level = logging.getLevelName(log_level.upper())
        if not isinstance(log_level, int):
            log_level = logging.WARNING

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_level)

    # Replace our console handler so it writes to the current stderr
    for handler in list(logger.handlers):
        if handler.get_name() == HANDLER_NAME:
            logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.set_name(HANDLER_NAME)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)
    return logger
