# shop_logging.py
# Info and results loggers for scenario runs

import os
import time
import logging
from typing import Optional, Tuple

INFO_LOGGER_NAME = 'init_logger.shop_test'
RESULTS_LOGGER_NAME = 'init_result_logger_gui.shop_test'

logger = logging.getLogger(INFO_LOGGER_NAME)
result_logger_gui = logging.getLogger(RESULTS_LOGGER_NAME)

SEPARATOR = "---------------------------------------------------"


def setup_logging(logs_path: Optional[str] = None) -> Tuple[logging.Logger, logging.Logger]:
    """
    Setup info and results logging

    Args:
        logs_path: Folder for the timestamped log files. When None, the loggers
            are reset without file handlers (records still propagate).

    Returns:
        (info_logger, results_logger)
    """
    logger.setLevel(logging.DEBUG)
    result_logger_gui.setLevel(logging.INFO)

    for log in (logger, result_logger_gui):
        for handler in list(log.handlers):
            log.removeHandler(handler)
            handler.close()

    if logs_path:
        os.makedirs(logs_path, exist_ok=True)
        timestamp = time.strftime("%Y%m%d_%H%M%S")

        info_handler = logging.FileHandler(os.path.join(logs_path, f"info_log_{timestamp}.log"))
        info_handler.setLevel(logging.DEBUG)
        info_handler.setFormatter(logging.Formatter('%(asctime)s - %(levelname)s - %(message)s'))
        logger.addHandler(info_handler)

        results_handler = logging.FileHandler(os.path.join(logs_path, f"results_log_{timestamp}.log"))
        results_handler.setLevel(logging.INFO)
        results_handler.setFormatter(logging.Formatter('%(asctime)s - %(message)s'))
        result_logger_gui.addHandler(results_handler)

    logger.info("Shop test logging initialized")
    return logger, result_logger_gui


def log_message(message: str, level: str = "info"):
    """
    Log a message to both loggers

    Args:
        message: The message to log
        level: Log level - "info", "warning", "error", "debug"
    """
    log_level = {
        "warning": logging.WARNING,
        "error": logging.ERROR,
        "debug": logging.DEBUG,
    }.get(level, logging.INFO)

    logger.log(log_level, message)
    result_logger_gui.log(log_level, message)

    # Separator after every message in results logger
    result_logger_gui.info(SEPARATOR)
