import logging
from pathlib import Path
from typing import Dict

import colorlog
from concurrent_log_handler import ConcurrentRotatingFileHandler

from farm_summary.util.path import mkdir, path_from_root

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def initialize_logging(service_name: str, logging_config: Dict, root_path: Path):
    log_date_format = "%Y-%m-%dT%H:%M:%S"
    file_name_length = 33 - len(service_name)
    if logging_config.get("log_stdout", True):
        handler = colorlog.StreamHandler()
        handler.setFormatter(
            colorlog.ColoredFormatter(
                f"%(asctime)s.%(msecs)03d {service_name} %(name)-{file_name_length}s: "
                f"%(log_color)s%(levelname)-8s%(reset)s %(message)s",
                datefmt=log_date_format,
                reset=True,
            )
        )
        logger = colorlog.getLogger()
        logger.addHandler(handler)
    else:
        log_path = path_from_root(root_path, logging_config.get("log_filename", "log/farm_summary.log"))
        mkdir(str(log_path.parent))
        logger = logging.getLogger()
        maxrotation = logging_config.get("log_maxfilesrotation", 7)
        handler = ConcurrentRotatingFileHandler(log_path, "a", maxBytes=20 * 1024 * 1024, backupCount=maxrotation)
        handler.setFormatter(
            logging.Formatter(
                fmt=f"%(asctime)s.%(msecs)03d {service_name} %(name)-{file_name_length}s: %(levelname)-8s %(message)s",
                datefmt=log_date_format,
            )
        )
        logger.addHandler(handler)

    level = logging_config.get("log_level", "WARNING")
    if level in LOG_LEVELS:
        logger.setLevel(getattr(logging, level))
    else:
        logger.setLevel(logging.WARNING)
    if logger.level <= logging.DEBUG:
        logging.getLogger("asyncio").setLevel(logging.INFO)
    return logger
