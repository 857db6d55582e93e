import logging
import os
import re
from logging.handlers import RotatingFileHandler

from seo_assistant.platform.config import settings

log_dir = os.path.join(os.getcwd(), "logs")
if not os.path.exists(log_dir):
    os.makedirs(log_dir)


def log_file_name(app_name: str) -> str:
    """Slug the app name into a log file name, e.g. daily_seo_assistant.log"""
    slug = re.sub(r"[^a-z0-9]+", "_", app_name.lower()).strip("_")
    return f"{slug or 'seo_assistant'}.log"


log_file_path = os.path.join(log_dir, log_file_name(settings.APP_NAME))


def get_logger(name: str):
    """
    Logger that writes to the console and to a rotating file under logs/.
    Handlers are attached once per name.
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)

    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    file_handler = RotatingFileHandler(log_file_path, maxBytes=10_000_000, backupCount=5)
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    for handler in (file_handler, console_handler):
        logger.addHandler(handler)

    return logger
