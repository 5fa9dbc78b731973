import logging
import sys
from typing import Optional

from .config import LOGGER_NAME

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
	"""Attach console (and optionally file) handlers to the package logger.

	Calling it again replaces the handlers instead of stacking duplicates.
	"""
	logger = logging.getLogger(LOGGER_NAME)
	logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
	for handler in list(logger.handlers):
		logger.removeHandler(handler)
		handler.close()

	formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
	console = logging.StreamHandler(sys.stderr)
	console.setFormatter(formatter)
	logger.addHandler(console)
	if log_file:
		file_handler = logging.FileHandler(log_file, encoding="utf-8")
		file_handler.setFormatter(formatter)
		logger.addHandler(file_handler)
	return logger
