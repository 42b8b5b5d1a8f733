import logging
import sys

from pythonjsonlogger.json import JsonFormatter

from app.components.logger.logger_interface import LoggerInterface

TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
JSON_FIELDS = "%(asctime)s %(levelname)s %(name)s %(message)s"


class Logger(LoggerInterface):
    def __init__(self, log_format: str = "text", log_level: str = "INFO") -> None:
        self.log_format = log_format.lower()
        self.log_level = log_level.upper()
        if self.log_format not in {"text", "json"}:
            raise ValueError(f"Invalid log format: {log_format}")
        if self.log_level not in logging.getLevelNamesMapping():
            raise ValueError(f"Invalid log level: {log_level}")

    def _build_formatter(self) -> logging.Formatter:
        if self.log_format == "json":
            return JsonFormatter(
                JSON_FIELDS,
                rename_fields={"levelname": "level", "name": "logger"},
            )
        return logging.Formatter(TEXT_FORMAT)

    def get_logger(self, name: str) -> logging.Logger:
        logger = logging.getLogger(name)

        # Only configure once per name to avoid duplicated handlers
        if not logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(self._build_formatter())
            logger.addHandler(handler)
            logger.propagate = False

        logger.setLevel(self.log_level)
        return logger
