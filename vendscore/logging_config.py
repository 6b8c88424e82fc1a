"""Structured JSON logging setup."""
import json
import logging
from datetime import datetime, timezone

from vendscore.config import Settings, settings as default_settings

_HANDLER_TAG = "_vendscore_handler"


class JSONFormatter(logging.Formatter):
    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName
        }
        if hasattr(record, "duration"):
            log_entry["duration_seconds"] = record.duration
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def configure_logging(config: Settings = None) -> logging.Logger:
    """
    Configure root logger with a JSON file handler and a console handler.
    
    Safe to call more than once; handlers installed by a previous call are
    replaced rather than duplicated.
    
    Args:
        config: Settings to read log level and directory from
    
    Returns:
        The configured root logger
    """
    config = config or default_settings
    root_logger = logging.getLogger()
    
    for handler in list(root_logger.handlers):
        if getattr(handler, _HANDLER_TAG, False):
            root_logger.removeHandler(handler)
            handler.close()
    
    # Setup console handler with standard format
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
    setattr(console_handler, _HANDLER_TAG, True)
    root_logger.addHandler(console_handler)
    
    # Setup file handler with JSON formatter
    if config.log_json:
        config.log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(config.log_file)
        file_handler.setFormatter(JSONFormatter())
        setattr(file_handler, _HANDLER_TAG, True)
        root_logger.addHandler(file_handler)
    
    root_logger.setLevel(config.log_level.upper())
    return root_logger
