import logging
import logging.config
from pathlib import Path

import yaml

DEFAULT_LOG_YAML = Path(__file__).parent / "logging_config.yaml"

PACKAGE_LOGGER = "osmpoints"


class ColorFormatter(logging.Formatter):
    COLORS = {
        'ERROR': '\033[1;31m',  # Bold red
        'RESET': '\033[0m',  # Reset color
    }

    def format(self, record):
        original_msg = record.msg
        color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
        record.msg = f"{color}{record.msg}{self.COLORS['RESET']}"
        formatted = super().format(record)
        record.msg = original_msg
        return formatted


class CustomLogger:
    """Process-wide logging setup, applied once on first instantiation.

    config_path points to the YAML dictConfig file; it only takes effect on the first call, later calls
    return the already configured instance.
    """
    _instance = None

    def __new__(cls, config_path: Path = DEFAULT_LOG_YAML):
        if cls._instance is None:
            cls._instance = super(CustomLogger, cls).__new__(cls)
            cls._instance._setup_logger(config_path)
        return cls._instance

    def _setup_logger(self, config_path: Path):
        with open(config_path, 'r', encoding="UTF-8") as file:
            config = yaml.safe_load(file)
            logging.config.dictConfig(config)

        for logger_name in config.get('loggers', {}):
            logger = logging.getLogger(logger_name)

            # set formatting
            for handler in logger.handlers:
                if isinstance(handler, logging.FileHandler):
                    handler.setFormatter(logging.Formatter(handler.formatter._fmt, handler.formatter.datefmt))
                elif isinstance(handler, logging.StreamHandler):
                    handler.setFormatter(ColorFormatter(handler.formatter._fmt, handler.formatter.datefmt))

    def get_logger(self, logger_name: str) -> logging.Logger:
        return logging.getLogger(logger_name)


def setup_logger(logger_name: str = PACKAGE_LOGGER) -> logging.Logger:
    """Load the YAML logging configuration (once) and return the requested logger."""
    return CustomLogger().get_logger(logger_name)


def set_logging(config):
    """Apply the log level from the configuration to the package logger."""
    logger = setup_logger(PACKAGE_LOGGER)
    level = getattr(config, 'log_level', 'INFO')
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)
    logger.debug("Log level set to %s", logging.getLevelName(logger.level))
    return logger
