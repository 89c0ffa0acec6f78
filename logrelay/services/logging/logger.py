import inspect
import logging
import sys
from typing import Iterable, Optional, Union

from loguru import logger

Level = Union[int, str]

DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan> | "
    "<level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        """
        Forward a standard library record to loguru.

        The loguru level is looked up by name, falling back to the numeric
        level for custom ones.
        """
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message.
        frame, depth = inspect.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


class MainLogger:
    __instance = None

    def __new__(cls) -> "MainLogger":
        """
        Implement singleton pattern to ensure only one instance of MainLogger is created.
        """
        if cls.__instance is None:
            cls.__instance = super().__new__(cls)
            cls.__instance.logger = logger
        return cls.__instance

    def configure(
        self,
        log_level: Level = "INFO",
        log_path: Optional[str] = None,
        log_format: str = DEFAULT_FORMAT,
        colorize: bool = True,
        rotation: str = "00:00",
        retention: str = "10 days",
    ) -> "MainLogger":
        """
        Replace every sink with a stdout sink and an optional rotating file.

        :param log_level: Level name or number
        :param log_path: Log file, ``None`` keeps output on stdout only
        :param log_format: Format of the log messages
        :param colorize: Whether to colorize the console output
        :param rotation: Log rotation setting
        :param retention: Log retention setting
        """
        self.logger.remove()
        self.logger.add(sys.stdout, level=log_level, format=log_format, colorize=colorize)
        if log_path:
            self.logger.add(
                log_path,
                level=log_level,
                format=log_format,
                rotation=rotation,
                retention=retention,
            )
        return self

    @property
    def get_logger(self):
        """Get logger"""
        return self.__instance.logger


def intercept_loggers(names: Iterable[str]) -> None:
    """Send the named standard library loggers to loguru only."""
    for name in names:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False


def setup_logging(level: Level, log_path: Optional[str] = None, loggers: Iterable[str] = ()) -> None:
    MainLogger().configure(log_level=level, log_path=log_path)
    intercept_loggers(loggers)


# Route the standard library loggers (redis, urllib3) through loguru
logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

log = MainLogger().configure().get_logger
