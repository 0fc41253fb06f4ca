from contextvars import ContextVar
from datetime import datetime, timezone
from enum import StrEnum
import logging
import os
import sys
from typing import TYPE_CHECKING

from loguru import logger as loguru_logger


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from src.platform.config.core_setting import settings
from src.platform.constant.path import LOG_DIR
from src.platform.logging.service_context import get_service_context


# Use test log directory if in test environment
LOG_DIR = os.environ.get('TEST_LOG_DIR', LOG_DIR)


SENSITIVE_KEYWORDS = {
    'password',
    'phone',
}

chain_start_time_var: ContextVar[float] = ContextVar('chain_start_time_var', default=0)
call_depth_var: ContextVar[int] = ContextVar('call_depth_var', default=0)


class ExtraField(StrEnum):
    SERVICE_CONTEXT = 'service_context'
    CHAIN_START_TIME = 'chain_start_time'
    CALL_TARGET = 'call_target'


def _access_log_level(message: str) -> str | None:
    """
    Map a uvicorn access log line to a log level by its status code.

    Format: '127.0.0.1:51234 - "POST /api/events/registrations HTTP/1.1" 201'
    """
    if '"' not in message or ' HTTP/' not in message:
        return None

    try:
        status_code = int(message.rsplit('"', 1)[1].split()[0])
    except (ValueError, IndexError):
        return None

    if status_code >= 500:
        return 'CRITICAL'
    if status_code >= 400:
        return 'ERROR'
    if status_code >= 300:
        return 'WARNING'
    return 'SUCCESS'


def _default_extra() -> dict[str, str]:
    return {
        ExtraField.SERVICE_CONTEXT: get_service_context(),
        ExtraField.CHAIN_START_TIME: '',
        ExtraField.CALL_TARGET: '',
    }


class InterceptHandler(logging.Handler):
    """Route stdlib logging (uvicorn, sqlalchemy, asyncio) into loguru."""

    def __init__(self) -> None:
        super().__init__()
        self._bound_logger: 'LoguruLogger' = loguru_logger.bind(**_default_extra())

    def emit(self, record: logging.LogRecord) -> None:
        message = record.getMessage()

        # asyncio selector chatter
        if record.levelno <= logging.DEBUG and 'Using selector:' in message:
            return

        level: str | int | None = None
        if record.name == 'uvicorn.access':
            level = _access_log_level(message)
        if level is None:
            try:
                level = loguru_logger.level(record.levelname).name
            except ValueError:
                level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore
            depth += 1

        self._bound_logger.opt(depth=depth, exception=record.exc_info).log(level, message)


# Log format for LoguruIO decorated functions
io_log_format = ' | '.join(
    (
        f'<c>{{extra[{ExtraField.SERVICE_CONTEXT}]}}</>',
        '<lvl>{level:<8}</>',
        f'<c>{{file}}::{{function}}:{{line}}</>=><y>{{extra[{ExtraField.CALL_TARGET}]}}</>',
        '{message}',
        '<lk>{elapsed}</>',
        f'<lk>{{extra[{ExtraField.CHAIN_START_TIME}]:<18}}</>',
    )
)


# Configure logger
loguru_logger.remove()  # Remove default handler to avoid duplicate output and use custom format
custom_logger = loguru_logger.bind(**_default_extra())

min_log_level = 'DEBUG' if settings.DEBUG else 'INFO'

custom_logger.add(sys.stdout, format=io_log_format, level=min_log_level, enqueue=True)

# File output only in DEBUG mode; production ships stdout to the log collector
if settings.DEBUG:
    now_utc = datetime.now(timezone.utc)
    log_filename = (
        f'test_{now_utc.strftime("%Y-%m-%d_%H")}.log'
        if os.environ.get('TEST_LOG_DIR')
        else f'{now_utc.strftime("%Y-%m-%d_%H")}.log'
    )
    custom_logger.add(
        f'{LOG_DIR}/{log_filename}',
        format=io_log_format,
        rotation='1 hour',
        retention='7 days',
        compression='gz',
        enqueue=True,
        level=min_log_level,
    )

# Intercept standard logging -> loguru
logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
