# 📄 File: app/shared/utils/logging.py

# 🧭 Purpose (Layman Explanation):
# This file sets up the logging system that records what happens in the service in a
# structured way (who logged in, which session was revoked, what failed), without ever
# writing passwords, tokens or full email addresses to the logs.

# 🧪 Purpose (Technical Summary):
# Structured logging with text or JSON output (python-json-logger), request-scoped context
# variables injected into every record, and a security audit helper for authentication
# and session lifecycle events.

# 🔗 Dependencies:
# - python-json-logger: JSON log formatting
# - logging: Python standard logging
# - contextvars: Request context tracking

# 🔄 Connected Modules / Calls From:
# Used by: app.main (setup), request logging middleware (log_context), use cases
# (security audit events), email backends (masked recipients)

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional
from uuid import uuid4

from pythonjsonlogger.json import JsonFormatter

SERVICE_NAME = "sigma-auth"

# Context variables for request tracking
request_id_var: ContextVar[str] = ContextVar('request_id', default='')
user_id_var: ContextVar[str] = ContextVar('user_id', default='')

_loggers_cache: Dict[str, "StructuredLogger"] = {}


def mask_email(email: Optional[str]) -> str:
    """
    Mask an email address for logging.

    Keeps the first character of the local part and the full domain,
    e.g. ``john.doe@example.com`` -> ``j***@example.com``.
    """
    if not email or "@" not in email:
        return "***"
    local, domain = email.split("@", 1)
    return f"{local[:1]}***@{domain}"


class ContextualFormatter(logging.Formatter):
    """
    Formatter that adds request context to every log record.

    Adds request ID, user ID and service name so log lines from one
    request can be correlated.
    """

    def format(self, record):
        record.request_id = request_id_var.get('') or '-'
        record.user_id = user_id_var.get('') or '-'
        record.service = SERVICE_NAME
        record.timestamp = datetime.now(timezone.utc).isoformat()
        return super().format(record)


class JSONFormatter(JsonFormatter):
    """
    JSON formatter for structured logging.

    Outputs one JSON object per record with a consistent set of keys for
    log aggregation tools. Extra fields passed through ``extra_fields``
    are flattened into the top-level object.
    """

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record['timestamp'] = datetime.now(timezone.utc).isoformat()
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['service'] = SERVICE_NAME

        if request_id_var.get():
            log_record['request_id'] = request_id_var.get()
        if user_id_var.get():
            log_record['user_id'] = user_id_var.get()

        extra_fields = log_record.pop('extra_fields', None)
        if extra_fields:
            for key, value in extra_fields.items():
                log_record.setdefault(key, value)


class SecurityLogger:
    """
    Logger for authentication and session audit events.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def log_authentication(
        self,
        event_type: str,
        success: bool,
        user_id: Optional[str] = None,
        email: Optional[str] = None,
        reason: Optional[str] = None,
        extra: Optional[Dict] = None
    ):
        """Log authentication events (register, verify, login, refresh)."""
        extra_fields = {
            'event_type': 'authentication',
            'auth_event': event_type,
            'success': success,
            **(extra or {})
        }

        if user_id:
            extra_fields['user_id'] = user_id
        if email:
            extra_fields['email'] = mask_email(email)
        if reason:
            extra_fields['reason'] = reason

        subject = user_id or mask_email(email)
        level = logging.INFO if success else logging.WARNING
        self.logger.log(
            level,
            f"Auth {event_type} for {subject} - {'success' if success else 'failed'}"
            + (f" ({reason})" if reason else ""),
            extra={'extra_fields': extra_fields}
        )

    def log_session_event(
        self,
        event_type: str,
        user_id: str,
        session_id: Optional[str] = None,
        device_id: Optional[str] = None,
        extra: Optional[Dict] = None
    ):
        """Log session lifecycle events (created, rotated, revoked)."""
        extra_fields = {
            'event_type': 'session',
            'session_event': event_type,
            'user_id': user_id,
            **(extra or {})
        }

        if session_id:
            extra_fields['session_id'] = session_id
        if device_id:
            extra_fields['device_id'] = device_id

        self.logger.info(
            f"Session {event_type} for user {user_id}"
            + (f" on device {device_id}" if device_id else ""),
            extra={'extra_fields': extra_fields}
        )


class StructuredLogger:
    """
    Logger wrapper with structured logging capabilities.

    Provides the usual level methods plus a ``security`` audit helper.
    Keyword arguments become structured extra fields.
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)
        self.security = SecurityLogger(self.logger)

    def debug(self, message: str, extra: Dict = None, **kwargs):
        self._log(logging.DEBUG, message, extra, **kwargs)

    def info(self, message: str, extra: Dict = None, **kwargs):
        self._log(logging.INFO, message, extra, **kwargs)

    def warning(self, message: str, extra: Dict = None, **kwargs):
        self._log(logging.WARNING, message, extra, **kwargs)

    def error(self, message: str, extra: Dict = None, exc_info: bool = False, **kwargs):
        self._log(logging.ERROR, message, extra, exc_info=exc_info, **kwargs)

    def _log(self, level: int, message: str, extra: Dict = None, **kwargs):
        """Internal log method with extra fields handling."""
        extra_fields = dict(extra or {})
        passthrough = {}

        for key, value in kwargs.items():
            if key in ('exc_info', 'stack_info', 'stacklevel'):
                passthrough[key] = value
            else:
                extra_fields[key] = value

        if extra_fields:
            passthrough['extra'] = {'extra_fields': extra_fields}

        self.logger.log(level, message, **passthrough)

    def log_business_event(
        self,
        event_type: str,
        description: str,
        entity_id: str = None,
        entity_type: str = None,
        extra: Dict = None
    ):
        """Log business events (maintenance runs, bulk revocations)."""
        extra_fields = {
            'event_type': 'business_event',
            'business_event_type': event_type,
            **(extra or {})
        }

        if entity_id:
            extra_fields['entity_id'] = entity_id
        if entity_type:
            extra_fields['entity_type'] = entity_type

        self.info(description, extra=extra_fields)


def setup_logging(
    log_level: str = 'INFO',
    log_format: str = 'text',
    log_file: Optional[str] = None,
    enable_console: bool = True
) -> logging.Logger:
    """
    Configure root logging for the process.

    Args:
        log_level: Minimum level name (DEBUG, INFO, ...)
        log_format: 'json' for python-json-logger output, anything else for text
        log_file: Optional file path that also receives log records
        enable_console: Write records to stdout

    Returns:
        logging.Logger: The startup logger
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    if log_format.lower() == 'json':
        formatter = JSONFormatter('%(message)s')
    else:
        formatter = ContextualFormatter(
            '%(timestamp)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s'
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('passlib').setLevel(logging.WARNING)
    logging.getLogger('asyncio').setLevel(logging.WARNING)

    return logging.getLogger("startup")


def get_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        StructuredLogger instance
    """
    if name not in _loggers_cache:
        _loggers_cache[name] = StructuredLogger(name)
    return _loggers_cache[name]


@contextmanager
def log_context(request_id: str = None, user_id: str = None):
    """
    Context manager for adding contextual information to logs.

    Args:
        request_id: Request identifier, generated when omitted
        user_id: Authenticated user identifier
    """
    if request_id is None:
        request_id = str(uuid4())

    request_token = request_id_var.set(request_id)
    user_token = user_id_var.set(user_id or '')

    try:
        yield {'request_id': request_id, 'user_id': user_id}
    finally:
        request_id_var.reset(request_token)
        user_id_var.reset(user_token)


def bind_user(user_id: str) -> None:
    """Attach the authenticated user to the current log context."""
    user_id_var.set(user_id)


def log_startup_event(service_name: str, version: str, extra: Dict = None):
    """Log application startup event."""
    get_logger('startup').info(
        f"Service {service_name} starting up",
        extra={
            'event_type': 'service_startup',
            'service_name': service_name,
            'version': version,
            **(extra or {})
        }
    )


def log_shutdown_event(service_name: str, extra: Dict = None):
    """Log application shutdown event."""
    get_logger('shutdown').info(
        f"Service {service_name} shutting down",
        extra={
            'event_type': 'service_shutdown',
            'service_name': service_name,
            **(extra or {})
        }
    )
