"""Logging configuration and management for the catalogue curation service.

This module provides the logging system used across the application:
- Structured logging with JSON formatting
- Correlation ID tracking across requests
- Request timing middleware
- Performance monitoring decorator for async operations

Every record is a single JSON object so downstream log shippers can index
catalogue ids, fallback reasons and timings without parsing free text.
"""

import logging
import json
import time
import traceback
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from contextvars import ContextVar
from functools import wraps
from pythonjsonlogger import jsonlogger
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from curator.core.config import get_settings

# Get application settings
settings = get_settings()

# Context variable for correlation ID
correlation_id: ContextVar[str] = ContextVar('correlation_id', default='')

class StructuredLogger:
    """Custom logger that ensures consistent structured logging."""

    def __init__(self, name: str):
        """Initialize structured logger with given name."""
        self.logger = logging.getLogger(name)
        self.service_name = settings.APP_NAME
        self.environment = settings.ENVIRONMENT.value

    def _build_log_dict(
        self,
        message: str,
        level: str,
        additional_fields: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Build structured log dictionary with common fields."""
        log_dict = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'service': self.service_name,
            'environment': self.environment,
            'level': level,
            'message': message,
            'correlation_id': correlation_id.get(),
        }

        if additional_fields:
            log_dict.update(additional_fields)

        return log_dict

    @staticmethod
    def _dumps(log_dict: Dict[str, Any]) -> str:
        return json.dumps(log_dict, default=str)

    def info(self, message: str, **kwargs):
        """Log info level message with structured data."""
        self.logger.info(
            self._dumps(self._build_log_dict(message, 'INFO', kwargs))
        )

    def error(self, message: str, error: Optional[BaseException] = None, **kwargs):
        """Log error level message with structured data and optional exception."""
        log_dict = self._build_log_dict(message, 'ERROR', kwargs)

        if error is not None:
            log_dict.update({
                'error_type': error.__class__.__name__,
                'error_message': str(error),
                'error_trace': self._get_traceback(error)
            })

        self.logger.error(self._dumps(log_dict))

    def warning(self, message: str, **kwargs):
        """Log warning level message with structured data."""
        self.logger.warning(
            self._dumps(self._build_log_dict(message, 'WARNING', kwargs))
        )

    def debug(self, message: str, **kwargs):
        """Log debug level message with structured data."""
        self.logger.debug(
            self._dumps(self._build_log_dict(message, 'DEBUG', kwargs))
        )

    @staticmethod
    def _get_traceback(error: BaseException) -> str:
        """Get formatted traceback from exception."""
        return ''.join(traceback.format_exception(
            type(error),
            error,
            error.__traceback__
        ))

class CorrelationMiddleware(BaseHTTPMiddleware):
    """Middleware to handle correlation ID for request tracking."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint
    ) -> Response:
        """Process request with correlation ID tracking."""
        token = correlation_id.set(
            request.headers.get('X-Correlation-ID', str(uuid.uuid4()))
        )

        try:
            response = await call_next(request)
            response.headers['X-Correlation-ID'] = correlation_id.get()
            return response
        finally:
            correlation_id.reset(token)

class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging request and response details."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint
    ) -> Response:
        """Log request and response details."""
        logger = get_logger(__name__)
        start_time = time.perf_counter()

        logger.info(
            "Request started",
            method=request.method,
            path=request.url.path,
            client_host=request.client.host if request.client else None
        )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request failed",
                error=e,
                method=request.method,
                path=request.url.path,
                process_time_ms=round((time.perf_counter() - start_time) * 1000, 2)
            )
            raise

        logger.info(
            "Request completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            process_time_ms=round((time.perf_counter() - start_time) * 1000, 2)
        )
        return response

class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter adding timestamp and level to every record."""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        log_record['timestamp'] = record.created
        log_record['level'] = record.levelname

def setup_logging():
    """Configure logging for the application."""
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)

    # Replace any JSON handler installed by a previous call
    for handler in list(root.handlers):
        if isinstance(handler.formatter, CustomJsonFormatter):
            root.removeHandler(handler)

    json_handler = logging.StreamHandler()
    json_handler.setFormatter(CustomJsonFormatter())
    root.addHandler(json_handler)

def get_logger(name: str) -> StructuredLogger:
    """Get a structured logger instance."""
    return StructuredLogger(name)

# Performance monitoring decorator
def monitor_performance(name: Optional[str] = None):
    """Decorator for monitoring async function performance."""
    def decorator(func):
        @wraps(func)
        async def wrapped(*args, **kwargs):
            logger = get_logger(func.__module__)
            start_time = time.perf_counter()

            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                logger.error(
                    f"Function {name or func.__name__} failed",
                    error=e,
                    process_time_ms=round((time.perf_counter() - start_time) * 1000, 2)
                )
                raise

            logger.info(
                f"Function {name or func.__name__} completed",
                process_time_ms=round((time.perf_counter() - start_time) * 1000, 2)
            )
            return result

        return wrapped
    return decorator
