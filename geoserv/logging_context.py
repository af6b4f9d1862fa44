"""
Request correlation for availability and booking lookups.

Every record that reaches a handler carrying ``RequestIdFilter`` gets a
``request_id`` attribute, so one customer query can be followed from the
CLI (or any caller) through address validation and booking intake.

Usage:
    from geoserv.logging_context import get_request_logger, request_scope

    logger = get_request_logger(__name__)
    with request_scope() as request_id:
        logger.info("Validating address")  # [req-1a2b3c4d] in the output
"""

import logging
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Optional

NO_REQUEST = "-"

LOG_FORMAT = "%(asctime)s [%(name)s] [%(request_id)s] %(levelname)s: %(message)s"

_request_id: ContextVar[str] = ContextVar("request_id", default=NO_REQUEST)


def new_request_id() -> str:
    return f"req-{uuid.uuid4().hex[:8]}"


def get_request_id() -> str:
    return _request_id.get()


@contextmanager
def request_scope(request_id: Optional[str] = None) -> Iterator[str]:
    """Tag log records with ``request_id`` (or a fresh one) inside the block.

    The previous id is restored on exit, so scopes nest.
    """
    rid = request_id or new_request_id()
    token = _request_id.set(rid)
    try:
        yield rid
    finally:
        _request_id.reset(token)


class RequestIdFilter(logging.Filter):
    """Stamps the current request id onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = _request_id.get()  # type: ignore[attr-defined]
        return True


def build_handler() -> logging.Handler:
    """Stream handler whose format includes the request id."""
    handler = logging.StreamHandler()
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def get_request_logger(name: str) -> logging.Logger:
    """Logger with ``RequestIdFilter`` attached, for handlers configured elsewhere."""
    logger = logging.getLogger(name)
    if not any(isinstance(f, RequestIdFilter) for f in logger.filters):
        logger.addFilter(RequestIdFilter())
    return logger
