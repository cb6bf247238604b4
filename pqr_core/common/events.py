# pqr_core/common/events.py
from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)

Handler = Callable[[Dict[str, Any]], None]

_registry: Dict[str, List[Handler]] = defaultdict(list)


def subscribe(event_name: str):
    """
    Decorator to register an event handler.
    Usage:
        @subscribe("appointment.cancelled")
        def handler(payload): ...
    """
    def _decorator(fn: Handler) -> Handler:
        _registry[event_name].append(fn)
        return fn
    return _decorator


def publish(event_name: str, payload: Dict[str, Any]) -> None:
    """
    Publish an event to in-process subscribers.
    Payloads are ID-based (strings) to avoid cross-app imports.
    Handler errors propagate to the caller; handlers that must not
    break the publisher catch and log their own failures.
    """
    handlers = _registry.get(event_name, [])
    logger.debug("publish %s -> %d handler(s)", event_name, len(handlers))
    for handler in handlers:
        handler(payload)


def subscribers(event_name: str) -> list[Handler]:
    return list(_registry.get(event_name, []))
