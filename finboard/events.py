import logging
from datetime import datetime
from typing import Callable, Dict, List, NamedTuple

from finboard.functional import Either

logger = logging.getLogger(__name__)

__all__ = [
    'event_bus', 'TRANSACTION_ADDED', 'DATA_CHANGED', 'MUTATION_FAILED',
    'Event', 'EventBus', 'publish_outcome',
]


class Event(NamedTuple):
    name: str
    ts: str
    payload: dict


Handler = Callable[[Event, dict], dict]


class EventBus:
    def __init__(self):
        self._subscribers: Dict[str, List[Handler]] = {}

    def subscribe(self, name: str, handler: Handler) -> None:
        self._subscribers.setdefault(name, []).append(handler)

    def publish(self, name: str, payload: dict) -> List[dict]:
        handlers = self._subscribers.get(name, [])
        if not handlers:
            return []

        event = Event(name=name, ts=datetime.now().isoformat(), payload=payload)
        logger.debug(f"publish {name} -> {len(handlers)} handler(s)")
        return [handler(event, payload) for handler in handlers]

    def unsubscribe(self, name: str, handler: Handler) -> None:
        if handler in self._subscribers.get(name, []):
            self._subscribers[name].remove(handler)


TRANSACTION_ADDED = "TRANSACTION_ADDED"
DATA_CHANGED = "DATA_CHANGED"
MUTATION_FAILED = "MUTATION_FAILED"


def refresh_handler(event: Event, payload: dict) -> dict:
    return {"refresh": 1}


def success_notice_handler(event: Event, payload: dict) -> dict:
    message = payload.get("message")
    if not message:
        return {}
    return {"notice": {"level": "success", "message": message}}


def failure_notice_handler(event: Event, payload: dict) -> dict:
    return {"notice": {"level": "error", "message": payload.get("message", "Something went wrong")}}


def register_default_handlers(bus: EventBus) -> EventBus:
    bus.subscribe(TRANSACTION_ADDED, refresh_handler)
    bus.subscribe(TRANSACTION_ADDED, success_notice_handler)
    bus.subscribe(DATA_CHANGED, refresh_handler)
    bus.subscribe(DATA_CHANGED, success_notice_handler)
    bus.subscribe(MUTATION_FAILED, failure_notice_handler)
    return bus


def publish_outcome(
    bus: EventBus,
    outcome: Either,
    success_message: str,
    event_name: str = DATA_CHANGED,
) -> List[dict]:
    """Publish the result of a mutation: a change event on success, a failure event otherwise."""
    if outcome.is_right():
        return bus.publish(event_name, {"message": success_message})
    return bus.publish(MUTATION_FAILED, outcome.get_error())


def collect(results: List[dict]) -> dict:
    """Merge handler results into refresh count and notices."""
    refresh = sum(r.get("refresh", 0) for r in results)
    notices = [r["notice"] for r in results if "notice" in r]
    return {"refresh": refresh, "notices": notices}


event_bus = register_default_handlers(EventBus())
