from datetime import datetime

from finboard.events import (
    DATA_CHANGED,
    MUTATION_FAILED,
    TRANSACTION_ADDED,
    Event,
    EventBus,
    collect,
    publish_outcome,
    register_default_handlers,
)
from finboard.functional import Left, Right


def test_event_creation():
    event = Event(name=DATA_CHANGED, ts=datetime.now().isoformat(), payload={"message": "ok"})
    assert event.name == DATA_CHANGED
    assert event.payload["message"] == "ok"


def test_event_bus_subscribe_and_publish():
    bus = EventBus()
    seen = []

    def handler(event: Event, payload: dict) -> dict:
        seen.append(payload)
        return {"processed": True}

    bus.subscribe(TRANSACTION_ADDED, handler)
    results = bus.publish(TRANSACTION_ADDED, {"amount": 50})

    assert results == [{"processed": True}]
    assert seen == [{"amount": 50}]


def test_publish_without_subscribers():
    assert EventBus().publish(DATA_CHANGED, {}) == []


def test_unsubscribe():
    bus = EventBus()

    def handler(event: Event, payload: dict) -> dict:
        return {"called": True}

    bus.subscribe(DATA_CHANGED, handler)
    bus.unsubscribe(DATA_CHANGED, handler)
    assert bus.publish(DATA_CHANGED, {}) == []
    # unknown handler is ignored
    bus.unsubscribe(MUTATION_FAILED, handler)


def test_success_outcome_refreshes_and_notifies():
    bus = register_default_handlers(EventBus())
    result = collect(publish_outcome(bus, Right("d1"), "Debt deleted successfully!"))
    assert result["refresh"] == 1
    assert result["notices"] == [{"level": "success", "message": "Debt deleted successfully!"}]


def test_failure_outcome_notifies_without_refresh():
    bus = register_default_handlers(EventBus())
    outcome = Left({"error": "datastore_error", "message": "Failed to delete debt"})
    result = collect(publish_outcome(bus, outcome, "Debt deleted successfully!"))
    assert result["refresh"] == 0
    assert result["notices"] == [{"level": "error", "message": "Failed to delete debt"}]


def test_transaction_added_event_name():
    bus = EventBus()
    names = []
    bus.subscribe(TRANSACTION_ADDED, lambda e, p: names.append(e.name) or {})
    publish_outcome(bus, Right({}), "added", event_name=TRANSACTION_ADDED)
    assert names == [TRANSACTION_ADDED]
