from typing import Callable, Dict, List, NamedTuple
from datetime import datetime

__all__ = [
    'EventBus', 'Event', 'register_default_handlers',
    'RECORDS_LOADED', 'LOAD_FAILED', 'RECORD_SUBMITTED', 'SUBMIT_FAILED', 'EXPORT_EMPTY',
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
        if name not in self._subscribers:
            self._subscribers[name] = []
        self._subscribers[name].append(handler)

    def publish(self, name: str, payload: dict) -> List[dict]:
        if name not in self._subscribers:
            return []

        event = Event(
            name=name,
            ts=datetime.now().isoformat(),
            payload=payload
        )

        results = []
        for handler in self._subscribers[name]:
            result = handler(event, payload)
            results.append(result)
        return results

    def unsubscribe(self, name: str, handler: Handler) -> None:
        if name in self._subscribers:
            if handler in self._subscribers[name]:
                self._subscribers[name].remove(handler)

RECORDS_LOADED = "RECORDS_LOADED"
LOAD_FAILED = "LOAD_FAILED"
RECORD_SUBMITTED = "RECORD_SUBMITTED"
SUBMIT_FAILED = "SUBMIT_FAILED"
EXPORT_EMPTY = "EXPORT_EMPTY"

def record_submitted_handler(event: Event, payload: dict) -> dict:
    return {"notice": "Saved your record!", "level": "success"}

def submit_failed_handler(event: Event, payload: dict) -> dict:
    return {
        "notice": "Saving the record failed.",
        "level": "error",
        "reason": payload.get("reason", ""),
    }

def export_empty_handler(event: Event, payload: dict) -> dict:
    return {"notice": "There is nothing to export yet.", "level": "warning"}

def register_default_handlers(bus: EventBus) -> EventBus:
    bus.subscribe(RECORD_SUBMITTED, record_submitted_handler)
    bus.subscribe(SUBMIT_FAILED, submit_failed_handler)
    bus.subscribe(EXPORT_EMPTY, export_empty_handler)
    return bus
