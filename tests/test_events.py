from kindlog.events import (
    EXPORT_EMPTY, LOAD_FAILED, RECORD_SUBMITTED, SUBMIT_FAILED,
    EventBus, register_default_handlers
)


def test_subscribe_and_publish():
    bus = EventBus()
    seen = []

    def handler(event, payload):
        seen.append(event.name)
        return {"ok": payload["n"]}

    bus.subscribe("PING", handler)
    results = bus.publish("PING", {"n": 1})

    assert results == [{"ok": 1}]
    assert seen == ["PING"]


def test_publish_without_subscribers():
    assert EventBus().publish("NOBODY", {}) == []


def test_unsubscribe():
    bus = EventBus()

    def handler(event, payload):
        return {}

    bus.subscribe("PING", handler)
    bus.unsubscribe("PING", handler)
    bus.unsubscribe("PING", handler)

    assert bus.publish("PING", {}) == []


def test_default_handlers_produce_notices():
    bus = register_default_handlers(EventBus())

    [submitted] = bus.publish(RECORD_SUBMITTED, {})
    assert submitted["level"] == "success"

    [failed] = bus.publish(SUBMIT_FAILED, {"reason": "timeout"})
    assert failed["level"] == "error"
    assert failed["reason"] == "timeout"

    [empty] = bus.publish(EXPORT_EMPTY, {})
    assert empty["level"] == "warning"
    assert "nothing to export" in empty["notice"].lower()


def test_load_failures_have_no_default_notice():
    bus = register_default_handlers(EventBus())
    assert bus.publish(LOAD_FAILED, {"reason": "x"}) == []
