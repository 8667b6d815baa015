# tests/test_events.py
from seasonchain.events.publisher import Event, EventBus, BLOCK_EVENT

class Payload:
    def to_dict(self):
        return {"height": 1}

class TestEventBus:
    def test_publish_reaches_all_subscribers(self):
        bus = EventBus()
        first, second = [], []
        bus.subscribe(first.append)
        bus.subscribe(second.append)

        delivered = bus.publish(Event(BLOCK_EVENT, {"height": 1}))

        assert delivered == 2
        assert len(first) == len(second) == 1

    def test_unsubscribe(self):
        bus = EventBus()
        received = []
        subscription = bus.subscribe(received.append)

        assert subscription.unsubscribe()
        assert not subscription.unsubscribe()
        assert bus.publish(Event(BLOCK_EVENT, None)) == 0
        assert received == []
        assert bus.subscriber_count == 0

    def test_failing_subscriber_is_isolated(self):
        bus = EventBus()
        received = []

        def broken(event):
            raise RuntimeError("subscriber failed")

        bus.subscribe(broken)
        bus.subscribe(received.append)

        assert bus.publish(Event(BLOCK_EVENT, None)) == 1
        assert len(received) == 1
        assert bus.failed_deliveries == 1

    def test_subscriber_may_unsubscribe_during_publish(self):
        bus = EventBus()
        calls = []

        def once(event):
            calls.append(event)
            subscription.unsubscribe()

        subscription = bus.subscribe(once)
        bus.publish(Event(BLOCK_EVENT, None))
        bus.publish(Event(BLOCK_EVENT, None))
        assert len(calls) == 1

    def test_event_serialization(self):
        assert Event(BLOCK_EVENT, Payload()).to_dict() == {"type": "block", "data": {"height": 1}}
        assert Event(BLOCK_EVENT, [1, 2]).to_dict() == {"type": "block", "data": [1, 2]}
