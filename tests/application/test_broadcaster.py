"""Unit tests for the UpdateBroadcaster."""

from irito.application.broadcaster import INVENTORY_UPDATE, VOICE_COMMAND, UpdateBroadcaster
from tests.fakes import BrokenSink, BusySink, CrashingSink, RecordingSink


class TestUpdateBroadcaster:

    def test_message_envelope(self):
        broadcaster = UpdateBroadcaster()
        sink = RecordingSink()
        broadcaster.register(sink)

        message = broadcaster.publish(INVENTORY_UPDATE, {"productId": "1"})

        assert sink.messages == [message]
        assert message["type"] == "inventory_update"
        assert message["data"] == {"productId": "1"}
        assert message["timestamp"].endswith("+00:00")

    def test_every_sink_sees_publish_order(self):
        broadcaster = UpdateBroadcaster()
        sinks = [RecordingSink(), RecordingSink()]
        for sink in sinks:
            broadcaster.register(sink)

        broadcaster.publish(INVENTORY_UPDATE, {"n": 1})
        broadcaster.publish(VOICE_COMMAND, {"n": 2})

        for sink in sinks:
            assert [m["data"]["n"] for m in sink.messages] == [1, 2]

    def test_no_replay_for_late_sink(self):
        broadcaster = UpdateBroadcaster()
        broadcaster.publish(INVENTORY_UPDATE, {"n": 1})

        sink = RecordingSink()
        broadcaster.register(sink)
        broadcaster.publish(INVENTORY_UPDATE, {"n": 2})

        assert [m["data"]["n"] for m in sink.messages] == [2]

    def test_closed_sink_is_removed(self):
        broadcaster = UpdateBroadcaster()
        closed, live = RecordingSink(), RecordingSink()
        broadcaster.register(closed)
        broadcaster.register(live)
        closed.open = False

        broadcaster.publish(INVENTORY_UPDATE, {})

        assert closed.messages == []
        assert len(live.messages) == 1
        assert broadcaster.sink_count == 1

    def test_failing_sink_is_removed_without_affecting_others(self):
        broadcaster = UpdateBroadcaster()
        broken, live = BrokenSink(), RecordingSink()
        broadcaster.register(broken)
        broadcaster.register(live)

        broadcaster.publish(INVENTORY_UPDATE, {})
        broadcaster.publish(INVENTORY_UPDATE, {})

        assert broken.attempts == 1
        assert len(live.messages) == 2

    def test_unexpected_sink_error_is_contained(self):
        broadcaster = UpdateBroadcaster()
        crashing, live = CrashingSink(), RecordingSink()
        broadcaster.register(crashing)
        broadcaster.register(live)

        broadcaster.publish(INVENTORY_UPDATE, {"n": 1})
        broadcaster.publish(INVENTORY_UPDATE, {"n": 2})

        assert crashing.attempts == 1
        assert [m["data"]["n"] for m in live.messages] == [1, 2]
        assert broadcaster.sink_count == 1

    def test_busy_sink_is_skipped_but_kept(self):
        broadcaster = UpdateBroadcaster()
        busy = BusySink()
        broadcaster.register(busy)

        broadcaster.publish(INVENTORY_UPDATE, {})
        broadcaster.publish(INVENTORY_UPDATE, {})

        assert busy.attempts == 2
        assert broadcaster.sink_count == 1

    def test_register_twice_and_unregister(self):
        broadcaster = UpdateBroadcaster()
        sink = RecordingSink()
        broadcaster.register(sink)
        broadcaster.register(sink)
        assert broadcaster.sink_count == 1

        broadcaster.unregister(sink)
        broadcaster.publish(INVENTORY_UPDATE, {})
        assert sink.messages == []

    def test_publish_without_sinks(self):
        assert UpdateBroadcaster().publish(VOICE_COMMAND, {})["type"] == "voice_command"
