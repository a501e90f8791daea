import unittest

from ftorplanner.events.Event_Bus import EventBus, LANGUAGE_CHANGED, BACKUP_IMPORTED
from ftorplanner.events.event_helpers import publish_language_changed, publish_backup_imported
from ftorplanner.events.web_observers import RecentEvents


class TestEventBus(unittest.TestCase):

    def setUp(self):
        self.bus = EventBus()
        self.received = []

    def listener(self, name, payload):
        self.received.append((name, payload))

    def test_subscribe_and_unsubscribe(self):
        unsubscribe = self.bus.subscribe(LANGUAGE_CHANGED, self.listener)
        self.bus.subscribe(LANGUAGE_CHANGED, self.listener)
        self.assertEqual(self.bus.subscriber_count(LANGUAGE_CHANGED), 1)

        self.bus.publish(LANGUAGE_CHANGED, {"language": "fr"})
        unsubscribe()
        self.bus.publish(LANGUAGE_CHANGED, {"language": "en"})

        self.assertEqual(self.received, [(LANGUAGE_CHANGED, {"language": "fr"})])
        self.assertEqual(self.bus.subscriber_count(LANGUAGE_CHANGED), 0)
        # removing twice is harmless
        unsubscribe()

    def test_failing_listener_does_not_block_others(self):
        def broken(name, payload):
            raise RuntimeError("boom")

        self.bus.subscribe(BACKUP_IMPORTED, broken)
        self.bus.subscribe(BACKUP_IMPORTED, self.listener)
        with self.assertLogs("ftorplanner.events.Event_Bus", level="ERROR"):
            publish_backup_imported(self.bus, ["meals"])
        self.assertEqual(self.received, [(BACKUP_IMPORTED, {"keys": ["meals"]})])

    def test_helpers_ignore_missing_bus(self):
        publish_language_changed(None, "ar", True, True)
        publish_backup_imported(None, [])

    def test_separate_buses_are_independent(self):
        other = EventBus()
        self.bus.subscribe(LANGUAGE_CHANGED, self.listener)
        publish_language_changed(other, "ar", True, True)
        self.assertEqual(self.received, [])


class TestRecentEvents(unittest.TestCase):

    def setUp(self):
        self.bus = EventBus()
        self.recent = RecentEvents(max_events=3).attach(self.bus)

    def test_cursor_returns_only_newer_events(self):
        publish_language_changed(self.bus, "fr", False, False)
        first = self.recent.get_events()
        self.assertEqual(len(first["events"]), 1)
        self.assertEqual(first["events"][0]["language"], "fr")

        publish_language_changed(self.bus, "ar", True, True)
        newer = self.recent.get_events(since=first["next_cursor"])
        self.assertEqual([e["language"] for e in newer["events"]], ["ar"])
        self.assertTrue(newer["events"][0]["reload_required"])
        self.assertEqual(self.recent.get_events(since=newer["next_cursor"])["events"], [])

    def test_buffer_is_bounded(self):
        for i in range(5):
            publish_backup_imported(self.bus, [f"key{i}"])
        events = self.recent.get_events()["events"]
        self.assertEqual([e["id"] for e in events], [3, 4, 5])

    def test_attach_is_idempotent_and_detach_stops_recording(self):
        self.recent.attach(self.bus)
        self.assertEqual(self.bus.subscriber_count(LANGUAGE_CHANGED), 1)
        self.recent.detach()
        publish_language_changed(self.bus, "en", False, False)
        self.assertEqual(self.recent.get_events()["events"], [])


if __name__ == '__main__':
    unittest.main()
