import unittest

from fixme.core.config import normalize_config
from fixme.core.monitor import ClipboardMonitor, TickOutcome


class FakeClipboard:
    def __init__(self, content=None):
        self.content = content
        self.reads = 0

    def read_text(self):
        self.reads += 1
        return self.content


class CoreMonitorTests(unittest.TestCase):
    def setUp(self):
        self.config = normalize_config({})
        self.clipboard = FakeClipboard("Hello, how are you today?")
        self.frontmost = None
        self.received = []
        self.monitor = ClipboardMonitor(
            self.config,
            read_clipboard=self.clipboard.read_text,
            on_text=lambda text, app: self.received.append((text, app)),
            frontmost_app=lambda: self.frontmost,
        )

    def test_new_prose_is_processed_once(self):
        self.assertEqual(self.monitor.tick(), TickOutcome.PROCESSED)
        self.assertEqual(self.monitor.tick(), TickOutcome.UNCHANGED)
        self.assertEqual(self.received, [("Hello, how are you today?", None)])

    def test_disabled_monitor_does_not_read_clipboard(self):
        self.config["enabled"] = False
        self.assertEqual(self.monitor.tick(), TickOutcome.DISABLED)
        self.assertEqual(self.clipboard.reads, 0)

    def test_empty_clipboard(self):
        self.clipboard.content = None
        self.assertEqual(self.monitor.tick(), TickOutcome.EMPTY)

    def test_failing_reader_counts_as_empty(self):
        def boom():
            raise OSError("pasteboard unavailable")

        self.monitor.read_clipboard = boom
        self.assertEqual(self.monitor.tick(), TickOutcome.EMPTY)

    def test_code_is_skipped_when_skip_code_on(self):
        self.clipboard.content = "function foo() { return x; }"
        with self.assertLogs("fixme", level="INFO") as logs:
            outcome = self.monitor.tick()
        self.assertEqual(outcome, TickOutcome.CODE)
        self.assertEqual(self.received, [])
        self.assertTrue(any("Detected code" in line for line in logs.output))

    def test_code_is_processed_when_skip_code_off(self):
        self.config["skip_code"] = False
        self.clipboard.content = "function foo() { return x; }"
        self.assertEqual(self.monitor.tick(), TickOutcome.PROCESSED)

    def test_ignore_next_change_sets_baseline(self):
        self.monitor.ignore_next_change()
        self.assertEqual(self.monitor.tick(), TickOutcome.BASELINE)
        self.assertEqual(self.monitor.tick(), TickOutcome.UNCHANGED)
        self.clipboard.content = "Something new was copied."
        self.assertEqual(self.monitor.tick(), TickOutcome.PROCESSED)
        self.assertEqual(len(self.received), 1)

    def test_ignored_app_is_filtered_only_when_enabled(self):
        self.frontmost = "com.apple.Terminal"
        self.config["filter_apps"] = True
        self.assertEqual(self.monitor.tick(), TickOutcome.FILTERED_APP)

        self.config["filter_apps"] = False
        self.assertEqual(self.monitor.process_now(), TickOutcome.PROCESSED)
        self.assertEqual(self.received, [("Hello, how are you today?", "com.apple.Terminal")])

    def test_process_now_repeats_seen_content(self):
        self.monitor.tick()
        self.assertEqual(self.monitor.process_now(), TickOutcome.PROCESSED)
        self.assertEqual(len(self.received), 2)

    def test_process_now_still_skips_code(self):
        self.clipboard.content = "```\nhello\n```"
        self.assertEqual(self.monitor.process_now(), TickOutcome.CODE)

    def test_process_now_respects_disabled(self):
        self.config["enabled"] = False
        self.clipboard.content = "helo wrld"
        self.assertEqual(self.monitor.process_now(), TickOutcome.DISABLED)
        self.assertEqual(self.received, [])
        self.assertEqual(self.clipboard.reads, 0)


if __name__ == "__main__":
    unittest.main()
