"""Tests for the rolling history window."""

import os
import sys
import threading
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from cmdpredict.history import HistoryTracker
from cmdpredict.model import COMMAND_PLACEHOLDER, UsageModel, command_line, default_context_key

P = COMMAND_PLACEHOLDER


def make_model(width=2):
    return UsageModel(
        {default_context_key(width): [
            command_line("Connect-AzAccount -Identity", 3),
            command_line("Get-AzContext -ListAvailable", 2),
        ]},
        context_width=width,
    )


class TestHistoryTracker(unittest.TestCase):

    def setUp(self):
        self.tracker = HistoryTracker(make_model())

    def test_starts_with_placeholders(self):
        self.assertEqual(self.tracker.current_key(), default_context_key())
        self.assertEqual(self.tracker.snapshot(), [P, P])

    def test_observe_uses_model_casing(self):
        self.tracker.observe("connect-azaccount")
        self.assertEqual(self.tracker.current_key(), f"{P}\nConnect-AzAccount")

    def test_window_is_bounded(self):
        self.tracker.observe("Connect-AzAccount")
        self.tracker.observe("Get-AzContext")
        self.tracker.observe("connect-AzAccount")
        self.assertEqual(self.tracker.snapshot(), ["Get-AzContext", "Connect-AzAccount"])

    def test_unknown_commands_become_placeholder(self):
        self.tracker.observe("Connect-AzAccount")
        self.tracker.observe("git")
        self.assertEqual(self.tracker.snapshot(), ["Connect-AzAccount", P])

    def test_blank_commands_become_placeholder(self):
        self.tracker.observe("Get-AzContext")
        self.tracker.observe(None)
        self.tracker.observe("  ")
        self.assertEqual(self.tracker.snapshot(), [P, P])

    def test_reset(self):
        self.tracker.observe("Get-AzContext")
        self.tracker.reset()
        self.assertEqual(self.tracker.current_key(), default_context_key())

    def test_width_follows_model(self):
        tracker = HistoryTracker(make_model(width=3))
        self.assertEqual(tracker.snapshot(), [P, P, P])

    def test_explicit_width(self):
        tracker = HistoryTracker(make_model(), width=1)
        tracker.observe("Get-AzContext")
        self.assertEqual(tracker.current_key(), "Get-AzContext")

    def test_concurrent_observe_keeps_whole_window(self):
        valid = {"Connect-AzAccount", "Get-AzContext"}

        def worker(name):
            for _ in range(200):
                self.tracker.observe(name)
                window = self.tracker.snapshot()
                self.assertEqual(len(window), 2)

        threads = [threading.Thread(target=worker, args=(name,)) for name in sorted(valid)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertTrue(set(self.tracker.snapshot()) <= valid)
        self.assertEqual(len(self.tracker.current_key().split("\n")), 2)


if __name__ == "__main__":
    unittest.main()
