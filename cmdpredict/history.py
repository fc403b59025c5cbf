"""Rolling window of recent commands, used as the model's context key."""

import threading
from collections import deque

from cmdpredict.model import COMMAND_PLACEHOLDER, make_context_key

__all__ = ["HistoryTracker"]


class HistoryTracker:
    """Tracks the last few commands of a session.

    One tracker may be shared by overlapping requests, so every read and
    write goes through the lock; current_key() always sees a whole window.
    """

    def __init__(self, model, width=None):
        self.model = model
        self.width = width or model.context_width
        self.lock = threading.Lock()
        self._window = deque([COMMAND_PLACEHOLDER] * self.width, maxlen=self.width)

    def observe(self, command_name):
        """Record a command; unknown or blank commands become the placeholder."""
        token = self.model.canonical_command((command_name or "").strip()) or COMMAND_PLACEHOLDER
        with self.lock:
            self._window.append(token)

    def current_key(self):
        with self.lock:
            return make_context_key(self._window)

    def snapshot(self):
        with self.lock:
            return list(self._window)

    def reset(self):
        with self.lock:
            self._window.extend([COMMAND_PLACEHOLDER] * self.width)
