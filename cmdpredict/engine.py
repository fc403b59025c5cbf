"""Host-side wiring: raw text in, suggestions out, history kept between calls."""

from cmdpredict.catalog import CommandCatalog
from cmdpredict.history import HistoryTracker
from cmdpredict.parameters import resolve_parameters
from cmdpredict.parser import parse_command_line
from cmdpredict.predictor import (
    DEFAULT_MAX_COMMAND_DUPLICATES,
    DEFAULT_SUGGESTION_COUNT,
    CommandLinePredictor,
)
from cmdpredict.ranking import SuggestionResult

__all__ = ["SuggestionEngine"]


class SuggestionEngine:
    def __init__(self, model, catalog=None, tracker=None):
        self.model = model
        self.catalog = catalog if catalog is not None else CommandCatalog()
        self.tracker = tracker or HistoryTracker(model)
        self.predictor = CommandLinePredictor(model, self.tracker)

    def suggest(self, user_input, count=DEFAULT_SUGGESTION_COUNT, present_commands=None,
                min_context_matches=DEFAULT_MAX_COMMAND_DUPLICATES, cancellation=None):
        """Suggest completions for *user_input*; blank input gives no suggestions."""
        if not user_input or not user_input.strip():
            return SuggestionResult()
        parsed = parse_command_line(user_input)
        if not parsed.name:
            return SuggestionResult()

        parameter_set = resolve_parameters(parsed.name, parsed.arguments, self.catalog)
        return self.predictor.get_suggestion(
            parsed.name,
            parameter_set,
            user_input,
            {} if present_commands is None else present_commands,
            count,
            min_context_matches,
            cancellation,
        )

    def record(self, command_line):
        """Feed an executed command line into the session history."""
        self.tracker.observe(parse_command_line(command_line).name)

    def history_key(self):
        return self.tracker.current_key()
