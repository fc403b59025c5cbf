"""Turn a partially typed command into ranked full command lines."""

import logging

from cmdpredict.errors import (
    InvalidArgumentError,
    NullArgumentError,
    OutOfRangeError,
    SuggestionCancelledError,
)
from cmdpredict.history import HistoryTracker
from cmdpredict.model import COMMAND_PLACEHOLDER
from cmdpredict.parameters import UNRECOGNIZED
from cmdpredict.ranking import (
    SOURCE_COMMAND,
    SOURCE_PARAMETER,
    Candidate,
    SuggestionResult,
    dedupe,
    rank,
)

__all__ = [
    "DEFAULT_SUGGESTION_COUNT",
    "DEFAULT_MAX_COMMAND_DUPLICATES",
    "CommandLinePredictor",
]

logger = logging.getLogger(__name__)

DEFAULT_SUGGESTION_COUNT = 3
DEFAULT_MAX_COMMAND_DUPLICATES = 1


def _check_cancelled(cancellation):
    if cancellation is not None and cancellation.is_set():
        raise SuggestionCancelledError("suggestion request cancelled")


def _validate(command_name, parameter_set, raw_user_input,
              present_command_frequencies, suggestion_count, min_context_matches):
    if command_name is None or not command_name.strip():
        raise InvalidArgumentError("command_name must be a non-empty string", "command_name")
    if parameter_set is None:
        raise NullArgumentError("parameter_set is required", "parameter_set")
    if raw_user_input is None or not raw_user_input.strip():
        raise InvalidArgumentError("raw_user_input must be a non-empty string", "raw_user_input")
    if present_command_frequencies is None:
        raise NullArgumentError("present_command_frequencies is required", "present_command_frequencies")
    if suggestion_count <= 0:
        raise OutOfRangeError(
            f"suggestion_count must be positive, got {suggestion_count}",
            "suggestion_count", suggestion_count,
        )
    if min_context_matches <= 0:
        raise OutOfRangeError(
            f"min_context_matches must be positive, got {min_context_matches}",
            "min_context_matches", min_context_matches,
        )


def _normalized(text):
    return " ".join(text.split()).lower()


def _match_parameter(name, line_params, used):
    """Index of *name* in the line's parameters: exact first, then a unique prefix."""
    target = name.lower()
    for i, (param, _) in enumerate(line_params):
        if i not in used and param.lower() == target:
            return i
    prefixed = [
        i for i, (param, _) in enumerate(line_params)
        if i not in used and param.lower().startswith(target)
    ]
    if len(prefixed) == 1:
        return prefixed[0]
    return None


def _render_command_line(line, parameter_set):
    """
    Render *line* with the user's arguments in front, in the user's order.

    Positional values are kept as typed, named ones use the model's
    parameter name with the user's value (or the model's example when the
    user hasn't typed one yet). The line's other parameters follow in the
    model's order. Returns None when an input parameter isn't in the line.
    """
    parts = [line.name]
    used = set()
    for entry in parameter_set:
        if entry.name is None:
            parts.append(entry.value)
            continue
        index = _match_parameter(entry.name, line.parameters, used)
        if index is None:
            return None
        used.add(index)
        name, model_value = line.parameters[index]
        if entry.position is not None:
            parts.append(entry.value)
            continue
        parts.append("-" + name)
        value = entry.value if entry.value is not None else model_value
        if value is not None:
            parts.append(value)

    for index, (name, value) in enumerate(line.parameters):
        if index in used:
            continue
        parts.append("-" + name)
        if value is not None:
            parts.append(value)
    return " ".join(parts)


class CommandLinePredictor:
    """Suggests full command lines from the usage model and the session history."""

    def __init__(self, model, tracker=None):
        self.model = model
        self.tracker = tracker or HistoryTracker(model)

    def get_suggestion(self, command_name, parameter_set, raw_user_input,
                       present_command_frequencies, suggestion_count,
                       min_context_matches, cancellation=None):
        """
        Return up to *suggestion_count* completions of *raw_user_input*.

        Args:
            command_name: The command as typed (any casing, maybe unfinished).
            parameter_set: ParameterSet from resolve_parameters, or UNRECOGNIZED.
            raw_user_input: The full text the user has typed so far.
            present_command_frequencies: Command -> how often the caller is
                already showing it. Commands at or above *min_context_matches*
                are not suggested again. Never modified.
            suggestion_count: Maximum number of suggestions.
            min_context_matches: Duplicate budget per command, see above.
            cancellation: Optional object with is_set(), e.g. threading.Event.

        Raises the PredictorArgumentError subclasses for contract violations
        and SuggestionCancelledError when *cancellation* fires. A model miss
        is an empty result, never an exception.
        """
        _validate(command_name, parameter_set, raw_user_input,
                  present_command_frequencies, suggestion_count, min_context_matches)

        if command_name.strip().lower() == COMMAND_PLACEHOLDER or parameter_set is UNRECOGNIZED:
            return SuggestionResult()

        complete = not parameter_set.is_empty() or raw_user_input[-1].isspace()
        if complete and not self.model.knows_command(command_name):
            logger.debug("No prediction: %s is not in the model", command_name)
            return SuggestionResult()
        if not complete and not self.model.has_command_prefix(command_name):
            logger.debug("No prediction: no model command starts with %s", command_name)
            return SuggestionResult()

        _check_cancelled(cancellation)
        history_key = self.tracker.current_key()
        keys = [history_key]
        if history_key != self.model.default_context_key():
            keys.append(self.model.default_context_key())

        budget = {name.lower(): count for name, count in present_command_frequencies.items()}

        def over_budget(name):
            return budget.get(name.lower(), 0) >= min_context_matches

        typed = _normalized(raw_user_input)
        candidates = []
        for key in keys:
            # the default context only answers when the history context can't
            if candidates:
                break
            _check_cancelled(cancellation)
            for line in self.model.candidates_for(key, command_name, complete):
                _check_cancelled(cancellation)
                if over_budget(line.name):
                    continue
                text = _render_command_line(line, parameter_set)
                if text is None or _normalized(text) == typed:
                    continue
                candidates.append(Candidate(text, line.weight, SOURCE_COMMAND, line.description, line.text))

        if not parameter_set.is_empty() and not over_budget(command_name):
            _check_cancelled(cancellation)
            candidates.extend(self._parameter_candidates(command_name, parameter_set,
                                                         raw_user_input, cancellation))

        candidates = rank(dedupe(candidates), suggestion_count)
        logger.debug("%d candidates for %r (context %r)", len(candidates), raw_user_input, history_key)
        return SuggestionResult.from_candidates(candidates)

    def _parameter_candidates(self, command_name, parameter_set, raw_user_input, cancellation):
        """Append one likely parameter to the input exactly as typed."""
        present = parameter_set.names()
        if any(self.model.parameter_stat(command_name, name) is None for name in present):
            # the model never saw this combination
            return []

        base = raw_user_input.rstrip()
        last = parameter_set.entries[-1]
        if last.name is not None and last.position is None and last.value is None:
            # `-Name` still waits for its value
            stat = self.model.parameter_stat(command_name, last.name)
            if stat.value is not None:
                base = f"{base} {stat.value}"

        candidates = []
        for stat in self.model.parameter_candidates_for(command_name, present):
            _check_cancelled(cancellation)
            text = f"{base} -{stat.name}"
            if stat.value is not None:
                text = f"{text} {stat.value}"
            candidates.append(Candidate(text, stat.weight, SOURCE_PARAMETER, None, stat.name))
        return candidates
