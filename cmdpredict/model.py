"""
Read-only usage model.

Two tables, both built once by the loader:

* predictions: history context key -> predicted command lines, in the
  order the trainer stored them;
* parameters: command -> (parameter, weight, example value) statistics,
  derived from the command lines when the artifact doesn't carry them.
"""

import logging
from collections import namedtuple

from cmdpredict.artifacts import load_document
from cmdpredict.errors import ModelLoadError
from cmdpredict.parser import parse_command_line

__all__ = [
    "COMMAND_PLACEHOLDER",
    "COMMAND_CONCATENATOR",
    "DEFAULT_CONTEXT_WIDTH",
    "COMMON_PARAMETERS",
    "CommandLine",
    "ParameterStat",
    "make_context_key",
    "default_context_key",
    "command_line",
    "UsageModel",
    "model_from_dict",
    "load_model",
]

logger = logging.getLogger(__name__)

COMMAND_PLACEHOLDER = "start_of_snippet"
COMMAND_CONCATENATOR = "\n"
DEFAULT_CONTEXT_WIDTH = 2

# Parameters every command accepts; they say little about the command itself.
COMMON_PARAMETERS = frozenset(p.lower() for p in [
    "Debug", "ErrorAction", "ErrorVariable", "InformationAction",
    "InformationVariable", "OutBuffer", "OutVariable", "PipelineVariable",
    "Verbose", "WarningAction", "WarningVariable", "WhatIf", "Confirm",
    "DefaultProfile", "AsJob",
])


# parameters: tuple of (name, value) pairs in the order the line gives them
CommandLine = namedtuple("CommandLine", ["text", "name", "parameters", "weight", "description"])
ParameterStat = namedtuple("ParameterStat", ["name", "weight", "value"])


def make_context_key(commands):
    return COMMAND_CONCATENATOR.join(commands)


def default_context_key(width=DEFAULT_CONTEXT_WIDTH):
    """Key for an empty history: every slot holds the placeholder."""
    return make_context_key([COMMAND_PLACEHOLDER] * width)


def command_line(text, weight=1.0, description=None):
    """Parse a predicted command line into a CommandLine record."""
    parsed = parse_command_line(text)
    if not parsed.name:
        raise ModelLoadError(f"empty command line in model: {text!r}")
    params = tuple((a.name, a.value) for a in parsed.arguments if a.name is not None)
    return CommandLine(text.strip(), parsed.name, params, float(weight), description)


def _derive_parameter_stats(lines):
    """Sum line weights per parameter; first example value seen wins."""
    order = []
    stats = {}
    for line in lines:
        for name, value in line.parameters:
            key = name.lower()
            if key not in stats:
                order.append(key)
                stats[key] = [name, 0.0, value]
            stats[key][1] += line.weight
            if stats[key][2] is None:
                stats[key][2] = value
    return [ParameterStat(*stats[key]) for key in order]


def _by_weight(items):
    # sorted() is stable, so equal weights keep stored order
    return sorted(items, key=lambda item: -item.weight)


class UsageModel:
    """Immutable after construction; safe to share between threads."""

    def __init__(self, predictions, parameters=None, common_parameters=None,
                 context_width=DEFAULT_CONTEXT_WIDTH):
        if context_width < 1:
            raise ModelLoadError(f"context_width must be positive, got {context_width}")
        self.context_width = context_width
        self._predictions = {key: tuple(lines) for key, lines in predictions.items()}

        # lowercased name -> canonical casing
        self._vocabulary = {}
        lines_by_command = {}
        for lines in self._predictions.values():
            for line in lines:
                key = line.name.lower()
                self._vocabulary.setdefault(key, line.name)
                lines_by_command.setdefault(key, []).append(line)

        self._parameters = {}
        for name, stats in (parameters or {}).items():
            self._vocabulary.setdefault(name.lower(), name)
            self._parameters[name.lower()] = tuple(_by_weight(stats))
        for key, lines in lines_by_command.items():
            if key not in self._parameters:
                self._parameters[key] = tuple(_by_weight(_derive_parameter_stats(lines)))

        if common_parameters is None:
            self.common_parameters = COMMON_PARAMETERS
        else:
            self.common_parameters = frozenset(p.lower() for p in common_parameters)

    def default_context_key(self):
        return default_context_key(self.context_width)

    def context_keys(self):
        return list(self._predictions)

    def vocabulary(self):
        return sorted(self._vocabulary.values())

    def knows_command(self, name):
        return bool(name) and name.lower() in self._vocabulary

    def canonical_command(self, name):
        """Model casing of *name*, or None when the model never saw it."""
        if not name:
            return None
        return self._vocabulary.get(name.lower())

    def has_command_prefix(self, prefix):
        prefix = (prefix or "").lower()
        return bool(prefix) and any(key.startswith(prefix) for key in self._vocabulary)

    def candidates_for(self, history_key, command_name, complete=True):
        """
        Command lines stored under *history_key* for *command_name*.

        A complete name must match exactly; an incomplete one (the user is
        still typing it) matches as a prefix. Case-insensitive. Unknown keys
        or commands give an empty list.
        """
        target = (command_name or "").lower()
        if not target:
            return []
        lines = self._predictions.get(history_key, ())
        if complete:
            return [line for line in lines if line.name.lower() == target]
        return [line for line in lines if line.name.lower().startswith(target)]

    def parameter_stat(self, command_name, parameter_name):
        target = (parameter_name or "").lower()
        for stat in self._parameters.get((command_name or "").lower(), ()):
            if stat.name.lower() == target:
                return stat
        return None

    def parameter_candidates_for(self, command_name, present=()):
        """
        Parameter statistics of *command_name* not already in *present*.

        A common parameter is dropped when a command-specific candidate has
        an equal or higher weight. Sorted by weight, stable on ties.
        """
        present = {p.lower() for p in present if p}
        stats = [
            s for s in self._parameters.get((command_name or "").lower(), ())
            if s.name.lower() not in present
        ]
        specific = [s.weight for s in stats if s.name.lower() not in self.common_parameters]
        top_specific = max(specific) if specific else None
        kept = [
            s for s in stats
            if s.name.lower() not in self.common_parameters
            or top_specific is None
            or s.weight > top_specific
        ]
        return _by_weight(kept)


def _parameter_stat(command, item):
    if isinstance(item, str):
        return ParameterStat(item, 1.0, None)
    if not isinstance(item, dict) or not item.get("name"):
        raise ModelLoadError(f"{command}: parameter statistics need a name")
    try:
        weight = float(item.get("weight", 1.0))
    except (TypeError, ValueError):
        raise ModelLoadError(f"{command}: bad weight for {item['name']}: {item.get('weight')!r}")
    return ParameterStat(item["name"], weight, item.get("value"))


def _command_entry(item):
    if isinstance(item, str):
        return command_line(item)
    if not isinstance(item, dict) or not item.get("command"):
        raise ModelLoadError("prediction entries need a 'command' line")
    try:
        weight = float(item.get("weight", 1.0))
    except (TypeError, ValueError):
        raise ModelLoadError(f"bad weight for {item['command']!r}: {item.get('weight')!r}")
    return command_line(item["command"], weight, item.get("description"))


def model_from_dict(data):
    """Build a UsageModel from an already-parsed artifact."""
    width = data.get("context_width", DEFAULT_CONTEXT_WIDTH)
    if not isinstance(width, int) or width < 1:
        raise ModelLoadError(f"context_width must be a positive integer, got {width!r}")

    groups = data.get("predictions")
    if not isinstance(groups, list):
        raise ModelLoadError("'predictions' must be a list of history groups")

    predictions = {}
    for group in groups:
        if not isinstance(group, dict):
            raise ModelLoadError("each prediction group must be a mapping")
        history = group.get("history") or [COMMAND_PLACEHOLDER] * width
        if not isinstance(history, list):
            raise ModelLoadError(f"history must be a list of commands, got {history!r}")
        if len(history) != width:
            raise ModelLoadError(
                f"history {history!r} has {len(history)} commands, expected {width}"
            )
        commands = group.get("commands") or []
        if not isinstance(commands, list):
            raise ModelLoadError(f"'commands' must be a list, got {commands!r}")
        key = make_context_key(history)
        lines = predictions.setdefault(key, [])
        lines.extend(_command_entry(item) for item in commands)

    params_payload = data.get("parameters") or {}
    if not isinstance(params_payload, dict):
        raise ModelLoadError("'parameters' must map command names to lists")
    parameters = {}
    for name, items in params_payload.items():
        items = items or []
        if not isinstance(items, list):
            raise ModelLoadError(f"{name}: parameter statistics must be a list, got {items!r}")
        parameters[name] = [_parameter_stat(name, item) for item in items]

    return UsageModel(
        predictions,
        parameters=parameters,
        common_parameters=data.get("common_parameters"),
        context_width=width,
    )


def load_model(path):
    data = load_document(path)
    try:
        model = model_from_dict(data)
    except ModelLoadError as e:
        raise ModelLoadError(f"{path}: {e}", path=str(path)) from e
    logger.info(
        "Loaded model %s: %d contexts, %d commands",
        path, len(model.context_keys()), len(model.vocabulary()),
    )
    return model
