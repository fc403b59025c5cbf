"""Resolve the arguments of one invocation into canonical parameter names."""

import logging
from collections import namedtuple

__all__ = [
    "ParameterEntry",
    "ParameterSet",
    "UNRECOGNIZED",
    "resolve_parameters",
]

logger = logging.getLogger(__name__)


# name is None for a positional value the catalog can't bind;
# position is None for a named argument.
ParameterEntry = namedtuple("ParameterEntry", ["name", "value", "position"])


class ParameterSet:
    """Canonical parameters of one invocation, kept in the user's token order."""

    def __init__(self, entries=()):
        self._entries = tuple(entries)
        self._by_name = {}
        for entry in self._entries:
            if entry.name is None:
                continue
            key = entry.name.lower()
            if key in self._by_name:
                raise ValueError(f"duplicate parameter: {entry.name}")
            self._by_name[key] = entry

    @property
    def entries(self):
        return self._entries

    def names(self):
        return [e.name for e in self._entries if e.name is not None]

    def get(self, name):
        return self._by_name.get(name.lower())

    def is_empty(self):
        return not self._entries

    def __contains__(self, name):
        return name.lower() in self._by_name

    def __iter__(self):
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)

    def __eq__(self, other):
        if not isinstance(other, ParameterSet):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self):
        return hash(self._entries)

    def __repr__(self):
        return f"ParameterSet({list(self._entries)!r})"


class _Unrecognized:
    def __repr__(self):
        return "UNRECOGNIZED"

    def __bool__(self):
        return False


# Returned instead of a ParameterSet when any argument can't be resolved.
UNRECOGNIZED = _Unrecognized()


def resolve_parameters(command_name, arguments, catalog=None):
    """
    Bind the raw *arguments* of *command_name* to canonical parameter names.

    Named arguments bind first, through the catalog's name/alias/prefix
    lookup. Positional arguments then take the declared positional slots
    that are still free, in order. Without catalog metadata for the command,
    named arguments keep the name as typed and positional ones stay unbound.

    Returns a ParameterSet, or UNRECOGNIZED when an argument names an
    unknown parameter, repeats one, or has no positional slot left.
    """
    has_metadata = catalog is not None and catalog.has_command(command_name)
    bound = {}
    used = set()

    for index, arg in enumerate(arguments):
        if arg.name is None:
            continue
        if has_metadata:
            name = catalog.resolve_alias(command_name, arg.name)
            if name is None:
                logger.debug("%s: can't resolve parameter -%s", command_name, arg.name)
                return UNRECOGNIZED
        else:
            name = arg.name
        if name.lower() in used:
            logger.debug("%s: parameter -%s given twice", command_name, name)
            return UNRECOGNIZED
        used.add(name.lower())
        bound[index] = ParameterEntry(name, arg.value, None)

    free = []
    if has_metadata:
        free = [n for n in catalog.positional_parameters(command_name) if n.lower() not in used]

    position = 0
    for index, arg in enumerate(arguments):
        if arg.name is not None:
            continue
        name = None
        if has_metadata:
            if position >= len(free):
                logger.debug("%s: no positional slot for %r", command_name, arg.value)
                return UNRECOGNIZED
            name = free[position]
        bound[index] = ParameterEntry(name, arg.value, position)
        position += 1

    return ParameterSet(bound[i] for i in range(len(arguments)))
