"""Command metadata: which parameters a command declares, their positions and aliases."""

import logging
from collections import namedtuple

from cmdpredict.artifacts import load_document
from cmdpredict.errors import ModelLoadError

__all__ = ["ParameterSpec", "CommandCatalog", "load_catalog"]

logger = logging.getLogger(__name__)


ParameterSpec = namedtuple("ParameterSpec", ["name", "position", "aliases"])


def _parameter_spec(command, item):
    """Accept either a bare parameter name or {name, position, aliases}."""
    if isinstance(item, str):
        return ParameterSpec(item, None, ())
    if not isinstance(item, dict) or not item.get("name"):
        raise ModelLoadError(f"{command}: parameter entries need a name")
    position = item.get("position")
    if position is not None and (not isinstance(position, int) or position < 0):
        raise ModelLoadError(f"{command}: bad position for {item['name']}: {position!r}")
    return ParameterSpec(item["name"], position, tuple(item.get("aliases") or ()))


class CommandCatalog:
    """Precomputed lookup standing in for live command discovery."""

    def __init__(self, commands=None):
        # lowercased command name -> (canonical name, [ParameterSpec])
        self._commands = {}
        for name, spec in (commands or {}).items():
            self.add(name, spec)

    def add(self, name, spec):
        if isinstance(spec, dict):
            items = spec.get("parameters") or []
        else:
            items = spec or []
        params = [_parameter_spec(name, item) for item in items]

        positions = [p.position for p in params if p.position is not None]
        if len(positions) != len(set(positions)):
            raise ModelLoadError(f"{name}: duplicate parameter positions")
        self._commands[name.lower()] = (name, params)

    def __contains__(self, command):
        return self.has_command(command)

    def __len__(self):
        return len(self._commands)

    def has_command(self, command):
        return bool(command) and command.lower() in self._commands

    def _params(self, command):
        entry = self._commands.get((command or "").lower())
        return entry[1] if entry else None

    def parameter_names(self, command):
        return [p.name for p in self._params(command) or []]

    def positional_parameters(self, command):
        """Declared positional parameter names, in position order."""
        params = [p for p in self._params(command) or [] if p.position is not None]
        params.sort(key=lambda p: p.position)
        return [p.name for p in params]

    def resolve_alias(self, command, token):
        """
        Map *token* to a canonical parameter name of *command*.

        Exact names and aliases win; otherwise a prefix must select exactly
        one parameter. Returns None when nothing (or more than one) matches.
        """
        params = self._params(command)
        if not params or not token:
            return None
        token = token.lower()

        for p in params:
            if p.name.lower() == token or token in (a.lower() for a in p.aliases):
                return p.name

        matches = {
            p.name for p in params
            if any(n.lower().startswith(token) for n in (p.name,) + p.aliases)
        }
        if len(matches) == 1:
            return matches.pop()
        return None


def load_catalog(path):
    """Build a CommandCatalog from a JSON/YAML document with a `commands` mapping."""
    data = load_document(path)
    commands = data.get("commands")
    if not isinstance(commands, dict):
        raise ModelLoadError(f"{path}: 'commands' must be a mapping", path=str(path))
    catalog = CommandCatalog(commands)
    logger.info("Loaded catalog %s with %d commands", path, len(catalog))
    return catalog
