"""Split a typed command line into a command name and its raw arguments."""

import shlex
from collections import namedtuple

__all__ = ["RawArgument", "ParsedCommand", "split_tokens", "parse_command_line"]


# name is None for a positional argument
RawArgument = namedtuple("RawArgument", ["name", "value"])
ParsedCommand = namedtuple("ParsedCommand", ["name", "arguments"])

_SEPARATORS = {"|", ";", "&&", "||"}


def split_tokens(text):
    """Tokenize *text*, keeping quotes so values render back verbatim."""
    lexer = shlex.shlex(text, posix=False)
    lexer.whitespace_split = True
    lexer.commenters = ""
    try:
        return list(lexer)
    except ValueError:
        # Unbalanced quote while the user is still typing
        return text.split()


def _is_parameter(token):
    return len(token) > 1 and token[0] == "-" and (token[1].isalpha() or token[1] == "_")


def parse_command_line(text):
    """
    Parse the last command of *text*.

    `-Name value` and `-Name:value` become named arguments, a parameter
    followed by another parameter (or nothing) is a switch with no value,
    everything else is positional.
    """
    tokens = split_tokens(text or "")
    for i in range(len(tokens) - 1, -1, -1):
        if tokens[i] in _SEPARATORS:
            tokens = tokens[i + 1:]
            break

    if not tokens:
        return ParsedCommand(None, [])

    name, rest = tokens[0], tokens[1:]
    arguments = []
    i = 0
    while i < len(rest):
        token = rest[i]
        if _is_parameter(token):
            param, sep, inline = token[1:].partition(":")
            if sep:
                arguments.append(RawArgument(param, inline or None))
            elif i + 1 < len(rest) and not _is_parameter(rest[i + 1]):
                arguments.append(RawArgument(param, rest[i + 1]))
                i += 1
            else:
                arguments.append(RawArgument(param, None))
        else:
            arguments.append(RawArgument(None, token))
        i += 1

    return ParsedCommand(name, arguments)
