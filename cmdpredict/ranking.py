"""Order candidates and turn them into the result handed back to the caller."""

from collections import namedtuple

__all__ = [
    "SOURCE_COMMAND",
    "SOURCE_PARAMETER",
    "Candidate",
    "Suggestion",
    "SuggestionResult",
    "dedupe",
    "rank",
]

SOURCE_COMMAND = "command"
SOURCE_PARAMETER = "parameter"

Candidate = namedtuple("Candidate", ["text", "weight", "source", "description", "source_text"])
Suggestion = namedtuple("Suggestion", ["text", "description", "source_text"])


class SuggestionResult:
    def __init__(self, suggestions=()):
        self.suggestions = list(suggestions)

    @classmethod
    def from_candidates(cls, candidates):
        return cls(Suggestion(c.text, c.description, c.source_text) for c in candidates)

    def texts(self):
        return [s.text for s in self.suggestions]

    def __iter__(self):
        return iter(self.suggestions)

    def __len__(self):
        return len(self.suggestions)

    def __getitem__(self, index):
        return self.suggestions[index]

    def __repr__(self):
        return f"SuggestionResult({self.texts()!r})"


def dedupe(candidates):
    """Drop repeated texts, keeping the heavier one at the first one's place."""
    seen = {}
    result = []
    for candidate in candidates:
        index = seen.get(candidate.text)
        if index is None:
            seen[candidate.text] = len(result)
            result.append(candidate)
        elif candidate.weight > result[index].weight:
            result[index] = candidate
    return result


def rank(candidates, count=None):
    """Weight descending, input order on ties, at most *count* items."""
    ordered = sorted(candidates, key=lambda c: -c.weight)
    if count is None:
        return ordered
    return ordered[:max(0, count)]
