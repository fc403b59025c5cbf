"""Tests for candidate ordering, dedupe and the result container."""

import os
import sys
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from cmdpredict.ranking import (
    SOURCE_COMMAND,
    SOURCE_PARAMETER,
    Candidate,
    SuggestionResult,
    dedupe,
    rank,
)


def cand(text, weight, source=SOURCE_COMMAND):
    return Candidate(text, weight, source, None, text)


class TestRank(unittest.TestCase):

    def test_weight_descending(self):
        ranked = rank([cand("a", 1), cand("b", 3), cand("c", 2)], 3)
        self.assertEqual([c.text for c in ranked], ["b", "c", "a"])

    def test_ties_keep_input_order(self):
        ranked = rank([cand("first", 2), cand("second", 2), cand("third", 2)], 3)
        self.assertEqual([c.text for c in ranked], ["first", "second", "third"])

    def test_truncates(self):
        self.assertEqual(len(rank([cand("a", 1), cand("b", 1)], 1)), 1)
        self.assertEqual(rank([cand("a", 1)], 0), [])

    def test_no_count_keeps_everything(self):
        self.assertEqual(len(rank([cand("a", 1), cand("b", 2)])), 2)

    def test_does_not_mutate_input(self):
        items = [cand("a", 1), cand("b", 2)]
        rank(items, 2)
        self.assertEqual([c.text for c in items], ["a", "b"])


class TestDedupe(unittest.TestCase):

    def test_first_position_kept(self):
        result = dedupe([cand("a", 1), cand("b", 5), cand("a", 1)])
        self.assertEqual([c.text for c in result], ["a", "b"])

    def test_heavier_duplicate_wins(self):
        result = dedupe([cand("a", 1), cand("a", 4, SOURCE_PARAMETER)])
        self.assertEqual(len(result), 1)
        self.assertEqual(result[0].weight, 4)
        self.assertEqual(result[0].source, SOURCE_PARAMETER)


class TestSuggestionResult(unittest.TestCase):

    def test_from_candidates(self):
        result = SuggestionResult.from_candidates([cand("Get-AzContext -ListAvailable", 2)])
        self.assertEqual(len(result), 1)
        self.assertEqual(result.texts(), ["Get-AzContext -ListAvailable"])
        self.assertEqual(result[0].source_text, "Get-AzContext -ListAvailable")

    def test_empty_is_falsy(self):
        self.assertFalse(SuggestionResult())
        self.assertEqual(list(SuggestionResult()), [])


if __name__ == "__main__":
    unittest.main()
