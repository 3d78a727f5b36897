"""Tests for leaderboard re-scoring, search, and column sorting."""
from __future__ import annotations

import unittest

from llm_leaderboard.core.query import filter_records, rescore, sort_records
from llm_leaderboard.core.scoring import normalize_record


def _records():
    return [
        normalize_record({
            "id": "a", "display_name": "Alpha", "model_creator": {"name": "Acme"},
            "evaluations": {"lcr": 50, "gpqa": 10},
            "pricing": {"price_1m_blended_3_to_1": 3.0}, "release_date": "2024-03-01",
        }),
        normalize_record({
            "id": "b", "display_name": "Beta", "model_creator": {"name": "Borealis"},
            "evaluations": {"lcr": 40, "gpqa": 40},
            "release_date": "2025-01-10",
        }),
        normalize_record({
            "id": "c", "display_name": "Gamma Acme Edition", "model_creator": {"name": "Other"},
            "evaluations": {"gpqa": 5},
            "pricing": {"price_1m_blended_3_to_1": "1.25"},
        }),
    ]


class TestRescore(unittest.TestCase):
    def test_subset_sum_and_missing(self):
        rescored = rescore(_records(), ["lcr"])
        self.assertEqual([r.sum_score for r in rescored], [50, 40, 0])
        self.assertEqual(rescored[2].missing_keys, ["lcr"])
        self.assertEqual(rescored[2].missing_count, 1)

    def test_originals_untouched(self):
        records = _records()
        rescore(records, ["lcr"])
        self.assertEqual(records[0].sum_score, 60)

    def test_unknown_metric(self):
        with self.assertRaises(ValueError):
            rescore(_records(), ["not_a_benchmark"])

    def test_repeated_metric_counted_once(self):
        rescored = rescore(_records(), ["lcr", "lcr"])
        self.assertEqual([r.sum_score for r in rescored], [50, 40, 0])
        self.assertEqual(rescored[2].missing_keys, ["lcr"])


class TestFilterRecords(unittest.TestCase):
    def test_matches_display_name_or_creator(self):
        ids = [r.id for r in filter_records(_records(), "acme")]
        self.assertEqual(ids, ["a", "c"])

    def test_empty_query_keeps_all(self):
        self.assertEqual(len(filter_records(_records(), "  ")), 3)


class TestSortRecords(unittest.TestCase):
    def test_sum_score_descending(self):
        self.assertEqual([r.id for r in sort_records(_records())], ["b", "a", "c"])

    def test_ascending(self):
        self.assertEqual([r.id for r in sort_records(_records(), "sum_score", descending=False)], ["c", "a", "b"])

    def test_nulls_last_both_directions(self):
        self.assertEqual([r.id for r in sort_records(_records(), "lcr")], ["a", "b", "c"])
        self.assertEqual([r.id for r in sort_records(_records(), "lcr", descending=False)], ["b", "a", "c"])

    def test_price_shorthand(self):
        ids = [r.id for r in sort_records(_records(), "price_blend", descending=False)]
        self.assertEqual(ids, ["c", "a", "b"])

    def test_release_date(self):
        self.assertEqual([r.id for r in sort_records(_records(), "release_date")], ["b", "a", "c"])

    def test_unknown_key(self):
        with self.assertRaises(ValueError):
            sort_records([], "vibes")


if __name__ == "__main__":
    unittest.main()
