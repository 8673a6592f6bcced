import math
import unittest

from wikisearch.search_engine import (
    SearchEngine,
    difference,
    evaluate,
    intersection,
    parse_query,
    rank,
    union,
)

CAT = {"A": 2.0, "B": 1.0}
DOG = {"B": 3.0, "C": 1.0}


def make_lookup(table):
    calls = []

    def lookup(term):
        calls.append(term)
        return dict(table.get(term, {}))

    return lookup, calls


class TestRelevanceAlgebra(unittest.TestCase):
    def test_union_sums_scores(self):
        self.assertEqual(union(CAT, DOG), {"A": 2.0, "B": 4.0, "C": 1.0})

    def test_intersection_keeps_common_keys(self):
        self.assertEqual(intersection(CAT, DOG), {"B": 4.0})

    def test_difference_keeps_left_values(self):
        self.assertEqual(difference(CAT, DOG), {"A": 2.0})
        self.assertEqual(difference(DOG, CAT), {"C": 1.0})

    def test_union_is_commutative_and_associative(self):
        third = {"C": 5.0, "D": 0.5}
        self.assertEqual(union(CAT, DOG), union(DOG, CAT))
        self.assertEqual(union(union(CAT, DOG), third), union(CAT, union(DOG, third)))

    def test_self_combination_doubles_scores(self):
        self.assertEqual(union(CAT, CAT), {"A": 4.0, "B": 2.0})
        self.assertEqual(intersection(CAT, CAT), {"A": 4.0, "B": 2.0})

    def test_inputs_are_not_mutated(self):
        a, b = dict(CAT), dict(DOG)
        union(a, b)
        intersection(a, b)
        difference(a, b)
        self.assertEqual(a, CAT)
        self.assertEqual(b, DOG)


class TestParseQuery(unittest.TestCase):
    def test_operator_priority(self):
        query = parse_query("rock and roll or jazz")
        self.assertEqual(query.operator, "or")
        self.assertEqual(query.left, "rock and roll")
        self.assertEqual(query.right, "jazz")

    def test_splits_at_first_occurrence(self):
        query = parse_query("a minus b minus c")
        self.assertEqual(query.operator, "minus")
        self.assertEqual(query.left, "a")
        self.assertEqual(query.right, "b minus c")

    def test_operator_needs_surrounding_spaces(self):
        query = parse_query("sandy beach")
        self.assertIsNone(query.operator)
        self.assertEqual(query.words, ("sandy", "beach"))


class TestEvaluate(unittest.TestCase):
    def setUp(self):
        self.lookup, self.calls = make_lookup({"cat": CAT, "dog": DOG})

    def test_and_query(self):
        self.assertEqual(evaluate("cat and dog", self.lookup), {"B": 4.0})
        self.assertEqual(self.calls, ["cat and dog", "cat", "dog"])

    def test_or_query(self):
        self.assertEqual(evaluate("cat or dog", self.lookup), {"A": 2.0, "B": 4.0, "C": 1.0})

    def test_minus_query(self):
        self.assertEqual(evaluate("cat minus dog", self.lookup), {"A": 2.0})

    def test_full_query_string_is_folded_in(self):
        lookup, _ = make_lookup({"cat and dog": {"Z": 1.0}, "cat": CAT, "dog": DOG})
        self.assertEqual(evaluate("cat and dog", lookup), {"Z": 1.0, "B": 4.0})

    def test_full_query_string_is_folded_into_or(self):
        lookup, _ = make_lookup({"cat or dog": {"Z": 1.0}, "cat": CAT, "dog": DOG})
        self.assertEqual(evaluate("cat or dog", lookup), {"Z": 1.0, "A": 2.0, "B": 4.0, "C": 1.0})

    def test_full_query_string_is_folded_into_minus(self):
        lookup, _ = make_lookup({"cat minus dog": {"A": 1.0, "Z": 1.0}, "cat": CAT, "dog": DOG})
        self.assertEqual(evaluate("cat minus dog", lookup), {"A": 3.0, "Z": 1.0})

    def test_full_query_string_is_folded_into_plain_words(self):
        lookup, _ = make_lookup({"cat dog": {"B": 1.0}, "cat": CAT, "dog": DOG})
        self.assertEqual(evaluate("cat dog", lookup), {"A": 2.0, "B": 9.0, "C": 1.0})

    def test_plain_words_combine_intersection_and_union(self):
        # intersection {B:4} plus union {A:2, B:4, C:1}
        self.assertEqual(evaluate("cat dog", self.lookup), {"A": 2.0, "B": 8.0, "C": 1.0})

    def test_single_word(self):
        self.assertEqual(evaluate("cat", self.lookup), {"A": 6.0, "B": 3.0})

    def test_empty_query(self):
        self.assertEqual(evaluate("", self.lookup), {})
        self.assertEqual(evaluate("   ", self.lookup), {})
        self.assertEqual(self.calls, [])


class TestRank(unittest.TestCase):
    def test_scales_by_idf_and_sorts_ascending(self):
        ranked = rank({"A": 2.0, "B": 4.0, "C": 1.0}, 10000)
        idf = abs(math.log(10000 / 3) + 1.0)

        self.assertEqual([url for url, _ in ranked], ["C", "A", "B"])
        self.assertAlmostEqual(ranked[0][1], idf)
        self.assertAlmostEqual(ranked[1][1], 2 * idf)
        self.assertAlmostEqual(ranked[2][1], 4 * idf)

    def test_empty_map_gives_no_results(self):
        self.assertEqual(rank({}, 10000), [])

    def test_order_is_scale_invariant(self):
        relevance = {"A": 2.0, "B": 4.0, "C": 1.0, "D": 3.5}
        scaled = {url: score * 7.5 for url, score in relevance.items()}
        self.assertEqual(
            [url for url, _ in rank(relevance, 10000)],
            [url for url, _ in rank(scaled, 10000)],
        )

    def test_ties_are_ordered_by_url(self):
        ranked = rank({"b": 1.0, "a": 1.0}, 100)
        self.assertEqual([url for url, _ in ranked], ["a", "b"])


class FakeIndex:
    def __init__(self, counts):
        self.counts = counts

    def get_counts(self, term):
        return dict(self.counts.get(term, {}))


class TestSearchEngine(unittest.TestCase):
    def setUp(self):
        pages = {f"https://en.wikipedia.org/wiki/P{i}": float(i + 1) for i in range(25)}
        self.engine = SearchEngine(FakeIndex({"java": pages}), total_pages=10000)

    def test_results_are_best_first_and_truncated(self):
        results = self.engine.search("Java")
        self.assertEqual(len(results), 20)
        self.assertEqual(results[0][0], "https://en.wikipedia.org/wiki/P24")
        scores = [score for _, score in results]
        self.assertEqual(scores, sorted(scores, reverse=True))

    def test_full_result(self):
        self.assertEqual(len(self.engine.search("java", full_result=True)), 25)

    def test_no_results(self):
        self.assertEqual(self.engine.search("python"), [])

    def test_explicit_total_pages_is_kept(self):
        engine = SearchEngine(FakeIndex({"java": {"A": 1.0}}), total_pages=0)
        self.assertEqual(engine.total_pages, 0)
        with self.assertRaises(ValueError):
            engine.search("java")

    def test_default_total_pages(self):
        engine = SearchEngine(FakeIndex({}))
        self.assertEqual(engine.total_pages, 10000)


if __name__ == "__main__":
    unittest.main()
