import unittest

from app.career.scoring import aggregate_scores
from app.schemas.career import Answer


def _answers(*pairs):
    return [Answer(question_id=f"q{i}", domain=domain, value=value) for i, (domain, value) in enumerate(pairs)]


class AggregateScoresTests(unittest.TestCase):
    def test_empty_input_returns_empty_list(self):
        self.assertEqual(aggregate_scores([]), [])

    def test_technical_and_artistic_scenario(self):
        scores = aggregate_scores(_answers(("technical", 5), ("technical", 5), ("artistic", 1)))

        self.assertEqual([s.domain for s in scores], ["technical", "artistic"])
        self.assertAlmostEqual(scores[0].raw_average, 5.0)
        self.assertAlmostEqual(scores[0].normalized_score, 100.0)
        self.assertAlmostEqual(scores[1].raw_average, 1.0)
        self.assertAlmostEqual(scores[1].normalized_score, 20.0)

    def test_normalized_score_matches_formula_and_range(self):
        pairs = [("social", 2), ("social", 4), ("social", 5), ("musical", 3), ("business", 1), ("business", 2)]
        scores = {s.domain: s for s in aggregate_scores(_answers(*pairs))}

        for domain in ("social", "musical", "business"):
            values = [value for tag, value in pairs if tag == domain]
            expected = 100 * sum(values) / (5 * len(values))
            self.assertAlmostEqual(scores[domain].normalized_score, expected)
            self.assertGreaterEqual(scores[domain].normalized_score, 20.0)
            self.assertLessEqual(scores[domain].normalized_score, 100.0)

    def test_one_entry_per_domain_in_encounter_order(self):
        scores = aggregate_scores(_answers(("b", 3), ("a", 4), ("b", 5), ("c", 1), ("a", 2)))
        self.assertEqual([s.domain for s in scores], ["b", "a", "c"])
        self.assertAlmostEqual(scores[0].raw_average, 4.0)
        self.assertAlmostEqual(scores[1].raw_average, 3.0)


if __name__ == "__main__":
    unittest.main()
