import unittest
from unittest import mock

from app.career.default_roadmaps import DEFAULT_ROADMAPS, default_roadmap
from app.career.narrative_parser import ParserSettings, load_parser_settings, parse_narrative
from app.schemas.career import CANONICAL_DOMAINS

from helpers import SAMPLE_NARRATIVE

DEFAULT_ALTERNATIVES = ["Explore related fields", "Consider interdisciplinary roles", "Look into emerging careers"]
DEFAULT_SKILL_GAPS = ["Technical proficiency", "Industry knowledge", "Practical experience"]


class NarrativeParserTests(unittest.TestCase):
    def test_empty_text_takes_every_default(self):
        parsed = parse_narrative("", "Music")

        self.assertEqual(parsed.primary_career, "AI-Generated Career Path")
        self.assertEqual(parsed.alternative_careers, DEFAULT_ALTERNATIVES)
        self.assertEqual(parsed.skill_gaps, DEFAULT_SKILL_GAPS)
        self.assertEqual(parsed.roadmap_steps, list(DEFAULT_ROADMAPS["Music"]))
        self.assertEqual(parsed.resources, [])
        self.assertEqual(
            set(parsed.defaulted_fields),
            {"primary_career", "alternative_careers", "skill_gaps", "roadmap_steps", "resources"},
        )

    def test_non_string_input_is_treated_as_empty(self):
        parsed = parse_narrative(None, "Art")
        self.assertEqual(parsed.primary_career, "AI-Generated Career Path")
        self.assertEqual(parsed.roadmap_steps, list(DEFAULT_ROADMAPS["Art"]))

    def test_free_form_text_without_headings_degrades_to_defaults(self):
        text = "You would make a great teacher. Consider **tutoring** and 1. volunteering.\n\nGood luck!"
        parsed = parse_narrative(text, "Education")

        self.assertEqual(parsed.primary_career, "AI-Generated Career Path")
        self.assertEqual(parsed.alternative_careers, DEFAULT_ALTERNATIVES)
        self.assertEqual(parsed.roadmap_steps, list(DEFAULT_ROADMAPS["Education"]))
        self.assertEqual(parsed.resources, [])

    def test_partial_sections_keep_what_was_found(self):
        text = (
            "### Alternative Career Paths:\n\n"
            "1. **UX Designer** - visual problem solving\n"
            "2. **Illustrator** - drawing every day\n"
        )
        parsed = parse_narrative(text, "Art")

        self.assertEqual(parsed.alternative_careers, ["UX Designer", "Illustrator"])
        self.assertEqual(parsed.primary_career, "AI-Generated Career Path")
        self.assertEqual(parsed.skill_gaps, DEFAULT_SKILL_GAPS)
        self.assertEqual(parsed.roadmap_steps, list(DEFAULT_ROADMAPS["Art"]))
        self.assertNotIn("alternative_careers", parsed.defaulted_fields)

    def test_well_formed_response_is_fully_extracted(self):
        parsed = parse_narrative(SAMPLE_NARRATIVE, "Technology")

        self.assertEqual(parsed.primary_career, "Full-Stack Software Engineer")
        self.assertEqual(parsed.alternative_careers, ["Data Analyst", "DevOps Engineer", "Product Manager"])
        self.assertEqual(parsed.skill_gaps, ["System Design", "Cloud Platforms"])
        self.assertEqual([s.step for s in parsed.roadmap_steps], [1, 2, 3])
        self.assertEqual(parsed.roadmap_steps[0].title, "Months 1-6 - Foundations")
        self.assertEqual(
            parsed.roadmap_steps[0].description,
            "Learn Python and JavaScript. Build three small projects.",
        )
        self.assertEqual(parsed.roadmap_steps[2].description, "Pick backend or frontend and go deep.")
        self.assertEqual(parsed.resources, ["CS50", "The Odin Project", "LeetCode"])
        self.assertEqual(parsed.defaulted_fields, [])

    def test_skill_gap_keeps_only_text_before_colon(self):
        text = "### Skill Gaps to Address:\n\n1. **Public Speaking: join Toastmasters**\n2. **SQL**: practice daily\n"
        parsed = parse_narrative(text, "Business")
        self.assertEqual(parsed.skill_gaps, ["Public Speaking", "SQL"])

    def test_lists_and_steps_are_capped(self):
        alternatives = "\n".join(f"{i}. **Career {i}** - reason" for i in range(1, 9))
        steps = "\n\n".join(f"**Step {i}: Phase {i}**\n{'x' * 400}" for i in range(1, 9))
        resources = "\n".join(f"- **Resource {i}** - site" for i in range(1, 15))
        text = (
            f"### Alternative Career Paths:\n{alternatives}\n\n"
            f"### Roadmap for Career Development:\n\n{steps}\n\n"
            f"### Recommended Resources:\n{resources}\n"
        )
        parsed = parse_narrative(text, "Technology")

        self.assertEqual(len(parsed.alternative_careers), 5)
        self.assertEqual(len(parsed.roadmap_steps), 6)
        self.assertEqual([s.step for s in parsed.roadmap_steps], [1, 2, 3, 4, 5, 6])
        self.assertTrue(all(len(s.description) <= 300 for s in parsed.roadmap_steps))
        self.assertEqual(len(parsed.resources), 10)
        self.assertEqual(parsed.resources[0], "Resource 1")

    def test_roadmap_without_step_markers_uses_domain_default(self):
        text = "### Roadmap for Career Development:\n\nJust keep practicing every day.\n"
        parsed = parse_narrative(text, "Business")
        self.assertEqual(parsed.roadmap_steps, list(DEFAULT_ROADMAPS["Business"]))
        self.assertIn("roadmap_steps", parsed.defaulted_fields)

    def test_unknown_domain_falls_back_to_technology_roadmap(self):
        parsed = parse_narrative("", "Culinary")
        self.assertEqual(parsed.roadmap_steps, list(DEFAULT_ROADMAPS["Technology"]))

    def test_never_raises_on_odd_input(self):
        odd_inputs = [
            "**",
            "### Roadmap for Career Development:**Step 1:**",
            "Primary Career Recommendation: **",
            "Recommended Resources:",
            "Skill Gaps" * 50,
            "\x00\n###\n###",
        ]
        for text in odd_inputs:
            parsed = parse_narrative(text, "Technology")
            self.assertTrue(parsed.primary_career)
            self.assertTrue(parsed.roadmap_steps)

    def test_skill_gap_mention_in_paragraph_does_not_hide_section(self):
        text = (
            "### Primary Career Recommendation: **Data Engineer**\n\n"
            "You have few skill gaps overall.\n\n"
            "### Alternative Career Paths:\n\n"
            "1. **Data Analyst** - numbers\n\n"
            "### Skill Gaps to Address:\n\n"
            "1. **Spark**: distributed processing\n"
        )
        parsed = parse_narrative(text, "Technology")

        self.assertEqual(parsed.skill_gaps, ["Spark"])
        self.assertNotIn("skill_gaps", parsed.defaulted_fields)

    def test_skill_gap_mention_in_alternative_line_is_not_a_section(self):
        text = (
            "### Alternative Career Paths:\n\n"
            "1. **Data Analyst** - closes your skill gap in statistics\n"
            "2. **DevOps Engineer** - automation\n\n"
            "### Skill Gaps to Address:\n\n"
            "1. **Spark**\n"
        )
        parsed = parse_narrative(text, "Technology")

        self.assertEqual(parsed.alternative_careers, ["Data Analyst", "DevOps Engineer"])
        self.assertEqual(parsed.skill_gaps, ["Spark"])

    def test_bold_heading_without_hashes_is_still_found(self):
        text = "**Skill Gaps to Address:**\n1. **Negotiation**\n2. **Excel**\n"
        parsed = parse_narrative(text, "Business")
        self.assertEqual(parsed.skill_gaps, ["Negotiation", "Excel"])

    def test_unreadable_config_uses_built_in_limits_and_defaults(self):
        broken = mock.Mock(side_effect=RuntimeError("Scoring config not found"))
        with mock.patch("app.career.narrative_parser.get_scoring_value", broken), mock.patch(
            "app.career.default_roadmaps.get_scoring_value", broken
        ):
            self.assertEqual(load_parser_settings(), ParserSettings())
            empty = parse_narrative("", "Culinary")
            full = parse_narrative(SAMPLE_NARRATIVE, "Technology")

        self.assertEqual(empty.primary_career, "AI-Generated Career Path")
        self.assertEqual(empty.alternative_careers, DEFAULT_ALTERNATIVES)
        self.assertEqual(empty.skill_gaps, DEFAULT_SKILL_GAPS)
        self.assertEqual(empty.roadmap_steps, list(DEFAULT_ROADMAPS["Technology"]))
        self.assertEqual(full.primary_career, "Full-Stack Software Engineer")
        self.assertEqual(full.defaulted_fields, [])

    def test_explicit_settings_override_limits(self):
        settings = ParserSettings(limits={**ParserSettings().limits, "alternative_careers": 1})
        parsed = parse_narrative(SAMPLE_NARRATIVE, "Technology", settings)
        self.assertEqual(parsed.alternative_careers, ["Data Analyst"])


class DefaultRoadmapTests(unittest.TestCase):
    def test_every_canonical_domain_has_five_contiguous_phases(self):
        self.assertEqual(set(DEFAULT_ROADMAPS), set(CANONICAL_DOMAINS))
        for domain, steps in DEFAULT_ROADMAPS.items():
            self.assertEqual([s.step for s in steps], [1, 2, 3, 4, 5], domain)
            self.assertTrue(all(s.title and s.description for s in steps), domain)

    def test_table_is_read_only(self):
        with self.assertRaises(TypeError):
            DEFAULT_ROADMAPS["Technology"] = ()  # type: ignore[index]
        returned = default_roadmap("Art")
        returned.clear()
        self.assertEqual(len(DEFAULT_ROADMAPS["Art"]), 5)


if __name__ == "__main__":
    unittest.main()
