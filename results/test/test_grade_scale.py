from decimal import Decimal

from django.test import SimpleTestCase

from results.academic.grade_scale import (
    get_grading_scale,
    grade_points,
    is_passing,
    min_score_for_letter,
    resolve_grade,
    to_score,
)
from results.services.shared.errors import ContractViolation


class GradeScaleTests(SimpleTestCase):
    def test_pass_flag_follows_threshold_only(self):
        for score, expected in [(0, False), (49.99, False), (50, True), (55, True), (59.5, True), (100, True)]:
            self.assertEqual(resolve_grade(score).passed, expected, score)

    def test_passing_score_can_carry_zero_points(self):
        res = resolve_grade(55)
        self.assertTrue(res.passed)
        self.assertEqual(res.grade_points, Decimal("0.0"))
        self.assertEqual(res.letter_grade, "F")

    def test_point_bands_inclusive_lower(self):
        self.assertEqual(grade_points(100), Decimal("4.0"))
        self.assertEqual(grade_points(90), Decimal("4.0"))
        self.assertEqual(grade_points("89.999"), Decimal("3.0"))
        self.assertEqual(grade_points(89.999), Decimal("3.0"))
        self.assertEqual(grade_points(80), Decimal("3.0"))
        self.assertEqual(grade_points(79.99), Decimal("2.0"))
        self.assertEqual(grade_points(70), Decimal("2.0"))
        self.assertEqual(grade_points(60), Decimal("1.0"))
        self.assertEqual(grade_points(59.99), Decimal("0.0"))
        self.assertEqual(grade_points(0), Decimal("0.0"))

    def test_whole_top_band_is_four_points(self):
        for score in range(90, 101):
            self.assertEqual(resolve_grade(score).grade_points, Decimal("4.0"))

    def test_letters(self):
        self.assertEqual(resolve_grade(92).letter_grade, "A")
        self.assertEqual(resolve_grade(85).letter_grade, "B")
        self.assertEqual(resolve_grade(74).letter_grade, "C")
        self.assertEqual(resolve_grade(61).letter_grade, "D")
        self.assertEqual(resolve_grade(20).letter_grade, "F")

    def test_out_of_range_scores_are_rejected(self):
        with self.assertRaises(ContractViolation):
            resolve_grade(-0.5)
        with self.assertRaises(ContractViolation):
            resolve_grade(100.01)

    def test_non_numeric_scores_are_rejected(self):
        for bad in [None, True, "abc", float("nan"), float("inf"), ""]:
            with self.assertRaises(ContractViolation):
                to_score(bad)

    def test_to_score_keeps_decimal_exact(self):
        self.assertEqual(to_score(0.1), Decimal("0.1"))
        self.assertEqual(to_score(" 72.50 "), Decimal("72.50"))
        self.assertEqual(to_score(Decimal("64")), Decimal("64"))

    def test_is_passing(self):
        self.assertTrue(is_passing(50))
        self.assertFalse(is_passing("49.9"))

    def test_grading_scale_table(self):
        scale = get_grading_scale()
        self.assertEqual([b["letter"] for b in scale], ["A", "B", "C", "D", "F"])
        self.assertEqual(scale[0]["max"], Decimal("100"))
        self.assertEqual(scale[1]["max"], Decimal("90"))
        self.assertTrue(scale[0]["upperInclusive"])
        self.assertFalse(scale[1]["upperInclusive"])

    def test_min_score_for_letter(self):
        self.assertEqual(min_score_for_letter("b"), Decimal("80"))
        self.assertIsNone(min_score_for_letter("Z"))
