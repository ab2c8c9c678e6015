from decimal import Decimal

from django.test import SimpleTestCase

from results.academic.aggregator import (
    aggregate_semester,
    classify_gpa,
    determine_status,
    infer_current_level,
    level_name,
    round_gpa,
)
from results.academic.types import Classification, CourseResultRow, SemesterStatus
from results.services.shared.errors import ContractViolation
from results.test.factories import FALL_2024, row


class SemesterAggregatorTests(SimpleTestCase):
    def test_weighted_gpa_example(self):
        summary = aggregate_semester([row("CS101", 3, 95), row("MA101", 4, 65)], FALL_2024)
        totals = summary.summary
        # (4.0*3 + 1.0*4) / 7 = 16/7
        self.assertEqual(totals.gpa, Decimal("2.2857"))
        self.assertEqual(totals.classification, Classification.GOOD)
        self.assertEqual(totals.status, SemesterStatus.PASSED)
        self.assertEqual(totals.total_units, 7)
        self.assertEqual(totals.passed_units, 7)
        self.assertEqual(totals.completed_units, 7)
        self.assertEqual(totals.incomplete_courses, 0)

    def test_totals_invariants_with_failures(self):
        rows = [row("A", 3, 92), row("B", 2, 40), row("C", 4, 49.5)]
        totals = aggregate_semester(rows, FALL_2024).summary
        self.assertEqual(totals.total_units, 9)
        self.assertEqual(totals.passed_units, 3)
        self.assertEqual(totals.completed_units, totals.passed_units)
        self.assertEqual(totals.incomplete_courses, 2)
        self.assertEqual(totals.status, SemesterStatus.PASSED_WITH_DEFICIENCY)

    def test_semester_metadata_is_copied(self):
        summary = aggregate_semester([row("A", 3, 92)], FALL_2024)
        self.assertEqual(summary.semester_id, "sem-fall-2024")
        self.assertEqual(summary.name_en, "Fall 2024")
        self.assertEqual(summary.year, 2024)
        self.assertEqual(summary.term, "FALL")
        self.assertEqual(summary.courses, (row("A", 3, 92),))

    def test_gpa_rounds_half_up(self):
        # 65 points over 32 units = 2.03125 exactly
        rows = [row("A", 16, 95), row("B", 1, 61), row("C", 15, 50)]
        self.assertEqual(aggregate_semester(rows, FALL_2024).summary.gpa, Decimal("2.0313"))
        self.assertEqual(round_gpa(Decimal("2.49995")), Decimal("2.5000"))
        self.assertEqual(round_gpa(Decimal("2.49994")), Decimal("2.4999"))

    def test_classification_boundaries(self):
        self.assertEqual(classify_gpa(Decimal("4.0")), Classification.EXCELLENT)
        self.assertEqual(classify_gpa(Decimal("3.5")), Classification.EXCELLENT)
        self.assertEqual(classify_gpa(Decimal("3.4999")), Classification.VERY_GOOD)
        self.assertEqual(classify_gpa(Decimal("2.5")), Classification.VERY_GOOD)
        self.assertEqual(classify_gpa(Decimal("2.4999")), Classification.GOOD)
        self.assertEqual(classify_gpa(Decimal("2.0")), Classification.GOOD)
        self.assertEqual(classify_gpa(Decimal("1.9999")), Classification.ACCEPTABLE)
        self.assertEqual(classify_gpa(Decimal("0")), Classification.ACCEPTABLE)

    def test_status_table(self):
        self.assertEqual(determine_status(0), SemesterStatus.PASSED)
        self.assertEqual(determine_status(1), SemesterStatus.PASSED_WITH_DEFICIENCY)
        self.assertEqual(determine_status(2), SemesterStatus.PASSED_WITH_DEFICIENCY)
        self.assertEqual(determine_status(3), SemesterStatus.FAILED)
        self.assertEqual(determine_status(7), SemesterStatus.FAILED)

    def test_all_failed_semester(self):
        rows = [row("A", 3, 10), row("B", 3, 20), row("C", 3, 30)]
        totals = aggregate_semester(rows, FALL_2024).summary
        self.assertEqual(totals.gpa, Decimal("0.0000"))
        self.assertEqual(totals.classification, Classification.ACCEPTABLE)
        self.assertEqual(totals.status, SemesterStatus.FAILED)

    def test_current_level_takes_maximum(self):
        # Documented current behavior: the highest course level wins, not the average.
        rows = [row("A", 3, 80, level=2), row("B", 3, 80, level=3), row("C", 3, 80, level=1)]
        self.assertEqual(infer_current_level(rows), 3)
        self.assertEqual(aggregate_semester(rows, FALL_2024).current_level, 3)

    def test_current_level_defaults_to_one(self):
        rows = [row("A", 3, 80, level=0), row("B", 3, 80, level=0)]
        self.assertEqual(infer_current_level(rows), 1)

    def test_level_names(self):
        self.assertEqual(level_name(1), "First Semester")
        self.assertEqual(level_name(10), "Tenth Semester")
        self.assertEqual(level_name(11), "Semester Level 11")
        self.assertEqual(level_name(3, "ar"), "الفصل الدراسي الثالث")
        self.assertEqual(level_name(12, "ar"), "الفصل الدراسي 12")
        with self.assertRaises(ContractViolation):
            level_name(0)

    def test_summary_carries_level_names(self):
        summary = aggregate_semester([row("A", 3, 80, level=2)], FALL_2024)
        self.assertEqual(summary.level_name_en, "Second Semester")
        self.assertEqual(summary.level_name_ar, "الفصل الدراسي الثاني")

    def test_malformed_rows_are_rejected(self):
        bad = CourseResultRow(course_code="X", units=-2, level=1, score=Decimal("80"), passed=True)
        with self.assertRaises(ContractViolation):
            aggregate_semester([bad], FALL_2024)
        with self.assertRaises(ContractViolation):
            aggregate_semester([], FALL_2024)
        with self.assertRaises(ContractViolation):
            aggregate_semester([row("A", 3, 80)], {"id": "x"})
