from __future__ import annotations

import json
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError
from django.core.cache.backends.locmem import LocMemCache
from django.core.serializers.json import DjangoJSONEncoder

from results.services.results import (
    InMemoryEnrollmentSource,
    build_results_coordinator,
    get_gpa_summary,
    get_results_payload,
    get_semester_results,
)
from results.services.results.serializers import serialize_semester
from results.services.shared.errors import ServiceError


class Command(BaseCommand):
    help = (
        "Compile semester results for one student from a JSON enrollment export. "
        "Example: python manage.py compile_results --input export.json --student s-1"
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "--input",
            type=str,
            required=True,
            help="JSON file mapping student id -> list of enrollments (camelCase export)",
        )
        parser.add_argument("--student", type=str, required=True, help="Student id to compile")
        parser.add_argument(
            "--semester",
            type=str,
            default="",
            help="(Optional) only print the summary of this semester id",
        )
        parser.add_argument(
            "--summary",
            action="store_true",
            help="(Optional) print the GPA summary / overall standing instead of semesters",
        )

    def handle(self, *args, **options):
        path = Path(str(options["input"]))
        student_id = str(options["student"] or "").strip()
        semester_id = str(options.get("semester") or "").strip()
        only_summary = bool(options.get("summary"))

        if not path.exists():
            raise CommandError(f"Input file not found: {path}")
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise CommandError(f"Input file is not valid JSON: {exc}")

        try:
            source = InMemoryEnrollmentSource.from_payload(payload)
            # Private cache: an export is never answered from the shared results cache.
            cache = LocMemCache("compile-results-cli", {})
            cache.clear()
            with build_results_coordinator(source, cache=cache) as coordinator:
                if semester_id:
                    out = serialize_semester(get_semester_results(coordinator, student_id, semester_id))
                elif only_summary:
                    out = get_gpa_summary(coordinator, student_id)
                else:
                    out = get_results_payload(coordinator, student_id)
        except ServiceError as exc:
            raise CommandError(f"[{exc.code}] {exc}")

        self.stdout.write(json.dumps(out, cls=DjangoJSONEncoder, ensure_ascii=False, indent=2))
