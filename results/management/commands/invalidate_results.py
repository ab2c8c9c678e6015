from __future__ import annotations

from django.core.cache import caches
from django.core.management.base import BaseCommand, CommandError

from results.services.results.coordinator import invalidate_cached_results
from results.services.shared.errors import ServiceError
from results.settings import get_results_settings


class Command(BaseCommand):
    help = "Drop cached results for the given student ids. Example: python manage.py invalidate_results s-1 s-2"

    def add_arguments(self, parser):
        parser.add_argument("student_ids", nargs="+", type=str, help="Student ids whose cached results are dropped")

    def handle(self, *args, **options):
        settings = get_results_settings()
        cache = caches[settings.cache_alias]
        student_ids = [str(s).strip() for s in options["student_ids"] if str(s).strip()]
        if not student_ids:
            raise CommandError("At least one student id is required.")

        fail_count = 0
        for student_id in student_ids:
            try:
                invalidate_cached_results(cache, student_id, settings.cache_key_prefix)
                self.stdout.write(self.style.SUCCESS(f"  invalidated student_id={student_id}"))
            except ServiceError as exc:
                fail_count += 1
                self.stdout.write(self.style.ERROR(f"  failed student_id={student_id}: {exc}"))

        if fail_count:
            raise CommandError(f"Invalidation failed for {fail_count} of {len(student_ids)} students.")
        self.stdout.write(self.style.SUCCESS(f"Done. invalidated={len(student_ids)}"))
