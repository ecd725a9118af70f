from django.core.management.base import BaseCommand, CommandError

from bible.loaders import LoadReport


class LoaderCommand(BaseCommand):
    """Shared options and summary output of the ETL commands."""

    def add_arguments(self, parser):
        parser.add_argument("--fail-fast", action="store_true",
                            help="Stop at the first failing entity instead of collecting failures.")
        parser.add_argument("--database", default="default", help="Database alias (default: default)")

    def progress(self, message: str):
        if getattr(self, "verbosity", 1) >= 1:
            self.stdout.write(message)

    def finish(self, report: LoadReport, title: str):
        counts = ", ".join(f"{k}={v}" for k, v in sorted(report.counts.items())) or "nothing"
        if report.failures:
            self.stderr.write(self.style.ERROR(f"{len(report.failures)} failure(s):"))
            for path, message in report.failures:
                self.stderr.write(f"- {path}: {message}")
            raise CommandError(f"{title} finished with {report.failed} failure(s) ({counts}).")
        self.stdout.write(self.style.SUCCESS(f"{title} completed successfully! ({counts})"))
