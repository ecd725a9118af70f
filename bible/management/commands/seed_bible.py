from django.core.management.base import CommandError

from bible.loaders import LoadAborted, LoadError, LoadReport, read_json, seed_document
from bible.management.base import LoaderCommand
from bible.store import BibleStore
from bible.validation import validate_bible_data


class Command(LoaderCommand):
    help = (
        "Seed the database from one composite Bible JSON document "
        "({language, version, books[chapters[verses[audios]]]}). Re-running is idempotent."
    )

    def add_arguments(self, parser):
        parser.add_argument("file", help="Path of the Bible JSON document (ex: data/kjv.json)")
        parser.add_argument("--validate", action="store_true",
                            help="Run validate_bible_data first and abort on any issue.")
        super().add_arguments(parser)

    def handle(self, *args, **opts):
        self.verbosity = opts["verbosity"]
        path: str = opts["file"]

        self.stdout.write("Starting Bible data seeding...")
        try:
            data = read_json(path)
        except LoadError as exc:
            raise CommandError(str(exc)) from exc

        if opts["validate"]:
            issues = validate_bible_data(data)
            if issues:
                for issue in issues:
                    self.stderr.write(f"- {issue}")
                raise CommandError(f"Validation failed with {len(issues)} error(s); nothing was written.")

        if isinstance(data, dict) and isinstance(data.get("books"), list):
            version = data.get("version") or {}
            language = data.get("language") or {}
            self.stdout.write(
                f"Processing {len(data['books'])} books from {version.get('name')} ({language.get('name')})..."
            )

        report = LoadReport(fail_fast=opts["fail_fast"])
        with BibleStore(using=opts["database"]) as store:
            try:
                seed_document(store, data, report=report, progress=self.progress)
            except (LoadError, LoadAborted) as exc:
                raise CommandError(f"Error seeding Bible data: {exc}") from exc

        self.finish(report, "Bible data seeding")
