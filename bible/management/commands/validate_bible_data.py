from django.core.management.base import BaseCommand, CommandError

from bible.loaders import LoadError, read_json
from bible.validation import summarize, validate_bible_data


class Command(BaseCommand):
    help = "Check a composite Bible JSON document before seeding it (no database access)."

    def add_arguments(self, parser):
        parser.add_argument("file", help="Path of the Bible JSON document")

    def handle(self, *args, **opts):
        self.stdout.write("Validating Bible data format...")
        try:
            data = read_json(opts["file"])
        except LoadError as exc:
            raise CommandError(str(exc)) from exc

        issues = validate_bible_data(data)
        if issues:
            self.stderr.write(self.style.ERROR("Validation failed with the following errors:"))
            for issue in issues:
                self.stderr.write(f"- {issue}")
            raise CommandError(f"{len(issues)} validation error(s).")

        totals = summarize(data)
        self.stdout.write(self.style.SUCCESS("Validation successful!"))
        self.stdout.write(
            f"Found {totals['books']} books in {data['version']['name']} ({data['language']['name']})"
        )
        self.stdout.write(f"Total verses: {totals['verses']}")
        self.stdout.write(f"Total audio files: {totals['audios']}")
