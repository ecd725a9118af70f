from django.core.management.base import CommandError

from bible.loaders import LoadAborted, LoadError, LoadReport, attach_audio_records, read_json
from bible.management.base import LoaderCommand
from bible.store import BibleStore


class Command(LoaderCommand):
    help = (
        "Attach audio files to existing verses from a JSON array of "
        "{versionCode, bookSlug, chapterNum, verseNumber, audio:{language, url, duration?, format?}}."
    )

    def add_arguments(self, parser):
        parser.add_argument("file", help="Path of the audio JSON file")
        super().add_arguments(parser)

    def handle(self, *args, **opts):
        self.verbosity = opts["verbosity"]

        self.stdout.write("Starting audio attachment process...")
        report = LoadReport(fail_fast=opts["fail_fast"])
        with BibleStore(using=opts["database"]) as store:
            try:
                records = read_json(opts["file"])
                attach_audio_records(store, records, report=report, progress=self.progress)
            except (LoadError, LoadAborted) as exc:
                raise CommandError(f"Error processing audio data: {exc}") from exc

        self.stdout.write("Audio attachment process completed.")
        self.stdout.write(f"Successfully attached: {report.counts['audios']}")
        self.stdout.write(f"Failed to attach: {report.failed}")
        self.finish(report, "Audio attachment")
