import json
from pathlib import Path

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from bible.catalog import Catalog
from bible.loaders import LoadError, build_audio_manifest


class Command(BaseCommand):
    help = (
        "Write an attach_audio input file for every verse of a language folder tree "
        "(urls follow <base-url>/<book>/<chapter>/<verse>.<format>)."
    )

    def add_arguments(self, parser):
        parser.add_argument("language_code", help="Language folder name (ex: ruanglat)")
        parser.add_argument("output", help="Output JSON path (ex: data/ruanglat-audio.json)")
        parser.add_argument("--data-dir", default=None, help="Data root (default: settings.BIBLE_DATA_DIR)")
        parser.add_argument("--catalog", default=None, help="Catalog JSON (default: settings.BIBLE_CATALOG_PATH)")
        parser.add_argument("--base-url", default="https://example.com/audio", help="Audio base url")
        parser.add_argument("--format", dest="audio_format", default="mp3", help="Audio format (default: mp3)")
        parser.add_argument("--duration", type=int, default=5, help="Placeholder duration in seconds")

    def handle(self, *args, **opts):
        output = Path(opts["output"])
        try:
            records = build_audio_manifest(
                opts["language_code"],
                Path(opts["data_dir"] or settings.BIBLE_DATA_DIR),
                Catalog.load(opts["catalog"]),
                base_url=opts["base_url"],
                audio_format=opts["audio_format"],
                duration=opts["duration"],
            )
        except (LoadError, OSError, ValueError) as exc:
            raise CommandError(f"Error generating audio data: {exc}") from exc

        output.parent.mkdir(parents=True, exist_ok=True)
        with output.open("w", encoding="utf-8") as f:
            json.dump(records, f, ensure_ascii=False, indent=2)

        self.stdout.write(self.style.SUCCESS(f"Generated audio attachment data for {len(records)} verses"))
        self.stdout.write(f"Output written to {output}")
