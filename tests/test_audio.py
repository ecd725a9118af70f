import json
import tempfile
from io import StringIO
from pathlib import Path

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import SimpleTestCase, TestCase

from bible.catalog import Catalog
from bible.loaders import LoadAborted, LoadError, LoadReport, attach_audio_records, build_audio_manifest, seed_document
from bible.models import Audio
from bible.store import BibleStore
from tests.fixtures import MINIMAL_DOCUMENT, document, write_chapter, write_json


def record(verse=1, chapter=1, url=None, **extra):
    return {
        "versionCode": "KJV",
        "bookSlug": "genesis",
        "chapterNum": chapter,
        "verseNumber": verse,
        "audio": {"language": "en", "url": url or f"https://example.com/audio/genesis/{chapter}/{verse}.mp3", **extra},
    }


def quiet(_msg):
    pass


class AttachAudioRecordsTests(TestCase):
    def setUp(self):
        self.store = BibleStore()
        seed_document(self.store, document(MINIMAL_DOCUMENT), progress=quiet)

    def test_attaches_to_existing_verse(self):
        report = attach_audio_records(self.store, [record(duration=7, format="mp3")], progress=quiet)

        self.assertTrue(report.ok)
        self.assertEqual(report.counts["audios"], 1)
        audio = Audio.objects.get()
        self.assertEqual((audio.verse.verse_number, audio.duration, audio.format), (1, 7, "mp3"))

    def test_missing_verse_is_counted_and_others_continue(self):
        records = [record(verse=99), record(verse=1)]

        report = attach_audio_records(self.store, records, progress=quiet)

        self.assertEqual(report.counts["audios"], 1)
        self.assertEqual(report.failed, 1)
        path, message = report.failures[0]
        self.assertEqual(path, "genesis 1:99 (KJV)")
        self.assertEqual(message, "Verse not found: genesis 1:99 (KJV)")
        self.assertEqual(Audio.objects.count(), 1)

    def test_malformed_record_is_a_failure(self):
        report = attach_audio_records(self.store, [{"versionCode": "KJV"}, record()], progress=quiet)

        self.assertEqual(report.failed, 1)
        self.assertEqual(report.counts["audios"], 1)

    def test_fail_fast_stops_at_first_miss(self):
        with self.assertRaises(LoadAborted):
            attach_audio_records(self.store, [record(verse=99), record()], report=LoadReport(fail_fast=True),
                                 progress=quiet)
        self.assertFalse(Audio.objects.exists())

    def test_non_array_input_is_fatal(self):
        with self.assertRaises(LoadError):
            attach_audio_records(self.store, {"audio": []}, progress=quiet)

    def test_reattaching_is_idempotent(self):
        attach_audio_records(self.store, [record(duration=5)], progress=quiet)
        attach_audio_records(self.store, [record(duration=9)], progress=quiet)

        audio = Audio.objects.get()
        self.assertEqual(audio.duration, 9)


class AttachAudioCommandTests(TestCase):
    def setUp(self):
        seed_document(BibleStore(), document(MINIMAL_DOCUMENT), progress=quiet)
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.root = Path(tmp.name)

    def test_reports_counts(self):
        path = write_json(self.root / "audio.json", [record()])
        out = StringIO()

        call_command("attach_audio", str(path), stdout=out)

        self.assertIn("Successfully attached: 1", out.getvalue())
        self.assertIn("Failed to attach: 0", out.getvalue())

    def test_failures_exit_with_error(self):
        path = write_json(self.root / "audio.json", [record(), record(verse=42)])
        out = StringIO()

        with self.assertRaises(CommandError):
            call_command("attach_audio", str(path), stdout=out, stderr=StringIO())

        self.assertIn("Successfully attached: 1", out.getvalue())
        self.assertIn("Failed to attach: 1", out.getvalue())
        self.assertEqual(Audio.objects.count(), 1)

    def test_object_input_exits_with_error(self):
        path = write_json(self.root / "audio.json", {"not": "an array"})
        with self.assertRaises(CommandError):
            call_command("attach_audio", str(path), stdout=StringIO())


class AudioManifestTests(SimpleTestCase):
    def setUp(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.root = Path(tmp.name)
        write_chapter(self.root, "en", "genesis", 1, [{"heading": "The Creation"}, {"1": "a"}, {"2": "b"}])
        write_chapter(self.root, "en", "genesis", 2, [{"1": "c"}])
        self.catalog = Catalog.from_dict({
            "languages": {"en": {"name": "English", "version": {"code": "KJV", "name": "King James Version"}}},
        })

    def test_one_record_per_verse(self):
        records = build_audio_manifest("en", self.root, self.catalog, base_url="https://cdn.test/audio/")

        self.assertEqual(
            [(r["chapterNum"], r["verseNumber"]) for r in records],
            [(1, 1), (1, 2), (2, 1)],
        )
        self.assertEqual(records[0], {
            "versionCode": "KJV",
            "bookSlug": "genesis",
            "chapterNum": 1,
            "verseNumber": 1,
            "audio": {
                "language": "en",
                "url": "https://cdn.test/audio/genesis/1/1.mp3",
                "duration": 5,
                "format": "mp3",
            },
        })

    def test_command_writes_file(self):
        output = self.root / "out" / "en-audio.json"
        out = StringIO()

        call_command("generate_audio_data", "en", str(output), "--data-dir", str(self.root),
                     "--format", "ogg", stdout=out)

        records = json.loads(output.read_text(encoding="utf-8"))
        self.assertEqual(len(records), 3)
        self.assertTrue(records[0]["audio"]["url"].endswith("/genesis/1/1.ogg"))
        self.assertIn("Generated audio attachment data for 3 verses", out.getvalue())
