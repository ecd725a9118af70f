"""
ETL from JSON documents into the store.

Every loader follows the same policy: a failing entity (book, chapter,
verse, audio record) is logged and recorded in the ``LoadReport`` and its
siblings are still processed. With ``fail_fast`` the first failure aborts the
run instead. Input that is unusable as a whole raises ``LoadError``.
"""
from __future__ import annotations

import json
import logging
from collections import Counter
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Tuple

from bible.catalog import Catalog
from bible.store import BibleStore

logger = logging.getLogger(__name__)

HEADING_KEY = "heading"

Progress = Callable[[str], None]


class LoadError(Exception):
    """The input cannot be loaded at all (bad file, bad top-level shape)."""


class VerseNotFound(LookupError):
    pass


class LoadAborted(Exception):
    """Raised on the first entity failure when the report is fail-fast."""

    def __init__(self, path: str, error: Exception):
        super().__init__(f"{path}: {error}")
        self.path = path
        self.error = error


@dataclass
class LoadReport:
    fail_fast: bool = False
    counts: Counter = field(default_factory=Counter)
    failures: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(self.counts.values())

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def ok(self) -> bool:
        return not self.failures

    def add(self, kind: str, n: int = 1):
        self.counts[kind] += n

    def fail(self, path: str, error: Exception):
        if isinstance(error, (LoadError, VerseNotFound)):
            message = str(error)
        else:
            message = f"{type(error).__name__}: {error}"
        logger.error("Failed to load %s: %s", path, message)
        self.failures.append((path, message))
        if self.fail_fast:
            raise LoadAborted(path, error) from error

    @contextmanager
    def guard(self, path: str) -> Iterator[None]:
        try:
            yield
        except LoadAborted:
            raise
        except Exception as exc:
            self.fail(path, exc)


def read_json(path) -> object:
    try:
        with Path(path).open("r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as exc:
        raise LoadError(f"File not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise LoadError(f"Invalid JSON in {path}: {exc}") from exc


# ----------------------------------
# Composite document (language -> version -> books -> chapters -> verses -> audios)
# ----------------------------------

def seed_document(
    store: BibleStore,
    data: object,
    report: Optional[LoadReport] = None,
    progress: Progress = logger.info,
) -> LoadReport:
    report = report or LoadReport()

    if not isinstance(data, dict):
        raise LoadError("Invalid Bible data format. Check the file structure.")
    language, version, books = data.get("language"), data.get("version"), data.get("books")
    if not language or not version or not isinstance(books, list):
        raise LoadError("Invalid Bible data format. Check the file structure.")

    try:
        db_language = store.upsert_language(language["code"], language["name"])
        db_version = store.upsert_version(version["code"], version["name"], db_language)
    except (KeyError, TypeError) as exc:
        raise LoadError(f"Invalid language/version header: {exc!r}") from exc
    progress(f"Language {db_language.name} ({db_language.code}) processed.")
    progress(f"Version {db_version.name} ({db_version.code}) processed.")

    for i, book in enumerate(books):
        with report.guard(f"books[{i}]"):
            _seed_book(store, db_version, book, f"books[{i}]", report, progress)
    return report


def _seed_book(store, version, book: dict, path: str, report: LoadReport, progress: Progress):
    db_book = store.upsert_book(book["slug"], book["name"], book["number"])
    report.add("books")
    progress(f"Book {db_book.name} processed.")

    for i, chapter in enumerate(book["chapters"]):
        chapter_path = f"{path}.chapters[{i}]"
        with report.guard(chapter_path):
            db_chapter = store.upsert_chapter(db_book, chapter["chapterNum"])
            report.add("chapters")
            for j, verse in enumerate(chapter["verses"]):
                with report.guard(f"{chapter_path}.verses[{j}]"):
                    _seed_verse(store, version, db_chapter, verse, report)
            progress(f"Chapter {db_chapter.chapter_num} of {db_book.name} processed.")


def _seed_verse(store, version, chapter, verse: dict, report: LoadReport):
    db_verse = store.upsert_verse(version, chapter, verse["verseNumber"], verse["text"])
    report.add("verses")

    for audio in verse.get("audios") or []:
        store.attach_audio(
            db_verse,
            language=audio["language"],
            url=audio["url"],
            duration=audio.get("duration"),
            format=audio.get("format"),
            audio_id=audio.get("id"),
        )
        report.add("audios")


# ----------------------------------
# Folder tree: <data_dir>/<language>/<book slug>/<chapter>.json
# ----------------------------------

def chapter_files(book_dir: Path) -> Tuple[List[Tuple[int, Path]], List[Path]]:
    """``(number, path)`` pairs sorted numerically, plus files whose stem is not a number."""
    numbered, rejected = [], []
    for path in book_dir.glob("*.json"):
        try:
            numbered.append((int(path.stem), path))
        except ValueError:
            rejected.append(path)
    numbered.sort(key=lambda item: item[0])
    return numbered, sorted(rejected)


def book_dirs(root: Path) -> List[Path]:
    return sorted(p for p in root.iterdir() if p.is_dir())


def verse_entries(content, warn: Progress = logger.warning) -> Iterator[Tuple[int, str]]:
    """
    ``(verse number, text)`` from a chapter's ``content``: a list of
    ``{"<n>": text}`` objects (or a single object). Headings are skipped.
    """
    items = content if isinstance(content, list) else [content]
    for item in items:
        if not isinstance(item, dict):
            continue
        for key, text in item.items():
            if key == HEADING_KEY:
                continue
            try:
                number = int(key)
            except (TypeError, ValueError):
                warn(f"Skipping invalid verse number: {key}")
                continue
            yield number, text


def language_dir(data_dir, language_code: str) -> Path:
    path = Path(data_dir) / language_code
    if not path.is_dir():
        raise LoadError(f"Language folder not found: {path}")
    return path


def _book_info(catalog: Catalog, book_dir: Path, chapters) -> Tuple[str, int]:
    info = catalog.book(book_dir.name)
    if info:
        return info.name, info.number

    name = book_dir.name
    if chapters:
        first = read_json(chapters[0][1])
        if isinstance(first, dict) and first.get("book"):
            name = first["book"]
    return name, 0


def load_folder_tree(
    store: BibleStore,
    language_code: str,
    data_dir,
    catalog: Catalog,
    report: Optional[LoadReport] = None,
    progress: Progress = logger.info,
) -> LoadReport:
    report = report or LoadReport()
    root = language_dir(data_dir, language_code)
    progress(f"Processing language: {language_code}")

    language = store.upsert_language(language_code, catalog.language_name(language_code))
    info = catalog.version_for(language_code)
    version = store.upsert_version(info.code, info.name, language)

    for book_dir in book_dirs(root):
        with report.guard(book_dir.name):
            _load_book(store, version, book_dir, catalog, report, progress)

    progress(f"Completed processing language: {language_code}")
    return report


def _load_book(store, version, book_dir: Path, catalog: Catalog, report: LoadReport, progress: Progress):
    slug = book_dir.name
    progress(f"Processing book: {slug}")

    chapters, rejected = chapter_files(book_dir)
    for path in rejected:
        report.fail(f"{slug}/{path.name}", ValueError(f"'{path.stem}' is not a chapter number"))

    name, number = _book_info(catalog, book_dir, chapters)
    book = store.upsert_book(slug, name, number)
    report.add("books")

    for chapter_num, path in chapters:
        with report.guard(f"{slug}/{path.name}"):
            chapter = store.upsert_chapter(book, chapter_num)
            data = read_json(path)
            content = data.get("content") if isinstance(data, dict) else None
            if content is None:
                raise LoadError(f"{path} has no content")

            count = 0
            for verse_number, text in verse_entries(content, warn=progress):
                store.upsert_verse(version, chapter, verse_number, text)
                count += 1
            report.add("chapters")
            report.add("verses", count)
            progress(f"Processed {slug} chapter {chapter_num} ({count} verses)")

    progress(f"Completed processing book: {slug}")


# ----------------------------------
# Audio records
# ----------------------------------

def _reference(record) -> str:
    if not isinstance(record, dict):
        return repr(record)
    return (f"{record.get('bookSlug')} {record.get('chapterNum')}:{record.get('verseNumber')} "
            f"({record.get('versionCode')})")


def attach_audio_records(
    store: BibleStore,
    records: object,
    report: Optional[LoadReport] = None,
    progress: Progress = logger.info,
) -> LoadReport:
    report = report or LoadReport()
    if not isinstance(records, list):
        raise LoadError("Invalid audio data format. Expected an array of audio entries.")

    progress(f"Processing {len(records)} audio entries...")
    for record in records:
        ref = _reference(record)
        with report.guard(ref):
            verse = store.find_verse(
                record["versionCode"], record["bookSlug"], int(record["chapterNum"]), int(record["verseNumber"])
            )
            if verse is None:
                raise VerseNotFound(f"Verse not found: {ref}")
            audio = record["audio"]
            store.attach_audio(
                verse,
                language=audio["language"],
                url=audio["url"],
                duration=audio.get("duration"),
                format=audio.get("format"),
            )
            report.add("audios")
            progress(f"Audio attached to {ref}")
    return report


def build_audio_manifest(
    language_code: str,
    data_dir,
    catalog: Catalog,
    base_url: str = "https://example.com/audio",
    audio_format: str = "mp3",
    duration: Optional[int] = 5,
) -> List[dict]:
    """One ``attach_audio`` record per verse found in the folder tree."""
    root = language_dir(data_dir, language_code)
    version_code = catalog.version_for(language_code).code
    base_url = base_url.rstrip("/")

    records = []
    for book_dir in book_dirs(root):
        slug = book_dir.name
        chapters, _ = chapter_files(book_dir)
        for file_num, path in chapters:
            data = read_json(path)
            if not isinstance(data, dict):
                continue
            chapter_num = data.get("chapter") or file_num
            for verse_number, _text in verse_entries(data.get("content") or [], warn=lambda _msg: None):
                records.append({
                    "versionCode": version_code,
                    "bookSlug": slug,
                    "chapterNum": chapter_num,
                    "verseNumber": verse_number,
                    "audio": {
                        "language": language_code,
                        "url": f"{base_url}/{slug}/{chapter_num}/{verse_number}.{audio_format}",
                        "duration": duration,
                        "format": audio_format,
                    },
                })
    return records
