"""
Natural-key access to the Bible tables.

A ``BibleStore`` is built explicitly by whoever needs the database (a
management command, a view) and handed down to the loaders; ``close()``
releases the connection of its alias.
"""
from __future__ import annotations

from typing import Optional

from django.db import connections, transaction
from django.db.models import Prefetch, QuerySet

from bible.models import Audio, Book, Chapter, Language, Verse, Version


SEARCH_LIMIT = 100


class BibleStore:

    def __init__(self, using: str = "default"):
        self.using = using

    def __enter__(self) -> "BibleStore":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        connections[self.using].close()

    def _qs(self, model) -> QuerySet:
        return model.objects.using(self.using)

    # ----------------------------------
    # Upserts (natural keys)
    # ----------------------------------

    def upsert_language(self, code: str, name: str) -> Language:
        language, _ = self._qs(Language).update_or_create(code=code, defaults={"name": name})
        return language

    def upsert_version(self, code: str, name: str, language: Language) -> Version:
        version, _ = self._qs(Version).update_or_create(
            code=code, defaults={"name": name, "language": language}
        )
        return version

    def upsert_book(self, slug: str, name: str, number: int) -> Book:
        book, _ = self._qs(Book).update_or_create(slug=slug, defaults={"name": name, "number": number})
        return book

    def upsert_chapter(self, book: Book, chapter_num: int) -> Chapter:
        # nothing mutable on a chapter: plain get_or_create
        chapter, _ = self._qs(Chapter).get_or_create(book=book, chapter_num=chapter_num)
        return chapter

    def upsert_verse(self, version: Version, chapter: Chapter, verse_number: int, text: str) -> Verse:
        verse, _ = self._qs(Verse).update_or_create(
            version=version, chapter=chapter, verse_number=verse_number, defaults={"text": text}
        )
        return verse

    def attach_audio(
        self,
        verse: Verse,
        language: str,
        url: str,
        duration: Optional[int] = None,
        format: Optional[str] = None,
        audio_id: Optional[int] = None,
    ) -> tuple[Audio, bool]:
        """
        Create-if-absent for an audio row.

        - ``audio_id`` naming a row of ``verse``: that row is updated.
          An id that belongs to another verse is ignored, a row never
          changes verse.
        - otherwise the row is keyed on ``(verse, url)``.

        Returns ``(audio, created)``.
        """
        fields = {"language": language, "duration": duration, "format": format}
        with transaction.atomic(using=self.using):
            if audio_id is not None:
                audio = self._qs(Audio).select_for_update().filter(pk=audio_id, verse=verse).first()
                if audio is not None:
                    for name, value in {**fields, "url": url}.items():
                        setattr(audio, name, value)
                    audio.save(using=self.using)
                    return audio, False

            audio = self._qs(Audio).filter(verse=verse, url=url).order_by("id").first()
            if audio is None:
                return self._qs(Audio).create(verse=verse, url=url, **fields), True

            changed = [name for name, value in fields.items() if getattr(audio, name) != value]
            if changed:
                for name in changed:
                    setattr(audio, name, fields[name])
                audio.save(using=self.using, update_fields=changed)
            return audio, False

    # ----------------------------------
    # Find unique / first
    # ----------------------------------

    def get_language(self, code: str) -> Optional[Language]:
        return self._qs(Language).filter(code=code).first()

    def get_version(self, code: str) -> Optional[Version]:
        return self._qs(Version).select_related("language").filter(code=code).first()

    def first_version(self, language: Language) -> Optional[Version]:
        return self._qs(Version).select_related("language").filter(language=language).order_by("id").first()

    def get_book(self, slug: str) -> Optional[Book]:
        return self._qs(Book).filter(slug=slug).first()

    def get_chapter(self, book: Book, chapter_num: int) -> Optional[Chapter]:
        return self._qs(Chapter).filter(book=book, chapter_num=chapter_num).first()

    def get_verse(self, version: Version, chapter: Chapter, verse_number: int) -> Optional[Verse]:
        return (self._qs(Verse)
                .filter(version=version, chapter=chapter, verse_number=verse_number)
                .prefetch_related(self._audios())
                .first())

    def find_verse(
        self, version_code: str, book_slug: str, chapter_num: int, verse_number: int
    ) -> Optional[Verse]:
        return (self._qs(Verse)
                .filter(
                    version__code=version_code,
                    chapter__book__slug=book_slug,
                    chapter__chapter_num=chapter_num,
                    verse_number=verse_number,
                )
                .first())

    # ----------------------------------
    # Find many (ordered)
    # ----------------------------------

    def _audios(self) -> Prefetch:
        return Prefetch("audios", queryset=self._qs(Audio).order_by("id"))

    def _verses_of(self, version: Version) -> Prefetch:
        return Prefetch(
            "verses",
            queryset=(self._qs(Verse)
                      .filter(version=version)
                      .order_by("verse_number")
                      .prefetch_related(self._audios())),
            to_attr="version_verses",
        )

    def books(self) -> QuerySet:
        return self._qs(Book).order_by("number", "slug")

    def verses(self, chapter: Chapter, version: Version) -> QuerySet:
        return (self._qs(Verse)
                .filter(chapter=chapter, version=version)
                .order_by("verse_number")
                .prefetch_related(self._audios()))

    def chapters_with_text(self, book: Book, version: Version) -> QuerySet:
        """Chapters of ``book``; each gets ``version_verses`` for ``version``."""
        return (self._qs(Chapter)
                .filter(book=book)
                .order_by("chapter_num")
                .prefetch_related(self._verses_of(version)))

    def books_with_text(self, version: Version) -> QuerySet:
        """Every book -> chapters -> ``version_verses`` -> audios, each level ordered."""
        chapters = Prefetch(
            "chapters",
            queryset=(self._qs(Chapter)
                      .order_by("chapter_num")
                      .prefetch_related(self._verses_of(version))),
        )
        return self.books().prefetch_related(chapters)

    def search_verses(self, query: str, version: Optional[Version] = None, limit: int = SEARCH_LIMIT) -> list[Verse]:
        qs = (self._qs(Verse)
              .filter(text__icontains=query)
              .select_related("version__language", "chapter__book")
              .prefetch_related(self._audios())
              .order_by("id"))
        if version is not None:
            qs = qs.filter(version=version)
        return list(qs[:limit])

    def counts(self) -> dict[str, int]:
        return {
            model.__name__.lower(): self._qs(model).count()
            for model in (Language, Version, Book, Chapter, Verse, Audio)
        }
