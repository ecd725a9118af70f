"""
Structural checks for a composite Bible document (the ``seed_bible`` input).

``validate_bible_data`` never touches the database; it returns one
``ValidationIssue`` per problem, an empty list meaning the document can be
seeded.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List

MISSING = "missing"
NOT_A_LIST = "not_a_list"
NOT_AN_OBJECT = "not_an_object"

DOCUMENT = "Document"


@dataclass(frozen=True)
class ValidationIssue:
    path: str       # ex: "books[2].chapters[0]" ("" at the top level)
    entity: str     # ex: "Chapter"
    field: str      # ex: "chapterNum"
    kind: str = MISSING

    @property
    def message(self) -> str:
        if self.kind == NOT_AN_OBJECT:
            text = f"{self.entity} must be an object"
        elif not self.field:
            text = f"Missing {self.entity.lower()} object"
        elif self.kind == NOT_A_LIST and self.entity == DOCUMENT:
            text = f"Missing {self.field} array"
        elif self.kind == NOT_A_LIST:
            text = f"{self.entity} missing {self.field} array"
        else:
            text = f"{self.entity} missing {self.field}"
        return f"{self.path}: {text}" if self.path else text

    def __str__(self) -> str:
        return self.message


def _absent(value: Any) -> bool:
    return value is None or value == "" or value is False


def _require(obj: dict, keys, entity: str, path: str, issues: List[ValidationIssue], *, numeric=()):
    for key in keys:
        value = obj.get(key)
        # numbers only need to be present: 0 is a legit value
        missing = value is None if key in numeric else _absent(value)
        if missing:
            issues.append(ValidationIssue(path, entity, key))


def _children(obj: dict, key: str, entity: str, path: str, issues: List[ValidationIssue]) -> list:
    items = obj.get(key)
    if not isinstance(items, list):
        issues.append(ValidationIssue(path, entity, key, NOT_A_LIST))
        return []
    return items


def validate_audio(audio: Any, path: str) -> List[ValidationIssue]:
    if not isinstance(audio, dict):
        return [ValidationIssue(path, "Audio", "", NOT_AN_OBJECT)]
    issues: List[ValidationIssue] = []
    _require(audio, ("language", "url"), "Audio", path, issues)
    return issues


def validate_verse(verse: Any, path: str) -> List[ValidationIssue]:
    if not isinstance(verse, dict):
        return [ValidationIssue(path, "Verse", "", NOT_AN_OBJECT)]
    issues: List[ValidationIssue] = []
    _require(verse, ("verseNumber", "text"), "Verse", path, issues, numeric=("verseNumber",))

    # audios is optional, but must be a list when present
    if verse.get("audios") is not None:
        for i, audio in enumerate(_children(verse, "audios", "Verse", path, issues)):
            issues += validate_audio(audio, f"{path}.audios[{i}]")
    return issues


def validate_chapter(chapter: Any, path: str) -> List[ValidationIssue]:
    if not isinstance(chapter, dict):
        return [ValidationIssue(path, "Chapter", "", NOT_AN_OBJECT)]
    issues: List[ValidationIssue] = []
    _require(chapter, ("chapterNum",), "Chapter", path, issues, numeric=("chapterNum",))
    for i, verse in enumerate(_children(chapter, "verses", "Chapter", path, issues)):
        issues += validate_verse(verse, f"{path}.verses[{i}]")
    return issues


def validate_book(book: Any, path: str) -> List[ValidationIssue]:
    if not isinstance(book, dict):
        return [ValidationIssue(path, "Book", "", NOT_AN_OBJECT)]
    issues: List[ValidationIssue] = []
    _require(book, ("name", "slug", "number"), "Book", path, issues, numeric=("number",))
    for i, chapter in enumerate(_children(book, "chapters", "Book", path, issues)):
        issues += validate_chapter(chapter, f"{path}.chapters[{i}]")
    return issues


def validate_bible_data(data: Any) -> List[ValidationIssue]:
    if not isinstance(data, dict):
        return [ValidationIssue("", DOCUMENT, "", NOT_AN_OBJECT)]

    issues: List[ValidationIssue] = []
    for key, entity in (("language", "Language"), ("version", "Version")):
        obj = data.get(key)
        if not obj:
            issues.append(ValidationIssue("", entity, ""))
        elif not isinstance(obj, dict):
            issues.append(ValidationIssue("", entity, "", NOT_AN_OBJECT))
        else:
            _require(obj, ("code", "name"), entity, "", issues)

    books = data.get("books")
    if not isinstance(books, list):
        issues.append(ValidationIssue("", DOCUMENT, "books", NOT_A_LIST))
    else:
        for i, book in enumerate(books):
            issues += validate_book(book, f"books[{i}]")
    return issues


def summarize(data: dict) -> dict:
    """Book/verse/audio totals of a document that passed validation."""
    verses = audios = 0
    for book in data["books"]:
        for chapter in book["chapters"]:
            verses += len(chapter["verses"])
            for verse in chapter["verses"]:
                audios += len(verse.get("audios") or [])
    return {"books": len(data["books"]), "verses": verses, "audios": audios}
