"""
Display names for folder-tree imports: language, version and book lookups
read from a JSON file (``settings.BIBLE_CATALOG_PATH``).

    {
      "languages": {"ruanglat": {"name": "Rongmei",
                                 "version": {"code": "RONGBSI", "name": "..."}}},
      "books": {"thaureymei": {"name": "Genesis", "number": 1}}
    }
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from django.conf import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VersionInfo:
    code: str
    name: str


@dataclass(frozen=True)
class BookInfo:
    name: str
    number: int


@dataclass
class Catalog:
    languages: dict = field(default_factory=dict)
    books: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> "Catalog":
        if not isinstance(data, dict):
            raise ValueError("Catalog must be a JSON object")
        return cls(languages=dict(data.get("languages") or {}), books=dict(data.get("books") or {}))

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Catalog":
        path = Path(path or settings.BIBLE_CATALOG_PATH)
        if not path.exists():
            logger.warning("Catalog %s not found, falling back to slugs and codes", path)
            return cls()
        with path.open("r", encoding="utf-8") as f:
            return cls.from_dict(json.load(f))

    def language_name(self, code: str) -> str:
        return (self.languages.get(code) or {}).get("name") or code

    def version_for(self, language_code: str) -> VersionInfo:
        info = (self.languages.get(language_code) or {}).get("version") or {}
        return VersionInfo(
            code=info.get("code") or language_code.upper(),
            name=info.get("name") or language_code,
        )

    def book(self, slug: str) -> Optional[BookInfo]:
        info = self.books.get(slug)
        if not info:
            return None
        return BookInfo(name=info.get("name") or slug, number=int(info.get("number") or 0))
