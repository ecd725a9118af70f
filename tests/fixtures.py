import copy
import json
from pathlib import Path

MINIMAL_DOCUMENT = {
    "language": {"code": "en", "name": "English"},
    "version": {"code": "KJV", "name": "King James Version"},
    "books": [
        {
            "name": "Genesis",
            "slug": "genesis",
            "number": 1,
            "chapters": [
                {
                    "chapterNum": 1,
                    "verses": [
                        {"verseNumber": 1, "text": "In the beginning God created the heaven and the earth."},
                    ],
                }
            ],
        }
    ],
}

SAMPLE_DOCUMENT = {
    "language": {"code": "en", "name": "English"},
    "version": {"code": "KJV", "name": "King James Version"},
    "books": [
        {
            "name": "Exodus",
            "slug": "exodus",
            "number": 2,
            "chapters": [
                {
                    "chapterNum": 1,
                    "verses": [
                        {"verseNumber": 1, "text": "Now these are the names of the children of Israel."},
                    ],
                }
            ],
        },
        {
            "name": "Genesis",
            "slug": "genesis",
            "number": 1,
            "chapters": [
                {
                    "chapterNum": 2,
                    "verses": [
                        {"verseNumber": 1, "text": "Thus the heavens and the earth were finished."},
                    ],
                },
                {
                    "chapterNum": 1,
                    "verses": [
                        {"verseNumber": 2, "text": "And the earth was without form, and void."},
                        {
                            "verseNumber": 1,
                            "text": "In the beginning God created the heaven and the earth.",
                            "audios": [
                                {
                                    "language": "en",
                                    "url": "https://example.com/audio/genesis/1/1.mp3",
                                    "duration": 5,
                                    "format": "mp3",
                                }
                            ],
                        },
                    ],
                },
            ],
        },
    ],
}


def document(base=SAMPLE_DOCUMENT):
    return copy.deepcopy(base)


def write_json(path: Path, data) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return path


def write_chapter(root: Path, language: str, slug: str, number, content, book_name=None) -> Path:
    data = {"chapter": number, "slug": slug, "language": language, "content": content}
    if book_name:
        data["book"] = book_name
    return write_json(root / language / slug / f"{number}.json", data)
