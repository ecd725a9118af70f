from rest_framework import serializers

from bible.models import Audio, Book, Chapter, Verse, Version


class AudioSerializer(serializers.ModelSerializer):
    class Meta:
        model = Audio
        fields = ("language", "url", "duration", "format")


class VerseSerializer(serializers.ModelSerializer):
    verseNumber = serializers.IntegerField(source="verse_number")
    audios = AudioSerializer(many=True, read_only=True)

    class Meta:
        model = Verse
        fields = ("verseNumber", "text", "audios")


class ChapterRefSerializer(serializers.ModelSerializer):
    chapterNum = serializers.IntegerField(source="chapter_num")

    class Meta:
        model = Chapter
        fields = ("chapterNum",)


class ChapterSerializer(ChapterRefSerializer):
    # ``version_verses`` is prefetched by BibleStore for a single version
    verses = VerseSerializer(source="version_verses", many=True, read_only=True)

    class Meta(ChapterRefSerializer.Meta):
        fields = ("chapterNum", "verses")


class BookRefSerializer(serializers.ModelSerializer):
    class Meta:
        model = Book
        fields = ("name", "slug", "number")


class BookSerializer(BookRefSerializer):
    chapters = ChapterSerializer(many=True, read_only=True)

    class Meta(BookRefSerializer.Meta):
        fields = ("name", "slug", "number", "chapters")


class VersionHeaderSerializer(serializers.ModelSerializer):
    language = serializers.CharField(source="language.code")
    languageName = serializers.CharField(source="language.name")
    version = serializers.CharField(source="code")
    versionName = serializers.CharField(source="name")

    class Meta:
        model = Version
        fields = ("language", "languageName", "version", "versionName")


def bible_payload(version: Version, books) -> dict:
    return {**VersionHeaderSerializer(version).data, "books": BookSerializer(books, many=True).data}


def book_payload(version: Version, book: Book, chapters) -> dict:
    return {
        **VersionHeaderSerializer(version).data,
        "book": {**BookRefSerializer(book).data, "chapters": ChapterSerializer(chapters, many=True).data},
    }


def chapter_payload(version: Version, book: Book, chapter: Chapter, verses) -> dict:
    return {
        **VersionHeaderSerializer(version).data,
        "book": BookRefSerializer(book).data,
        "chapter": {**ChapterRefSerializer(chapter).data, "verses": VerseSerializer(verses, many=True).data},
    }


class VerseResultSerializer(serializers.BaseSerializer):
    """A verse with its version/language/book/chapter context (verse lookups and search hits)."""

    def to_representation(self, verse: Verse):
        chapter = verse.chapter
        return {
            **VersionHeaderSerializer(verse.version).data,
            "book": BookRefSerializer(chapter.book).data,
            "chapter": ChapterRefSerializer(chapter).data,
            "verse": VerseSerializer(verse).data,
        }
