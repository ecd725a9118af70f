from __future__ import annotations

from django.conf import settings
from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from drf_yasg.views import get_schema_view
from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from api.exceptions import NotFoundError
from api.serializers import VerseResultSerializer, bible_payload, book_payload, chapter_payload
from api.validators import RequiredParamsMixin, parse_number
from bible.store import BibleStore

schema_view = get_schema_view(
    openapi.Info(
        title=settings.API_TITLE,
        default_version=settings.API_VERSION,
        description="Bible texts and verse audio: language -> version -> book -> chapter -> verse, plus search.",
    ),
    public=True,
    permission_classes=[permissions.AllowAny],
)


class IndexView(APIView):
    permission_classes = [permissions.AllowAny]
    swagger_schema = None

    def get(self, request):
        return Response({
            "message": f"Welcome to {settings.API_TITLE}",
            "version": settings.API_VERSION,
            "documentation": "/api-docs/",
            "endpoints": {
                "bible": "/bible/:languageCode",
                "search": "/bible/search",
                "language": "/bible/language/:languageCode",
                "version": "/bible/version/:versionCode",
                "book": "/bible/version/:versionCode/book/:bookSlug",
                "chapter": "/bible/version/:versionCode/book/:bookSlug/chapter/:chapterNum",
                "verse": "/bible/version/:versionCode/book/:bookSlug/chapter/:chapterNum/verse/:verseNum",
            },
        })


class HealthView(APIView):
    permission_classes = [permissions.AllowAny]
    throttle_classes = []
    swagger_schema = None

    def get(self, request):
        return Response({"status": "ok"})


class BibleAPIView(RequiredParamsMixin, APIView):
    """Base for the read endpoints: natural-key lookups that turn a miss into a 404."""
    permission_classes = [permissions.AllowAny]
    store_class = BibleStore

    def initial(self, request, *args, **kwargs):
        self.store = self.store_class()
        super().initial(request, *args, **kwargs)

    def get_version(self, code: str, message: str | None = None):
        version = self.store.get_version(code)
        if version is None:
            raise NotFoundError(message or f"Version '{code}' not found")
        return version

    def get_book(self, slug: str):
        book = self.store.get_book(slug)
        if book is None:
            raise NotFoundError(f"Book '{slug}' not found")
        return book

    def get_chapter(self, book, chapter_num: int):
        chapter = self.store.get_chapter(book, chapter_num)
        if chapter is None:
            raise NotFoundError(f"Chapter {chapter_num} in book '{book.slug}' not found")
        return chapter


class BibleByLanguageView(BibleAPIView):
    """
    GET /bible/language/<languageCode>  (and the legacy /bible/<languageCode>)
    Full bible of the language's first version.
    """
    required_path_params = ("language_code",)

    @swagger_auto_schema(responses={200: "Complete Bible dataset for the language", 404: "Language not found"})
    def get(self, request, language_code):
        language = self.store.get_language(language_code)
        version = self.store.first_version(language) if language else None
        if version is None:
            raise NotFoundError(f"Bible data for language '{language_code}' not found")
        return Response(bible_payload(version, self.store.books_with_text(version)))


class BibleByVersionView(BibleAPIView):
    """GET /bible/version/<versionCode>"""
    required_path_params = ("version_code",)

    @swagger_auto_schema(responses={200: "Complete Bible dataset for the version", 404: "Version not found"})
    def get(self, request, version_code):
        version = self.get_version(version_code, f"Bible data for version '{version_code}' not found")
        return Response(bible_payload(version, self.store.books_with_text(version)))


class BookView(BibleAPIView):
    """GET /bible/version/<versionCode>/book/<bookSlug>"""
    required_path_params = ("version_code", "book_slug")

    @swagger_auto_schema(responses={200: "Book with chapters and verses", 404: "Version or book not found"})
    def get(self, request, version_code, book_slug):
        version = self.get_version(version_code)
        book = self.get_book(book_slug)
        return Response(book_payload(version, book, self.store.chapters_with_text(book, version)))


class ChapterView(BibleAPIView):
    """GET /bible/version/<versionCode>/book/<bookSlug>/chapter/<chapterNum>"""
    required_path_params = ("version_code", "book_slug", "chapter_num")

    @swagger_auto_schema(responses={
        200: "Chapter with its verses", 400: "Invalid chapter number", 404: "Version, book, or chapter not found",
    })
    def get(self, request, version_code, book_slug, chapter_num):
        number = parse_number(chapter_num, "Chapter")
        version = self.get_version(version_code)
        book = self.get_book(book_slug)
        chapter = self.get_chapter(book, number)
        return Response(chapter_payload(version, book, chapter, self.store.verses(chapter, version)))


class VerseView(BibleAPIView):
    """GET /bible/version/<versionCode>/book/<bookSlug>/chapter/<chapterNum>/verse/<verseNum>"""
    required_path_params = ("version_code", "book_slug", "chapter_num", "verse_num")

    @swagger_auto_schema(responses={
        200: "Verse text and audio", 400: "Invalid chapter or verse number",
        404: "Version, book, chapter, or verse not found",
    })
    def get(self, request, version_code, book_slug, chapter_num, verse_num):
        chapter_number = parse_number(chapter_num, "Chapter")
        verse_number = parse_number(verse_num, "Verse")
        version = self.get_version(version_code)
        book = self.get_book(book_slug)
        chapter = self.get_chapter(book, chapter_number)

        verse = self.store.get_verse(version, chapter, verse_number)
        if verse is None:
            raise NotFoundError(
                f"Verse {verse_number} in chapter {chapter_number} of book '{book_slug}' not found"
            )
        # already resolved above, no need to query them again
        chapter.book = book
        verse.chapter, verse.version = chapter, version
        return Response(VerseResultSerializer(verse).data)


class SearchView(BibleAPIView):
    """
    GET /bible/search?query=<text>&versionCode=<code>
    Case-insensitive substring match on verse text, capped at BIBLE_SEARCH_LIMIT results.
    """
    required_query_params = ("query",)

    @swagger_auto_schema(
        manual_parameters=[
            openapi.Parameter("query", openapi.IN_QUERY, type=openapi.TYPE_STRING, required=True,
                              description="Text to search for in verses"),
            openapi.Parameter("versionCode", openapi.IN_QUERY, type=openapi.TYPE_STRING, required=False,
                              description="Bible version code to restrict search"),
        ],
        responses={200: "Search results", 400: "Missing query parameter", 404: "Version not found"},
    )
    def get(self, request):
        query = request.query_params["query"]
        version_code = request.query_params.get("versionCode")

        version = self.get_version(version_code) if version_code else None
        verses = self.store.search_verses(query, version=version, limit=settings.BIBLE_SEARCH_LIMIT)
        results = VerseResultSerializer(verses, many=True).data
        return Response({"query": query, "count": len(results), "results": results})
