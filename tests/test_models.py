from django.db import IntegrityError, transaction
from django.test import TestCase

from bible.models import Book, Chapter, Language, Verse, Version


class ModelConstraintTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.language = Language.objects.create(code="en", name="English")
        cls.kjv = Version.objects.create(code="KJV", name="King James Version", language=cls.language)
        cls.web = Version.objects.create(code="WEB", name="World English Bible", language=cls.language)
        cls.genesis = Book.objects.create(slug="genesis", name="Genesis", number=1)
        cls.chapter = Chapter.objects.create(book=cls.genesis, chapter_num=1)

    def test_verse_natural_key_is_unique(self):
        Verse.objects.create(version=self.kjv, chapter=self.chapter, verse_number=1, text="a")
        with self.assertRaises(IntegrityError), transaction.atomic():
            Verse.objects.create(version=self.kjv, chapter=self.chapter, verse_number=1, text="b")

    def test_same_address_exists_in_parallel_versions(self):
        Verse.objects.create(version=self.kjv, chapter=self.chapter, verse_number=1, text="a")
        Verse.objects.create(version=self.web, chapter=self.chapter, verse_number=1, text="b")
        self.assertEqual(self.chapter.verses.count(), 2)

    def test_chapter_number_is_unique_per_book(self):
        with self.assertRaises(IntegrityError), transaction.atomic():
            Chapter.objects.create(book=self.genesis, chapter_num=1)

    def test_codes_and_slugs_are_unique(self):
        with self.assertRaises(IntegrityError), transaction.atomic():
            Language.objects.create(code="en", name="Other")
        with self.assertRaises(IntegrityError), transaction.atomic():
            Version.objects.create(code="KJV", name="Other", language=self.language)
        with self.assertRaises(IntegrityError), transaction.atomic():
            Book.objects.create(slug="genesis", name="Other", number=9)

    def test_default_orderings(self):
        Book.objects.create(slug="exodus", name="Exodus", number=2)
        Book.objects.create(slug="intro", name="Intro", number=0)
        Chapter.objects.create(book=self.genesis, chapter_num=10)
        Chapter.objects.create(book=self.genesis, chapter_num=2)

        self.assertEqual(list(Book.objects.values_list("slug", flat=True)), ["intro", "genesis", "exodus"])
        self.assertEqual(list(self.genesis.chapters.values_list("chapter_num", flat=True)), [1, 2, 10])
