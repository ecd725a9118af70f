from django.db import models


class Language(models.Model):
    code = models.CharField(max_length=32, unique=True)   # ex: "en", "ruanglat"
    name = models.CharField(max_length=128)               # ex: "English"

    class Meta:
        ordering = ["code"]

    def __str__(self): return self.code


class Version(models.Model):
    code = models.CharField(max_length=32, unique=True)   # ex: "KJV"
    name = models.CharField(max_length=128)               # ex: "King James Version"
    language = models.ForeignKey(Language, on_delete=models.CASCADE, related_name="versions")

    def __str__(self): return self.code


class Book(models.Model):
    """Book structure is shared by every version; only verses are per version."""
    slug = models.SlugField(max_length=64, unique=True)   # ex: "genesis"
    name = models.CharField(max_length=128)
    # canonical position, 0 when unknown
    number = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["number", "slug"]

    def __str__(self): return self.slug


class Chapter(models.Model):
    book = models.ForeignKey(Book, on_delete=models.CASCADE, related_name="chapters")
    chapter_num = models.PositiveIntegerField()

    class Meta:
        ordering = ["chapter_num"]
        constraints = [
            models.UniqueConstraint(fields=["book", "chapter_num"], name="uniq_chapter_per_book"),
        ]

    def __str__(self): return f"{self.book.slug} {self.chapter_num}"


class Verse(models.Model):
    version = models.ForeignKey(Version, on_delete=models.CASCADE, related_name="verses")
    chapter = models.ForeignKey(Chapter, on_delete=models.CASCADE, related_name="verses")
    verse_number = models.PositiveIntegerField()
    text = models.TextField()

    class Meta:
        ordering = ["verse_number"]
        constraints = [
            models.UniqueConstraint(
                fields=["version", "chapter", "verse_number"], name="uniq_verse_per_version_chapter"
            ),
        ]
        indexes = [
            models.Index(fields=["version", "chapter"], name="verse_version_chapter_idx"),
        ]

    def __str__(self):
        return f"{self.version.code} {self.chapter.book.slug} {self.chapter.chapter_num}:{self.verse_number}"


class Audio(models.Model):
    verse = models.ForeignKey(Verse, on_delete=models.CASCADE, related_name="audios")
    language = models.CharField(max_length=32)
    url = models.URLField(max_length=500)
    duration = models.PositiveIntegerField(null=True, blank=True)  # seconds
    format = models.CharField(max_length=16, null=True, blank=True)

    class Meta:
        ordering = ["id"]

    def __str__(self): return self.url
