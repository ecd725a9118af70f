from django.contrib import admin

from bible.models import Audio, Book, Chapter, Language, Verse, Version

admin.site.site_header = 'YourBible back-end'
admin.site.site_title = 'YourBible admin'
admin.site.index_title = 'Bible data'
admin.empty_value_display = '**Empty**'


class VersionInline(admin.TabularInline):
    model = Version
    extra = 0


@admin.register(Language)
class LanguageAdmin(admin.ModelAdmin):
    list_display = ('code', 'name')
    search_fields = ('code', 'name')
    inlines = [VersionInline]


@admin.register(Version)
class VersionAdmin(admin.ModelAdmin):
    list_display = ('code', 'name', 'language')
    list_filter = ('language',)
    search_fields = ('code', 'name')


@admin.register(Book)
class BookAdmin(admin.ModelAdmin):
    list_display = ('number', 'slug', 'name')
    search_fields = ('slug', 'name')
    ordering = ('number',)


@admin.register(Chapter)
class ChapterAdmin(admin.ModelAdmin):
    list_display = ('book', 'chapter_num')
    list_filter = ('book',)
    list_select_related = ('book',)


class AudioInline(admin.TabularInline):
    model = Audio
    extra = 0


@admin.register(Verse)
class VerseAdmin(admin.ModelAdmin):
    list_display = ('version', 'chapter', 'verse_number', 'short_text')
    list_filter = ('version',)
    search_fields = ('text',)
    list_select_related = ('version', 'chapter__book')
    raw_id_fields = ('chapter',)
    inlines = [AudioInline]

    @admin.display(description='Text')
    def short_text(self, obj):
        return obj.text[:80]


@admin.register(Audio)
class AudioAdmin(admin.ModelAdmin):
    list_display = ('verse', 'language', 'format', 'duration', 'url')
    list_filter = ('language', 'format')
    raw_id_fields = ('verse',)
    list_select_related = ('verse__version', 'verse__chapter__book')
