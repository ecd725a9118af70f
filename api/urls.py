from django.urls import path

from api.views import BibleByLanguageView, BibleByVersionView, BookView, ChapterView, SearchView, VerseView

# order matters: /bible/<languageCode> must stay last
urlpatterns = [
    path('search', SearchView.as_view(), name='bible-search'),
    path('language/<str:language_code>', BibleByLanguageView.as_view(), name='bible-language'),
    path('version/<str:version_code>', BibleByVersionView.as_view(), name='bible-version'),
    path('version/<str:version_code>/book/<str:book_slug>', BookView.as_view(), name='bible-book'),
    path('version/<str:version_code>/book/<str:book_slug>/chapter/<str:chapter_num>',
         ChapterView.as_view(), name='bible-chapter'),
    path('version/<str:version_code>/book/<str:book_slug>/chapter/<str:chapter_num>/verse/<str:verse_num>',
         VerseView.as_view(), name='bible-verse'),
    path('<str:language_code>', BibleByLanguageView.as_view(), name='bible-language-legacy'),
]
