"""
URL configuration for yourbible project.

/bible/...   read API (api.urls)
/api-docs/   Swagger UI
/admin/      Django admin

Anything else gets the JSON 404 envelope, also when DEBUG is on
(Django only calls handler404 with DEBUG off).
"""
from django.contrib import admin
from django.urls import path, include, re_path

from api.exceptions import not_found_view
from api.views import schema_view, IndexView, HealthView

urlpatterns = [
    path('', IndexView.as_view(), name='index'),
    path('health', HealthView.as_view(), name='health'),
    path('bible/', include('api.urls')),
    path('api-docs/', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('admin/', admin.site.urls),
    # keep last
    re_path(r'^', not_found_view, name='not-found'),
]

handler404 = 'api.exceptions.not_found_view'
handler500 = 'api.exceptions.server_error_view'
