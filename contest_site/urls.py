"""
URL configuration for contest_site project.

- /api/...        JSON endpoints (token validation, submission)
- /<lang>/...     localized pages
- /admin/         unfold admin
- /health...      liveness, database and token cache checks
"""
from django.conf.urls.i18n import i18n_patterns
from django.contrib import admin
from django.urls import include, path

from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularRedocView,
    SpectacularSwaggerView,
)

from .views import health_cache, health_db, health_root

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include('tokens.urls')),
    path('api/', include('entries.urls')),
    path('i18n/', include('django.conf.urls.i18n')),
    path('health', health_root, name='health'),
    path('health/db', health_db, name='health-db'),
    path('health/cache', health_cache, name='health-cache'),

    ## Swagger API Documentation URLs
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path(
        "api/schema/swagger-ui/",
        SpectacularSwaggerView.as_view(url_name="schema"),
        name="swagger-ui",
    ),
    path(
        "api/schema/redoc/",
        SpectacularRedocView.as_view(url_name="schema"),
        name="redoc",
    ),
]

urlpatterns += i18n_patterns(
    path('', include('pages.urls')),
    prefix_default_language=True,
)
