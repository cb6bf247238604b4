# config/urls.py
from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

# schema covers the public /api/v1/ surface only, not the admin site
schema_view = SpectacularAPIView.as_view(urlconf="pqr_core.api.urls_v1")

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/schema/", schema_view, name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("api/v1/", include("pqr_core.api.urls")),
]
