# pqr_core/api/urls_v1.py
# URLConf used for schema generation only (public API surface).
from django.urls import include, path

urlpatterns = [
    path("api/v1/", include("pqr_core.api.urls")),
]
