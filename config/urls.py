# config/urls.py
from django.contrib import admin
from django.urls import include, path

from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from mind_core.common.views import health

urlpatterns = [
    path("admin/", admin.site.urls),

    # OpenAPI
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),

    path("health", health, name="health"),
    path("api/", include("mind_core.api.urls")),
]

handler404 = "mind_core.common.views.not_found"
handler500 = "mind_core.common.views.server_error"
