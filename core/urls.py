"""
URL configuration for the kioskads project.
"""

from django.contrib import admin
from django.urls import path
from django.urls import include
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView, SpectacularRedocView
from core.graphql.schema import schema
from core.graphql.views import JWTGraphQLView

def home_view(request):
    return JsonResponse({
        "message": "Kiosk Ads Backend API",
        "status": "running",
        "endpoints": {
            "admin": "/admin/",
            "api": "/api/v1/",
            "graphql": "/graphql/",
            "docs": "/api/docs/",
            "schema": "/api/schema/"
        }
    })


urlpatterns = [
    path("", home_view, name="home"),
    path("admin/", admin.site.urls),
    path("api/v1/auth/", include("apps.authentication.urls")),
    path("api/v1/audit/", include("apps.audit.urls")),
    path("api/v1/analytics/", include("apps.analytics.urls")),
    path("api/v1/notifications/", include("apps.notifications.urls")),
    path("api/v1/scheduler/", include("apps.scheduler.urls")),
    path("api/v1/custom-ads/", include("apps.custom_ads.urls")),
    path("api/v1/", include("apps.marketing.urls")),
    path("api/v1/billing/", include("apps.billing.urls")),
    path("api/v1/", include("apps.kiosks.urls")),
    path("api/v1/", include("apps.coupons.urls")),
    path("api/v1/", include("apps.campaigns.urls")),
    path('graphql/', csrf_exempt(JWTGraphQLView.as_view(schema=schema, graphql_ide="graphiql"))),
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    path('api/redoc/', SpectacularRedocView.as_view(url_name='schema'), name='redoc'),
]
