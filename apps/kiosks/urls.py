from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import KioskViewSet

router = DefaultRouter()
router.register(r'kiosks', KioskViewSet)

urlpatterns = [
    path('', include(router.urls)),
]
