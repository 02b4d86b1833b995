from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

router = DefaultRouter()
router.register(r'orders', views.CustomAdOrderViewSet)
router.register(r'proofs', views.ProofViewSet)

urlpatterns = [
    path('', include(router.urls)),
    path('notifications/', views.notifications, name='custom-ad-notifications'),
    path('notifications/<int:notification_id>/read/', views.mark_notification_read, name='custom-ad-notification-read'),
    path('approved-media/', views.approved_media, name='custom-ad-approved-media'),
]
