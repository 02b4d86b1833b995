from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

router = DefaultRouter()
router.register(r'email-templates', views.EmailTemplateViewSet)
router.register(r'email-queue', views.EmailQueueViewSet)

urlpatterns = [
    path('', include(router.urls)),
    path('settings/', views.settings_list, name='settings-list'),
    path('settings/public/', views.public_settings, name='settings-public'),
    path('settings/<str:key>/', views.setting_detail, name='setting-detail'),
    path('notification-settings/', views.notification_settings, name='notification-settings'),
    path('campaign-test-email/', views.campaign_test_email, name='campaign-test-email'),
]
