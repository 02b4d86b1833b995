from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

router = DefaultRouter()
router.register(r'marketing-tools', views.MarketingToolViewSet)
router.register(r'testimonials', views.TestimonialViewSet)
router.register(r'partner-logos', views.PartnerLogoViewSet)

urlpatterns = [
    path('marketing/public/', views.public_marketing, name='marketing-public'),
    path('', include(router.urls)),
]
