from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

router = DefaultRouter()
router.register(r'coupons', views.CouponViewSet)

urlpatterns = [
    path('coupons/validate/', views.validate_coupon, name='coupon-validate'),
    path('', include(router.urls)),
]
