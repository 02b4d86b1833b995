from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

router = DefaultRouter()
router.register(r'campaigns', views.CampaignViewSet)
router.register(r'media-assets', views.MediaAssetViewSet)
router.register(r'host-ads', views.HostAdViewSet)

urlpatterns = [
    path('', include(router.urls)),
    path('review/queue/', views.review_queue, name='review-queue'),
    path('review/', views.review_item, name='review-item'),
    path('asset-lifecycle/', views.asset_lifecycle_list, name='asset-lifecycle'),
    path('asset-lifecycle/<int:lifecycle_id>/restore/', views.restore_asset, name='asset-restore'),
]
