from django.urls import path
from . import views

urlpatterns = [
    path('schedulers/', views.scheduler_list, name='scheduler-list'),
    path('schedulers/activity/', views.activity, name='scheduler-activity'),
    path('schedulers/<str:name>/', views.scheduler_detail, name='scheduler-detail'),
    path('schedulers/<str:name>/trigger/', views.trigger, name='scheduler-trigger'),
    path('schedulers/<str:name>/test/', views.test_run, name='scheduler-test'),
    path('schedulers/<str:name>/enable/', views.enable, name='scheduler-enable'),
    path('schedulers/<str:name>/disable/', views.disable, name='scheduler-disable'),
    path('schedulers/<str:name>/time/', views.update_time, name='scheduler-time'),
]
