from django.urls import path
from . import views

urlpatterns = [
    path('dashboard/', views.dashboard, name='dashboard'),
    path('circuit-breaker/status/', views.circuit_breaker_status, name='circuit_status'),
]
