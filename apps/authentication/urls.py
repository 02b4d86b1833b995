from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView
from . import views

urlpatterns = [
    path('register/', views.register, name='register'),
    path('login/', views.login, name='login'),
    path('logout/', views.logout, name='logout'),
    path('me/', views.me, name='me'),
    path('token/refresh/', TokenRefreshView.as_view(), name='token-refresh'),
    path('preferences/<str:key>/', views.preference, name='preference'),
    path('users/', views.user_list, name='user-list'),
    path('users/export/', views.export_users, name='user-export'),
    path('users/import/', views.import_users, name='user-import'),
    path('users/<int:user_id>/', views.user_detail, name='user-detail'),
]
