"""
Admin panel URLs for login, logout and user management.

Mounted under the admin prefix in the ``panel`` namespace.
"""
from django.urls import path

from . import views, user_management_views

urlpatterns = [
    path('', views.index, name='index'),
    path('login', views.login, name='login'),
    path('logout', views.logout, name='logout'),

    # Admin only
    path('users', user_management_views.users, name='users'),
    path('users/delete/<uuid:id>', user_management_views.user_delete, name='user-delete'),
]
