"""
CMS admin URLs, mounted under the admin prefix in the ``panel`` namespace.
"""
from django.urls import path
from . import admin_views

urlpatterns = [
    # Posts
    path('posts', admin_views.posts, name='posts'),
    path('posts/add', admin_views.post_add, name='post-add'),
    path('posts/edit/<uuid:id>', admin_views.post_edit, name='post-edit'),
    path('posts/delete/<uuid:id>', admin_views.post_delete, name='post-delete'),
    path('posts/<uuid:id>', admin_views.post_update, name='post-update'),

    # Gallery
    path('gallery', admin_views.gallery, name='gallery'),
    path('gallery/delete/<uuid:id>', admin_views.gallery_delete, name='gallery-delete'),

    # YouTube videos
    path('videos', admin_views.videos, name='videos'),
    path('videos/delete/<uuid:id>', admin_views.video_delete, name='video-delete'),

    # Services
    path('services', admin_views.services, name='services'),
    path('services/edit/<uuid:id>', admin_views.service_edit, name='service-edit'),
    path('services/delete/<uuid:id>', admin_views.service_delete, name='service-delete'),
]
