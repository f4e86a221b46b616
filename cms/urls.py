"""
Public site URLs: HTML pages and their JSON mirrors.
"""
from django.urls import path
from . import views

urlpatterns = [
    path('', views.home, name='home'),
    path('services', views.services, name='services'),
    path('posts', views.posts, name='posts'),
    path('post/<uuid:id>', views.post_detail, name='post-detail'),
    path('gallery', views.gallery, name='gallery'),
    path('youtube', views.youtube, name='youtube'),

    # JSON
    path('api/posts', views.PostListAPIView.as_view(), name='api-posts'),
    path('api/gallery', views.GalleryListAPIView.as_view(), name='api-gallery'),
    path('api/youtube', views.YouTubeListAPIView.as_view(), name='api-youtube'),
]
