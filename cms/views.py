"""
Public site views.

HTML pages for the marketing site plus the JSON mirrors under /api/.
Store failures never break a page: the list is logged and rendered empty.
"""
import logging

from django.conf import settings
from django.shortcuts import render
from rest_framework import generics
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from core.exceptions import StoreError, store_errors
from .models import Post, GalleryItem, YouTubeVideo, Service
from .serializers import PostSerializer, GalleryItemSerializer, YouTubeVideoSerializer

logger = logging.getLogger(__name__)

HOME_POST_COUNT = 3
HOME_GALLERY_COUNT = 8


def fetch(queryset, operation):
    """Evaluate a queryset, degrading to an empty list on store failure."""
    try:
        with store_errors(operation):
            return list(queryset)
    except StoreError as e:
        logger.error(f"{operation} failed: {e}")
        return []


def page_title(title=None):
    if title:
        return f"{title} - {settings.BUSINESS_NAME}"
    return f"{settings.BUSINESS_NAME} - {settings.BUSINESS_TAGLINE}"


def home(request):
    return render(request, 'index.html', {
        'title': page_title(),
        'posts': fetch(Post.objects.published()[:HOME_POST_COUNT], 'load home posts'),
        'gallery': fetch(GalleryItem.objects.all()[:HOME_GALLERY_COUNT], 'load home gallery'),
    })


def services(request):
    return render(request, 'services.html', {
        'title': page_title('Our Services'),
        'services': fetch(Service.objects.active(), 'load services'),
    })


def posts(request):
    return render(request, 'posts.html', {
        'title': page_title('Blog Posts'),
        'posts': fetch(Post.objects.published(), 'load posts'),
    })


def post_detail(request, id):
    try:
        with store_errors('load post'):
            post = Post.objects.published().filter(id=id).first()
    except StoreError:
        post = None

    if post is None:
        return not_found(request, title='Post Not Found')

    return render(request, 'post_detail.html', {
        'title': page_title(post.title),
        'post': post,
        'current_url': request.build_absolute_uri(),
    })


def gallery(request):
    return render(request, 'gallery.html', {
        'title': page_title('Gallery'),
        'gallery': fetch(GalleryItem.objects.all(), 'load gallery'),
    })


def youtube(request):
    return render(request, 'youtube.html', {
        'title': page_title('YouTube Videos'),
        'videos': fetch(YouTubeVideo.objects.all(), 'load videos'),
    })


def not_found(request, exception=None, title='Page Not Found'):
    return render(request, '404.html', {'title': title}, status=404)


class PublicListView(generics.ListAPIView):
    """
    Unpaginated JSON array, newest first. Answers ``[]`` if the store fails.
    """

    permission_classes = [AllowAny]
    pagination_class = None

    def list(self, request, *args, **kwargs):
        items = fetch(self.get_queryset(), f"API {self.__class__.__name__}")
        return Response(self.get_serializer(items, many=True).data)


class PostListAPIView(PublicListView):
    """GET /api/posts - published posts only."""
    serializer_class = PostSerializer

    def get_queryset(self):
        return Post.objects.published()


class GalleryListAPIView(PublicListView):
    """GET /api/gallery"""
    serializer_class = GalleryItemSerializer
    queryset = GalleryItem.objects.all()


class YouTubeListAPIView(PublicListView):
    """GET /api/youtube"""
    serializer_class = YouTubeVideoSerializer
    queryset = YouTubeVideo.objects.all()
