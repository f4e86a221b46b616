"""
CMS admin views: CRUD for posts, gallery items, YouTube videos and services.

Every view requires an editor or admin session.
"""
import logging

from django.contrib import messages
from django.shortcuts import redirect
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from accounts.gates import gated, require_editor
from core.admin_pages import admin_render, redirect_with_error, site_error_response
from core.exceptions import SiteError, ValidationError, StoreError, store_errors
from core.uploads import delete_upload, resolve_image_source
from .models import Post, GalleryItem, YouTubeVideo, Service
from .serializers import (
    PostFormSerializer,
    GalleryItemFormSerializer,
    YouTubeVideoFormSerializer,
    ServiceFormSerializer,
    first_error,
)

logger = logging.getLogger(__name__)


def validated(serializer_class, data, instance=None):
    serializer = serializer_class(instance, data=data)
    if not serializer.is_valid():
        raise ValidationError(first_error(serializer.errors))
    return serializer


def list_page(request, template, key, queryset, current_page, title, fallback):
    try:
        with store_errors(fallback):
            items = list(queryset)
    except StoreError as e:
        return site_error_response(request, e, f"Failed to load {fallback}")
    return admin_render(request, template, {'title': title, key: items}, current_page)


def save_with_upload(serializer, source, **extra):
    """
    Save the record; if that fails, drop the file just uploaded for it.
    """
    try:
        with store_errors('save record'):
            return serializer.save(**extra)
    except StoreError:
        if source is not None and source.kind == 'uploaded':
            delete_upload(source.value)
        raise


# =============================================================================
# POSTS
# =============================================================================

@gated(require_editor)
@require_http_methods(['GET', 'POST'])
def posts(request):
    if request.method == 'POST':
        return post_create(request)
    return list_page(
        request, 'admin/posts.html', 'posts', Post.objects.all(),
        'posts', 'Manage Posts', 'posts'
    )


def post_create(request):
    try:
        serializer = validated(PostFormSerializer, request.POST)
        source = resolve_image_source(
            request.FILES.get('image'), request.POST.get('image_url')
        )
        draft = Post()
        draft.set_image(source)
        post = save_with_upload(
            serializer, source, image=draft.image, image_url=draft.image_url
        )
    except SiteError as e:
        return site_error_response(request, e, 'Failed to create post')

    logger.info(f"Post created: {post.title} by {request.admin_user.username}")
    return redirect('panel:posts')


@gated(require_editor)
@require_GET
def post_add(request):
    return admin_render(request, 'admin/post_form.html', {
        'title': 'Add New Post',
        'post': None,
        'statuses': Post.Status.choices,
    }, 'posts')


@gated(require_editor)
@require_GET
def post_edit(request, id):
    post = Post.objects.filter(id=id).first()
    if post is None:
        return redirect('panel:posts')
    return admin_render(request, 'admin/post_form.html', {
        'title': 'Edit Post',
        'post': post,
        'statuses': Post.Status.choices,
    }, 'posts')


@gated(require_editor)
@require_POST
def post_update(request, id):
    post = Post.objects.filter(id=id).first()
    if post is None:
        return redirect('panel:posts')

    previous_upload = post.image
    try:
        serializer = validated(PostFormSerializer, request.POST, instance=post)
        source = resolve_image_source(
            request.FILES.get('image'), request.POST.get('image_url')
        )
        if source is not None:
            post.set_image(source)
        elif request.POST.get('remove_image'):
            post.image, post.image_url = None, None
        save_with_upload(serializer, source, image=post.image, image_url=post.image_url)
    except SiteError as e:
        return site_error_response(request, e, 'Failed to update post')

    if previous_upload and previous_upload != post.image:
        delete_upload(previous_upload)

    logger.info(f"Post updated: {post.id}")
    return redirect('panel:posts')


@gated(require_editor)
@require_POST
def post_delete(request, id):
    try:
        with store_errors('delete post'):
            Post.objects.filter(id=id).delete()
    except StoreError as e:
        return redirect_with_error(request, 'panel:posts', e, 'Failed to delete post')
    messages.success(request, 'Post deleted.')
    return redirect('panel:posts')


# =============================================================================
# GALLERY
# =============================================================================

@gated(require_editor)
@require_http_methods(['GET', 'POST'])
def gallery(request):
    if request.method == 'POST':
        return gallery_create(request)
    return list_page(
        request, 'admin/gallery.html', 'gallery', GalleryItem.objects.all(),
        'gallery', 'Manage Gallery', 'gallery'
    )


def gallery_create(request):
    try:
        serializer = validated(GalleryItemFormSerializer, request.POST)
        source = resolve_image_source(
            request.FILES.get('image'), request.POST.get('image_url'), required=True
        )
        save_with_upload(serializer, source, image=source.value)
    except SiteError as e:
        return site_error_response(
            request, e,
            'Failed to add gallery item. Please make sure you provided a valid image file or URL.'
        )
    return redirect('panel:gallery')


@gated(require_editor)
@require_POST
def gallery_delete(request, id):
    try:
        with store_errors('delete gallery item'):
            GalleryItem.objects.filter(id=id).delete()
    except StoreError as e:
        return redirect_with_error(request, 'panel:gallery', e, 'Failed to delete gallery item')
    return redirect('panel:gallery')


# =============================================================================
# YOUTUBE VIDEOS
# =============================================================================

@gated(require_editor)
@require_http_methods(['GET', 'POST'])
def videos(request):
    if request.method == 'POST':
        try:
            serializer = validated(YouTubeVideoFormSerializer, request.POST)
            with store_errors('add video'):
                serializer.save()
        except SiteError as e:
            return site_error_response(request, e, 'Failed to add video')
        return redirect('panel:videos')

    return list_page(
        request, 'admin/videos.html', 'videos', YouTubeVideo.objects.all(),
        'videos', 'Manage YouTube Videos', 'videos'
    )


@gated(require_editor)
@require_POST
def video_delete(request, id):
    try:
        with store_errors('delete video'):
            YouTubeVideo.objects.filter(id=id).delete()
    except StoreError as e:
        return redirect_with_error(request, 'panel:videos', e, 'Failed to delete video')
    return redirect('panel:videos')


# =============================================================================
# SERVICES
# =============================================================================

@gated(require_editor)
@require_http_methods(['GET', 'POST'])
def services(request):
    if request.method == 'POST':
        try:
            serializer = validated(ServiceFormSerializer, request.POST)
            with store_errors('add service'):
                serializer.save()
        except SiteError as e:
            return site_error_response(request, e, 'Failed to add service')
        return redirect('panel:services')

    return list_page(
        request, 'admin/services.html', 'services', Service.objects.all(),
        'services', 'Manage Services', 'services'
    )


@gated(require_editor)
@require_http_methods(['GET', 'POST'])
def service_edit(request, id):
    # GET has no form of its own; the list page edits inline
    if request.method == 'GET':
        return redirect('panel:services')

    service = Service.objects.filter(id=id).first()
    if service is None:
        return redirect('panel:services')

    try:
        serializer = validated(ServiceFormSerializer, request.POST, instance=service)
        with store_errors('update service'):
            serializer.save()
    except SiteError as e:
        return site_error_response(request, e, 'Failed to update service')
    return redirect('panel:services')


@gated(require_editor)
@require_POST
def service_delete(request, id):
    try:
        with store_errors('delete service'):
            Service.objects.filter(id=id).delete()
    except StoreError as e:
        return redirect_with_error(request, 'panel:services', e, 'Failed to delete service')
    return redirect('panel:services')
