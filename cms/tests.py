"""
Tests for the public site, the JSON endpoints and CMS administration.
"""
import os
import uuid
from decimal import Decimal

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.db import DatabaseError
from django.db.models.query import QuerySet
from rest_framework import status

from cms.models import Post, GalleryItem, YouTubeVideo, Service
from core.exceptions import ValidationError
from core.uploads import External, Uploaded, delete_upload, resolve_image_source, upload_storage

pytestmark = pytest.mark.django_db

GIF_BYTES = (
    b'GIF89a\x01\x00\x01\x00\x80\x00\x00\x00\x00\x00\xff\xff\xff!\xf9\x04'
    b'\x01\x00\x00\x00\x00,\x00\x00\x00\x00\x01\x00\x01\x00\x00\x02\x02D\x01\x00;'
)


def gif(name='photo.gif'):
    return SimpleUploadedFile(name, GIF_BYTES, content_type='image/gif')


@pytest.fixture
def published_post(db):
    return Post.objects.create(
        title='Fixing water damage', content='Step one: switch it off.',
        author='Sunny', status=Post.Status.PUBLISHED
    )


@pytest.fixture
def draft_post(db):
    return Post.objects.create(title='Unfinished', content='...', author='Sunny')


@pytest.fixture
def broken_store(monkeypatch):
    def fail(self):
        raise DatabaseError('connection refused')
    monkeypatch.setattr(QuerySet, '_fetch_all', fail)


class TestPublicPages:

    def test_home_shows_published_posts_only(self, client, published_post, draft_post):
        response = client.get('/')
        assert response.status_code == 200
        assert response.context['posts'] == [published_post]

    def test_home_limits(self, client):
        for i in range(5):
            Post.objects.create(title=f'Post {i}', content='x', author='a', status='published')
        for i in range(10):
            GalleryItem.objects.create(title=f'Pic {i}', image='/media/uploads/x.gif', category='repairs')

        response = client.get('/')
        assert len(response.context['posts']) == 3
        assert len(response.context['gallery']) == 8

    def test_services_page_lists_active_only(self, client):
        active = Service.objects.create(name='Screen replacement', price=Decimal('1500'))
        Service.objects.create(name='Retired', status=Service.Status.INACTIVE)

        response = client.get('/services')
        assert response.context['services'] == [active]

    def test_post_detail(self, client, published_post):
        response = client.get(f'/post/{published_post.id}')
        assert response.status_code == 200
        assert b'Fixing water damage' in response.content

    def test_draft_post_is_not_found(self, client, draft_post):
        response = client.get(f'/post/{draft_post.id}')
        assert response.status_code == 404
        assert response.context['title'] == 'Post Not Found'

    def test_missing_post_is_not_found(self, client):
        assert client.get(f'/post/{uuid.uuid4()}').status_code == 404

    def test_unknown_path_renders_404(self, client):
        response = client.get('/no/such/page')
        assert response.status_code == 404
        assert b'Page Not Found' in response.content

    def test_gallery_and_youtube_pages(self, client):
        YouTubeVideo.objects.create(title='Battery swap', video_id='abc123')
        assert client.get('/gallery').status_code == 200
        response = client.get('/youtube')
        assert b'https://www.youtube.com/embed/abc123' in response.content


class TestPublicAPI:

    def test_posts_api_published_newest_first(self, api_client, draft_post):
        older = Post.objects.create(title='Older', content='x', author='a', status='published')
        newer = Post.objects.create(title='Newer', content='x', author='a', status='published')
        Post.objects.filter(id=older.id).update(created_at=newer.created_at.replace(year=2020))

        response = api_client.get('/api/posts')

        assert response.status_code == status.HTTP_200_OK
        assert [p['title'] for p in response.json()] == ['Newer', 'Older']

    def test_gallery_and_youtube_api(self, api_client):
        GalleryItem.objects.create(title='Pic', image='https://cdn.example.com/p.jpg', category='shop')
        YouTubeVideo.objects.create(title='Vid', video_id='xyz')

        gallery = api_client.get('/api/gallery').json()
        videos = api_client.get('/api/youtube').json()

        assert gallery[0]['image'] == 'https://cdn.example.com/p.jpg'
        assert videos[0]['category'] == 'general'
        assert videos[0]['embed_url'] == 'https://www.youtube.com/embed/xyz'

    def test_store_failure_answers_empty_list(self, api_client, broken_store):
        for url in ['/api/posts', '/api/gallery', '/api/youtube']:
            response = api_client.get(url)
            assert response.status_code == 200
            assert response.json() == []

    def test_store_failure_renders_empty_page(self, client, broken_store):
        response = client.get('/gallery')
        assert response.status_code == 200
        assert response.context['gallery'] == []


class TestImageSource:

    def test_both_file_and_url_rejected(self):
        with pytest.raises(ValidationError):
            resolve_image_source(gif(), 'https://example.com/a.png')

    def test_nothing_given(self):
        assert resolve_image_source(None, '') is None
        with pytest.raises(ValidationError):
            resolve_image_source(None, '', required=True)

    def test_external_urls(self):
        assert resolve_image_source(None, ' https://example.com/a.png ') == External('https://example.com/a.png')
        assert resolve_image_source(None, '/images/shop.jpg') == External('/images/shop.jpg')
        with pytest.raises(ValidationError):
            resolve_image_source(None, 'javascript:alert(1)')

    def test_upload_is_stored(self):
        source = resolve_image_source(gif('my photo.gif'), None)

        assert isinstance(source, Uploaded)
        assert source.path.startswith('/media/uploads/')
        assert source.path.endswith('-my_photo.gif')
        name = source.path[len('/media/uploads/'):]
        assert upload_storage().exists(name)

    def test_delete_upload_with_encoded_name(self):
        source = resolve_image_source(gif('café.gif'), None)
        stored = [n for n in os.listdir(upload_storage().location) if n.endswith('-café.gif')]
        assert stored
        assert '%C3%A9' in source.path

        delete_upload(source.path)

        assert not upload_storage().exists(stored[0])

    def test_delete_upload_ignores_external_urls(self):
        delete_upload('https://example.com/a.png')
        delete_upload(None)

    def test_oversize_upload_rejected(self, settings):
        settings.MAX_UPLOAD_SIZE = 10
        with pytest.raises(ValidationError, match='too large'):
            resolve_image_source(gif(), None)

    def test_non_image_rejected(self):
        upload = SimpleUploadedFile('notes.txt', b'hello', content_type='text/plain')
        with pytest.raises(ValidationError, match='Invalid file type'):
            resolve_image_source(upload, None)

    def test_post_prefers_external_url(self):
        post = Post(image='/media/uploads/1-a.gif', image_url='https://example.com/b.png')
        assert post.image_source == External('https://example.com/b.png')
        post.set_image(Uploaded('/media/uploads/2-c.gif'))
        assert post.image_url is None
        assert post.display_image == '/media/uploads/2-c.gif'


class TestPostAdmin:

    def test_create_post_without_image(self, editor_client):
        response = editor_client.post('/sunny/posts', {
            'title': ' New phones in stock ', 'content': 'Come and see.', 'author': 'Sunny',
        })

        assert response.status_code == 302
        post = Post.objects.get()
        assert post.title == 'New phones in stock'
        assert post.status == Post.Status.DRAFT
        assert post.image is None and post.image_url is None

    def test_create_post_with_upload(self, editor_client):
        editor_client.post('/sunny/posts', {
            'title': 'With photo', 'content': 'x', 'author': 'a',
            'status': 'published', 'image': gif(),
        })

        post = Post.objects.get()
        assert post.image.startswith('/media/uploads/')
        assert post.image_url is None

    def test_create_post_with_both_images_fails(self, editor_client):
        response = editor_client.post('/sunny/posts', {
            'title': 'Both', 'content': 'x', 'author': 'a',
            'image': gif(), 'image_url': 'https://example.com/a.png',
        })

        assert response.status_code == 400
        assert b'not both' in response.content
        assert not Post.objects.exists()

    def test_missing_title_fails(self, editor_client):
        response = editor_client.post('/sunny/posts', {'content': 'x', 'author': 'a'})
        assert response.status_code == 400
        assert not Post.objects.exists()

    def test_update_keeps_current_image(self, editor_client, published_post):
        published_post.image_url = 'https://example.com/keep.png'
        published_post.save()

        response = editor_client.post(f'/sunny/posts/{published_post.id}', {
            'title': 'Renamed', 'content': 'New body', 'author': 'Sunny', 'status': 'draft',
        })

        assert response.status_code == 302
        published_post.refresh_from_db()
        assert published_post.title == 'Renamed'
        assert published_post.status == 'draft'
        assert published_post.image_url == 'https://example.com/keep.png'

    def test_update_replaces_image(self, editor_client, published_post):
        published_post.image = '/media/uploads/1-old.gif'
        published_post.save()

        editor_client.post(f'/sunny/posts/{published_post.id}', {
            'title': 'T', 'content': 'C', 'author': 'A', 'status': 'published',
            'image_url': 'https://example.com/new.png',
        })

        published_post.refresh_from_db()
        assert published_post.image is None
        assert published_post.image_url == 'https://example.com/new.png'

    def test_replacing_upload_removes_old_file(self, editor_client, published_post):
        old = resolve_image_source(gif('old.gif'), None)
        published_post.set_image(old)
        published_post.save()
        old_name = old.path.rsplit('/', 1)[1]
        assert upload_storage().exists(old_name)

        editor_client.post(f'/sunny/posts/{published_post.id}', {
            'title': 'T', 'content': 'C', 'author': 'A', 'status': 'published',
            'image': gif('new.gif'),
        })

        published_post.refresh_from_db()
        assert published_post.image.endswith('-new.gif')
        assert not upload_storage().exists(old_name)

    def test_removing_upload_removes_file(self, editor_client, published_post):
        old = resolve_image_source(gif('gone.gif'), None)
        published_post.set_image(old)
        published_post.save()

        editor_client.post(f'/sunny/posts/{published_post.id}', {
            'title': 'T', 'content': 'C', 'author': 'A', 'status': 'published',
            'remove_image': 'on',
        })

        published_post.refresh_from_db()
        assert published_post.image is None
        assert not upload_storage().exists(old.path.rsplit('/', 1)[1])

    def test_draft_is_hidden_until_published(self, editor_client, client, api_client):
        editor_client.post('/sunny/posts', {
            'title': 'Monsoon offer', 'content': 'Free check-up.', 'author': 'Sunny',
        })
        post = Post.objects.get()

        assert client.get('/posts').context['posts'] == []
        assert api_client.get('/api/posts').json() == []
        assert client.get(f'/post/{post.id}').status_code == 404

        editor_client.post(f'/sunny/posts/{post.id}', {
            'title': 'Monsoon offer', 'content': 'Free check-up.', 'author': 'Sunny',
            'status': 'published',
        })

        assert client.get('/posts').context['posts'] == [post]
        assert [p['title'] for p in api_client.get('/api/posts').json()] == ['Monsoon offer']
        assert client.get(f'/post/{post.id}').status_code == 200

    def test_edit_form_and_delete(self, editor_client, published_post):
        assert editor_client.get(f'/sunny/posts/edit/{published_post.id}').status_code == 200
        assert editor_client.get('/sunny/posts/add').status_code == 200

        response = editor_client.post(f'/sunny/posts/delete/{published_post.id}')
        assert response.status_code == 302
        assert not Post.objects.exists()

    def test_admin_list_includes_drafts(self, editor_client, published_post, draft_post):
        response = editor_client.get('/sunny/posts')
        assert set(response.context['posts']) == {published_post, draft_post}


class TestGalleryAdmin:

    def test_add_with_url(self, editor_client):
        response = editor_client.post('/sunny/gallery', {
            'title': 'Shop front', 'category': 'shop', 'image_url': 'https://example.com/shop.jpg',
        })
        assert response.status_code == 302
        assert GalleryItem.objects.get().image == 'https://example.com/shop.jpg'

    def test_add_with_upload(self, editor_client):
        editor_client.post('/sunny/gallery', {'title': 'Repair', 'category': 'repairs', 'image': gif()})

        item = GalleryItem.objects.get()
        assert item.image.startswith('/media/uploads/')
        assert os.path.exists(upload_storage().path(item.image[len('/media/uploads/'):]))

    def test_image_is_required(self, editor_client):
        response = editor_client.post('/sunny/gallery', {'title': 'No image', 'category': 'x'})
        assert response.status_code == 400
        assert not GalleryItem.objects.exists()

    def test_delete(self, editor_client):
        item = GalleryItem.objects.create(title='Pic', image='/x.gif', category='c')
        editor_client.post(f'/sunny/gallery/delete/{item.id}')
        assert not GalleryItem.objects.exists()


class TestVideoAdmin:

    def test_add_defaults_category(self, editor_client):
        response = editor_client.post('/sunny/videos', {'title': 'Unboxing', 'video_id': ' dQw4w9WgXcQ '})

        assert response.status_code == 302
        video = YouTubeVideo.objects.get()
        assert video.video_id == 'dQw4w9WgXcQ'
        assert video.category == 'general'

    def test_delete(self, editor_client):
        video = YouTubeVideo.objects.create(title='V', video_id='v')
        editor_client.post(f'/sunny/videos/delete/{video.id}')
        assert not YouTubeVideo.objects.exists()


class TestServiceAdmin:

    def test_create_edit_delete(self, editor_client):
        editor_client.post('/sunny/services', {'name': 'Battery replacement', 'price': '799.50'})
        service = Service.objects.get()
        assert service.price == Decimal('799.50')
        assert service.status == Service.Status.ACTIVE

        editor_client.post(f'/sunny/services/edit/{service.id}', {
            'name': 'Battery swap', 'price': '899', 'status': 'inactive',
        })
        service.refresh_from_db()
        assert service.name == 'Battery swap'
        assert service.status == Service.Status.INACTIVE

        editor_client.post(f'/sunny/services/delete/{service.id}')
        assert not Service.objects.exists()

    def test_edit_get_redirects_to_list(self, editor_client):
        service = Service.objects.create(name='S')
        response = editor_client.get(f'/sunny/services/edit/{service.id}')
        assert response['Location'] == '/sunny/services'
