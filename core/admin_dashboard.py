"""
Admin panel dashboard with site statistics.
"""
from accounts.gates import gated, require_auth
from cms.models import Post, GalleryItem, YouTubeVideo, Service
from contact.models import ContactMessage
from .admin_pages import admin_render, site_error_response
from .exceptions import StoreError, store_errors

RECENT_COUNT = 5


@gated(require_auth)
def admin_dashboard(request):
    """
    Counts of every content type, new messages, and the latest posts and
    messages. Any logged-in role may view it.
    """
    try:
        with store_errors('load dashboard'):
            stats = {
                'posts': Post.objects.count(),
                'gallery': GalleryItem.objects.count(),
                'videos': YouTubeVideo.objects.count(),
                'services': Service.objects.count(),
                'messages': ContactMessage.objects.filter(
                    status=ContactMessage.Status.NEW
                ).count(),
            }
            recent_posts = list(Post.objects.all()[:RECENT_COUNT])
            recent_messages = list(ContactMessage.objects.all()[:RECENT_COUNT])
    except StoreError as e:
        return site_error_response(request, e, 'Failed to load dashboard')

    return admin_render(request, 'admin/dashboard.html', {
        'title': 'Admin Dashboard',
        'stats': stats,
        'recent_posts': recent_posts,
        'recent_messages': recent_messages,
    }, 'dashboard')
