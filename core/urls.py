"""
URL configuration for the site.

Public pages and JSON come from ``cms``, the contact form from ``contact``.
Everything under ADMIN_PATH_PREFIX is the admin panel, namespaced ``panel``.
"""
from django.conf import settings
from django.conf.urls.static import static
from django.urls import path, include

from accounts import admin_urls as accounts_admin_urls, views as accounts_views
from cms import admin_urls as cms_admin_urls
from contact import admin_urls as contact_admin_urls
from .admin_dashboard import admin_dashboard

panel_urlpatterns = [
    path('dashboard', admin_dashboard, name='dashboard'),
    *accounts_admin_urls.urlpatterns,
    *cms_admin_urls.urlpatterns,
    *contact_admin_urls.urlpatterns,
]

urlpatterns = [
    path(settings.ADMIN_PATH_PREFIX, accounts_views.index),
    path(f'{settings.ADMIN_PATH_PREFIX}/', include((panel_urlpatterns, 'panel'))),
    path('', include('contact.urls')),
    path('', include('cms.urls')),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)

handler404 = 'cms.views.not_found'
