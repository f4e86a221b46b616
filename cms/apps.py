"""
CMS App Configuration
Site content: blog posts, gallery, YouTube videos and the service catalogue.
"""
from django.apps import AppConfig


class CmsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'cms'
    verbose_name = 'Site Content'
