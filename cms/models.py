"""
CMS Models
Site content managed from the admin panel: blog posts, gallery items,
YouTube videos and the service catalogue.

Each model is an independent record; nothing here references a User.
"""
import uuid
from django.db import models

from core.uploads import External, Uploaded


class TimestampedModel(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ['-created_at']


class PostQuerySet(models.QuerySet):
    def published(self):
        return self.filter(status=Post.Status.PUBLISHED)


class Post(TimestampedModel):
    """
    Blog post. Drafts are visible only in the admin panel.
    """

    class Status(models.TextChoices):
        DRAFT = 'draft', 'Draft'
        PUBLISHED = 'published', 'Published'

    title = models.CharField(max_length=255)
    content = models.TextField()

    image = models.CharField(
        max_length=500,
        null=True,
        blank=True,
        help_text="Path of an uploaded image"
    )

    image_url = models.URLField(
        max_length=1000,
        null=True,
        blank=True,
        help_text="External image URL"
    )

    author = models.CharField(max_length=255)

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.DRAFT,
        db_index=True
    )

    objects = PostQuerySet.as_manager()

    class Meta(TimestampedModel.Meta):
        db_table = 'cms_posts'
        verbose_name = 'Post'
        verbose_name_plural = 'Posts'
        indexes = [
            models.Index(fields=['status', 'created_at'], name='cms_posts_status_created_idx'),
        ]

    def __str__(self):
        return f"{self.title} ({self.status})"

    @property
    def image_source(self):
        """The image shown on the site: an external URL wins over an upload."""
        if self.image_url:
            return External(self.image_url)
        if self.image:
            return Uploaded(self.image)
        return None

    @property
    def display_image(self):
        source = self.image_source
        return source.value if source else None

    def set_image(self, source):
        """Store an ImageSource, clearing the other field."""
        if isinstance(source, Uploaded):
            self.image, self.image_url = source.path, None
        elif isinstance(source, External):
            self.image, self.image_url = None, source.url


class GalleryItem(TimestampedModel):
    """Gallery picture; ``image`` holds an upload path or an external URL."""

    title = models.CharField(max_length=255)
    image = models.CharField(max_length=1000)
    category = models.CharField(max_length=100)
    description = models.TextField(blank=True, default='')

    class Meta(TimestampedModel.Meta):
        db_table = 'cms_gallery'
        verbose_name = 'Gallery Item'
        verbose_name_plural = 'Gallery Items'

    def __str__(self):
        return self.title


class YouTubeVideo(TimestampedModel):
    title = models.CharField(max_length=255)
    video_id = models.CharField(max_length=64, help_text="YouTube video identifier")
    description = models.TextField(blank=True, default='')
    category = models.CharField(max_length=100, default='general')

    class Meta(TimestampedModel.Meta):
        db_table = 'cms_youtube_videos'
        verbose_name = 'YouTube Video'
        verbose_name_plural = 'YouTube Videos'

    def __str__(self):
        return self.title

    @property
    def embed_url(self):
        return f"https://www.youtube.com/embed/{self.video_id}"


class ServiceQuerySet(models.QuerySet):
    def active(self):
        return self.filter(status=Service.Status.ACTIVE)


class Service(TimestampedModel):
    """Entry in the public service catalogue."""

    class Status(models.TextChoices):
        ACTIVE = 'active', 'Active'
        INACTIVE = 'inactive', 'Inactive'

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default='')
    icon = models.CharField(
        max_length=100,
        blank=True,
        default='',
        help_text="Icon class name, e.g. 'fas fa-mobile-alt'"
    )
    price = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.ACTIVE,
        db_index=True
    )

    objects = ServiceQuerySet.as_manager()

    class Meta(TimestampedModel.Meta):
        db_table = 'cms_services'
        verbose_name = 'Service'
        verbose_name_plural = 'Services'

    def __str__(self):
        return self.name
