"""
CMS Serializers

Public JSON representations and admin form validation for site content.
"""
from rest_framework import serializers

from .models import Post, GalleryItem, YouTubeVideo, Service


class PostSerializer(serializers.ModelSerializer):
    """Public representation of a published post."""

    display_image = serializers.ReadOnlyField()

    class Meta:
        model = Post
        fields = [
            'id', 'title', 'content', 'image', 'image_url', 'display_image',
            'author', 'status', 'created_at', 'updated_at'
        ]
        read_only_fields = fields


class GalleryItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = GalleryItem
        fields = ['id', 'title', 'image', 'category', 'description', 'created_at', 'updated_at']
        read_only_fields = fields


class YouTubeVideoSerializer(serializers.ModelSerializer):
    embed_url = serializers.ReadOnlyField()

    class Meta:
        model = YouTubeVideo
        fields = [
            'id', 'title', 'video_id', 'embed_url', 'description',
            'category', 'created_at', 'updated_at'
        ]
        read_only_fields = fields


# Admin form serializers. Image fields are handled by core.uploads.

class PostFormSerializer(serializers.ModelSerializer):
    class Meta:
        model = Post
        fields = ['title', 'content', 'author', 'status']

    def validate_title(self, value):
        return value.strip()

    def validate_author(self, value):
        return value.strip()


class GalleryItemFormSerializer(serializers.ModelSerializer):
    description = serializers.CharField(required=False, allow_blank=True, default='')

    class Meta:
        model = GalleryItem
        fields = ['title', 'category', 'description']

    def validate_title(self, value):
        return value.strip()

    def validate_category(self, value):
        return value.strip()


class YouTubeVideoFormSerializer(serializers.ModelSerializer):
    description = serializers.CharField(required=False, allow_blank=True, default='')
    category = serializers.CharField(required=False, allow_blank=True, default='general')

    class Meta:
        model = YouTubeVideo
        fields = ['title', 'video_id', 'description', 'category']

    def validate_video_id(self, value):
        return value.strip()

    def validate_category(self, value):
        return value.strip() or 'general'


class ServiceFormSerializer(serializers.ModelSerializer):
    description = serializers.CharField(required=False, allow_blank=True, default='')
    icon = serializers.CharField(required=False, allow_blank=True, default='')
    price = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, default=0)

    class Meta:
        model = Service
        fields = ['name', 'description', 'icon', 'price', 'status']
        extra_kwargs = {'status': {'required': False}}


def first_error(errors):
    """Flatten serializer errors into one user-facing sentence."""
    for field, messages in errors.items():
        message = messages[0] if isinstance(messages, list) else messages
        if field == 'non_field_errors':
            return str(message)
        return f"{field.replace('_', ' ').capitalize()}: {message}"
    return 'Please check the submitted information.'
