from django.conf import settings


def site(request):
    """Business details and the admin mount point for every template."""
    return {
        'business_name': settings.BUSINESS_NAME,
        'business_tagline': settings.BUSINESS_TAGLINE,
        'business_phone': settings.BUSINESS_PHONE,
        'business_address': settings.BUSINESS_ADDRESS,
        'business_hours': settings.BUSINESS_HOURS,
        'admin_prefix': settings.ADMIN_PATH_PREFIX,
    }
