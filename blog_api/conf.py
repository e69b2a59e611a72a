"""
Configuration settings for django-blog-api.

Override these in your Django settings.py:

    BLOG_API = {
        'APP_NAME': 'My Blog',
        'BODY_MIN_LENGTH': 200,
        'PHOTO_MAX_SIZE': 10000000,
        ...
    }
"""
from django.conf import settings

DEFAULTS = {
    # Used in the generated meta title: "<title> | <APP_NAME>"
    "APP_NAME": "Blog",

    # Posts
    "BODY_MIN_LENGTH": 200,
    "EXCERPT_LENGTH": 320,
    "EXCERPT_DELIMITER": " ",
    "EXCERPT_APPENDIX": " ...",
    "META_DESCRIPTION_LENGTH": 160,

    # Photo upload limit in bytes
    "PHOTO_MAX_SIZE": 10000000,

    # Listing
    "LIST_LIMIT": 10,
    "RELATED_LIMIT": 3,

    # SEO
    "SLUG_MAX_LENGTH": 255,
}


class BlogApiSettings:
    """
    Lazy settings object that reads from Django settings.

    Access via: from blog_api.conf import blog_settings
    """

    def __getattr__(self, name):
        if name not in DEFAULTS:
            raise AttributeError(f"Invalid blog_api setting: {name}")

        user_settings = getattr(settings, "BLOG_API", {})
        return user_settings.get(name, DEFAULTS[name])


blog_settings = BlogApiSettings()
