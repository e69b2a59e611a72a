"""Django app configuration for blog_api."""
from django.apps import AppConfig


class BlogApiConfig(AppConfig):
    """Configuration for the blog API app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "blog_api"
    verbose_name = "Blog API"
