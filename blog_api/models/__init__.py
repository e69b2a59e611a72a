"""
Models for django-blog-api.

All models are importable from blog_api.models:

    from blog_api.models import Blog, Category, Tag
"""
from .blogs import Category, Tag, Blog

__all__ = [
    "Category",
    "Tag",
    "Blog",
]
