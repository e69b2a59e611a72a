"""
django-blog-api - A JSON blog backend for Django.

Features:
- Blog posts with derived slug, excerpt and SEO fields
- Categories and tags referenced by posts
- Photo attachments stored alongside the post
- Paginated listing, related posts and search
"""

__version__ = "0.1.0"
__author__ = "Nestor Wheelock"
