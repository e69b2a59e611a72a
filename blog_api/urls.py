"""
URL configuration for django-blog-api.

Include in your project urls.py:

    path('api/', include('blog_api.urls')),
"""
from django.urls import path

from . import views
from .models import Category, Tag

app_name = "blog_api"

urlpatterns = [
    # Blogs; fixed paths come before the slug catch-all
    path("blogs", views.BlogListView.as_view(), name="blog_list"),
    path("blogs/all", views.BlogTaxonomyListView.as_view(), name="blog_all"),
    path("blogs/related", views.BlogRelatedView.as_view(), name="blog_related"),
    path("blogs/search", views.BlogSearchView.as_view(), name="blog_search"),
    path("blogs/photo/<str:slug>", views.BlogPhotoView.as_view(), name="blog_photo"),
    path("blogs/<str:slug>", views.BlogDetailView.as_view(), name="blog_detail"),

    # Categories and tags
    path(
        "categories",
        views.TermListView.as_view(model=Category),
        name="category_list",
    ),
    path(
        "categories/<str:slug>",
        views.TermDetailView.as_view(model=Category),
        name="category_detail",
    ),
    path("tags", views.TermListView.as_view(model=Tag), name="tag_list"),
    path("tags/<str:slug>", views.TermDetailView.as_view(model=Tag), name="tag_detail"),
]
