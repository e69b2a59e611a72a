"""
Django admin configuration for blog_api.
"""
from django.contrib import admin
from django.utils.html import format_html

from .models import Blog, Category, Tag


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ["name", "slug", "blog_count", "created_at"]
    search_fields = ["name", "slug"]
    prepopulated_fields = {"slug": ("name",)}
    readonly_fields = ["created_at", "updated_at"]

    @admin.display(description="Blogs")
    def blog_count(self, obj):
        return obj.blogs.count()


@admin.register(Tag)
class TagAdmin(admin.ModelAdmin):
    list_display = ["name", "slug", "blog_count", "created_at"]
    search_fields = ["name", "slug"]
    prepopulated_fields = {"slug": ("name",)}
    readonly_fields = ["created_at", "updated_at"]

    @admin.display(description="Blogs")
    def blog_count(self, obj):
        return obj.blogs.count()


@admin.register(Blog)
class BlogAdmin(admin.ModelAdmin):
    list_display = [
        "title_preview",
        "slug",
        "posted_by",
        "has_photo",
        "created_at",
    ]
    list_filter = ["categories", "tags", "created_at"]
    search_fields = ["title", "body", "posted_by__username"]
    raw_id_fields = ["posted_by"]
    filter_horizontal = ["categories", "tags"]
    date_hierarchy = "created_at"
    readonly_fields = [
        "slug",
        "excerpt",
        "mtitle",
        "mdesc",
        "photo_preview",
        "photo_content_type",
        "created_at",
        "updated_at",
    ]

    fieldsets = (
        (None, {
            "fields": ("title", "slug", "body", "posted_by")
        }),
        ("Taxonomy", {
            "fields": ("categories", "tags")
        }),
        ("SEO", {
            "fields": ("excerpt", "mtitle", "mdesc"),
            "classes": ("collapse",),
        }),
        ("Photo", {
            "fields": ("photo_preview", "photo_content_type"),
        }),
        ("Metadata", {
            "fields": ("created_at", "updated_at"),
            "classes": ("collapse",),
        }),
    )

    @admin.display(description="Title")
    def title_preview(self, obj):
        """Truncated title for list display."""
        return obj.title[:60] + "..." if len(obj.title) > 60 else obj.title

    @admin.display(boolean=True, description="Photo")
    def has_photo(self, obj):
        return obj.has_photo

    @admin.display(description="Photo")
    def photo_preview(self, obj):
        if obj.pk and obj.has_photo:
            return format_html(
                '<img src="{}" style="max-width: 150px; max-height: 150px;" />',
                obj.get_photo_url(),
            )
        return "-"
