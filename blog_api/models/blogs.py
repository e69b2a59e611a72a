"""
Blog, Category, and Tag models for django-blog-api.
"""
from django.conf import settings
from django.db import models
from django.urls import reverse

from ..conf import blog_settings
from ..utils import make_slug, smart_trim, strip_html


class Category(models.Model):
    """
    Category for organizing blogs.

    Categories are referenced by blogs, not owned by them.
    """

    name = models.CharField(max_length=100, unique=True)
    slug = models.SlugField(max_length=100, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "Categories"

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = make_slug(self.name)[:100]
        super().save(*args, **kwargs)

    def get_absolute_url(self):
        return reverse("blog_api:category_detail", kwargs={"slug": self.slug})


class Tag(models.Model):
    """Flat tag for blogs."""

    name = models.CharField(max_length=100, unique=True)
    slug = models.SlugField(max_length=100, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = make_slug(self.name)[:100]
        super().save(*args, **kwargs)

    def get_absolute_url(self):
        return reverse("blog_api:tag_detail", kwargs={"slug": self.slug})


class Blog(models.Model):
    """
    Blog post.

    The slug is derived from the title on first save and never changes.
    Excerpt, meta title and meta description are re-derived on every save
    from the current title and body.
    """

    # Content
    title = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True)
    body = models.TextField()
    excerpt = models.TextField(blank=True)

    # SEO
    mtitle = models.CharField(max_length=512, blank=True)
    mdesc = models.TextField(blank=True)

    # Photo is stored inline with the post
    photo = models.BinaryField(null=True, blank=True)
    photo_content_type = models.CharField(max_length=100, blank=True)

    # Taxonomy
    categories = models.ManyToManyField(Category, related_name="blogs", blank=True)
    tags = models.ManyToManyField(Tag, related_name="blogs", blank=True)

    # Author - uses Django's AUTH_USER_MODEL
    posted_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        on_delete=models.SET_NULL,
        related_name="blogs",
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return self.title

    def save(self, *args, **kwargs):
        if not self.slug and self.title:
            self.slug = make_slug(self.title)
        self.derive_fields()
        super().save(*args, **kwargs)

    def derive_fields(self):
        """Recompute excerpt and meta fields from title and body."""
        body = self.body or ""
        self.excerpt = smart_trim(
            body,
            blog_settings.EXCERPT_LENGTH,
            blog_settings.EXCERPT_DELIMITER,
            blog_settings.EXCERPT_APPENDIX,
        )
        self.mtitle = f"{self.title} | {blog_settings.APP_NAME}"
        self.mdesc = strip_html(body[:blog_settings.META_DESCRIPTION_LENGTH])

    def get_absolute_url(self):
        return reverse("blog_api:blog_detail", kwargs={"slug": self.slug})

    def get_photo_url(self):
        return reverse("blog_api:blog_photo", kwargs={"slug": self.slug})

    @property
    def has_photo(self):
        return bool(self.photo)

    @property
    def photo_size(self):
        """Return photo size in bytes, or 0 when there is none."""
        if not self.photo:
            return 0
        return len(self.photo)
