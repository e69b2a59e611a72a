"""
Blog workflows: validation, field derivation and persistence.

Views decode the request and call these functions; every failure is
raised as a :class:`blog_api.errors.BlogApiError` subclass.
"""
import io
import logging

from django.db import DatabaseError, transaction
from django.db.models import Q
from PIL import Image

from .conf import blog_settings
from .errors import NotFoundError, PersistenceError, UploadError, ValidationError
from .models import Blog, Category, Tag
from .utils import MAX_ID, db_error_message, make_slug, parse_id_list

logger = logging.getLogger(__name__)


def _listing_queryset():
    """Blogs with relations resolved, without body and photo."""
    return (
        Blog.objects.defer("body", "photo")
        .select_related("posted_by")
        .prefetch_related("categories", "tags")
    )


def _to_int(value, default, name):
    # 0 falls back to the default, like a missing value
    if value is None or value == "" or value == 0:
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {name}")
    if not 0 <= number <= MAX_ID:
        raise ValidationError(f"Invalid {name}")
    return number


def _clean_title(value):
    title = (value or "").strip()
    if not title:
        raise ValidationError("Title is required")
    if not make_slug(title):
        raise ValidationError("Title must contain letters or numbers")
    return title


def _clean_body(value):
    body = value or ""
    if len(body) < blog_settings.BODY_MIN_LENGTH:
        raise ValidationError("Content is too short")
    return body


def _resolve_terms(model, ids, label):
    """Load the Category or Tag rows for ``ids``, all of which must exist."""
    terms = list(model.objects.filter(pk__in=ids))
    if len(terms) != len(set(ids)):
        raise ValidationError(f"{label.capitalize()} not found")
    return terms


def read_photo(upload):
    """
    Validate an uploaded photo and return ``(data, content_type)``.

    The upload must fit in PHOTO_MAX_SIZE and be readable by Pillow.
    """
    max_size = blog_settings.PHOTO_MAX_SIZE
    if upload.size > max_size:
        raise UploadError(f"Image should be less than {max_size / 1000000:g} MB")

    data = upload.read()
    try:
        with Image.open(io.BytesIO(data)) as image:
            image.verify()
            image_format = image.format
    except Exception as exc:
        logger.info("Rejected photo %r: %s", getattr(upload, "name", ""), exc)
        raise UploadError("Image could not upload")

    content_type = Image.MIME.get(image_format)
    if content_type is None:
        content_type = getattr(upload, "content_type", "") or "application/octet-stream"
    return data, content_type


def _save(blog, categories=None, tags=None):
    """Save the blog and replace its links in one transaction."""
    try:
        with transaction.atomic():
            blog.save()
            if categories is not None:
                blog.categories.set(categories)
            if tags is not None:
                blog.tags.set(tags)
    except DatabaseError as exc:
        logger.exception("Could not save blog %r", blog.title)
        raise PersistenceError(db_error_message(exc))


def create_blog(fields, files, user):
    """Validate a submitted form and create a Blog with its categories and tags."""
    title = _clean_title(fields.get("title"))
    body = _clean_body(fields.get("body"))

    category_ids = parse_id_list(fields.get("categories"), "category")
    if not category_ids:
        raise ValidationError("At least one category is required")

    tag_ids = parse_id_list(fields.get("tags"), "tag")
    if not tag_ids:
        raise ValidationError("At least one tag is required")

    blog = Blog(title=title, body=body, posted_by=user)

    photo = files.get("photo")
    if photo is not None:
        blog.photo, blog.photo_content_type = read_photo(photo)

    categories = _resolve_terms(Category, category_ids, "category")
    tags = _resolve_terms(Tag, tag_ids, "tag")

    _save(blog, categories, tags)
    logger.info("Created blog %s", blog.slug)
    return get_blog(blog.slug)


def update_blog(slug, fields, files):
    """
    Apply the mutable fields of a submitted form to an existing Blog.

    Only title, body, categories, tags and photo are taken from the form.
    The slug never changes.
    """
    blog = get_blog(slug)

    if "title" in fields:
        blog.title = _clean_title(fields.get("title"))
    if "body" in fields:
        blog.body = _clean_body(fields.get("body"))

    categories = None
    category_ids = parse_id_list(fields.get("categories"), "category")
    if category_ids:
        categories = _resolve_terms(Category, category_ids, "category")

    tags = None
    tag_ids = parse_id_list(fields.get("tags"), "tag")
    if tag_ids:
        tags = _resolve_terms(Tag, tag_ids, "tag")

    photo = files.get("photo")
    if photo is not None:
        blog.photo, blog.photo_content_type = read_photo(photo)

    _save(blog, categories, tags)
    logger.info("Updated blog %s", blog.slug)
    return get_blog(blog.slug)


def remove_blog(slug):
    """Delete a blog by slug. Returns False when no blog matched."""
    blog = Blog.objects.filter(slug=slug.lower()).only("pk").first()
    if blog is None:
        return False
    blog.delete()
    logger.info("Deleted blog %s", slug.lower())
    return True


def get_blog(slug):
    blog = (
        Blog.objects.select_related("posted_by")
        .prefetch_related("categories", "tags")
        .filter(slug=slug.lower())
        .first()
    )
    if blog is None:
        raise NotFoundError("Blog not found")
    return blog


def get_photo(slug):
    """Return ``(data, content_type)`` of a blog's photo."""
    blog = (
        Blog.objects.filter(slug=slug.lower())
        .only("photo", "photo_content_type")
        .first()
    )
    if blog is None:
        raise NotFoundError("Blog not found", status_code=400)
    if not blog.has_photo:
        raise NotFoundError("Photo not found", status_code=400)
    return bytes(blog.photo), blog.photo_content_type


def list_blogs():
    return list(_listing_queryset())


def list_blogs_with_taxonomy(limit=None, skip=None):
    """Return a page of the newest blogs along with every category and tag."""
    limit = _to_int(limit, blog_settings.LIST_LIMIT, "limit")
    skip = _to_int(skip, 0, "skip")

    blogs = list(_listing_queryset().order_by("-created_at")[skip:skip + limit])
    categories = list(Category.objects.all())
    tags = list(Tag.objects.all())
    return blogs, categories, tags


def list_related(blog_data, limit=None):
    """Blogs sharing at least one category with ``blog_data``, excluding it."""
    if not isinstance(blog_data, dict):
        raise ValidationError("Blog is required")

    limit = _to_int(limit, blog_settings.RELATED_LIMIT, "limit")
    category_ids = parse_id_list(blog_data.get("categories"), "category")
    if not category_ids:
        return []

    blogs = (
        Blog.objects.filter(categories__in=category_ids)
        .distinct()
        .defer("body", "photo")
        .select_related("posted_by")
    )
    blog_id = blog_data.get("id", blog_data.get("_id"))
    if blog_id is not None:
        blogs = blogs.exclude(pk=_to_int(blog_id, None, "blog id"))
    return list(blogs[:limit])


def search_blogs(term):
    """
    Case-insensitive match of ``term`` against title or body.

    Returns None when no term is given.
    """
    term = (term or "").strip()
    if not term:
        return None
    return list(
        _listing_queryset().filter(
            Q(title__icontains=term) | Q(body__icontains=term)
        )
    )


# Categories and tags


def list_terms(model):
    return list(model.objects.all())


def create_term(model, name):
    """Create a Category or Tag from its name."""
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Name is required")
    name = name.strip()
    if not make_slug(name):
        raise ValidationError("Name must contain letters or numbers")
    if model.objects.filter(name=name).exists():
        raise PersistenceError("Name already exists")

    try:
        with transaction.atomic():
            term = model.objects.create(name=name)
    except DatabaseError as exc:
        logger.warning("Could not create %s %r: %s", model._meta.verbose_name, name, exc)
        raise PersistenceError(db_error_message(exc))
    logger.info("Created %s %s", model._meta.verbose_name, term.slug)
    return term


def get_term(model, slug):
    """Return a Category or Tag and the blogs that reference it."""
    term = model.objects.filter(slug=slug.lower()).first()
    if term is None:
        raise NotFoundError(f"{model._meta.verbose_name.capitalize()} not found")
    blogs = list(
        term.blogs.defer("body", "photo")
        .select_related("posted_by")
        .prefetch_related("categories", "tags")
    )
    return term, blogs


def remove_term(model, slug):
    """Delete a Category or Tag by slug. Returns False when none matched."""
    term = model.objects.filter(slug=slug.lower()).first()
    if term is None:
        return False
    term.delete()
    logger.info("Deleted %s %s", model._meta.verbose_name, term.slug)
    return True
