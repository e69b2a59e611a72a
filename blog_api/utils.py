"""
Field transform helpers: slugs, HTML stripping, excerpts and error messages.
"""
import re

from django.db import IntegrityError
from django.utils.html import strip_tags
from django.utils.text import slugify

from .conf import blog_settings
from .errors import ValidationError

# Largest value a BigAutoField primary key can hold
MAX_ID = 2 ** 63 - 1

UNIQUE_FIELD_PATTERNS = [
    # SQLite: UNIQUE constraint failed: blog_api_blog.slug
    re.compile(r"UNIQUE constraint failed: \w+\.(?P<field>\w+)"),
    # PostgreSQL: Key (slug)=(hello-world) already exists.
    re.compile(r"Key \((?P<field>\w+)\)=\(.*\) already exists"),
    # MySQL: Duplicate entry 'hello-world' for key 'blog_api_blog.slug'
    re.compile(r"Duplicate entry .* for key '(?:\w+\.)?(?P<field>\w+)'"),
]


def make_slug(text):
    """Return a lowercase, URL-safe slug for ``text``."""
    return slugify(text or "").lower()[:blog_settings.SLUG_MAX_LENGTH]


def strip_html(text):
    """Remove HTML tags and surrounding whitespace."""
    return strip_tags(text or "").strip()


def smart_trim(text, length, delim, appendix):
    """
    Trim ``text`` to about ``length`` characters without cutting a word.

    The cut happens at the last ``delim`` inside the first
    ``length + len(delim)`` characters and ``appendix`` is added.

        >>> smart_trim("one two three", 6, " ", " ...")
        'one ...'
    """
    if len(text) <= length:
        return text

    trimmed = text[:length + len(delim)]
    last_delim = trimmed.rfind(delim)
    if last_delim >= 0:
        trimmed = trimmed[:last_delim]
    if trimmed:
        trimmed += appendix
    return trimmed


def parse_id_list(value, label):
    """
    Parse comma-separated ids into a list of ints.

    Accepts a string ("1,2,3") or an iterable of ids or ``{"id": ...}``
    objects. Blank entries are dropped.
    """
    if value is None:
        return []
    if isinstance(value, str):
        raw_ids = value.split(",")
    elif isinstance(value, (list, tuple)):
        raw_ids = value
    else:
        raw_ids = [value]

    ids = []
    for raw in raw_ids:
        if isinstance(raw, dict):
            raw = raw.get("id", raw.get("_id"))
        if isinstance(raw, str):
            raw = raw.strip()
            if not raw:
                continue
        try:
            number = int(raw)
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid {label} id")
        if not 0 < number <= MAX_ID:
            raise ValidationError(f"Invalid {label} id")
        ids.append(number)
    return ids


def db_error_message(exc):
    """Turn a database exception into a message safe to show to clients."""
    if isinstance(exc, IntegrityError):
        message = str(exc)
        for pattern in UNIQUE_FIELD_PATTERNS:
            match = pattern.search(message)
            if match:
                field = match.group("field").replace("_", " ")
                return f"{field.capitalize()} already exists"
    return "Something went wrong"
