"""
Shared fixtures for django-blog-api tests.
"""
import io

import pytest
from django.contrib.auth import get_user_model
from PIL import Image

from blog_api.models import Blog, Category, Tag

User = get_user_model()

BODY = "Lorem ipsum dolor sit amet, consectetur adipiscing elit. " * 5


def make_png(width=8, height=8, color="red"):
    """Return the bytes of a small PNG image."""
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def body():
    """A body long enough to pass validation."""
    return BODY


@pytest.fixture
def staff(db):
    """Create a staff user allowed to write."""
    return User.objects.create_user(
        username="editor",
        email="editor@example.com",
        password="testpass123",
        first_name="Ada",
        last_name="Editor",
        is_staff=True,
    )


@pytest.fixture
def reader(db):
    """Create a regular user without write access."""
    return User.objects.create_user(
        username="reader",
        email="reader@example.com",
        password="testpass123",
    )


@pytest.fixture
def staff_client(client, staff):
    client.force_login(staff)
    return client


@pytest.fixture
def category(db):
    return Category.objects.create(name="Python")


@pytest.fixture
def tag(db):
    return Tag.objects.create(name="Django")


@pytest.fixture
def blog(db, staff, category, tag, body):
    """Create a test blog linked to one category and one tag."""
    blog = Blog.objects.create(title="First Post", body=body, posted_by=staff)
    blog.categories.add(category)
    blog.tags.add(tag)
    return blog
