"""
Convert models to JSON-ready dicts.

Each function returns an explicit set of fields so that listings never
leak the body or the photo bytes.
"""


def serialize_user(user):
    if user is None:
        return None
    return {
        "id": user.pk,
        "username": user.get_username(),
        "name": user.get_full_name() or user.get_username(),
    }


def serialize_term(term):
    """Serialize a Category or Tag."""
    return {
        "id": term.pk,
        "name": term.name,
        "slug": term.slug,
    }


def serialize_blog_summary(blog):
    """Fields shown in listings and search results."""
    return {
        "id": blog.pk,
        "title": blog.title,
        "slug": blog.slug,
        "excerpt": blog.excerpt,
        "categories": [serialize_term(c) for c in blog.categories.all()],
        "tags": [serialize_term(t) for t in blog.tags.all()],
        "posted_by": serialize_user(blog.posted_by),
        "created_at": blog.created_at,
        "updated_at": blog.updated_at,
    }


def serialize_blog_detail(blog):
    """Full blog with body and photo metadata, without the photo bytes."""
    data = serialize_blog_summary(blog)
    data.update({
        "body": blog.body,
        "mtitle": blog.mtitle,
        "mdesc": blog.mdesc,
        "photo": None,
    })
    if blog.has_photo:
        data["photo"] = {
            "content_type": blog.photo_content_type,
            "size": blog.photo_size,
            "url": blog.get_photo_url(),
        }
    return data


def serialize_blog_related(blog):
    return {
        "id": blog.pk,
        "title": blog.title,
        "slug": blog.slug,
        "excerpt": blog.excerpt,
        "posted_by": serialize_user(blog.posted_by),
        "created_at": blog.created_at,
        "updated_at": blog.updated_at,
    }
