"""
JSON views for django-blog-api.
"""
import json
import logging

from django.db import DatabaseError
from django.http import HttpResponse, JsonResponse, QueryDict
from django.http.multipartparser import MultiPartParserError
from django.utils.datastructures import MultiValueDict
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from . import services
from .errors import (
    AuthenticationRequired,
    BlogApiError,
    PermissionDenied,
    UploadError,
    ValidationError,
)
from .serializers import (
    serialize_blog_detail,
    serialize_blog_related,
    serialize_blog_summary,
    serialize_term,
)
from .utils import db_error_message

logger = logging.getLogger(__name__)


def parse_form(request):
    """
    Return ``(fields, files)`` for a form-encoded or multipart body.

    Django only decodes POST bodies, so PUT bodies are parsed here.
    """
    try:
        if request.method == "POST":
            return request.POST, request.FILES
        if request.content_type == "multipart/form-data":
            return request.parse_file_upload(request.META, request)
    except MultiPartParserError:
        raise UploadError("Image could not upload")
    return QueryDict(request.body, encoding=request.encoding), MultiValueDict()


def parse_json(request):
    """Decode a JSON object body; an empty body is an empty dict."""
    if not request.body:
        return {}
    try:
        data = json.loads(request.body)
    except ValueError:
        raise ValidationError("Invalid JSON body")
    if not isinstance(data, dict):
        raise ValidationError("Invalid JSON body")
    return data


@method_decorator(csrf_exempt, name="dispatch")
class ApiView(View):
    """
    Base view for the JSON API.

    Methods listed in ``staff_methods`` need a logged-in staff user.
    Any BlogApiError raised by a handler becomes ``{"error": ...}``.
    """

    staff_methods = ()

    def dispatch(self, request, *args, **kwargs):
        try:
            self.check_permissions(request)
            return super().dispatch(request, *args, **kwargs)
        except BlogApiError as exc:
            logger.warning(
                "%s %s failed with %s: %s",
                request.method,
                request.path,
                exc.status_code,
                exc.detail,
            )
            return JsonResponse({"error": exc.detail}, status=exc.status_code)
        except DatabaseError as exc:
            logger.exception("%s %s failed on the database", request.method, request.path)
            return JsonResponse({"error": db_error_message(exc)}, status=400)

    def check_permissions(self, request):
        if request.method.lower() not in self.staff_methods:
            return
        if not request.user.is_authenticated:
            raise AuthenticationRequired("Login required")
        if not request.user.is_staff:
            raise PermissionDenied("Admin resource. Access denied")


class BlogListView(ApiView):
    """List all blogs or create a new one."""

    staff_methods = ("post",)

    def get(self, request):
        blogs = services.list_blogs()
        return JsonResponse([serialize_blog_summary(b) for b in blogs], safe=False)

    def post(self, request):
        fields, files = parse_form(request)
        blog = services.create_blog(fields, files, request.user)
        return JsonResponse(serialize_blog_detail(blog))


class BlogTaxonomyListView(ApiView):
    """A page of blogs together with all categories and tags."""

    def post(self, request):
        data = parse_json(request)
        blogs, categories, tags = services.list_blogs_with_taxonomy(
            data.get("limit"), data.get("skip")
        )
        return JsonResponse({
            "blogs": [serialize_blog_summary(b) for b in blogs],
            "categories": [serialize_term(c) for c in categories],
            "tags": [serialize_term(t) for t in tags],
            "size": len(blogs),
        })


class BlogDetailView(ApiView):
    """Read, update or remove a blog by slug."""

    staff_methods = ("put", "delete")

    def get(self, request, slug):
        return JsonResponse(serialize_blog_detail(services.get_blog(slug)))

    def put(self, request, slug):
        fields, files = parse_form(request)
        blog = services.update_blog(slug, fields, files)
        return JsonResponse(serialize_blog_detail(blog))

    def delete(self, request, slug):
        if services.remove_blog(slug):
            return JsonResponse({"message": "Blog deleted successfully"})
        return JsonResponse({"message": "Blog not found"})


class BlogPhotoView(ApiView):
    def get(self, request, slug):
        data, content_type = services.get_photo(slug)
        return HttpResponse(data, content_type=content_type)


class BlogRelatedView(ApiView):
    """Blogs sharing a category with the posted blog."""

    def post(self, request):
        data = parse_json(request)
        blogs = services.list_related(data.get("blog"), data.get("limit"))
        return JsonResponse([serialize_blog_related(b) for b in blogs], safe=False)


class BlogSearchView(ApiView):
    def get(self, request):
        blogs = services.search_blogs(request.GET.get("search"))
        if blogs is None:
            # No term, nothing to send back.
            return HttpResponse(status=204)
        return JsonResponse([serialize_blog_summary(b) for b in blogs], safe=False)


class TermListView(ApiView):
    """List or create categories or tags, depending on ``model``."""

    model = None
    staff_methods = ("post",)

    def get(self, request):
        terms = services.list_terms(self.model)
        return JsonResponse([serialize_term(t) for t in terms], safe=False)

    def post(self, request):
        if request.content_type == "application/json":
            data = parse_json(request)
        else:
            data = request.POST
        term = services.create_term(self.model, data.get("name"))
        return JsonResponse(serialize_term(term))


class TermDetailView(ApiView):
    """Read or remove a category or tag, depending on ``model``."""

    model = None
    staff_methods = ("delete",)

    def get(self, request, slug):
        term, blogs = services.get_term(self.model, slug)
        return JsonResponse({
            self.model._meta.model_name: serialize_term(term),
            "blogs": [serialize_blog_summary(b) for b in blogs],
        })

    def delete(self, request, slug):
        label = self.model._meta.verbose_name.capitalize()
        if services.remove_term(self.model, slug):
            return JsonResponse({"message": f"{label} deleted successfully"})
        return JsonResponse({"message": f"{label} not found"})
