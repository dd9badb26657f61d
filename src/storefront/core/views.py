"""Core views for Storefront: health check and session authentication API."""

import logging

from django.contrib.auth import authenticate, login, logout
from django.http import HttpResponse, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import ensure_csrf_cookie

from .decorators import login_required_json
from .exceptions import InvalidRequest
from .forms import LoginForm, RegistrationForm
from .utils import form_errors, load_json_body, snake_case_keys

logger = logging.getLogger(__name__)


def health_check(request):
    """Health check endpoint for container orchestration."""
    from django.db import connection

    try:
        # Check database connection
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")

        return JsonResponse({"status": "healthy", "database": "connected"})
    except Exception as e:
        return JsonResponse(
            {"status": "unhealthy", "error": str(e)},
            status=503,
        )


def csrf_failure(request, reason=""):
    """JSON replacement for Django's CSRF failure page."""
    return JsonResponse({"message": "CSRF verification failed"}, status=403)


def serialize_user(user):
    """User as returned by the API. The password hash is never included."""
    return {
        "id": user.pk,
        "username": user.username,
        "email": user.email,
        "firstName": user.first_name,
        "lastName": user.last_name,
        "role": user.role,
    }


class RegisterView(View):
    """Create a customer account and start a session.

    POST /api/register
    {
        "username": "jane",
        "password": "secret1",
        "email": "jane@example.com",
        "firstName": "Jane",
        "lastName": "Doe"
    }
    """

    def post(self, request):
        form = RegistrationForm(snake_case_keys(load_json_body(request)))
        if not form.is_valid():
            errors = form_errors(form)
            message = errors["username"][0] if "username" in errors else "Invalid registration details"
            raise InvalidRequest(message, errors=errors)

        user = form.save()
        login(request, user, backend="storefront.core.backends.UsernameOrEmailBackend")
        logger.info("Registered user %s", user.pk)

        return JsonResponse(serialize_user(user), status=201)


class LoginView(View):
    """Start a session.

    POST /api/login
    {
        "username": "jane",
        "password": "secret1"
    }

    The username may also be the account's email address.
    """

    def post(self, request):
        form = LoginForm(load_json_body(request))
        if not form.is_valid():
            raise InvalidRequest("Username and password required", errors=form_errors(form))

        user = authenticate(
            request,
            username=form.cleaned_data["username"].strip(),
            password=form.cleaned_data["password"],
        )
        if not user:
            return JsonResponse({"message": "Invalid username or password"}, status=401)

        login(request, user)
        return JsonResponse(serialize_user(user))


class LogoutView(View):
    """End the current session. POST /api/logout"""

    def post(self, request):
        logout(request)
        return HttpResponse(status=204)


@method_decorator(ensure_csrf_cookie, name="dispatch")
class CurrentUserView(View):
    """GET /api/user

    Always sets the CSRF cookie, so clients call this before their first
    POST and echo the token back in the X-CSRFToken header.
    """

    @method_decorator(login_required_json)
    def get(self, request):
        return JsonResponse(serialize_user(request.user))
