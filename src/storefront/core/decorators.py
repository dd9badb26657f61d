"""Access-control decorators for JSON API views."""

from functools import wraps

from django.http import JsonResponse


def login_required_json(view_func):
    """Decorator to require an authenticated session, answering 401 otherwise."""
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return JsonResponse({"message": "Unauthorized"}, status=401)
        return view_func(request, *args, **kwargs)
    return wrapper


def admin_required_json(view_func):
    """Decorator to require an admin session.

    Anonymous callers get 403 as well, the same as logged-in customers.
    """
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        user = request.user
        if not user.is_authenticated or not user.is_admin:
            return JsonResponse({"message": "Forbidden"}, status=403)
        return view_func(request, *args, **kwargs)
    return wrapper
