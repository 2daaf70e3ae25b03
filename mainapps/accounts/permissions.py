from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import BasePermission


class StandardResultsSetPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class IsAdminOrSuperUser(BasePermission):
    """Allow staff users, superusers and accounts with the admin role."""

    def has_permission(self, request, view):
        user = request.user
        return bool(
            user
            and user.is_authenticated
            and getattr(user, "is_admin", False)
        )


def is_admin_user(user):
    return bool(user and user.is_authenticated and getattr(user, "is_admin", False))
