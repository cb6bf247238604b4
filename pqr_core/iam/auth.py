# pqr_core/iam/auth.py
from __future__ import annotations

from django.conf import settings
from rest_framework_simplejwt.authentication import JWTAuthentication

from pqr_core.iam.scope import apply_scope_from_headers


def access_cookie_name() -> str:
    return settings.SIMPLE_JWT.get("AUTH_COOKIE", "pqr_access")


class CookieOrHeaderJWTAuthentication(JWTAuthentication):
    """
    Staff console sends the access token in the Authorization header; the
    browser front desk relies on the HttpOnly cookie set at login. Either way
    the X-Tenant-Id scope is resolved here, once the user is known.
    """

    def authenticate(self, request):
        if self.get_header(request):
            result = super().authenticate(request)
        else:
            result = self._authenticate_cookie(request)

        if result is not None:
            apply_scope_from_headers(request, user=result[0])
        return result

    def _authenticate_cookie(self, request):
        raw = request.COOKIES.get(access_cookie_name())
        if not raw:
            return None
        token = self.get_validated_token(raw)
        return self.get_user(token), token
