# pqr_core/iam/api/auth.py
from __future__ import annotations

import logging
from datetime import timedelta

from django.conf import settings
from drf_spectacular.utils import extend_schema
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer, TokenRefreshSerializer

from pqr_core.iam.api.schema_serializers import DetailResponseSerializer, LoginRequestSerializer
from pqr_core.iam.auth import access_cookie_name

logger = logging.getLogger(__name__)


class TokenCookies:
    """HttpOnly access/refresh cookie pair, configured through SIMPLE_JWT."""

    @staticmethod
    def _cfg() -> dict:
        return getattr(settings, "SIMPLE_JWT", {}) or {}

    @classmethod
    def refresh_name(cls) -> str:
        return cls._cfg().get("AUTH_COOKIE_REFRESH", "pqr_refresh")

    @classmethod
    def store(cls, response: Response, *, access: str, refresh: str) -> Response:
        cfg = cls._cfg()
        pairs = (
            (access_cookie_name(), access, cfg.get("ACCESS_TOKEN_LIFETIME", timedelta(minutes=30))),
            (cls.refresh_name(), refresh, cfg.get("REFRESH_TOKEN_LIFETIME", timedelta(days=7))),
        )
        for name, token, lifetime in pairs:
            response.set_cookie(
                name,
                token,
                max_age=int(lifetime.total_seconds()),
                httponly=cfg.get("AUTH_COOKIE_HTTP_ONLY", True),
                secure=bool(cfg.get("AUTH_COOKIE_SECURE", False)),
                samesite=cfg.get("AUTH_COOKIE_SAMESITE", "Lax"),
                path="/",
            )
        return response

    @classmethod
    def clear(cls, response: Response) -> Response:
        response.delete_cookie(access_cookie_name(), path="/")
        response.delete_cookie(cls.refresh_name(), path="/")
        return response


class TokenEndpoint(APIView):
    """
    Login and refresh run without an authenticator, so DRF would answer bad
    credentials with 403; the challenge header keeps them at 401.
    """

    tenant_scoped = False
    permission_classes = [AllowAny]
    authentication_classes = []

    def get_authenticate_header(self, request):
        return 'Bearer realm="api"'


class LoginView(TokenEndpoint):
    @extend_schema(request=LoginRequestSerializer, responses={200: DetailResponseSerializer}, tags=["IAM"])
    def post(self, request):
        s = TokenObtainPairSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        logger.info("Login for %s", s.user.get_username())
        return TokenCookies.store(
            Response({"detail": "login ok"}),
            access=s.validated_data["access"],
            refresh=s.validated_data["refresh"],
        )


class RefreshView(TokenEndpoint):
    """Accepts the refresh cookie, or {"refresh": ...} for non-browser clients."""

    @extend_schema(request=None, responses={200: DetailResponseSerializer}, tags=["IAM"])
    def post(self, request):
        refresh = request.COOKIES.get(TokenCookies.refresh_name()) or request.data.get("refresh")

        s = TokenRefreshSerializer(data={"refresh": refresh})
        s.is_valid(raise_exception=True)

        return TokenCookies.store(
            Response({"detail": "refreshed"}),
            access=s.validated_data["access"],
            refresh=s.validated_data.get("refresh", refresh),
        )


class LogoutView(APIView):
    tenant_scoped = False
    permission_classes = [IsAuthenticated]

    @extend_schema(request=None, responses={200: DetailResponseSerializer}, tags=["IAM"])
    def post(self, request):
        return TokenCookies.clear(Response({"detail": "logged out"}))
