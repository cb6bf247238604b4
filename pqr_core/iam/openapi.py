# pqr_core/iam/openapi.py
from drf_spectacular.extensions import OpenApiAuthenticationExtension

SCHEME_NAME = "PQRAccessToken"


class PQRAccessTokenScheme(OpenApiAuthenticationExtension):
    target_class = "pqr_core.iam.auth.CookieOrHeaderJWTAuthentication"
    name = SCHEME_NAME

    def get_security_definition(self, auto_schema):
        return {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
            "description": "Access token from /api/v1/auth/login/. The pqr_access cookie is accepted as well.",
        }
