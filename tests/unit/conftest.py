import json
import os
from dataclasses import dataclass

import pytest

from services.user.domain.entity import User
from services.user.domain.value_object import Email, UserId

# Handler modules build their repositories and settings at import time.
os.environ.setdefault("AWS_DEFAULT_REGION", "ap-southeast-1")
os.environ.setdefault("TABLE_NAME", "airline-test-table")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "airline-test")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("XENDIT_CALLBACK_TOKEN", "test-callback-token")
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_dummy")
os.environ.setdefault("STRIPE_WEBHOOK_SECRET", "whsec_dummy")
os.environ.setdefault("XENDIT_SANDBOX_SECRET_KEY", "xnd_development_dummy")
os.environ.setdefault("GOOGLE_CLIENT_ID", "google-client-id")
os.environ.setdefault("GOOGLE_CLIENT_SECRET", "google-client-secret")
os.environ.setdefault("CLIENT_URLS", "http://localhost:5173")
os.environ.setdefault("SERVER_URL", "https://api.example.com/prod")
os.environ.pop("APP_SECRET_ARN", None)


@dataclass
class FakeLambdaContext:
    function_name: str = "airline-test"
    memory_limit_in_mb: int = 256
    invoked_function_arn: str = (
        "arn:aws:lambda:ap-southeast-1:123456789012:function:airline-test"
    )
    aws_request_id: str = "4f2d1c9a-0000-4000-8000-000000000000"


@pytest.fixture
def lambda_context() -> FakeLambdaContext:
    return FakeLambdaContext()


@pytest.fixture
def api_event():
    """API Gateway REST proxy event factory (Factories as fixtures)"""

    def _factory(
        method: str,
        path: str,
        body=None,
        query: dict | None = None,
        headers: dict | None = None,
        principal=None,
        raw_body: str | None = None,
    ) -> dict:
        all_headers = {"Content-Type": "application/json", **(headers or {})}
        if raw_body is None and body is not None:
            raw_body = json.dumps(body)
        return {
            "resource": path,
            "path": path,
            "httpMethod": method,
            "headers": all_headers,
            "multiValueHeaders": {k: [v] for k, v in all_headers.items()},
            "queryStringParameters": query,
            "multiValueQueryStringParameters": (
                {k: [v] for k, v in query.items()} if query else None
            ),
            "pathParameters": None,
            "stageVariables": None,
            "requestContext": {
                "requestId": "c6af9ac6-7b61-11e6-9a41-93e8deadbeef",
                "stage": "prod",
                "path": f"/prod{path}",
                "httpMethod": method,
                "resourcePath": path,
                "identity": {"sourceIp": "203.0.113.10"},
                "authorizer": principal.to_context() if principal else {},
            },
            "body": raw_body,
            "isBase64Encoded": False,
        }

    return _factory


@pytest.fixture
def create_user():
    def _factory(
        user_id: str = "USR-OWNER",
        email: str = "juan@example.com",
        password_hash: str | None = "hashed",
        is_oauth_user: bool = False,
        is_admin: bool = False,
        google_id: str | None = None,
    ) -> User:
        return User(
            id=UserId(value=user_id),
            email=Email(email),
            full_name="Juan Dela Cruz",
            password_hash=password_hash,
            google_id=google_id,
            is_oauth_user=is_oauth_user,
            is_admin=is_admin,
        )

    return _factory
