import hmac
import secrets

from aws_lambda_powertools import Logger
from aws_lambda_powertools.event_handler import APIGatewayRestResolver
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.shared.config import get_settings
from services.shared.domain.exception import AuthenticationException
from services.shared.utils import (
    build_cors_config,
    current_principal,
    json_response,
    redirect_response,
    register_exception_handlers,
    request_body,
    require_admin,
)
from services.shared.utils.cookies import (
    OAUTH_STATE_COOKIE,
    SESSION_COOKIE,
    build_cookie,
    expired_cookie,
    read_cookie,
)
from services.user.applications.authenticate_user import AuthenticationService
from services.user.applications.google_sign_in import GoogleSignInService
from services.user.applications.manage_users import UserAdminService
from services.user.applications.register_user import RegisterUserService
from services.user.domain.factory import UserFactory
from services.user.domain.value_object import UserId
from services.user.handlers.request_models import LoginRequest, RegisterRequest
from services.user.handlers.response_models import to_response
from services.user.infrastructure.dynamodb_session_repository import (
    DynamoDBSessionRepository,
)
from services.user.infrastructure.dynamodb_user_repository import (
    DynamoDBUserRepository,
)
from services.user.infrastructure.google_oauth import GoogleOAuthClient
from services.user.infrastructure.password_hasher import PasswordHasher
from services.user.infrastructure.token_service import TokenService

OAUTH_STATE_TTL_SECONDS = 600

logger = Logger()
settings = get_settings()
app = APIGatewayRestResolver(cors=build_cors_config(settings))
register_exception_handlers(app)

repository = DynamoDBUserRepository()
factory = UserFactory()
hasher = PasswordHasher()
register_service = RegisterUserService(repository=repository, factory=factory, hasher=hasher)
auth_service = AuthenticationService(
    repository=repository,
    session_repository=DynamoDBSessionRepository(),
    factory=factory,
    hasher=hasher,
    token_service=TokenService(ttl_minutes=settings.access_token_ttl_minutes),
    session_ttl_seconds=settings.session_ttl_seconds,
)
google_service = GoogleSignInService(
    client=GoogleOAuthClient(redirect_uri=settings.google_callback_url),
    repository=repository,
    factory=factory,
)
admin_service = UserAdminService(repository=repository)


def _session_cookie(session_id: str):
    return build_cookie(
        SESSION_COOKIE,
        session_id,
        max_age=settings.session_ttl_seconds,
        secure=settings.is_production,
    )


@app.post("/users/register")
def register():
    request = RegisterRequest.model_validate(request_body(app))
    user = register_service.register(
        email=request.email,
        password=request.password,
        full_name=request.full_name,
        mobile_no=request.mobile_no,
    )
    logger.info("User registered", extra={"user_id": str(user.id)})
    return json_response(
        201, {"message": "User registered successfully", "user": to_response(user)}
    )


@app.post("/users/login")
def login():
    request = LoginRequest.model_validate(request_body(app))
    result = auth_service.login(request.email, request.password)
    logger.info("User logged in", extra={"user_id": str(result.user.id)})
    return json_response(
        200,
        {"access": result.access_token},
        cookies=[_session_cookie(str(result.session.id))],
    )


@app.get("/users/details")
def get_details():
    user = auth_service.current_user(current_principal(app))
    return to_response(user)


@app.post("/users/logout")
def logout():
    auth_service.logout(read_cookie(app.current_event.headers, SESSION_COOKIE))
    return json_response(
        200,
        {"message": "Logged out successfully"},
        cookies=[expired_cookie(SESSION_COOKIE, secure=settings.is_production)],
    )


@app.get("/users/google")
def google_login():
    state = secrets.token_urlsafe(24)
    return redirect_response(
        google_service.authorization_url(state),
        cookies=[
            build_cookie(
                OAUTH_STATE_COOKIE,
                state,
                max_age=OAUTH_STATE_TTL_SECONDS,
                secure=settings.is_production,
            )
        ],
    )


@app.get("/users/google/callback")
def google_callback():
    code = app.current_event.get_query_string_value(name="code", default_value=None)
    state = app.current_event.get_query_string_value(name="state", default_value="")
    expected_state = read_cookie(app.current_event.headers, OAUTH_STATE_COOKIE) or ""
    if not expected_state or not hmac.compare_digest(state, expected_state):
        raise AuthenticationException("Invalid OAuth state")
    if not code:
        raise AuthenticationException("Missing authorization code")

    user, created = google_service.sign_in(code)
    session = auth_service.open_session(user)
    logger.info(
        "Google sign-in",
        extra={"user_id": str(user.id), "new_account": created},
    )
    return redirect_response(
        settings.client_url or "/",
        cookies=[
            _session_cookie(str(session.id)),
            expired_cookie(OAUTH_STATE_COOKIE, secure=settings.is_production),
        ],
    )


@app.get("/users/session")
def session_user():
    user, access_token = auth_service.session_user(current_principal(app))
    return {"user": to_response(user), "access": access_token}


@app.get("/users/all")
def list_users():
    require_admin(app)
    return [to_response(u) for u in admin_service.list_users()]


@app.patch("/users/<user_id>/set-as-admin")
def set_as_admin(user_id: str):
    principal = require_admin(app)
    user = admin_service.set_as_admin(UserId(value=user_id))
    logger.info(
        "Admin role granted",
        extra={"user_id": user_id, "granted_by": principal.user_id},
    )
    return to_response(user)


@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """User service Lambda handler"""
    return app.resolve(event, context)
