from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.shared.config import get_settings
from services.shared.domain.exception import AuthenticationException
from services.shared.utils.cookies import SESSION_COOKIE, read_cookie
from services.shared.utils.principal import Principal
from services.user.domain.value_object import SessionId
from services.user.infrastructure.dynamodb_session_repository import (
    DynamoDBSessionRepository,
)
from services.user.infrastructure.token_service import TokenService

logger = Logger()

token_service = TokenService(ttl_minutes=get_settings().access_token_ttl_minutes)
session_repository = DynamoDBSessionRepository()


def _header(headers: dict, name: str) -> str:
    for key, value in headers.items():
        if key.lower() == name:
            return value or ""
    return ""


def _from_bearer(headers: dict) -> Principal | None:
    authorization = _header(headers, "authorization")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    try:
        return token_service.decode(token.strip())
    except AuthenticationException:
        logger.info("Rejected bearer token")
        return None


def _from_session(headers: dict) -> Principal | None:
    session_id = read_cookie(headers, SESSION_COOKIE)
    if not session_id:
        return None
    session = session_repository.find_by_id(SessionId(value=session_id))
    if session is None:
        return None
    return Principal(
        user_id=str(session.user_id),
        email=session.email,
        is_admin=session.is_admin,
    )


def _stage_resource_arn(method_arn: str) -> str:
    """Every method and path of the calling stage"""
    arn_parts = method_arn.split(":")
    region = arn_parts[3]
    account_id = arn_parts[4]
    api_gw_arn = arn_parts[5]
    rest_api_id, stage = api_gw_arn.split("/")[:2]
    return f"arn:aws:execute-api:{region}:{account_id}:{rest_api_id}/{stage}/*/*"


@logger.inject_lambda_context
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """REQUEST authorizer: bearer JWT first, then the ``sid`` session cookie"""
    headers = event.get("headers") or {}
    principal = _from_bearer(headers) or _from_session(headers)
    if principal is None:
        raise Exception("Unauthorized")

    logger.append_keys(user_id=principal.user_id)
    return {
        "principalId": principal.user_id,
        "policyDocument": {
            "Version": "2012-10-17",
            "Statement": [
                {
                    "Action": "execute-api:Invoke",
                    "Effect": "Allow",
                    "Resource": _stage_resource_arn(event["methodArn"]),
                }
            ],
        },
        "context": principal.to_context(),
    }
