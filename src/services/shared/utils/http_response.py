import json

from aws_lambda_powertools.event_handler import Response, content_types
from aws_lambda_powertools.shared.cookies import Cookie


def json_response(
    status_code: int,
    body: dict | list,
    cookies: list[Cookie] | None = None,
) -> Response:
    """Build a resolver Response with a JSON body"""
    return Response(
        status_code=status_code,
        content_type=content_types.APPLICATION_JSON,
        body=json.dumps(body, default=str),
        cookies=cookies,
    )


def redirect_response(location: str, cookies: list[Cookie] | None = None) -> Response:
    return Response(
        status_code=302,
        content_type=content_types.TEXT_PLAIN,
        body="",
        headers={"Location": location},
        cookies=cookies,
    )
