from http.cookies import CookieError, SimpleCookie

from aws_lambda_powertools.shared.cookies import Cookie, SameSite

SESSION_COOKIE = "sid"
OAUTH_STATE_COOKIE = "oauth_state"


def read_cookie(headers: dict | None, name: str) -> str | None:
    """Value of a request cookie, looked up case-insensitively in the headers"""
    raw = next(
        (value for key, value in (headers or {}).items() if key.lower() == "cookie"),
        None,
    )
    if not raw:
        return None
    jar = SimpleCookie()
    try:
        jar.load(raw)
    except CookieError:
        return None
    morsel = jar.get(name)
    return morsel.value if morsel else None


def build_cookie(name: str, value: str, max_age: int, secure: bool) -> Cookie:
    """HttpOnly, SameSite=Lax cookie scoped to the whole API"""
    return Cookie(
        name=name,
        value=value,
        path="/",
        secure=secure,
        http_only=True,
        max_age=max_age,
        same_site=SameSite.LAX_MODE,
    )


def expired_cookie(name: str, secure: bool) -> Cookie:
    # powertools omits a zero max age; negative values render as zero
    return build_cookie(name, "", max_age=-1, secure=secure)
