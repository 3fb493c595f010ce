from services.shared.utils.cookies import (
    SESSION_COOKIE,
    build_cookie,
    expired_cookie,
    read_cookie,
)


class TestReadCookie:
    def test_reads_named_cookie_case_insensitively(self):
        headers = {"cookie": "theme=dark; sid=abc123"}

        assert read_cookie(headers, SESSION_COOKIE) == "abc123"

    def test_capitalised_header_name(self):
        assert read_cookie({"Cookie": "sid=xyz"}, "sid") == "xyz"

    def test_missing_cookie_header(self):
        assert read_cookie({}, "sid") is None
        assert read_cookie(None, "sid") is None

    def test_missing_cookie_name(self):
        assert read_cookie({"Cookie": "theme=dark"}, "sid") is None


class TestBuildCookie:
    def test_session_cookie_is_http_only_and_lax(self):
        rendered = str(build_cookie("sid", "abc", max_age=3600, secure=True))

        assert rendered.startswith("sid=abc")
        assert "HttpOnly" in rendered
        assert "Secure" in rendered
        assert "SameSite=Lax" in rendered
        assert "Path=/" in rendered

    def test_expired_cookie_has_zero_max_age(self):
        rendered = str(expired_cookie("sid", secure=False))

        assert rendered.startswith("sid=")
        assert "Age=0" in rendered
