import pytest

from infrastructure.url.base_url_resolver import BaseUrlResolver


class TestBaseUrlResolver:
    @pytest.mark.parametrize(
        "base, url, expected",
        [
            ("https://api.example.com", "/users", "https://api.example.com/users"),
            ("https://api.example.com/", "users", "https://api.example.com/users"),
            ("https://api.example.com/v1/", "/users/1", "https://api.example.com/v1/users/1"),
            ("https://api.example.com", "http://other.example.com/x", "http://other.example.com/x"),
            ("https://api.example.com", "https://other.example.com/x", "https://other.example.com/x"),
            ("https://api.example.com", "", "https://api.example.com"),
        ],
    )
    def test_resolve_url(self, base, url, expected):
        assert BaseUrlResolver(base).resolve_url(url) == expected

    def test_without_base_returns_url(self):
        assert BaseUrlResolver().resolve_url("/users") == "/users"
        assert BaseUrlResolver(None).resolve_url("https://a.example.com") == "https://a.example.com"

    def test_frozen(self):
        resolver = BaseUrlResolver("https://api.example.com")
        with pytest.raises(Exception):  # FrozenInstanceError
            resolver.base_url = "https://other.example.com"
