"""
Tests for Go-import Routes.

Covers the HTML page, redirects, health checks, 404s and render failures.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest
from fastapi.testclient import TestClient

from src.api.main import create_app
from src.api.routes.go_import import (
    RenderError,
    cache_headers,
    render_go_import_page,
)
from src.components.goimport import RedirectConfig, RenderStrategy, ResolvedRedirect

ClientFactory = Callable[[RedirectConfig, str], TestClient]

RSC = RedirectConfig(
    import_path="rsc.io",
    repo_path="https://github.com/rsc",
    wildcard=True,
)

NINE_FANS = RedirectConfig(
    import_path="9fans.net/go",
    repo_path="https://github.com/9fans/go",
)


# --- Test Fixtures ---


@pytest.fixture
def make_client() -> ClientFactory:
    """Build a test client whose requests carry the given Host."""

    def _make(config: RedirectConfig, host: str) -> TestClient:
        app = create_app(config)
        return TestClient(app, base_url=f"http://{host}", raise_server_exceptions=False)

    return _make


@pytest.fixture
def rsc_client(make_client: ClientFactory) -> TestClient:
    return make_client(RSC, "rsc.io")


@pytest.fixture
def nine_fans_client(make_client: ClientFactory) -> TestClient:
    return make_client(NINE_FANS, "9fans.net")


# --- HTML Page Tests ---


class TestGoImportPage:
    """Test the rendered go-import page."""

    def test_wildcard_element_page(self, rsc_client: TestClient) -> None:
        response = rsc_client.get("/x86/x86asm", follow_redirects=False)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert (
            '<meta name="go-import" content="rsc.io/x86 git https://github.com/rsc/x86">'
            in response.text
        )
        assert (
            '<meta http-equiv="refresh" content="0; url=https://pkg.go.dev/rsc.io/x86/x86asm">'
            in response.text
        )

    def test_plain_subpackage_page(self, nine_fans_client: TestClient) -> None:
        response = nine_fans_client.get("/go/acme/editinacme", follow_redirects=False)

        assert response.status_code == 200
        assert (
            'content="9fans.net/go git https://github.com/9fans/go"' in response.text
        )
        assert "url=https://pkg.go.dev/9fans.net/go/acme/editinacme" in response.text

    def test_plain_root_page(self, nine_fans_client: TestClient) -> None:
        response = nine_fans_client.get("/go", follow_redirects=False)

        assert response.status_code == 200
        assert 'content="9fans.net/go git https://github.com/9fans/go"' in response.text

    def test_escaped_question_mark_kept(self, rsc_client: TestClient) -> None:
        """An escaped "?" is part of the path, not the start of a query."""
        response = rsc_client.get("/quote%3Fx/sub", follow_redirects=False)

        assert response.status_code == 200
        assert 'content="rsc.io/quote?x git https://github.com/rsc/quote?x"' in response.text
        assert "url=https://pkg.go.dev/rsc.io/quote?x/sub" in response.text

    def test_escaped_hash_kept(self, rsc_client: TestClient) -> None:
        response = rsc_client.get("/a%23b", follow_redirects=False)

        assert response.status_code == 200
        assert 'content="rsc.io/a#b git https://github.com/rsc/a#b"' in response.text
        assert "url=https://pkg.go.dev/rsc.io/a#b" in response.text

    def test_trailing_slash(self, nine_fans_client: TestClient) -> None:
        with_slash = nine_fans_client.get("/go/", follow_redirects=False)
        without = nine_fans_client.get("/go", follow_redirects=False)

        assert with_slash.status_code == 200
        assert with_slash.text == without.text

    def test_go_get_query_ignored(self, rsc_client: TestClient) -> None:
        response = rsc_client.get("/quote?go-get=1", follow_redirects=False)

        assert response.status_code == 200
        assert 'content="rsc.io/quote git https://github.com/rsc/quote"' in response.text

    def test_cache_control_header(self, rsc_client: TestClient) -> None:
        response = rsc_client.get("/quote", follow_redirects=False)

        assert response.headers["cache-control"] == "public, max-age=300"

    def test_cache_control_disabled(self, make_client: ClientFactory) -> None:
        config = RedirectConfig(
            import_path="rsc.io",
            repo_path="https://github.com/rsc",
            wildcard=True,
            cache_control=False,
        )
        response = make_client(config, "rsc.io").get("/quote", follow_redirects=False)

        assert response.status_code == 200
        assert "cache-control" not in response.headers

    def test_vcs_in_page(self, make_client: ClientFactory) -> None:
        config = RedirectConfig(
            import_path="example.org/tool",
            repo_path="https://hg.example.org/tool",
            vcs="hg",
        )
        response = make_client(config, "example.org").get("/tool", follow_redirects=False)

        assert 'content="example.org/tool hg https://hg.example.org/tool"' in response.text

    def test_any_method(self, rsc_client: TestClient) -> None:
        response = rsc_client.post("/quote", follow_redirects=False)

        assert response.status_code == 200


# --- Redirect Tests ---


class TestRedirects:
    """Test 302 responses."""

    def test_wildcard_root_redirects(self, rsc_client: TestClient) -> None:
        response = rsc_client.get("/", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "https://pkg.go.dev/rsc.io"

    def test_redirect_strategy(self, make_client: ClientFactory) -> None:
        config = RedirectConfig(
            import_path="9fans.net/go",
            repo_path="https://github.com/9fans/go",
            render_strategy=RenderStrategy.REDIRECT,
        )
        response = make_client(config, "9fans.net").get(
            "/go/acme/editinacme", follow_redirects=False
        )

        assert response.status_code == 302
        assert response.headers["location"] == "https://pkg.go.dev/9fans.net/go/acme/editinacme"

    def test_redirect_strategy_wildcard_root(self, make_client: ClientFactory) -> None:
        config = RedirectConfig(
            import_path="rsc.io",
            repo_path="https://github.com/rsc",
            wildcard=True,
            render_strategy=RenderStrategy.REDIRECT,
        )
        response = make_client(config, "rsc.io").get("/", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "https://pkg.go.dev/rsc.io"


# --- Health Check Tests ---


class TestPing:
    """Test the .ping health check."""

    def test_ping(self, rsc_client: TestClient) -> None:
        response = rsc_client.get("/anything/.ping")

        assert response.status_code == 200
        assert response.text == "pong"

    def test_ping_outside_root(self, make_client: ClientFactory) -> None:
        response = make_client(NINE_FANS, "unrelated.example").get("/anything/.ping")

        assert response.status_code == 200
        assert response.text == "pong"

    def test_ping_plain_mode(self, nine_fans_client: TestClient) -> None:
        response = nine_fans_client.get("/go/.ping")

        assert response.text == "pong"


# --- Not Found Tests ---


class TestNotFound:
    """Test requests outside the import root."""

    def test_other_host(self, make_client: ClientFactory) -> None:
        response = make_client(RSC, "example.com").get("/quote", follow_redirects=False)

        assert response.status_code == 404
        assert response.json() == {"detail": "Not found"}

    def test_outside_plain_root(self, nine_fans_client: TestClient) -> None:
        response = nine_fans_client.get("/gopher", follow_redirects=False)

        assert response.status_code == 404

    def test_no_docs_routes(self, nine_fans_client: TestClient) -> None:
        """/docs belongs to the import namespace, not to the framework."""
        response = nine_fans_client.get("/docs", follow_redirects=False)

        assert response.status_code == 404


# --- Render Failure Tests ---


class TestRenderFailure:
    """Test render errors surface as 500."""

    def test_render_error_returns_500(self, make_client: ClientFactory) -> None:
        config = RedirectConfig(
            import_path="9fans.net/go",
            repo_path="https://github.com/9fans/go",
            vcs=None,  # type: ignore[arg-type]
        )
        response = make_client(config, "9fans.net").get("/go", follow_redirects=False)

        assert response.status_code == 500
        assert response.text

    def test_render_error_does_not_break_other_requests(
        self, make_client: ClientFactory
    ) -> None:
        broken = RedirectConfig(
            import_path="9fans.net/go",
            repo_path="https://github.com/9fans/go",
            vcs=None,  # type: ignore[arg-type]
        )
        make_client(broken, "9fans.net").get("/go", follow_redirects=False)

        response = make_client(NINE_FANS, "9fans.net").get("/go", follow_redirects=False)
        assert response.status_code == 200


# --- Renderer Unit Tests ---


class TestRenderGoImportPage:
    """Test the page renderer directly."""

    def test_escapes_values(self) -> None:
        redirect = ResolvedRedirect(
            import_root='example.com/"quoted"',
            repo_root="https://example.com/<repo>",
            suffix="",
            doc_url="https://pkg.go.dev/example.com/a&b",
        )
        page = render_go_import_page(redirect, "git")

        assert "&quot;quoted&quot;" in page
        assert "&lt;repo&gt;" in page
        assert "a&amp;b" in page
        assert "<repo>" not in page

    def test_non_string_raises(self) -> None:
        redirect = ResolvedRedirect(
            import_root="rsc.io/x86",
            repo_root="https://github.com/rsc/x86",
            suffix="",
            doc_url="https://pkg.go.dev/rsc.io/x86",
        )
        with pytest.raises(RenderError):
            render_go_import_page(redirect, None)  # type: ignore[arg-type]


class TestCacheHeaders:
    """Test Cache-Control header selection."""

    def test_enabled(self) -> None:
        assert cache_headers(RSC) == {"Cache-Control": "public, max-age=300"}

    def test_custom_max_age(self) -> None:
        config = RedirectConfig(import_path="a.b", repo_path="https://c.d", cache_max_age=60)
        assert cache_headers(config) == {"Cache-Control": "public, max-age=60"}

    def test_disabled(self) -> None:
        config = RedirectConfig(import_path="a.b", repo_path="https://c.d", cache_control=False)
        assert cache_headers(config) == {}
