import pytest

from src.components.goimport import RedirectConfig


@pytest.fixture
def plain_config() -> RedirectConfig:
    """Single repository behind a plain import root."""
    return RedirectConfig(
        import_path="9fans.net/go",
        repo_path="https://github.com/9fans/go",
    )


@pytest.fixture
def wildcard_config() -> RedirectConfig:
    """One repository per top-level element."""
    return RedirectConfig(
        import_path="rsc.io",
        repo_path="https://github.com/rsc",
        wildcard=True,
    )
