"""Shared pytest fixtures for Portfolio tests."""

from collections.abc import Callable

import pytest

from portfolio.core.config import PortfolioConfig
from portfolio.core.image_transform import ImageTransformResolver
from portfolio.core.unit_registry import UnitRegistry, build_default_registry
from portfolio.core.units import (
    BulkPhotoPayload,
    ContentUnit,
    FeaturedPhotoPayload,
    FilmInfo,
    MediaRef,
    PhotoPayload,
    TextCardPayload,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep PORTFOLIO_* variables from the developer's shell out of tests."""
    for name in (
        "PORTFOLIO_CLOUD_NAME",
        "PORTFOLIO_GRID_QUALITY",
        "PORTFOLIO_LIGHTBOX_QUALITY",
        "PORTFOLIO_SERVER_PORT",
        "PORTFOLIO_IMAGE_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def test_config() -> PortfolioConfig:
    """Create a configuration with the delivery service enabled.

    Returns:
        PortfolioConfig with cloud_name "demo-cloud"
    """
    return PortfolioConfig(_env_file=None, cloud_name="demo-cloud")


@pytest.fixture
def unconfigured_config() -> PortfolioConfig:
    """Create a configuration without a delivery-service identity.

    Returns:
        PortfolioConfig with cloud_name unset
    """
    return PortfolioConfig(_env_file=None)


@pytest.fixture
def resolver(test_config: PortfolioConfig) -> ImageTransformResolver:
    return ImageTransformResolver(test_config)


@pytest.fixture
def registry() -> UnitRegistry:
    return build_default_registry()


@pytest.fixture
def make_photo() -> Callable[..., ContentUnit]:
    """Factory for photo units.

    Returns:
        Callable(unit_id, width, height, **film) -> ContentUnit
    """

    def _make(
        unit_id: str = "p1",
        width: int | None = 1200,
        height: int | None = 800,
        caption: str | None = None,
        **film,
    ) -> ContentUnit:
        image = MediaRef(
            url=f"https://media.example.com/{unit_id}.jpg",
            width=width,
            height=height,
            alt=f"Photo {unit_id}",
        )
        return ContentUnit(
            id=unit_id,
            type_tag="photo",
            payload=PhotoPayload(image=image, caption=caption, film=FilmInfo(**film)),
        )

    return _make


@pytest.fixture
def make_bulk() -> Callable[..., ContentUnit]:
    """Factory for bulk photo units with ``count`` embedded images."""

    def _make(unit_id: str = "bulk", count: int = 3, **film) -> ContentUnit:
        images = tuple(
            MediaRef(url=f"https://media.example.com/{unit_id}-{i}.jpg", width=1000, height=1500)
            for i in range(count)
        )
        return ContentUnit(
            id=unit_id,
            type_tag="photoBulk",
            payload=BulkPhotoPayload(images=images, film=FilmInfo(**film)),
        )

    return _make


@pytest.fixture
def make_featured() -> Callable[..., ContentUnit]:
    def _make(unit_id: str = "featured") -> ContentUnit:
        image = MediaRef(url=f"https://media.example.com/{unit_id}.jpg", width=2400, height=1200)
        return ContentUnit(
            id=unit_id,
            type_tag="featuredPhoto",
            payload=FeaturedPhotoPayload(image=image),
        )

    return _make


@pytest.fixture
def make_text() -> Callable[..., ContentUnit]:
    def _make(unit_id: str = "text") -> ContentUnit:
        return ContentUnit(
            id=unit_id,
            type_tag="textCard",
            payload=TextCardPayload(content={"root": {"children": []}}),
        )

    return _make


@pytest.fixture
def photo_record() -> dict:
    """A CMS photo block record as the content backend returns it."""
    return {
        "id": "rec-photo",
        "blockType": "photo",
        "image": {
            "id": "media-1",
            "url": "https://media.example.com/harbour.jpg",
            "width": 1200,
            "height": 800,
            "alt": "Harbour at dusk",
        },
        "caption": "Harbour at dusk",
        "isFilmPhoto": True,
        "filmType": "35mm",
        "filmStock": "Portra 400",
        "blackAndWhite": False,
        "applyFilmBorder": True,
        "filmBorderNumber": "3",
    }


@pytest.fixture
def test_client(monkeypatch, test_config: PortfolioConfig):
    """FastAPI TestClient with the delivery service configured.

    The client is used as a context manager so the startup lifespan runs
    and builds the registry and resolver.
    """
    from fastapi.testclient import TestClient

    import portfolio.api.main as api_main

    monkeypatch.setattr(api_main, "config", test_config)
    with TestClient(api_main.app) as client:
        yield client


@pytest.fixture
def unconfigured_client(monkeypatch, unconfigured_config: PortfolioConfig):
    """FastAPI TestClient without a delivery-service identity."""
    from fastapi.testclient import TestClient

    import portfolio.api.main as api_main

    monkeypatch.setattr(api_main, "config", unconfigured_config)
    with TestClient(api_main.app) as client:
        yield client
