"""Portfolio - gallery layout and image reference resolution for a photo portfolio."""

__version__ = "0.1.0"

from portfolio.core.config import PortfolioConfig, config
from portfolio.core.gallery import GalleryLayout, render_gallery
from portfolio.core.image_transform import ImageTransformResolver
from portfolio.core.unit_registry import UnitRegistry, build_default_registry

__all__ = [
    "GalleryLayout",
    "ImageTransformResolver",
    "PortfolioConfig",
    "UnitRegistry",
    "build_default_registry",
    "config",
    "render_gallery",
]
