"""Core gallery layout functionality.

This module provides the core components of the portfolio gallery:

- **Units**: Content unit, payload and section data types (units.py)
- **UnitRegistry**: Tag-to-capability table for content unit types
- **split_into_sections**: Grid/break partitioning of a unit list
- **ImageTransformResolver**: Image-delivery transform descriptors
- **Renderers**: Per-variant view model builders
- **render_gallery**: End-to-end layout pass
- **PortfolioConfig**: Configuration management using Pydantic Settings

Architecture Overview
---------------------
1. **Configuration Layer** (config.py):
   - Environment-based configuration using Pydantic Settings
   - All settings prefixed with PORTFOLIO_ in .env files

2. **Classification Layer** (unit_registry.py, section_splitter.py):
   - Registry built once at startup, then frozen
   - Splitter expands bulk units and groups dense runs into grids

3. **Resolution Layer** (image_transform.py, renderers.py):
   - Pure transform descriptor construction, no I/O
   - Renderers pick grid and lightbox qualities per image

Usage Example
-------------
    from portfolio.core import build_default_registry, render_gallery, config
    from portfolio.core import ImageTransformResolver, parse_content_units

    registry = build_default_registry()
    resolver = ImageTransformResolver(config)
    layout = render_gallery(parse_content_units(records), registry, resolver, config)
"""

from portfolio.core.config import PortfolioConfig, config
from portfolio.core.gallery import GalleryLayout, render_gallery
from portfolio.core.image_transform import (
    ColorMode,
    ImageTransformResolver,
    Orientation,
    TransformDescriptor,
    TransformOptions,
    get_orientation,
)
from portfolio.core.section_splitter import expand_bulk_units, section_stats, split_into_sections
from portfolio.core.unit_registry import (
    RegistryEntry,
    RegistryFrozenError,
    UnitRegistry,
    build_default_registry,
)
from portfolio.core.units import (
    BreakSection,
    ContentUnit,
    GridSection,
    LayoutClass,
    parse_content_units,
)

__all__ = [
    "BreakSection",
    "ColorMode",
    "ContentUnit",
    "GalleryLayout",
    "GridSection",
    "ImageTransformResolver",
    "LayoutClass",
    "Orientation",
    "PortfolioConfig",
    "RegistryEntry",
    "RegistryFrozenError",
    "TransformDescriptor",
    "TransformOptions",
    "UnitRegistry",
    "build_default_registry",
    "config",
    "expand_bulk_units",
    "get_orientation",
    "parse_content_units",
    "render_gallery",
    "section_stats",
    "split_into_sections",
]
