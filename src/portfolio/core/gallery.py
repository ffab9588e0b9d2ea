"""Gallery assembly: from CMS units to render-ready sections.

:func:`render_gallery` runs the whole layout pass:

1. Split the units into grid and break sections (bulk units expanded)
2. Render every unit through its registered renderer
3. Resolve image references for every photograph along the way

The returned :class:`GalleryLayout` is what the templating layer consumes.
An empty layout is a valid result and means "render an empty gallery".

Priority Loading
----------------
Break units load with priority when their registry entry says so (featured
photos).  Inside the gallery's opening grid, the first
``grid_priority_count`` items also load with priority, since they are above
the fold on most screens.  Later grids get none, which is deliberately
stricter than boosting the leading items of every grid run.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from .config import PortfolioConfig
from .image_transform import ImageTransformResolver
from .renderers import RenderContext
from .section_splitter import section_stats, split_into_sections
from .unit_registry import UnitRegistry
from .units import BreakSection, ContentUnit, GridSection, Section

logger = logging.getLogger(__name__)


@dataclass
class GalleryLayout:
    """Rendered gallery sections plus the raw section list they came from."""

    sections: list[dict[str, Any]] = field(default_factory=list)
    raw_sections: list[Section] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.sections

    @property
    def stats(self) -> dict[str, int]:
        return section_stats(self.raw_sections)

    def to_dict(self) -> dict[str, Any]:
        return {"sections": self.sections, "stats": self.stats}


def _render_unit(
    unit: ContentUnit,
    registry: UnitRegistry,
    context: RenderContext,
) -> dict[str, Any] | None:
    entry = registry.lookup(unit.type_tag)
    if entry is None or entry.renderer is None:
        logger.warning(f"No renderer for unit type '{unit.type_tag}' (unit {unit.id})")
        return None
    return entry.renderer.render(unit, context)


def render_gallery(
    units: Iterable[ContentUnit],
    registry: UnitRegistry,
    resolver: ImageTransformResolver,
    config: PortfolioConfig,
) -> GalleryLayout:
    """Lay out and render a gallery.

    Args:
        units: Content units in gallery order
        registry: Frozen unit registry
        resolver: Image transform resolver
        config: Configuration (qualities, priority count)

    Returns:
        GalleryLayout with one view per section; sections whose units all
        fail to render are omitted
    """
    raw_sections = split_into_sections(units, registry)
    layout = GalleryLayout(raw_sections=raw_sections)

    for position, section in enumerate(raw_sections):
        if isinstance(section, GridSection):
            items = []
            for index, unit in enumerate(section.items):
                entry = registry.lookup(unit.type_tag)
                priority = bool(entry and entry.priority_hint) or (
                    position == 0 and index < config.grid_priority_count
                )
                context = RenderContext(resolver=resolver, config=config, priority=priority)
                view = _render_unit(unit, registry, context)
                if view is not None:
                    items.append(view)

            if not items:
                continue
            # A dropped break can leave two grid runs touching
            if layout.sections and layout.sections[-1]["type"] == "grid":
                layout.sections[-1]["items"].extend(items)
            else:
                layout.sections.append({"type": "grid", "items": items})
            continue

        if isinstance(section, BreakSection):
            entry = registry.lookup(section.unit.type_tag)
            context = RenderContext(
                resolver=resolver,
                config=config,
                priority=bool(entry and entry.priority_hint),
            )
            view = _render_unit(section.unit, registry, context)
            if view is not None:
                layout.sections.append(
                    {"type": "break", "type_tag": section.unit.type_tag, "item": view}
                )

    logger.debug(f"Rendered gallery: {layout.stats}")
    return layout
