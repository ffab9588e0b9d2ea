"""Split an ordered list of content units into renderable sections.

Dense units accumulate into grid runs; break units flush the current run and
render full-width on their own.  The result alternates between grids and
breaks::

    [photo, photo, featuredPhoto, photo, textCard, photo]
      -> [Grid[photo, photo], Break[featuredPhoto], Grid[photo],
          Break[textCard], Grid[photo]]

Guarantees
----------
- Units are never reordered; column balancing inside a grid belongs to the
  rendering layer.
- Grid sections are never empty and never adjacent.
- Consecutive breaks produce consecutive break sections, with no empty grid
  between them.
- Units whose tag is not registered are logged and dropped.
- Empty input (or input made only of unknown units) yields an empty list,
  which is a valid, renderable gallery.

Bulk units are expanded into one photo unit per embedded image before
classification, so their images join neighbouring photos in the same grid.
"""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import replace

from .unit_registry import UnitRegistry
from .units import (
    PHOTO,
    BreakSection,
    BulkPhotoPayload,
    ContentUnit,
    GridSection,
    LayoutClass,
    PhotoPayload,
    Section,
)

logger = logging.getLogger(__name__)


def expand_unit(unit: ContentUnit) -> list[ContentUnit]:
    """Expand a composite unit into its atomic photo units.

    Each embedded image becomes a ``photo`` unit with id ``<bulk id>-<index>``
    and the bulk unit's shared film metadata.  Non-composite units are
    returned unchanged as a single-element list.

    Args:
        unit: Unit to expand

    Returns:
        List of atomic units in embedded order
    """
    if not isinstance(unit.payload, BulkPhotoPayload):
        return [unit]

    film = unit.payload.film
    return [
        replace(
            unit,
            id=f"{unit.id}-{index}",
            type_tag=PHOTO,
            payload=PhotoPayload(image=image, film=film),
        )
        for index, image in enumerate(unit.payload.images)
    ]


def expand_bulk_units(units: Iterable[ContentUnit]) -> Iterator[ContentUnit]:
    """Yield units with every bulk unit replaced by its atomic photos."""
    for unit in units:
        yield from expand_unit(unit)


def split_into_sections(units: Iterable[ContentUnit], registry: UnitRegistry) -> list[Section]:
    """Partition content units into grid and break sections.

    Args:
        units: Content units in gallery order
        registry: Registry used to classify each unit's layout

    Returns:
        Sections in render order (possibly empty)
    """
    sections: list[Section] = []
    pending: list[ContentUnit] = []

    for unit in expand_bulk_units(units):
        entry = registry.lookup(unit.type_tag)

        if entry is None:
            logger.warning(
                f"Unknown unit type '{unit.type_tag}' (unit {unit.id}); "
                "register it in the unit registry to render it"
            )
            continue

        if entry.layout_class == LayoutClass.DENSE:
            pending.append(unit)
            continue

        if pending:
            sections.append(GridSection(items=tuple(pending)))
            pending = []

        sections.append(BreakSection(unit=unit))

    if pending:
        sections.append(GridSection(items=tuple(pending)))

    return sections


def section_stats(sections: list[Section]) -> dict[str, int]:
    """Summarise a section list (used for diagnostics and the API).

    Returns:
        Dictionary with ``total_sections``, ``grid_sections``,
        ``break_sections`` and ``total_grid_items``
    """
    grids = [section for section in sections if isinstance(section, GridSection)]
    return {
        "total_sections": len(sections),
        "grid_sections": len(grids),
        "break_sections": len(sections) - len(grids),
        "total_grid_items": sum(len(grid.items) for grid in grids),
    }
