"""Registry of gallery content-unit types.

The registry maps a content-unit type tag (the CMS block slug) to a
:class:`RegistryEntry` describing how units of that type are laid out and
rendered.  Adding a new kind of gallery content means adding a payload
variant, a renderer and one registry entry; the section splitter and the
gallery assembly never need to change.

Registry Lifecycle
------------------
The registry is populated once during process start and then frozen:

    >>> from portfolio.core.unit_registry import UnitRegistry, RegistryEntry
    >>> from portfolio.core.units import LayoutClass
    >>> registry = UnitRegistry()
    >>> registry.register("photo", RegistryEntry(LayoutClass.DENSE))
    >>> registry.freeze()
    >>> registry.lookup("photo").layout_class
    <LayoutClass.DENSE: 'dense'>
    >>> registry.lookup("video") is None
    True

After :meth:`UnitRegistry.freeze` the table is read-only, so any number of
concurrent render passes can share it without locking.  The registry is an
explicit value handed to the splitter and the gallery assembly; there is no
module-level registry instance.

Unknown Tags
------------
:meth:`UnitRegistry.lookup` never raises.  A ``None`` result is an expected
outcome: callers skip the unit and log a diagnostic.

See Also
--------
- split_into_sections: Consumer of layout classes
- UnitRenderer: Per-variant rendering interface stored on each entry
"""

import logging
from dataclasses import dataclass, replace
from typing import Any

from .renderers import (
    FeaturedPhotoRenderer,
    PhotoRenderer,
    TextCardRenderer,
    ThreeAcrossRenderer,
    UnitRenderer,
)
from .units import FEATURED_PHOTO, PHOTO, PHOTO_BULK, TEXT_CARD, THREE_ACROSS, LayoutClass

logger = logging.getLogger(__name__)


class RegistryFrozenError(RuntimeError):
    """Raised when registering a unit type after the registry was frozen."""

    pass


@dataclass(frozen=True)
class RegistryEntry:
    """Capability descriptor for one content-unit type.

    Attributes:
        layout_class: Whether units of this type join a grid run or break it
        priority_hint: Whether images of this type should load with priority
        renderer: Renderer producing the view model for units of this type
        type_tag: Tag the entry is registered under (filled in by register)
    """

    layout_class: LayoutClass
    priority_hint: bool = False
    renderer: UnitRenderer | None = None
    type_tag: str = ""


class UnitRegistry:
    """Tag-to-entry table for gallery content units.

    Notes
    -----
    - Re-registering a tag overwrites the previous entry (last write wins)
    - Registration is only allowed before :meth:`freeze`
    - Lookups are safe from any number of threads once frozen
    """

    def __init__(self) -> None:
        """Initialize an empty, writable registry."""
        self._entries: dict[str, RegistryEntry] = {}
        self._frozen = False

    def register(self, tag: str, entry: RegistryEntry) -> None:
        """Register (or overwrite) the entry for a type tag.

        Args:
            tag: Content-unit type tag
            entry: Capability descriptor for the tag

        Raises
        ------
        RegistryFrozenError
            If the registry has already been frozen
        """
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register unit type '{tag}': registry is frozen"
            )

        if tag in self._entries:
            logger.warning(f"Unit type '{tag}' is already registered, overwriting")

        if entry.type_tag != tag:
            entry = replace(entry, type_tag=tag)

        self._entries[tag] = entry
        logger.info(f"Registered unit type: {tag} ({entry.layout_class.value})")

    def freeze(self) -> "UnitRegistry":
        """Make the registry read-only.

        Returns
        -------
        UnitRegistry
            The registry itself, for chaining
        """
        if not self._frozen:
            self._frozen = True
            logger.info(f"Unit registry frozen with {len(self._entries)} types")
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def lookup(self, tag: str) -> RegistryEntry | None:
        """Return the entry for ``tag``, or None if the tag is unknown."""
        if not isinstance(tag, str):
            return None
        return self._entries.get(tag)

    def is_registered(self, tag: str) -> bool:
        return self.lookup(tag) is not None

    def registered_tags(self) -> list[str]:
        """List all registered tags in registration order."""
        return list(self._entries.keys())

    def get_entry_info(self, tag: str) -> dict[str, Any] | None:
        """Get JSON-friendly information about a registered tag.

        Args:
            tag: Content-unit type tag

        Returns
        -------
        dict[str, Any] | None
            Entry metadata or None if the tag is unknown
        """
        entry = self.lookup(tag)
        if entry is None:
            return None

        return {
            "type_tag": entry.type_tag,
            "layout_class": entry.layout_class.value,
            "priority_hint": entry.priority_hint,
            "renderer": entry.renderer.name if entry.renderer else None,
        }

    def __contains__(self, tag: object) -> bool:
        return self.lookup(tag) is not None

    def __len__(self) -> int:
        return len(self._entries)


def build_default_registry() -> UnitRegistry:
    """Build and freeze the registry of the standard gallery unit types.

    Returns
    -------
    UnitRegistry
        Frozen registry with photo, bulk photo, featured photo, text card
        and three-across row entries
    """
    registry = UnitRegistry()
    photo_renderer = PhotoRenderer()

    registry.register(PHOTO, RegistryEntry(LayoutClass.DENSE, renderer=photo_renderer))
    # Bulk units are expanded to photos before lookup; this entry keeps the tag
    # listed and classified Dense alongside the photos it expands into
    registry.register(PHOTO_BULK, RegistryEntry(LayoutClass.DENSE, renderer=photo_renderer))
    registry.register(
        FEATURED_PHOTO,
        RegistryEntry(LayoutClass.BREAK, priority_hint=True, renderer=FeaturedPhotoRenderer()),
    )
    registry.register(TEXT_CARD, RegistryEntry(LayoutClass.BREAK, renderer=TextCardRenderer()))
    registry.register(
        THREE_ACROSS, RegistryEntry(LayoutClass.BREAK, renderer=ThreeAcrossRenderer())
    )

    return registry.freeze()
