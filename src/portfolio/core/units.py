"""Content unit and section data types.

A gallery is an ordered sequence of :class:`ContentUnit` values.  Each unit
carries a type tag (the CMS block slug) and a variant-specific payload.  The
payload shape is determined by the tag; the unit's layout class is *not* part
of the unit, it comes from the unit registry.

Sections are the output of the section splitter: either a :class:`GridSection`
holding a run of dense units, or a :class:`BreakSection` wrapping a single
full-width unit.

CMS Record Shape
----------------
Units are parsed from the JSON records the content backend returns for a
gallery's ``items`` field, for example::

    {
        "id": "abc123",
        "blockType": "photo",
        "image": {"url": "https://...", "width": 1200, "height": 800, "alt": "..."},
        "caption": "Harbour at dusk",
        "blackAndWhite": false,
        "applyFilmBorder": true,
        "filmBorderNumber": "3"
    }

Records with an unrecognised ``blockType`` still become units (with an
:class:`UnknownPayload`) so that classification, not parsing, decides what
gets dropped.  Records that are structurally broken (no id, no tag, missing
required media) are dropped with a warning.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

logger = logging.getLogger(__name__)

PHOTO = "photo"
PHOTO_BULK = "photoBulk"
FEATURED_PHOTO = "featuredPhoto"
TEXT_CARD = "textCard"
THREE_ACROSS = "photoBulk3Across"
GRID_PHOTO = "gridPhoto"
GRID_TEXT_CARD = "gridTextCard"


class LayoutClass(str, Enum):
    """How a unit participates in the gallery layout."""

    DENSE = "dense"
    BREAK = "break"


@dataclass(frozen=True)
class MediaRef:
    """Reference to an uploaded image and its recorded pixel dimensions."""

    url: str
    width: int | None = None
    height: int | None = None
    alt: str = "Gallery photo"
    id: str | None = None


@dataclass(frozen=True)
class FilmInfo:
    """Film and border metadata shared by photo-like payloads."""

    is_film_photo: bool = False
    film_type: str | None = None
    film_stock: str | None = None
    black_and_white: bool = False
    apply_film_border: bool = False
    film_border_number: int | None = None


@dataclass(frozen=True)
class PhotoPayload:
    image: MediaRef
    caption: str | None = None
    film: FilmInfo = field(default_factory=FilmInfo)


@dataclass(frozen=True)
class BulkPhotoPayload:
    """Several images uploaded together, sharing one metadata set."""

    images: tuple[MediaRef, ...]
    film: FilmInfo = field(default_factory=FilmInfo)


@dataclass(frozen=True)
class FeaturedPhotoPayload:
    image: MediaRef
    enable_overlay: bool = False
    overlay_text: Any = None
    button_text: str | None = None
    button_link: str | None = None


@dataclass(frozen=True)
class TextCardPayload:
    content: Any
    font_family: str = "inter"
    font_size: str = "medium"
    text_align: str = "left"


@dataclass(frozen=True)
class ThreeAcrossPayload:
    """A full-width three-column row with its own nested items.

    Nested items are rendered inside the row and are never split further.
    Bulk-uploaded images are expanded into ``photo`` items at parse time and
    follow the explicitly nested ones.
    """

    items: tuple[ContentUnit, ...]


@dataclass(frozen=True)
class UnknownPayload:
    raw: dict[str, Any]


Payload = Union[
    PhotoPayload,
    BulkPhotoPayload,
    FeaturedPhotoPayload,
    TextCardPayload,
    ThreeAcrossPayload,
    UnknownPayload,
]


@dataclass(frozen=True)
class ContentUnit:
    """One atomic piece of gallery content.

    Attributes:
        id: Stable identifier from the content backend
        type_tag: Block slug used for registry lookup
        payload: Variant-specific payload
    """

    id: str
    type_tag: str
    payload: Payload

    @property
    def is_composite(self) -> bool:
        """True for bulk units that expand into several atomic photos."""
        return isinstance(self.payload, BulkPhotoPayload)


@dataclass(frozen=True)
class GridSection:
    """A contiguous run of dense units, rendered as a multi-column grid."""

    items: tuple[ContentUnit, ...]

    def __post_init__(self) -> None:
        if not self.items:
            raise ValueError("GridSection requires at least one item")


@dataclass(frozen=True)
class BreakSection:
    """A single full-width unit that terminates any grid run."""

    unit: ContentUnit


Section = Union[GridSection, BreakSection]


# ---------------------------------------------------------------------------
# CMS record parsing
# ---------------------------------------------------------------------------


def _parse_border_number(value: Any) -> int | None:
    # The CMS stores the border choice as a select string ("1".."8")
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        logger.warning(f"Ignoring non-numeric film border number: {value!r}")
        return None


def _parse_dimension(value: Any) -> int | None:
    if value is None:
        return None
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return number if number > 0 else None


def parse_media(value: Any) -> MediaRef | None:
    """Build a :class:`MediaRef` from a populated media record.

    Unpopulated relations (bare id strings) and records without a URL
    cannot be rendered and yield ``None``.
    """
    if not isinstance(value, dict):
        return None

    url = value.get("url")
    if not url or not isinstance(url, str):
        return None

    return MediaRef(
        url=url,
        width=_parse_dimension(value.get("width")),
        height=_parse_dimension(value.get("height")),
        alt=value.get("alt") or "Gallery photo",
        id=str(value["id"]) if value.get("id") is not None else None,
    )


def parse_film_info(record: dict[str, Any]) -> FilmInfo:
    is_film_photo = bool(record.get("isFilmPhoto", False))
    return FilmInfo(
        is_film_photo=is_film_photo,
        film_type=record.get("filmType") if is_film_photo else None,
        film_stock=record.get("filmStock") if is_film_photo else None,
        black_and_white=bool(record.get("blackAndWhite", False)),
        apply_film_border=bool(record.get("applyFilmBorder", False)),
        film_border_number=_parse_border_number(record.get("filmBorderNumber")),
    )


def _parse_media_list(value: Any) -> tuple[MediaRef, ...] | None:
    if value is None:
        return ()
    if not isinstance(value, list):
        return None
    return tuple(media for media in map(parse_media, value) if media is not None)


def _parse_payload(tag: str, record: dict[str, Any]) -> Payload | None:
    if tag in (PHOTO, GRID_PHOTO):
        image = parse_media(record.get("image"))
        if image is None:
            return None
        return PhotoPayload(
            image=image,
            caption=record.get("caption") or None,
            film=parse_film_info(record),
        )

    if tag == PHOTO_BULK:
        images = _parse_media_list(record.get("images"))
        if not images:
            return None
        return BulkPhotoPayload(images=images, film=parse_film_info(record))

    if tag == FEATURED_PHOTO:
        image = parse_media(record.get("image"))
        if image is None:
            return None
        return FeaturedPhotoPayload(
            image=image,
            enable_overlay=bool(record.get("enableOverlay", False)),
            overlay_text=record.get("overlayText"),
            button_text=record.get("buttonText"),
            button_link=record.get("buttonLink"),
        )

    if tag in (TEXT_CARD, GRID_TEXT_CARD):
        content = record.get("content")
        if content is None:
            return None
        return TextCardPayload(
            content=content,
            font_family=record.get("fontFamily") or "inter",
            font_size=record.get("fontSize") or "medium",
            text_align=record.get("textAlign") or "left",
        )

    if tag == THREE_ACROSS:
        items = record.get("items")
        if items is None:
            items = []
        images = _parse_media_list(record.get("images"))
        if not isinstance(items, list) or images is None:
            return None
        # Bulk images share the row's film metadata, one photo cell each
        film = parse_film_info(record)
        image_units = [
            ContentUnit(
                id=f"{record['id']}-{index}",
                type_tag=PHOTO,
                payload=PhotoPayload(image=image, film=film),
            )
            for index, image in enumerate(images)
        ]
        return ThreeAcrossPayload(items=(*parse_content_units(items), *image_units))

    return UnknownPayload(raw=dict(record))


def parse_content_unit(record: Any) -> ContentUnit | None:
    """Parse a single CMS block record into a :class:`ContentUnit`.

    Args:
        record: Block record as returned by the content backend

    Returns:
        The parsed unit, or None if the record cannot be rendered
    """
    if not isinstance(record, dict):
        logger.warning(f"Skipping non-object gallery record: {record!r}")
        return None

    tag = record.get("blockType")
    unit_id = record.get("id")
    if not isinstance(tag, str) or not tag or not isinstance(unit_id, (str, int)):
        logger.warning(f"Skipping gallery record without id/blockType: {record!r}")
        return None

    payload = _parse_payload(tag, record)
    if payload is None:
        logger.warning(f"Skipping '{tag}' record {unit_id}: missing required content")
        return None

    return ContentUnit(id=str(unit_id), type_tag=tag, payload=payload)


def parse_content_units(records: list[Any]) -> list[ContentUnit]:
    """Parse CMS block records, dropping the ones that cannot be rendered."""
    units = []
    for record in records:
        unit = parse_content_unit(record)
        if unit is not None:
            units.append(unit)
    return units
