"""Per-variant renderers for gallery content units.

Each registered unit type has a :class:`UnitRenderer` that turns a unit into
a JSON-ready view model for the templating layer.  Renderers are where
photographs get their final image references: the photo renderer builds
transform options from the unit's film metadata and asks the
:class:`~portfolio.core.image_transform.ImageTransformResolver` for a grid
thumbnail and a full-size (lightbox) reference.

Renderer Pattern
----------------
Renderers are stateless and shared by every render pass.  Everything a
render needs is passed in a :class:`RenderContext`:

    >>> context = RenderContext(resolver=resolver, config=config, priority=True)
    >>> view = PhotoRenderer().render(unit, context)
    >>> view["image"]["url"]
    'https://res.cloudinary.com/demo/image/fetch/...'

A renderer handed a payload it does not understand logs a warning and
returns None; the gallery assembly drops that unit.

Adding a Unit Type
------------------
1. Add a payload variant and parsing in ``units.py``
2. Subclass :class:`UnitRenderer`
3. Register the tag with a RegistryEntry holding the renderer
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from .config import PortfolioConfig
from .image_transform import ColorMode, ImageTransformResolver, TransformOptions
from .units import (
    ContentUnit,
    FeaturedPhotoPayload,
    FilmInfo,
    MediaRef,
    PhotoPayload,
    TextCardPayload,
    ThreeAcrossPayload,
)

logger = logging.getLogger(__name__)

# Leading items of a three-across row that load with priority
THREE_ACROSS_PRIORITY_COUNT = 6


@dataclass(frozen=True)
class RenderContext:
    """Per-render inputs shared by all renderers.

    Attributes:
        resolver: Image transform resolver for photo references
        config: Configuration holding grid and lightbox qualities
        priority: Whether the unit being rendered should load with priority
    """

    resolver: ImageTransformResolver
    config: PortfolioConfig
    priority: bool = False


def transform_options_for(
    image: MediaRef, film: FilmInfo | None, quality: int
) -> TransformOptions:
    """Build transform options for a photo from its media and film metadata.

    Args:
        image: Media reference with recorded dimensions
        film: Film/border metadata, or None for unbordered images
        quality: Output quality for this use of the image

    Returns:
        TransformOptions for the resolver
    """
    film = film or FilmInfo()
    return TransformOptions(
        target_width=image.width,
        target_height=image.height,
        border_enabled=film.apply_film_border,
        border_variant=film.film_border_number,
        color_mode=ColorMode.MONO if film.black_and_white else ColorMode.COLOR,
        quality=quality,
    )


def image_view(image: MediaRef, film: FilmInfo | None, context: RenderContext) -> dict[str, Any]:
    """Resolve grid and lightbox references for one image."""
    grid = context.resolver.resolve(
        image.url, transform_options_for(image, film, context.config.grid_quality)
    )
    lightbox_options = transform_options_for(image, film, context.config.lightbox_quality)
    lightbox = context.resolver.resolve(image.url, lightbox_options)

    return {
        "url": grid.url,
        "lightbox_url": lightbox.url,
        "source_url": image.url,
        "width": image.width,
        "height": image.height,
        "alt": image.alt,
        "orientation": lightbox_options.orientation.value,
        "has_border": grid.has_border,
    }


class UnitRenderer(ABC):
    """Abstract base class for content-unit renderers.

    Attributes
    ----------
    name : str
        Human-readable renderer name (reported by the registry)
    """

    name: str = "Base Renderer"

    @abstractmethod
    def render(self, unit: ContentUnit, context: RenderContext) -> dict[str, Any] | None:
        """Render a unit to a view model.

        Args:
            unit: Unit to render
            context: Shared render inputs

        Returns
        -------
        dict[str, Any] | None
            JSON-ready view model, or None if the unit cannot be rendered
        """
        pass

    def _unsupported(self, unit: ContentUnit) -> None:
        logger.warning(
            f"{self.name} cannot render unit {unit.id} "
            f"with payload {type(unit.payload).__name__}"
        )


class PhotoRenderer(UnitRenderer):
    name = "Photo"

    def render(self, unit: ContentUnit, context: RenderContext) -> dict[str, Any] | None:
        payload = unit.payload
        if not isinstance(payload, PhotoPayload):
            self._unsupported(unit)
            return None

        film = payload.film
        return {
            "id": unit.id,
            "type": unit.type_tag,
            "image": image_view(payload.image, film, context),
            "caption": payload.caption,
            "black_and_white": film.black_and_white,
            "film": {
                "type": film.film_type,
                "stock": film.film_stock,
            }
            if film.is_film_photo
            else None,
            "priority": context.priority,
        }


class FeaturedPhotoRenderer(UnitRenderer):
    """Full-width hero photo with an optional text/button overlay."""

    name = "Featured Photo"

    def render(self, unit: ContentUnit, context: RenderContext) -> dict[str, Any] | None:
        payload = unit.payload
        if not isinstance(payload, FeaturedPhotoPayload):
            self._unsupported(unit)
            return None

        overlay = None
        if payload.enable_overlay:
            overlay = {
                "text": payload.overlay_text,
                "button_text": payload.button_text,
                "button_link": payload.button_link,
            }

        return {
            "id": unit.id,
            "type": unit.type_tag,
            "image": image_view(payload.image, None, context),
            "overlay": overlay,
            "priority": context.priority,
        }


class TextCardRenderer(UnitRenderer):
    name = "Text Card"

    def render(self, unit: ContentUnit, context: RenderContext) -> dict[str, Any] | None:
        payload = unit.payload
        if not isinstance(payload, TextCardPayload):
            self._unsupported(unit)
            return None

        return {
            "id": unit.id,
            "type": unit.type_tag,
            "content": payload.content,
            "font_family": payload.font_family,
            "font_size": payload.font_size,
            "text_align": payload.text_align,
        }


class ThreeAcrossRenderer(UnitRenderer):
    """Full-width three-column row of nested photos and text cards."""

    name = "Three Across Row"

    def __init__(self) -> None:
        self._photo = PhotoRenderer()
        self._text = TextCardRenderer()

    def render(self, unit: ContentUnit, context: RenderContext) -> dict[str, Any] | None:
        payload = unit.payload
        if not isinstance(payload, ThreeAcrossPayload):
            self._unsupported(unit)
            return None

        items = []
        for index, item in enumerate(payload.items):
            item_context = RenderContext(
                resolver=context.resolver,
                config=context.config,
                priority=index < THREE_ACROSS_PRIORITY_COUNT,
            )
            if isinstance(item.payload, PhotoPayload):
                view = self._photo.render(item, item_context)
            elif isinstance(item.payload, TextCardPayload):
                view = self._text.render(item, item_context)
            else:
                self._unsupported(item)
                view = None

            if view is not None:
                items.append(view)

        return {
            "id": unit.id,
            "type": unit.type_tag,
            "items": items,
        }
