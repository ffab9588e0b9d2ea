"""Pydantic request models for the Portfolio API.

These models define the JSON schema for the API endpoints.  FastAPI uses
them for automatic request validation, serialisation, and OpenAPI
documentation generation.

Models
------
LayoutRequest
    Payload for ``POST /api/gallery/layout`` — the gallery's block records
    exactly as the content backend returns them.
ResolveImageRequest
    Payload for ``POST /api/images/resolve`` — one image source plus its
    transform options.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from portfolio.core.image_transform import ColorMode, TransformOptions


class LayoutRequest(BaseModel):
    """Request body for the ``POST /api/gallery/layout`` endpoint.

    Attributes:
        items: Ordered block records (``{"id", "blockType", ...}``).  Records
            are parsed leniently; unrenderable or unknown records are
            dropped rather than rejected.
    """

    items: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Ordered gallery block records from the content backend.",
    )


class ResolveImageRequest(BaseModel):
    """Request body for the ``POST /api/images/resolve`` endpoint.

    Attributes:
        source: Absolute URL of the original image.
        width: Known image width in pixels, if recorded.
        height: Known image height in pixels, if recorded.
        border_enabled: Whether a film border overlay is requested.
        border_variant: Border design number.  Values outside 1–8 are
            accepted and resolved as "no border".
        color_mode: ``"color"`` or ``"mono"`` (black-and-white border).
        quality: Output quality (1–100).
        image_format: Optional format override (``auto``, ``webp``, ``avif``).
    """

    source: str = Field(
        ...,
        description="Absolute URL of the original image.",
    )
    width: int | None = Field(
        default=None,
        description="Known image width in pixels.",
        gt=0,
    )
    height: int | None = Field(
        default=None,
        description="Known image height in pixels.",
        gt=0,
    )
    border_enabled: bool = Field(
        default=False,
        description="Apply a film border overlay.",
    )
    border_variant: int | None = Field(
        default=None,
        description="Border design number (1–8).",
    )
    color_mode: ColorMode = Field(
        default=ColorMode.COLOR,
        description="'color' or 'mono'.",
    )
    quality: int = Field(
        default=85,
        description="Output quality (1–100).",
        ge=1,
        le=100,
    )
    image_format: Literal["auto", "webp", "avif"] | None = Field(
        default=None,
        description="Format override; defaults to the configured format.",
    )

    def to_options(self) -> TransformOptions:
        """Convert the request into resolver options."""
        return TransformOptions(
            target_width=self.width,
            target_height=self.height,
            border_enabled=self.border_enabled,
            border_variant=self.border_variant,
            color_mode=self.color_mode,
            quality=self.quality,
            image_format=self.image_format,
        )
