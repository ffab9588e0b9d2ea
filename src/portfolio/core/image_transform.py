"""Image transform resolution for the external image-delivery service.

This module turns a photo's source URL plus rendering options into a
:class:`TransformDescriptor`: the exact, ordered list of operation tokens the
image-delivery service must apply.  Nothing here performs I/O; the
descriptor is a plain value that renders to a URL, and the delivery service
fetches and transforms the source when a browser requests that URL.

Transformation Grammar
----------------------
Tokens are comma-joined and placed between the service base and the
source URL::

    <root>/<cloud_name>/<delivery_path>/<tokens>/<source>

Tokens are emitted in this fixed order (the service applies them
sequentially)::

    l_<overlay public id>   only when a border is applied
    fl_layer_apply          immediately follows the overlay
    w_<width>               only when the width is known
    h_<height>              only when the height is known
    f_<format>              format negotiation (auto by default)
    q_<quality>             caller-supplied quality
    c_limit                 never upscale beyond the source resolution

Film Borders
------------
Eight numbered border designs exist, each uploaded in four variants
(horizontal/vertical, color/black-and-white).  Asset names follow
``<family>-<variant>-<horizontal|vertical>[-bw]``.  The orientation is
derived from the photo's dimensions; unknown dimensions fall back to
portrait (vertical).

Fail-Open Behaviour
-------------------
The resolver never raises.  With no delivery-service tenant configured, or
with a source URL the service cannot fetch (a site-relative path), the
descriptor renders to the original source URL.  An out-of-range border
variant produces an unbordered descriptor.

Usage Example
-------------
    >>> from portfolio.core.config import PortfolioConfig
    >>> resolver = ImageTransformResolver(PortfolioConfig(cloud_name="demo"))
    >>> options = TransformOptions(target_width=800, target_height=1200, quality=85)
    >>> resolver.resolve("https://cdn.example.com/a.jpg", options).url
    'https://res.cloudinary.com/demo/image/fetch/w_800,h_1200,f_auto,q_85,c_limit/https://cdn.example.com/a.jpg'
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from .config import PortfolioConfig

logger = logging.getLogger(__name__)

MIN_BORDER_VARIANT = 1
MAX_BORDER_VARIANT = 8

OVERLAY_APPLY_TOKEN = "fl_layer_apply"
NO_UPSCALE_TOKEN = "c_limit"


class Orientation(str, Enum):
    """Photo orientation; values match the border asset naming."""

    LANDSCAPE = "horizontal"
    PORTRAIT = "vertical"


class ColorMode(str, Enum):
    COLOR = "color"
    MONO = "mono"


def _known(dimension: int | None) -> bool:
    return dimension is not None and dimension > 0


def get_orientation(width: int | None, height: int | None) -> Orientation:
    """Determine orientation from pixel dimensions.

    Square images count as landscape.  If either dimension is unknown the
    result is portrait.

    Args:
        width: Width in pixels, or None if unknown
        height: Height in pixels, or None if unknown

    Returns:
        Orientation.LANDSCAPE if width >= height, else Orientation.PORTRAIT
    """
    if not _known(width) or not _known(height):
        return Orientation.PORTRAIT
    return Orientation.LANDSCAPE if width >= height else Orientation.PORTRAIT


def is_valid_border_variant(variant: int | None) -> bool:
    return (
        isinstance(variant, int)
        and not isinstance(variant, bool)
        and MIN_BORDER_VARIANT <= variant <= MAX_BORDER_VARIANT
    )


def border_asset_id(
    family: str,
    variant: int,
    orientation: Orientation,
    color_mode: ColorMode = ColorMode.COLOR,
) -> str:
    """Build a border overlay asset name.

    Args:
        family: Border family prefix (e.g. "FILM-FRAME_OVERLAY")
        variant: Border design number, 1-8
        orientation: Orientation of the photo being bordered
        color_mode: MONO selects the black-and-white variant

    Returns:
        Asset name such as "FILM-FRAME_OVERLAY-3-vertical-bw"

    Raises:
        ValueError: If variant is outside 1-8
    """
    if not is_valid_border_variant(variant):
        raise ValueError(
            f"Border variant must be between {MIN_BORDER_VARIANT} and "
            f"{MAX_BORDER_VARIANT}, got {variant!r}"
        )

    suffix = "-bw" if color_mode == ColorMode.MONO else ""
    return f"{family}-{variant}-{orientation.value}{suffix}"


@dataclass(frozen=True)
class TransformOptions:
    """Rendering options for one image reference.

    Attributes:
        target_width: Known width in pixels; drives orientation and resizing
        target_height: Known height in pixels; drives orientation and resizing
        border_enabled: Whether a film border overlay is requested
        border_variant: Border design number (1-8)
        color_mode: MONO selects black-and-white border assets
        quality: Output quality passed to the delivery service
        image_format: Format token override (defaults to the configured one)
    """

    target_width: int | None = None
    target_height: int | None = None
    border_enabled: bool = False
    border_variant: int | None = None
    color_mode: ColorMode = ColorMode.COLOR
    quality: int = 85
    image_format: str | None = None

    @property
    def orientation(self) -> Orientation:
        return get_orientation(self.target_width, self.target_height)


@dataclass(frozen=True)
class TransformDescriptor:
    """Ordered image operations for the delivery service.

    A descriptor without a base or without tokens is untransformed and
    renders to the source reference unchanged.

    Attributes:
        source: Original source reference (URL)
        tokens: Ordered operation tokens
        base: Delivery-service base URL including the tenant, or None
    """

    source: str
    tokens: tuple[str, ...] = ()
    base: str | None = None

    @property
    def is_transformed(self) -> bool:
        return bool(self.base and self.tokens)

    @property
    def has_border(self) -> bool:
        return any(token.startswith("l_") for token in self.tokens)

    @property
    def url(self) -> str:
        """Final image URL."""
        if not self.is_transformed:
            return self.source
        return f"{self.base}/{','.join(self.tokens)}/{self.source}"

    def __str__(self) -> str:
        return self.url


class ImageTransformResolver:
    """Builds transform descriptors from configuration and per-image options.

    The resolver is stateless apart from its configuration and is safe to
    share across threads and requests.

    Attributes:
        config: Configuration holding the delivery-service identity and
            border naming settings
    """

    def __init__(self, config: PortfolioConfig) -> None:
        self.config = config
        self._base = self._build_base(config)

        if self._base is None:
            logger.warning(
                "Image delivery service not configured (PORTFOLIO_CLOUD_NAME unset); "
                "original image URLs will be served"
            )

    @staticmethod
    def _build_base(config: PortfolioConfig) -> str | None:
        if not config.delivery_configured:
            return None
        root = config.image_service_root.rstrip("/")
        path = config.delivery_path.strip("/")
        return f"{root}/{config.cloud_name.strip()}/{path}"

    @property
    def configured(self) -> bool:
        return self._base is not None

    def border_asset_for(self, options: TransformOptions) -> str | None:
        """Select the border overlay asset for the given options.

        Args:
            options: Per-image transform options

        Returns:
            Asset name, or None when no border should be applied
        """
        if not options.border_enabled:
            return None

        if not is_valid_border_variant(options.border_variant):
            logger.warning(
                f"Border requested with invalid variant {options.border_variant!r}; "
                "rendering without border"
            )
            return None

        return border_asset_id(
            self.config.border_family,
            options.border_variant,
            options.orientation,
            options.color_mode,
        )

    def build_tokens(self, options: TransformOptions) -> tuple[str, ...]:
        """Assemble the ordered operation tokens for the given options."""
        tokens: list[str] = []

        asset = self.border_asset_for(options)
        if asset is not None:
            public_id = f"{self.config.border_folder.strip('/')}/{asset}"
            # Nested folders are addressed with ':' inside overlay tokens
            tokens.append(f"l_{public_id.replace('/', ':')}")
            tokens.append(OVERLAY_APPLY_TOKEN)

        if _known(options.target_width):
            tokens.append(f"w_{options.target_width}")
        if _known(options.target_height):
            tokens.append(f"h_{options.target_height}")

        tokens.append(f"f_{options.image_format or self.config.image_format}")
        tokens.append(f"q_{options.quality}")
        tokens.append(NO_UPSCALE_TOKEN)

        return tuple(tokens)

    def resolve(self, source: str, options: TransformOptions | None = None) -> TransformDescriptor:
        """Resolve the final image reference for a source URL.

        Args:
            source: Original image URL
            options: Per-image transform options (defaults to TransformOptions())

        Returns:
            TransformDescriptor; untransformed when the service is not
            configured or the source cannot be fetched remotely
        """
        if not source:
            return TransformDescriptor(source="")

        if self._base is None:
            logger.debug(f"Serving untransformed image (no delivery service): {source}")
            return TransformDescriptor(source=source)

        # Site-relative paths are not reachable by the remote fetch
        if source.startswith("/"):
            logger.error(
                f"Cannot transform relative image URL {source!r}; "
                "storage must expose absolute public URLs"
            )
            return TransformDescriptor(source=source)

        options = options or TransformOptions()
        return TransformDescriptor(source=source, tokens=self.build_tokens(options), base=self._base)
