"""Configuration management for the Portfolio gallery core.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the PORTFOLIO_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (PORTFOLIO_* prefix)
2. .env file in the project root
3. Default values defined in PortfolioConfig

Example .env file:
    PORTFOLIO_CLOUD_NAME=my-tenant
    PORTFOLIO_GRID_QUALITY=85
    PORTFOLIO_LIGHTBOX_QUALITY=95
    PORTFOLIO_SERVER_PORT=8000

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
Application code reads from it; tests build their own PortfolioConfig
instances and pass them explicitly.

Usage Example
-------------
    from portfolio.core.config import config

    print(config.cloud_name)
    print(config.grid_quality)

Image Delivery Service
----------------------
`cloud_name` is the tenant identity of the external image-delivery service.
When it is unset the image transform resolver fails open and returns the
original source URL for every photo, so a gallery still renders (unbordered,
unoptimized) on an unconfigured deployment.

Border overlays are addressed as ``<border_folder>/<border_family>-<n>-<orientation>[-bw]``
and must already be uploaded to the delivery service.

See Also
--------
- ImageTransformResolver: Consumer of the delivery-service settings
- render_gallery: Consumer of the quality and priority settings
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PortfolioConfig(BaseSettings):
    """Main configuration for the Portfolio gallery core.

    Values are loaded from environment variables with the PORTFOLIO_ prefix,
    with fallback to defaults defined here.

    Attributes
    ----------
    Image Delivery Service:
        cloud_name : str | None
            Tenant identity; None disables transformation (fail open)
        image_service_root : str
            Service root URL
        delivery_path : str
            Delivery path for remote-fetched images
        image_format : Literal["auto", "webp", "avif"]
            Format token; "auto" lets the service negotiate

    Film Borders:
        border_folder : str
            Folder on the delivery service holding the overlay assets
        border_family : str
            Family prefix of the overlay asset names

    Rendering:
        grid_quality : int
            Quality used for grid thumbnails (1-100)
        lightbox_quality : int
            Quality used for full-size/lightbox views (1-100)
        grid_priority_count : int
            Number of leading grid items that get priority loading

    Server:
        server_host : str
            Bind address for the API server
        server_port : int
            Port for the API server (1024-65535)
        log_level : str
            Root log level used by the server entry point

    Notes
    -----
    - Configuration is immutable after initialization
    - To modify config, set environment variables and restart the application

    Examples
    --------
        >>> custom_config = PortfolioConfig(cloud_name="demo", grid_quality=70)
        >>> custom_config.lightbox_quality
        95
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PORTFOLIO_",
        case_sensitive=False,
        frozen=True,
    )

    # Image delivery service
    cloud_name: str | None = Field(
        default=None,
        description="Tenant identity of the image-delivery service (unset = fail open)",
    )
    image_service_root: str = Field(
        default="https://res.cloudinary.com",
        description="Root URL of the image-delivery service",
    )
    delivery_path: str = Field(
        default="image/fetch",
        description="Delivery path for remote-fetched source images",
    )
    image_format: Literal["auto", "webp", "avif"] = Field(
        default="auto",
        description="Output format token (auto = content negotiated)",
    )

    # Film borders
    border_folder: str = Field(
        default="film-borders/film-borders",
        description="Folder holding the border overlay assets",
    )
    border_family: str = Field(
        default="FILM-FRAME_OVERLAY",
        description="Family prefix of the border overlay asset names",
    )

    # Rendering
    grid_quality: int = Field(default=85, ge=1, le=100)
    lightbox_quality: int = Field(default=95, ge=1, le=100)
    grid_priority_count: int = Field(
        default=4,
        description="Leading grid items loaded with priority (above the fold)",
        ge=0,
    )

    # Server
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address",
    )
    server_port: int = Field(
        default=8000,
        description="Server port",
        ge=1024,
        le=65535,
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root log level for the server entry point",
    )

    @property
    def delivery_configured(self) -> bool:
        """Whether a tenant identity for the image-delivery service is set."""
        return bool(self.cloud_name and self.cloud_name.strip())


# Global configuration instance
# Loads values from environment variables (PORTFOLIO_* prefix) and .env file.
config = PortfolioConfig()
