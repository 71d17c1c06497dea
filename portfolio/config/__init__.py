"""
Configuration management.

This module provides configuration classes and utilities for:
- Catalog loading, image resolution and layout settings (dataclasses)
- Site configuration (YAML-based)
- Logging setup for scripts
"""

from .settings import CarouselConfig, LayoutConfig, LoaderConfig, ResolverConfig
from .site import (
    SiteConfig,
    get_config,
    reload_config,
    get_config_path,
    setup_logging,
)

__all__ = [
    # Settings
    "CarouselConfig",
    "LayoutConfig",
    "LoaderConfig",
    "ResolverConfig",
    # Site config
    "SiteConfig",
    "get_config",
    "reload_config",
    "get_config_path",
    "setup_logging",
]
