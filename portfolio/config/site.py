"""
Centralized configuration for the portfolio site tooling.

This module loads configuration from a YAML file and provides a clean interface
for accessing data-source, image, layout, carousel and logging settings.
"""

import logging
import os
import yaml
from pathlib import Path
from typing import Any, Dict, Optional

from ..errors import ConfigError
from .settings import CarouselConfig, LayoutConfig, LoaderConfig, ResolverConfig


CONFIG_ENV_VAR = "PORTFOLIO_CONFIG"
DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _default_config_path() -> Path:
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    # __file__ = <repo_root>/portfolio/config/site.py → parents[2] == <repo_root>
    current = Path(__file__).resolve()
    repo_root = None
    for parent in current.parents:
        if (parent / "portfolio").exists() and (parent / "config").exists():
            repo_root = parent
            break
    if repo_root is None:
        repo_root = current.parents[2]
    return repo_root / "config" / "site.yaml"


class SiteConfig:
    """Configuration loader for the portfolio site.

    Loads ``site.yaml`` and exposes each section through properties and
    dataclass builders. Missing keys fall back to the dataclass defaults so a
    partial YAML file is valid.
    """

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize configuration from YAML file.

        Args:
            config_path: Path to YAML config file. If None, uses
                ``$PORTFOLIO_CONFIG`` or ``<repo_root>/config/site.yaml``.
        """
        self.config_path = Path(config_path) if config_path is not None else _default_config_path()
        self._config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            raise ConfigError(f"Configuration file not found: {self.config_path}")
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML configuration: {e}")
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration root must be a mapping: {self.config_path}")
        return data

    def reload(self) -> None:
        """Reload configuration from file."""
        self._config = self._load_config()

    def _section(self, name: str) -> Dict[str, Any]:
        return dict(self._config.get(name) or {})

    # === Data source ===
    @property
    def sheet_url(self) -> Optional[str]:
        return self._section("data").get("sheet_url")

    @property
    def fallback_enabled(self) -> bool:
        return bool(self._section("data").get("fallback", True))

    # === Images ===
    @property
    def images_root(self) -> str:
        return self._section("images").get("root", ResolverConfig.images_root)

    # === Logging ===
    @property
    def log_level(self) -> str:
        return str(self._section("logging").get("level", "INFO")).upper()

    @property
    def log_format(self) -> str:
        return self._section("logging").get("format", DEFAULT_LOG_FORMAT)

    # === Dataclass builders ===
    def loader_config(self) -> LoaderConfig:
        data = self._section("data")
        defaults = LoaderConfig()
        return LoaderConfig(
            sheet_url=data.get("sheet_url", defaults.sheet_url),
            csv_path=data.get("csv_path", defaults.csv_path),
            json_path=data.get("json_path", defaults.json_path),
            fallback=bool(data.get("fallback", defaults.fallback)),
            timeout_s=float(data.get("timeout_s", defaults.timeout_s)),
        )

    def resolver_config(self) -> ResolverConfig:
        images = self._section("images")
        defaults = ResolverConfig()
        return ResolverConfig(
            images_root=images.get("root", defaults.images_root),
            extensions=tuple(images.get("extensions", defaults.extensions)),
            max_variants=int(images.get("max_variants", defaults.max_variants)),
            verify=bool(images.get("verify", defaults.verify)),
        )

    def layout_config(self) -> LayoutConfig:
        layout = self._section("layout")
        defaults = LayoutConfig()
        raw_bps = layout.get("breakpoints")
        if raw_bps is None:
            breakpoints = defaults.breakpoints
        else:
            try:
                breakpoints = tuple(
                    (int(bp["min_width"]), int(bp["columns"])) for bp in raw_bps
                )
            except (KeyError, TypeError, ValueError) as e:
                raise ConfigError(f"Invalid layout.breakpoints entry: {e}")
            breakpoints = tuple(sorted(breakpoints, key=lambda bp: bp[0], reverse=True))
        return LayoutConfig(
            gap=int(layout.get("gap", defaults.gap)),
            min_item_height=int(layout.get("min_item_height", defaults.min_item_height)),
            breakpoints=breakpoints,
        )

    def carousel_config(self) -> CarouselConfig:
        carousel = self._section("carousel")
        defaults = CarouselConfig()
        return CarouselConfig(
            limit=int(carousel.get("limit", defaults.limit)),
            thumb_height=int(carousel.get("thumb_height", defaults.thumb_height)),
            min_width=int(carousel.get("min_width", defaults.min_width)),
            max_width=int(carousel.get("max_width", defaults.max_width)),
        )


def setup_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """Configure root logging for scripts.

    Args:
        level: Level name such as ``"INFO"``; defaults to the configured level.
        fmt: Log format string; defaults to the configured format.
    """
    if level is None or fmt is None:
        try:
            cfg = get_config()
            level = level or cfg.log_level
            fmt = fmt or cfg.log_format
        except ConfigError:
            level = level or "INFO"
            fmt = fmt or DEFAULT_LOG_FORMAT
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=fmt)


# Global configuration instance, created lazily so imports never touch disk
config: Optional[SiteConfig] = None


def get_config(config_path: Optional[Path] = None) -> SiteConfig:
    """Get the global configuration instance.

    Args:
        config_path: Optional path to custom config file

    Returns:
        SiteConfig instance
    """
    global config
    if config_path is not None or config is None:
        config = SiteConfig(config_path)
    return config


def reload_config() -> None:
    """Reload configuration from file."""
    get_config().reload()


def get_config_path() -> Path:
    """Get the path to the current configuration file."""
    return get_config().config_path
