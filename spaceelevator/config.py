"""Shadow model configuration.

All physical parameters are defined here and can be overridden via config file.
"""

from dataclasses import dataclass, field
from pathlib import Path
import json
from typing import Optional


@dataclass
class ShadowConfig:
    """Shadow cone parameters."""
    earth_radius_km: float = 6371.0  # Mean Earth radius used for the shadow cones [km]
    use_upper_limb: bool = True  # Sun counts as risen when its upper limb clears the horizon


@dataclass
class AstronomyConfig:
    """Astropy runtime settings."""
    # Use built-in IERS data to avoid network downloads and timeouts
    iers_auto_download: bool = False
    # "error", "warn" or "ignore" when a time falls outside the bundled IERS tables
    iers_degraded_accuracy: str = "warn"


@dataclass
class SiteConfig:
    """Default elevator site."""
    latitude_deg: float = 0.0
    longitude_deg: float = 120.0
    height_km: float = 100_000.0


@dataclass
class Config:
    """Root configuration."""
    shadow: ShadowConfig = field(default_factory=ShadowConfig)
    astronomy: AstronomyConfig = field(default_factory=AstronomyConfig)
    site: SiteConfig = field(default_factory=SiteConfig)


def load_config(path: Optional[Path] = None) -> Config:
    """Load configuration from JSON file or return defaults.

    Args:
        path: Path to config JSON file. If None, returns defaults.

    Returns:
        Configuration object
    """
    if path is None or not path.exists():
        return Config()

    with open(path) as f:
        data = json.load(f)

    # Build config from nested dict
    config = Config()

    if "shadow" in data:
        sh = data["shadow"]
        config.shadow.earth_radius_km = sh.get(
            "earth_radius_km", config.shadow.earth_radius_km
        )
        config.shadow.use_upper_limb = sh.get(
            "use_upper_limb", config.shadow.use_upper_limb
        )

    if "astronomy" in data:
        astro = data["astronomy"]
        config.astronomy.iers_auto_download = astro.get(
            "iers_auto_download", config.astronomy.iers_auto_download
        )
        config.astronomy.iers_degraded_accuracy = astro.get(
            "iers_degraded_accuracy", config.astronomy.iers_degraded_accuracy
        )

    if "site" in data:
        site = data["site"]
        config.site.latitude_deg = site.get("latitude_deg", config.site.latitude_deg)
        config.site.longitude_deg = site.get("longitude_deg", config.site.longitude_deg)
        config.site.height_km = site.get("height_km", config.site.height_km)

    return config


# Default config file path
CONFIG_FILE = Path(__file__).parent.parent / "config.json"

# Global state
_config: Optional[Config] = None


def get_config() -> Config:
    """Get global configuration instance.

    Auto-loads from config.json if it exists.
    """
    global _config

    if _config is None:
        _config = load_config(CONFIG_FILE)

    return _config


def set_config(config: Config) -> None:
    """Set global configuration instance."""
    global _config
    _config = config


def reload_config() -> Config:
    """Force reload configuration from file."""
    global _config
    _config = load_config(CONFIG_FILE)
    return _config
