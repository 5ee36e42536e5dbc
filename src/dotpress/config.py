"""Configuration management for dotpress."""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from dotpress.models.options import PRINTER_WIDTH, ProcessingOptions

logger = logging.getLogger(__name__)


class ProfileLoadResult(BaseModel):
    """Result of loading a profiles directory, including any warnings."""

    profiles: dict[str, ProcessingOptions] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)


class Settings(BaseSettings):
    """Environment-based settings."""

    model_config = SettingsConfigDict(
        env_prefix="DOTPRESS_",
        env_file=".env",
        extra="ignore",
    )

    printer_width: int = PRINTER_WIDTH  # 48 mm head at 8 dots/mm
    profile_file: Path = Path("dotpress.yaml")
    debug: bool = False


def load_profile(profile_path: Path) -> ProcessingOptions:
    """Load processing options from a YAML profile.

    A missing file or empty document gives the default options.
    """
    if not profile_path.exists():
        return ProcessingOptions()

    with open(profile_path) as f:
        data = yaml.safe_load(f) or {}

    # YAML returns None for keys with no value
    if isinstance(data, dict):
        for key in ("tone", "dither"):
            if data.get(key) is None:
                data.pop(key, None)

    return ProcessingOptions.model_validate(data)


def load_profiles(profiles_dir: Path) -> ProfileLoadResult:
    """Load every *.yaml profile in a directory, keyed by file stem.

    Files starting with an underscore are treated as examples and skipped.
    Invalid files are skipped with a warning rather than failing the load.
    """
    result = ProfileLoadResult()

    if not profiles_dir.exists():
        return result

    for profile_file in sorted(profiles_dir.glob("*.yaml")):
        if profile_file.name.startswith("_"):
            continue

        try:
            result.profiles[profile_file.stem] = load_profile(profile_file)
        except Exception as e:
            logger.warning(f"Failed to load profile {profile_file}: {e}")
            result.warnings.append(f"Profile '{profile_file.stem}' skipped: {e}")

    return result


# Global settings instance
settings = Settings()
