"""Configuration management for stepdoc."""

import tomllib
from pathlib import Path

import tomli_w
from pydantic import BaseModel, Field

from .export import ExportFormat, ThemeName
from .storage import FileProjectStore

STEPDOC_DIR = ".stepdoc"
CONFIG_FILE = "config.toml"


class ExportConfig(BaseModel):
    """Defaults for the export command."""

    format: ExportFormat = Field(default=ExportFormat.HTML, description="Default export format")
    theme: ThemeName = Field(default=ThemeName.DARK, description="Default HTML theme")
    output_dir: str = Field(default=".", description="Directory for exported files")


class StorageConfig(BaseModel):
    """Where saved projects live."""

    # Relative paths are resolved against the .stepdoc directory
    root: str = "."


class StepsConfig(BaseModel):
    """Defaults for newly created steps."""

    code_language: str = "javascript"


class StepdocConfig(BaseModel):
    """Root configuration for stepdoc."""

    export: ExportConfig = Field(default_factory=ExportConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    steps: StepsConfig = Field(default_factory=StepsConfig)

    def storage_root(self, stepdoc_dir: Path) -> Path:
        """Resolve the storage root against the .stepdoc directory."""
        root = Path(self.storage.root).expanduser()
        return root if root.is_absolute() else stepdoc_dir / root

    def project_store(self, stepdoc_dir: Path) -> FileProjectStore:
        return FileProjectStore(self.storage_root(stepdoc_dir))


def get_stepdoc_dir(base: Path | None = None) -> Path:
    """Get the .stepdoc directory under ``base`` (default: cwd)."""
    return (base or Path.cwd()) / STEPDOC_DIR


def load_config(stepdoc_dir: Path) -> StepdocConfig:
    """Load config from .stepdoc/config.toml.

    Args:
        stepdoc_dir: Path to .stepdoc directory

    Returns:
        Loaded configuration, or defaults if config.toml doesn't exist
    """
    config_path = stepdoc_dir / CONFIG_FILE
    if not config_path.exists():
        return StepdocConfig()
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return StepdocConfig.model_validate(data)


def write_config_template(stepdoc_dir: Path) -> Path:
    """Write default config.toml template.

    Args:
        stepdoc_dir: Path to .stepdoc directory

    Returns:
        Path to the written config file
    """
    config_path = stepdoc_dir / CONFIG_FILE
    template = {
        "export": {"format": "html", "theme": "dark", "output_dir": "."},
        "storage": {"root": "."},
        "steps": {"code_language": "javascript"},
    }
    with open(config_path, "wb") as f:
        tomli_w.dump(template, f)
    return config_path
