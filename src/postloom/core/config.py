import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from postloom.core.exceptions import ConfigError

CONFIG_FILENAME = ".postloom.toml"


def _deep_merge(destination: dict[str, Any], source: dict[str, Any]) -> dict[str, Any]:
    """Merge source into destination, with source values overwriting."""
    for key, value in source.items():
        if isinstance(value, Mapping) and key in destination and isinstance(destination[key], Mapping):
            destination[key] = _deep_merge(dict(destination.get(key, {})), dict(value))
        else:
            destination[key] = value
    return destination


class SiteSettings(BaseModel):
    """Site-wide metadata and listing sizes."""

    title: str = Field(default="My blog", description="Site title")
    description: str = Field(default="", description="Site description used by the feed and manifest")
    url: str = Field(default="http://localhost", description="Canonical site URL")
    page_size: int = Field(default=10, ge=1, description="Posts per archive page")
    home_page_size: int = Field(default=10, ge=1, description="Posts shown on the home page")
    feed_size: int = Field(default=10, ge=1, description="Posts included in the RSS feed")
    include_future: bool = Field(default=True, description="Publish posts dated in the future")
    strict_slugs: bool = Field(default=True, description="Fail the build on duplicate slugs")


class PathsSettings(BaseModel):
    """Path configuration.

    All paths are relative to 'site_root' unless absolute.
    site_root defaults to current working directory.
    """

    site_root: Path = Field(
        default_factory=Path.cwd,
        description="Root directory of the site (defaults to current working directory)",
    )
    content_dir: Path = Field(default=Path("content/posts"), description="Posts directory")
    output_dir: Path = Field(default=Path("dist"), description="Build output directory")

    @property
    def abs_content_dir(self) -> Path:
        return self.resolve(self.content_dir)

    @property
    def abs_output_dir(self) -> Path:
        return self.resolve(self.output_dir)

    def resolve(self, path: Path) -> Path:
        if path.is_absolute():
            return path
        return self.site_root / path


class CardSettings(BaseModel):
    """Social card layout, colours and assets.

    An empty font path selects the scalable font bundled with Pillow.
    Icons and the logo are required.
    """

    width: int = 1200
    height: int = 600
    background_color: str = "#f3f3f9"
    panel_color: str = "#ffffff"
    border_color: str = "#2d3452"
    text_color: str = "#051923"

    title_font: Path | None = Field(default=Path("assets/Montserrat-Bold.ttf"))
    title_font_size: int = 53
    body_font: Path | None = Field(default=Path("assets/Roboto-Regular.ttf"))
    body_font_size: int = 33

    calendar_icon: Path = Path("assets/calendar-outline.png")
    stopwatch_icon: Path = Path("assets/stopwatch.png")
    tag_icon: Path = Path("assets/tag.png")
    logo: Path = Path("assets/logo-square.png")

    @field_validator("title_font", "body_font", mode="before")
    @classmethod
    def _blank_font_is_bundled(cls, value: Any) -> Any:
        return None if value == "" else value


class ManifestSettings(BaseModel):
    """Web app manifest and favicon settings."""

    background_color: str = "#FFFFFF"
    theme_color: str = "#3E84CB"
    display: str = "standalone"
    icon_sizes: list[int] = Field(default_factory=lambda: [48, 72, 96, 144, 192, 256, 384, 512])
    icon: Path | None = Field(default=None, description="Square PNG the favicons are resized from")


class BuildSettings(BaseModel):
    max_workers: int = Field(default=4, ge=1, description="Threads used to render social cards")


class PostloomConfig(BaseSettings):
    """Root configuration for postloom.

    Supports environment variable overrides with the pattern:
    POSTLOOM_SECTION__KEY (e.g., POSTLOOM_SITE__PAGE_SIZE)
    """

    site: SiteSettings = Field(default_factory=SiteSettings)
    paths: PathsSettings = Field(default_factory=PathsSettings)
    card: CardSettings = Field(default_factory=CardSettings)
    manifest: ManifestSettings = Field(default_factory=ManifestSettings)
    build: BuildSettings = Field(default_factory=BuildSettings)

    model_config = SettingsConfigDict(
        extra="ignore",
        env_prefix="POSTLOOM_",
        env_nested_delimiter="__",
    )

    def resolve(self, path: Path) -> Path:
        """Resolve a configured path against the site root."""
        return self.paths.resolve(path)

    @classmethod
    def load(cls, site_root: Path | None = None) -> "PostloomConfig":
        """Loads configuration from .postloom.toml and environment variables.

        Priority (highest to lowest):
        1. Environment variables (POSTLOOM_SECTION__KEY)
        2. Config file (.postloom.toml)
        3. Defaults
        """
        root_path = site_root if site_root is not None else Path.cwd()
        config_file = root_path / CONFIG_FILENAME

        file_settings: dict[str, Any] = {}
        if config_file.is_file():
            try:
                with config_file.open("rb") as f:
                    file_settings = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                msg = f"Invalid {CONFIG_FILENAME}: {e}"
                raise ConfigError(msg) from e

        try:
            env_settings = cls().model_dump(exclude_unset=True)
            merged_config = _deep_merge(file_settings, env_settings)
            merged_config.setdefault("paths", {})["site_root"] = root_path
            return cls.model_validate(merged_config)
        except ValidationError as e:
            msg = f"Invalid configuration: {e}"
            raise ConfigError(msg) from e
