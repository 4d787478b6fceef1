"""Upload configuration settings.

Where attached show images are written and how they are exposed.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from shows_api.settings.base import get_project_root


class UploadSettings(BaseSettings):
    """Image upload configuration.

    Attributes:
        directory: Filesystem directory receiving uploaded images.
        url_prefix: Public path prefix stored in ``Show.image``.
        max_bytes: Largest accepted upload.
        allowed_extensions_raw: Comma-separated accepted extensions.
    """

    directory: Path = Field(default=get_project_root() / "uploads", alias="UPLOAD_DIR")
    url_prefix: str = Field(default="/uploads", alias="UPLOAD_URL_PREFIX")
    max_bytes: int = Field(default=16 * 1024 * 1024, gt=0, alias="UPLOAD_MAX_BYTES")
    allowed_extensions_raw: str = Field(
        default="jpeg,jpg,png",
        alias="UPLOAD_ALLOWED_EXTENSIONS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("url_prefix")
    @classmethod
    def normalize_url_prefix(cls, v: str) -> str:
        """Keep a single leading slash and no trailing slash."""
        return "/" + v.strip("/")

    @property
    def allowed_extensions(self) -> frozenset[str]:
        """Lower-cased extensions without the leading dot."""
        return frozenset(
            ext.strip().lower().lstrip(".")
            for ext in self.allowed_extensions_raw.split(",")
            if ext.strip()
        )
