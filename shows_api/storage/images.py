"""Image storage for show uploads.

Checks uploaded files against the allowed extensions and size limit and
writes accepted ones to the upload directory under a collision-resistant
name. The returned public path is stored verbatim in ``Show.image``.
"""

import secrets
import time
from dataclasses import dataclass
from pathlib import Path

from starlette.concurrency import run_in_threadpool
from werkzeug.utils import secure_filename

from shows_api.errors import FieldError
from shows_api.settings import UploadSettings
from shows_api.utils.logger import setup_logger

logger = setup_logger("shows_api.storage.images")

_TOKEN_BYTES = 8

# =============================================================================
# DATA STRUCTURES
# =============================================================================


@dataclass(frozen=True)
class ImageUpload:
    """A file attached to a create or update request.

    Attributes:
        filename: Client-side filename.
        content: Raw file bytes.
        content_type: Declared MIME type, informational only.
    """

    filename: str
    content: bytes
    content_type: str | None = None

    @property
    def extension(self) -> str:
        """Lower-cased extension without the leading dot."""
        return Path(self.filename).suffix.lower().lstrip(".")

    @property
    def size(self) -> int:
        """Size in bytes."""
        return len(self.content)


# =============================================================================
# STORAGE
# =============================================================================


class ImageStorage:
    """Writes show images to a local directory.

    Attributes:
        _directory: Upload directory.
        _url_prefix: Public path prefix of stored images.
        _allowed_extensions: Accepted extensions, lower-case.
        _max_bytes: Largest accepted upload.
    """

    def __init__(
        self,
        directory: Path,
        url_prefix: str = "/uploads",
        allowed_extensions: frozenset[str] = frozenset({"jpeg", "jpg", "png"}),
        max_bytes: int = 16 * 1024 * 1024,
    ) -> None:
        """Initialize image storage.

        Args:
            directory: Upload directory, created if missing.
            url_prefix: Public path prefix of stored images.
            allowed_extensions: Accepted extensions without dots.
            max_bytes: Largest accepted upload.
        """
        self._directory = Path(directory)
        self._url_prefix = "/" + url_prefix.strip("/")
        self._allowed_extensions = frozenset(e.lower() for e in allowed_extensions)
        self._max_bytes = max_bytes
        self._directory.mkdir(parents=True, exist_ok=True)

    @classmethod
    def from_settings(cls, upload_settings: UploadSettings) -> "ImageStorage":
        """Build storage from the uploads settings section."""
        return cls(
            directory=upload_settings.directory,
            url_prefix=upload_settings.url_prefix,
            allowed_extensions=upload_settings.allowed_extensions,
            max_bytes=upload_settings.max_bytes,
        )

    @property
    def directory(self) -> Path:
        """Upload directory."""
        return self._directory

    @property
    def url_prefix(self) -> str:
        """Public path prefix of stored images."""
        return self._url_prefix

    @property
    def max_bytes(self) -> int:
        """Largest accepted upload."""
        return self._max_bytes

    def check(self, upload: ImageUpload) -> FieldError | None:
        """Validate an upload without writing it.

        Args:
            upload: Attached file.

        Returns:
            The failing ``image`` field, or None when the file is accepted.
        """
        if upload.extension not in self._allowed_extensions:
            return FieldError(
                path="image",
                msg=_extensions_message(self._allowed_extensions),
                value=upload.filename,
            )
        if upload.size > self._max_bytes:
            return FieldError(
                path="image",
                msg=f"Image must not exceed {self._max_bytes} bytes",
                value=upload.filename,
            )
        return None

    def build_name(self, filename: str) -> str:
        """Derive the stored filename.

        Upload time in milliseconds plus a random token, followed by the
        sanitized original name.

        Args:
            filename: Client-side filename.

        Returns:
            Name relative to the upload directory.
        """
        original = Path(filename)
        stem = secure_filename(original.stem) or "image"
        millis = int(time.time() * 1000)
        token = secrets.token_hex(_TOKEN_BYTES)
        return f"{millis}-{token}-{stem}{original.suffix.lower()}"

    async def save(self, upload: ImageUpload) -> str:
        """Write an accepted upload to disk.

        Args:
            upload: File previously accepted by ``check``.

        Returns:
            Public path of the stored image (``/uploads/<name>``).
        """
        name = self.build_name(upload.filename)
        path = self._directory / name
        await run_in_threadpool(path.write_bytes, upload.content)
        logger.info(f"Stored image {upload.filename!r} as {name} ({upload.size} bytes)")
        return f"{self._url_prefix}/{name}"


def _extensions_message(extensions: frozenset[str]) -> str:
    """Build the rejection message, e.g. 'Only JPEG, JPG, or PNG images are allowed'."""
    names = [e.upper() for e in sorted(extensions)]
    if len(names) == 1:
        listed = names[0]
    elif len(names) == 2:
        listed = f"{names[0]} or {names[1]}"
    else:
        listed = ", ".join(names[:-1]) + f", or {names[-1]}"
    return f"Only {listed} images are allowed"
