# =============================================================================
# core/services/storage_service.py - Image Blob Storage
# =============================================================================
# Handles persisting uploaded images and handing back a reference that is
# stored on the Brand / Car document:
# - LocalBlobStore: writes under STORAGE_ROOT, reference "/storage/<resource>/<file>"
# - DriveBlobStore: uploads to a Google Drive folder, reference is the
#   Drive share link (rewritten to a CDN URL when served, see lib/utils.py)
# =============================================================================

import io
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path, PurePath

from app.config import settings
from app.exceptions import FileTooLargeError, InvalidFileTypeError, StorageUploadError

logger = logging.getLogger(__name__)

# Resource folders created at startup
RESOURCES = ("brands", "cars")

DRIVE_SCOPES = ["https://www.googleapis.com/auth/drive"]


@dataclass(frozen=True)
class ImageUpload:
    """An uploaded file, fully read into memory."""
    filename: str
    content: bytes
    content_type: str | None = None

    @property
    def extension(self) -> str:
        return PurePath(self.filename).suffix.lower()


def validate_images(images: list[ImageUpload]) -> None:
    """
    Check every upload against the allowed extensions and size limit.

    Raises:
        InvalidFileTypeError: If an extension is not allowed
        FileTooLargeError: If a file exceeds MAX_UPLOAD_SIZE_MB
    """
    allowed = settings.allowed_extensions_list
    for image in images:
        if image.extension not in allowed:
            raise InvalidFileTypeError(image.filename, allowed)
        if len(image.content) > settings.max_upload_size_bytes:
            raise FileTooLargeError(
                len(image.content) / (1024 * 1024),
                settings.MAX_UPLOAD_SIZE_MB,
            )


class BlobStore(ABC):
    """Where uploaded image bytes live."""

    @abstractmethod
    def save(self, resource: str, filename: str, image: ImageUpload) -> str:
        """
        Persist an image under a resource folder.

        Args:
            resource: "brands" or "cars"
            filename: Name to store the file under
            image: The uploaded file

        Returns:
            Reference to store on the document

        Raises:
            StorageUploadError: If the write fails
        """

    @abstractmethod
    def check(self) -> None:
        """Raise if the store is not usable."""


class LocalBlobStore(BlobStore):
    """
    Stores images on local disk.

    The root directory is mounted by the app at `url_prefix`, so the
    returned reference can be fetched directly by clients.
    """

    def __init__(self, root: Path | str, url_prefix: str = "/storage"):
        self.root = Path(root)
        self.url_prefix = url_prefix.rstrip("/")

    def ensure_directories(self) -> None:
        """Create the root and one folder per resource."""
        for resource in RESOURCES:
            (self.root / resource).mkdir(parents=True, exist_ok=True)
        logger.info(f"Local blob storage ready at {self.root.resolve()}")

    def save(self, resource: str, filename: str, image: ImageUpload) -> str:
        # Never let a client-supplied name escape the resource folder
        name = PurePath(filename).name
        target = self.root / resource / name

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(image.content)
        except OSError as e:
            logger.error(f"Local storage write failed: {e}")
            raise StorageUploadError(str(e))

        logger.info(f"Stored image: {target}")
        return f"{self.url_prefix}/{resource}/{name}"

    def check(self) -> None:
        if not self.root.is_dir():
            raise StorageUploadError(f"storage root missing: {self.root}")


class DriveBlobStore(BlobStore):
    """
    Stores images in a Google Drive folder using a service account.

    Returns Drive share links; the file id inside is what the CDN rewrite
    picks up when documents are served.
    """

    def __init__(self, credentials_file: str, folder_id: str):
        self.credentials_file = credentials_file
        self.folder_id = folder_id
        self._service = None

    @property
    def service(self):
        if self._service is None:
            from google.oauth2 import service_account
            from googleapiclient.discovery import build

            credentials = service_account.Credentials.from_service_account_file(
                self.credentials_file,
                scopes=DRIVE_SCOPES,
            )
            self._service = build("drive", "v3", credentials=credentials, cache_discovery=False)
            logger.info("Google Drive client initialized")
        return self._service

    def save(self, resource: str, filename: str, image: ImageUpload) -> str:
        from googleapiclient.http import MediaIoBaseUpload

        media = MediaIoBaseUpload(
            io.BytesIO(image.content),
            mimetype=image.content_type or "image/jpeg",
            resumable=False,
        )

        try:
            created = (
                self.service.files()
                .create(
                    body={"name": f"{resource}-{filename}", "parents": [self.folder_id]},
                    media_body=media,
                    fields="id, webViewLink",
                )
                .execute()
            )
        except Exception as e:
            logger.error(f"Drive upload failed: {e}")
            raise StorageUploadError(str(e))

        logger.info(f"Uploaded image to Drive: {created['id']}")
        return f"https://drive.google.com/file/d/{created['id']}/view"

    def check(self) -> None:
        self.service.files().get(fileId=self.folder_id, fields="id").execute()


def build_blob_store() -> BlobStore:
    """Create the blob store selected by STORAGE_BACKEND."""
    if settings.STORAGE_BACKEND == "drive":
        return DriveBlobStore(
            credentials_file=settings.GOOGLE_CREDENTIALS_FILE,
            folder_id=settings.DRIVE_FOLDER_ID,
        )
    return LocalBlobStore(settings.storage_root_path)
