# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Small pure helpers used across the application:
# - id normalization
# - slug derivation
# - image reference rewriting (Drive file id -> public CDN URL)
# =============================================================================

import re
from uuid import UUID

from slugify import slugify

DEFAULT_CDN_HOST = "lh3.googleusercontent.com"

# Drive share links look like https://drive.google.com/file/d/<fileId>/view
_BLOB_ID_PATTERN = re.compile(r"/d/([a-zA-Z0-9_-]+)/")


# =============================================================================
# UUID Utilities
# =============================================================================

def normalize_uuid(value: str | UUID) -> str:
    """
    Normalize a UUID to string format.

    Example:
        brand_id = normalize_uuid(uuid_obj)  # "550e8400-..."
        brand_id = normalize_uuid("550e8400-...")  # "550e8400-..."
    """
    return str(value) if isinstance(value, UUID) else value


def is_uuid(value: str) -> bool:
    """Check whether a string parses as a UUID."""
    try:
        UUID(str(value))
    except ValueError:
        return False
    return True


# =============================================================================
# Slugs
# =============================================================================

def make_slug(name: str) -> str:
    """
    Derive a URL-safe, lowercase, hyphenated slug from a display name.

    Example:
        make_slug("Mercedes-Benz C 200")  # "mercedes-benz-c-200"
    """
    return slugify(name)


# =============================================================================
# Image URL Rewriting
# =============================================================================

def extract_blob_id(url: str | None) -> str | None:
    """
    Pull the external file id out of a stored image reference.

    Returns None for references that are not Drive-style links, such as
    local paths like "/storage/brands/audi.png".
    """
    if not url:
        return None
    match = _BLOB_ID_PATTERN.search(url)
    return match.group(1) if match else None


def to_public_url(blob_id: str, host: str = DEFAULT_CDN_HOST) -> str:
    """Render the public, embeddable image URL for an external file id."""
    return f"https://{host}/d/{blob_id}=w1000?authuser=0"


def rewrite_image_url(url: str | None, host: str = DEFAULT_CDN_HOST) -> str | None:
    """Rewrite a stored reference to its public URL, or return it unchanged."""
    blob_id = extract_blob_id(url)
    return to_public_url(blob_id, host) if blob_id else url
