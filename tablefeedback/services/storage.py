import os
import uuid
from typing import Optional

from flask import current_app, url_for

from . import tokens

IMAGE_PREFIX = "feedback-images"
ALLOWED_IMAGE_EXTS = {".png", ".jpg", ".jpeg", ".webp", ".gif", ".heic"}


class StorageError(RuntimeError):
    """Upload rejected (bad extension, empty file)."""


def _upload_root() -> str:
    root = current_app.config["UPLOAD_FOLDER"]
    os.makedirs(os.path.join(root, IMAGE_PREFIX), exist_ok=True)
    return root


def save_image(fs) -> Optional[str]:
    """
    Persist an uploaded photo and return its storage path ("feedback-images/<uuid>.<ext>").
    Returns None when no file was sent; raises StorageError for disallowed files.
    """
    if fs is None or not getattr(fs, "filename", None):
        return None
    ext = os.path.splitext(fs.filename)[1].lower()
    if ext not in ALLOWED_IMAGE_EXTS:
        raise StorageError(f"image: unsupported file type {ext or '(none)'}")

    rel_path = f"{IMAGE_PREFIX}/{uuid.uuid4().hex}{ext}"
    fs.save(os.path.join(_upload_root(), rel_path))
    return rel_path


def signed_image_url(path: Optional[str]) -> Optional[str]:
    """Time-limited URL for a stored image (IMAGE_URL_TTL_SECONDS)."""
    if not path:
        return None
    return url_for("dashboard.image", token=tokens.generate("image", path))


def resolve_image_token(token: str) -> Optional[str]:
    """Storage path for a valid, unexpired image token; None otherwise."""
    ttl = int(current_app.config.get("IMAGE_URL_TTL_SECONDS", 3600))
    path = tokens.verify("image", token, max_age_seconds=ttl)
    if not path or not path.startswith(f"{IMAGE_PREFIX}/") or ".." in path:
        return None
    return path


def delete_image(path: Optional[str]) -> None:
    """Remove a stored photo; missing files are ignored."""
    if not path:
        return
    full = os.path.join(current_app.config["UPLOAD_FOLDER"], path)
    if os.path.isfile(full):
        os.remove(full)
