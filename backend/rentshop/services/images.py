"""
rentshop/services/images.py
Listing image upload to Firebase Storage, with inline `data:` URI fallback.

- Bucket configured: each file goes to `<prefix>/<seller_id>/<millis>_<i>.<ext>`, is made
  public (signed URL if that's refused) and its URL returned.
- No bucket, or any upload error: every image is returned base64-encoded inline instead,
  so the listing can still be saved. Files already uploaded by then are deleted.
"""
from __future__ import annotations

import base64
import logging
import mimetypes
import os
from datetime import timedelta
from typing import List, NamedTuple, Optional

from rentshop.utils.ids import now_millis

logger = logging.getLogger("rentshop.images")

MAX_IMAGES = 5


class ImageUpload(NamedTuple):
    filename: str
    content: bytes
    content_type: Optional[str] = None


def _content_type(img: ImageUpload) -> str:
    return img.content_type or mimetypes.guess_type(img.filename)[0] or "application/octet-stream"


def to_data_uri(img: ImageUpload) -> str:
    encoded = base64.b64encode(img.content).decode("ascii")
    return f"data:{_content_type(img)};base64,{encoded}"


def _upload_one(bucket, path: str, img: ImageUpload, uploaded: list) -> str:
    blob = bucket.blob(path)
    blob.upload_from_string(img.content, content_type=_content_type(img))
    uploaded.append(blob)
    try:
        blob.make_public()
        return blob.public_url
    except Exception:
        return blob.generate_signed_url(expiration=timedelta(days=3650))


def _discard(blobs) -> None:
    # nothing references these once the listing switches to inline images
    for blob in blobs:
        try:
            blob.delete()
        except Exception as exc:
            logger.warning("Could not delete orphaned upload %s: %r", blob.name, exc)


def upload_images(
    images: List[ImageUpload],
    seller_id: str,
    bucket=None,
    prefix: str = "product-images",
) -> List[str]:
    images = [img for img in images if img and img.content][:MAX_IMAGES]
    if bucket is None:
        logger.info("Storage not configured, inlining %d images", len(images))
        return [to_data_uri(img) for img in images]

    stamp = now_millis()
    uploaded: list = []
    try:
        urls = []
        for i, img in enumerate(images):
            ext = os.path.splitext(img.filename)[1].lstrip(".") or "jpg"
            urls.append(_upload_one(bucket, f"{prefix}/{seller_id}/{stamp}_{i}.{ext}", img, uploaded))
        return urls
    except Exception as exc:
        logger.warning("Image upload failed, falling back to inline images: %r", exc)
        _discard(uploaded)
        return [to_data_uri(img) for img in images]
