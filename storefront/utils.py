# Filename: storefront/utils.py
# Shared helpers:
#  - logging setup for the whole package
#  - data URL helpers for generated images
#  - download a remote image (when the image API answers with a URL instead of base64)

import base64
import logging
from typing import Optional

import requests
from decouple import config

LOG_LEVEL = config("LOG_LEVEL", default="INFO")
PUBLIC_BASE_URL = config("PUBLIC_BASE_URL", default="")
DOWNLOAD_TIMEOUT = config("DOWNLOAD_TIMEOUT", cast=int, default=20)

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)


def bytes_to_data_url(data: bytes, mime: str = "image/png") -> str:
    b64 = base64.b64encode(data).decode("utf-8")
    return f"data:{mime};base64,{b64}"


def b64_to_data_url(b64: str, mime: str = "image/png") -> str:
    return f"data:{mime};base64,{b64}"


def download_image_as_data_url(url: str, timeout: Optional[int] = None) -> str:
    """Fetch a remote image and embed it; the content type decides the MIME, PNG if missing."""
    resp = requests.get(url, timeout=timeout or DOWNLOAD_TIMEOUT)
    resp.raise_for_status()
    mime = (resp.headers.get("Content-Type") or "image/png").split(";")[0].strip()
    logger.info(f"Downloaded {len(resp.content)} bytes from image URL ({mime})")
    return bytes_to_data_url(resp.content, mime)


def public_url(filename: str, folder: str = "public") -> Optional[str]:
    return f"{PUBLIC_BASE_URL}/{folder}/{filename}" if PUBLIC_BASE_URL else None
