"""
Local-disk storage for interview screenshots.

Files land in UPLOAD_DIR/screenshots and are served by the /uploads static
mount; the database only keeps the public reference path.
"""
import logging
import time
import uuid
from pathlib import Path
from typing import List, Optional

from fastapi import UploadFile

from interview_capture.core import config

logger = logging.getLogger(__name__)

SCREENSHOT_SUBDIR = "screenshots"


def screenshot_dir() -> Path:
    return Path(config.UPLOAD_DIR) / SCREENSHOT_SUBDIR


def build_screenshot_filename(original_name: Optional[str], now_ms: Optional[int] = None, token: Optional[str] = None) -> str:
    """
    `{epoch_ms}-{random}-{basename}`.

    Unique in practice, not guaranteed: two uploads of the same name in the
    same millisecond only differ by the 6-char random token.
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    if token is None:
        token = uuid.uuid4().hex[:6]
    basename = Path(original_name or "").name or "screenshot"
    return f"{now_ms}-{token}-{basename}"


def screenshot_url(filename: str) -> str:
    return f"{config.UPLOAD_URL_PREFIX}/{SCREENSHOT_SUBDIR}/{filename}"


async def save_screenshots(files: Optional[List[UploadFile]]) -> List[str]:
    """
    Persist uploaded screenshots and return their reference URLs in upload order.

    Empty uploads (size 0) are skipped. Write errors propagate.
    """
    urls = []
    if not files:
        return urls

    target_dir = screenshot_dir()
    target_dir.mkdir(parents=True, exist_ok=True)

    for file in files:
        content = await file.read()
        if not content:
            continue

        filename = build_screenshot_filename(file.filename)
        with open(target_dir / filename, "wb") as f:
            f.write(content)

        urls.append(screenshot_url(filename))
        logger.debug(f"Screenshot stored: {filename} ({len(content)} bytes)")

    return urls
