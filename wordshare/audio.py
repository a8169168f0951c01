from __future__ import annotations
import io
import logging
from typing import Optional

import cloudinary
import cloudinary.exceptions
import cloudinary.uploader
from starlette.concurrency import run_in_threadpool

from .config import settings

logger = logging.getLogger(__name__)

MAX_AUDIO_BYTES = 1 * 1024 * 1024
TARGET_FORMAT = 'mp3'


class AudioUploadError(Exception):
    pass


class AudioUploader:
    """Pushes recorded pronunciations to Cloudinary and hands back a playable URL."""

    def __init__(
        self,
        cloud_name: Optional[str] = None,
        api_key: Optional[str] = None,
        api_secret: Optional[str] = None,
        folder: str = 'untranslatable',
    ):
        self.folder = folder
        cloudinary.config(cloud_name=cloud_name, api_key=api_key, api_secret=api_secret)

    def _upload(self, data: bytes, filename: Optional[str]) -> dict:
        stream = io.BytesIO(data)
        stream.name = filename or 'pronunciation'
        # Cloudinary files audio under the 'video' resource type
        return cloudinary.uploader.upload(
            stream,
            resource_type='video',
            folder=self.folder,
            format=TARGET_FORMAT,
        )

    async def upload(self, data: bytes, filename: Optional[str] = None) -> str:
        try:
            result = await run_in_threadpool(self._upload, data, filename)
        except cloudinary.exceptions.Error as exc:
            logger.error("Audio upload failed: %s", exc)
            raise AudioUploadError(str(exc)) from exc
        url = result.get('secure_url') if isinstance(result, dict) else None
        if not url:
            logger.error("Audio upload returned no URL: %s", result)
            raise AudioUploadError('no secure_url in upload result')
        return url


# Singleton instance
uploader = AudioUploader(
    cloud_name=settings.cloudinary_cloud_name,
    api_key=settings.cloudinary_api_key,
    api_secret=settings.cloudinary_api_secret,
    folder=settings.audio_folder,
)
