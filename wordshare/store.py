"""Gist-backed document store.

The whole dataset lives in a single file of a GitHub Gist. Reads fetch the
gist and parse the file content; writes replace the file content wholesale.
There is no merge, retry or version check: concurrent writers race and the
last PATCH wins.
"""
from __future__ import annotations
import json
import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from .schemas import Dataset

logger = logging.getLogger(__name__)


class GistStore:
    def __init__(
        self,
        gist_id: str,
        token: str,
        filename: str,
        api_url: str = 'https://api.github.com',
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.gist_id = gist_id
        self.filename = filename
        self.url = f"{api_url.rstrip('/')}/gists/{gist_id}"
        self._headers = {
            'Authorization': f'token {token}',
            'Accept': 'application/vnd.github.v3+json',
        }
        self._client = client or httpx.AsyncClient()

    async def read(self) -> Optional[Dataset]:
        """Fetch and parse the dataset, or ``None`` when it cannot be had."""
        try:
            response = await self._client.get(self.url, headers=self._headers)
        except httpx.HTTPError as exc:
            logger.error("Gist read failed: %s", exc)
            return None

        if not response.is_success:
            logger.error("GitHub API error: %s %s", response.status_code, response.reason_phrase)
            logger.error("Error details: %s", response.text)
            return None

        try:
            gist = response.json()
        except ValueError:
            logger.error("Gist response is not JSON: %s", response.text[:200])
            return None

        files = gist.get('files') if isinstance(gist, dict) else None
        if not files:
            logger.error("Gist response has no files: %s", gist)
            return None

        entry = files.get(self.filename)
        if not entry:
            logger.error('File "%s" not found in gist. Available files: %s', self.filename, list(files))
            return None

        content = entry.get('content')
        if not content:
            return None

        try:
            return Dataset.model_validate_json(content)
        except ValidationError as exc:
            logger.error('File "%s" does not hold a valid dataset: %s', self.filename, exc)
            return None

    async def write(self, dataset: Dataset) -> bool:
        """Overwrite the gist file with ``dataset``. Failures are logged, not raised."""
        content = json.dumps(dataset.model_dump(mode='json'), indent=2, ensure_ascii=False)
        body = {'files': {self.filename: {'content': content}}}
        try:
            response = await self._client.patch(self.url, headers=self._headers, json=body)
        except httpx.HTTPError as exc:
            logger.error("Gist write failed: %s", exc)
            return False
        if not response.is_success:
            logger.error("Gist write rejected: %s %s", response.status_code, response.text)
            return False
        return True

    async def aclose(self):
        await self._client.aclose()
