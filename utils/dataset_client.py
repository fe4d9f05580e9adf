from __future__ import annotations

import json
import logging
from typing import Any

import aiohttp

import config

logger = logging.getLogger("temperature_heatmap.dataset_client")


class DatasetClient:
    """Async client for the global temperature JSON resource.

    The caller owns *session* and closes it.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        url: str | None = None,
    ) -> None:
        self._session = session
        self.url = url or config.DATASET_URL

    async def fetch(self) -> dict[str, Any]:
        """
        GET the dataset and return the decoded JSON document.

        Raises aiohttp.ClientResponseError on a non-2xx status and
        UnicodeDecodeError or json.JSONDecodeError if the body is not JSON.  The raw GitHub host
        serves the file as text/plain, so the content type is not checked.
        """
        logger.info("Fetching dataset from %s", self.url)
        async with self._session.get(self.url) as resp:
            resp.raise_for_status()
            body = await resp.text()
        logger.debug("Dataset response: %d bytes", len(body))
        return json.loads(body)
