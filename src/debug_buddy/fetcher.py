"""GitHub blob URL resolution and raw-content fetching."""

import logging
import re
from pathlib import PurePosixPath
from typing import Optional

import httpx

from debug_buddy.models import ResolvedFileRef

logger = logging.getLogger(__name__)

_BLOB_URL = re.compile(r"https://github\.com/([^/]+)/([^/]+)/blob/([^/]+)/(.+)")


def parse_blob_url(url: str) -> Optional[ResolvedFileRef]:
    """Find ``https://github.com/<owner>/<repo>/blob/<branch>/<path>`` in ``url``.

    The blob URL may sit anywhere in the string; everything after it on
    the same line is taken as the path. Returns None when there is none.
    """
    match = _BLOB_URL.search(url.strip())
    if not match:
        return None
    owner, repo, branch, path = match.groups()
    return ResolvedFileRef(
        owner=owner,
        repo=repo,
        branch=branch,
        path=path,
        file_name=PurePosixPath(path).name,
    )


def build_raw_url(ref: ResolvedFileRef) -> str:
    return ref.raw_url


class GitHubFileFetcher:
    """Fetches single files from raw.githubusercontent.com.

    One GET per call, no retries. The timeout is httpx's default unless
    one is passed in.
    """

    def __init__(
        self, token: Optional[str] = None, timeout: Optional[float] = None
    ) -> None:
        self.token = token
        self.timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def headers(self) -> dict[str, str]:
        h: dict[str, str] = {"Accept": "text/plain, */*"}
        if self.token:
            h["Authorization"] = f"Bearer {self.token}"
        return h

    async def _client_instance(self) -> httpx.AsyncClient:
        if self._client is None:
            if self.timeout is None:
                self._client = httpx.AsyncClient(
                    headers=self.headers, follow_redirects=True
                )
            else:
                self._client = httpx.AsyncClient(
                    headers=self.headers, follow_redirects=True, timeout=self.timeout
                )
        return self._client

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def fetch_raw_content(self, ref: ResolvedFileRef) -> Optional[str]:
        """Return the file body as text, or None on any transport/HTTP/decoding failure."""
        url = build_raw_url(ref)
        client = await self._client_instance()
        try:
            resp = await client.get(url)
        except httpx.HTTPError as exc:
            logger.warning("Fetching %s failed: %s", url, exc)
            return None
        if not resp.is_success:
            logger.warning("Fetching %s returned HTTP %s", url, resp.status_code)
            return None
        try:
            return resp.content.decode("utf-8")
        except UnicodeDecodeError:
            logger.warning("Content at %s is not valid UTF-8", url)
            return None
