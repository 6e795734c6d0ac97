from dataclasses import dataclass
from typing import Optional

import httpx

from sitecheck.core.config import ScanConfig
from sitecheck.core.errors import TransportFailure
from sitecheck.core.models import Report

_HEADERS = {
    "Connection": "keep-alive",
    "Accept": "application/json",
    "Accept-Language": "en-US,en",
    "User-Agent": "Mozilla/5.0 (KHTML, like Gecko) Safari/537.36",
}


@dataclass
class ScanResult:
    """Raw API body plus the decoded report (None in export mode)."""
    raw: bytes
    report: Optional[Report] = None


class SiteCheckClient:
    def __init__(self, config: ScanConfig, logger=None, transport: Optional[httpx.BaseTransport] = None):
        self.name = "SiteCheck"
        self.version = "1.0.0"
        self.config = config
        self.logger = logger
        self.client = httpx.Client(
            headers=_HEADERS, follow_redirects=True,
            timeout=config.timeout, transport=transport)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def close(self):
        self.client.close()

    def fetch(self) -> bytes:
        url = self.config.url
        if self.logger:
            self.logger.info(f"Scanning {self.config.domain}")
            self.logger.debug(f"{self.name} {self.version} → GET {url}")
        try:
            resp = self.client.get(url)
        except httpx.HTTPError as e:
            raise TransportFailure(f"request to {url} failed: {e}") from e

        if self.logger:
            self.logger.debug(f"← HTTP {resp.status_code} ({len(resp.content)} bytes)")
        if resp.status_code >= 400:
            raise TransportFailure(
                f"{url} answered HTTP {resp.status_code}", status_code=resp.status_code)
        return resp.content

    def scan(self) -> ScanResult:
        raw = self.fetch()
        if self.config.export:
            return ScanResult(raw=raw)
        return ScanResult(raw=raw, report=Report.from_json(raw))
