"""
Transport and configuration

Tests for:
- Endpoint URL selection (cached vs fresh scan)
- Request headers
- Transport failures
- Export mode bypassing the decoder
"""

import argparse

import httpx
import pytest

from sitecheck.core.client import SiteCheckClient
from sitecheck.core.config import ScanConfig
from sitecheck.core.errors import MalformedResponse, TransportFailure


def make_client(config, handler):
    return SiteCheckClient(config, transport=httpx.MockTransport(handler))


class TestScanConfig:
    """Endpoint construction."""

    def test_fresh_scan_url(self):
        config = ScanConfig(domain="example.com")
        assert config.url == "https://sitecheck.sucuri.net/api/v2/?json&clear&scan=example.com"

    def test_cached_scan_url(self):
        config = ScanConfig(domain="example.com", use_cache=True)
        assert config.url == "https://sitecheck.sucuri.net/api/v2/?json&scan=example.com"

    def test_custom_service(self):
        config = ScanConfig(domain="a.test", service="http://localhost:8000/")
        assert config.url.startswith("http://localhost:8000/api/v2/?json&clear")

    def test_from_args(self):
        args = argparse.Namespace(
            domain="example.com", cache=True, export=False,
            timeout=5.0, no_color=True, sort_links=True)
        config = ScanConfig.from_args(args)

        assert config.use_cache
        assert not config.export
        assert config.timeout == 5.0
        assert not config.color
        assert config.sort_links


class TestSiteCheckClient:
    """HTTP exchange with a mocked API."""

    def test_request_shape(self, sample_bytes):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, content=sample_bytes)

        with make_client(ScanConfig(domain="example.com"), handler) as client:
            client.fetch()

        request = seen[0]
        assert request.method == "GET"
        assert "clear" in str(request.url)
        assert "scan=example.com" in str(request.url)
        assert request.headers["Accept"] == "application/json"
        assert "Mozilla" in request.headers["User-Agent"]

    def test_cached_request_omits_clear(self, sample_bytes):
        seen = []

        def handler(request):
            seen.append(str(request.url))
            return httpx.Response(200, content=sample_bytes)

        with make_client(ScanConfig(domain="example.com", use_cache=True), handler) as client:
            client.fetch()

        assert "clear" not in seen[0]

    def test_scan_decodes_report(self, sample_bytes):
        handler = lambda request: httpx.Response(200, content=sample_bytes)

        with make_client(ScanConfig(domain="example.com"), handler) as client:
            result = client.scan()

        assert result.raw == sample_bytes
        assert result.report.target_domains == ("example.com",)

    def test_export_skips_decoding(self):
        handler = lambda request: httpx.Response(200, content=b"not json")

        with make_client(ScanConfig(domain="example.com", export=True), handler) as client:
            result = client.scan()

        assert result.raw == b"not json"
        assert result.report is None

    def test_malformed_body_keeps_raw(self):
        handler = lambda request: httpx.Response(200, content=b'{"SCAN": ')

        with make_client(ScanConfig(domain="example.com"), handler) as client:
            with pytest.raises(MalformedResponse) as exc:
                client.scan()

        assert exc.value.raw == b'{"SCAN": '

    def test_http_error_status(self):
        handler = lambda request: httpx.Response(503, content=b"busy")

        with make_client(ScanConfig(domain="example.com"), handler) as client:
            with pytest.raises(TransportFailure) as exc:
                client.fetch()

        assert exc.value.status_code == 503

    def test_network_error_is_wrapped(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with make_client(ScanConfig(domain="example.com"), handler) as client:
            with pytest.raises(TransportFailure) as exc:
                client.fetch()

        assert isinstance(exc.value.__cause__, httpx.ConnectError)
        assert exc.value.status_code is None
