"""
Unit tests for model bundle loaders.

The HTTP loader runs against httpx.MockTransport, no network involved.
"""

from pathlib import Path

import httpx
import pytest

from bounce_classifier.exceptions import MalformedModelError, ModelLoadError
from bounce_classifier.loaders import (
    FileSystemModelLoader,
    HttpModelLoader,
    resolve_loader,
)

BASE_URL = "https://models.example.com/bounce/v1"


def _serve_directory(directory: Path, status_overrides: dict[str, int] | None = None):
    """MockTransport handler serving bundle files by their last path segment."""
    requested: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        name = request.url.path.rsplit("/", 1)[-1]
        requested.append(request.url.path)
        if status_overrides and name in status_overrides:
            return httpx.Response(status_overrides[name])
        path = directory / name
        if not path.is_file():
            return httpx.Response(404)
        return httpx.Response(200, content=path.read_bytes())

    return handler, requested


class TestResolveLoader:
    """Test loader selection by location."""

    def test_directory(self, tmp_path):
        loader = resolve_loader(tmp_path)
        assert isinstance(loader, FileSystemModelLoader)
        assert loader.location == str(tmp_path)

    @pytest.mark.parametrize("url", ["http://localhost:8080/model", "https://cdn.example.com/m/"])
    def test_urls(self, url):
        loader = resolve_loader(url, timeout=3.0)
        assert isinstance(loader, HttpModelLoader)
        assert loader.timeout == 3.0
        assert not loader.location.endswith("/")


class TestFileSystemModelLoader:
    """Test loading from a local directory."""

    @pytest.mark.asyncio
    async def test_load_bundle(self, bundle_dir, bundle_vocab, bundle_labels):
        bundle = await FileSystemModelLoader(bundle_dir).load_bundle()

        assert len(bundle.vocabulary) == len(bundle_vocab)
        assert bundle.labels == tuple(bundle_labels)

    @pytest.mark.asyncio
    async def test_missing_directory(self, tmp_path):
        loader = FileSystemModelLoader(tmp_path / "nowhere")

        with pytest.raises(ModelLoadError) as exc_info:
            await loader.load_bundle()
        assert exc_info.value.source == str(tmp_path / "nowhere" / "vocab.json")

    @pytest.mark.asyncio
    async def test_invalid_json(self, bundle_dir):
        (bundle_dir / "labels.json").write_text("{not json", encoding="utf-8")

        with pytest.raises(ModelLoadError, match="Invalid JSON in labels.json"):
            await FileSystemModelLoader(bundle_dir).load_bundle()

    @pytest.mark.asyncio
    async def test_malformed_content(self, write_bundle):
        directory = write_bundle("short", weights=b"\x00" * 16)

        with pytest.raises(MalformedModelError):
            await FileSystemModelLoader(directory).load_bundle()


class TestHttpModelLoader:
    """Test loading from a URL."""

    @pytest.mark.asyncio
    async def test_load_bundle(self, bundle_dir, bundle_labels):
        handler, requested = _serve_directory(bundle_dir)
        loader = HttpModelLoader(BASE_URL + "/", transport=httpx.MockTransport(handler))

        bundle = await loader.load_bundle()
        await loader.aclose()

        assert bundle.labels == tuple(bundle_labels)
        assert requested == [
            "/bounce/v1/vocab.json",
            "/bounce/v1/labels.json",
            "/bounce/v1/weights.bin",
        ]

    @pytest.mark.asyncio
    async def test_http_error_status(self, bundle_dir):
        handler, _ = _serve_directory(bundle_dir, {"weights.bin": 404})
        loader = HttpModelLoader(BASE_URL, transport=httpx.MockTransport(handler))

        with pytest.raises(ModelLoadError) as exc_info:
            await loader.load_bundle()
        await loader.aclose()

        assert exc_info.value.details["status_code"] == 404
        assert exc_info.value.source == BASE_URL + "/weights.bin"

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        loader = HttpModelLoader(BASE_URL, timeout=1.5, transport=httpx.MockTransport(handler))

        with pytest.raises(ModelLoadError, match="Timed out") as exc_info:
            await loader.load_bytes("vocab.json")
        await loader.aclose()

        assert exc_info.value.details["timeout"] == 1.5

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        loader = HttpModelLoader(BASE_URL, transport=httpx.MockTransport(handler))

        with pytest.raises(ModelLoadError, match="Failed to fetch vocab.json"):
            await loader.load_bytes("vocab.json")
        await loader.aclose()

    @pytest.mark.asyncio
    async def test_aclose_is_idempotent(self):
        loader = HttpModelLoader(BASE_URL, transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        await loader.load_bytes("vocab.json")

        await loader.aclose()
        await loader.aclose()
