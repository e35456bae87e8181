"""Tests for import target resolution."""

from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from apl.core.config import InterpreterConfig
from apl.core.errors import ResourceNotFoundError
from apl.core.resources import ResourceOrigin, ResourceResolver


@pytest.fixture
def resolver(config: InterpreterConfig) -> ResourceResolver:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith(".apl"):
            return httpx.Response(200, text=f"// {request.url.path}")
        return httpx.Response(500)

    return ResourceResolver(config, client=httpx.Client(transport=httpx.MockTransport(handler)))


class TestLocalResolution:
    def test_resolves_from_search_path(self, resolver: ResourceResolver, tmp_path: Path) -> None:
        (tmp_path / "lib.apl").write_text("data x;", encoding="utf-8")
        resource = resolver.resolve("lib.apl")
        assert resource.origin == ResourceOrigin.LOCAL
        assert resource.text == "data x;"
        assert resource.address == str((tmp_path / "lib.apl").resolve())
        assert resource.directory == (tmp_path / "lib.apl").resolve().parent

    def test_importer_directory_is_tried_first(
        self, resolver: ResourceResolver, tmp_path: Path
    ) -> None:
        (tmp_path / "lib.apl").write_text("outer", encoding="utf-8")
        nested = tmp_path / "nested"
        nested.mkdir()
        (nested / "lib.apl").write_text("inner", encoding="utf-8")
        assert resolver.resolve("lib.apl", relative_to=nested).text == "inner"

    def test_directory_is_not_a_source(self, resolver: ResourceResolver, tmp_path: Path) -> None:
        (tmp_path / "folder.apl").mkdir()
        with pytest.raises(FileNotFoundError):
            resolver.resolve_local("folder.apl")

    def test_custom_extension(self, tmp_path: Path) -> None:
        config = InterpreterConfig(source_extension="src", import_search_paths=[tmp_path])
        (tmp_path / "lib.src").write_text("1;", encoding="utf-8")
        assert ResourceResolver(config).resolve_local("lib.src").text == "1;"

    def test_undecodable_file_is_not_found(
        self, resolver: ResourceResolver, tmp_path: Path
    ) -> None:
        (tmp_path / "bad.apl").write_bytes(b"\xff\xfe 1;")
        with pytest.raises(FileNotFoundError, match="can't be read"):
            resolver.resolve_local("bad.apl")
        with pytest.raises(ResourceNotFoundError, match="can't be read"):
            resolver.resolve("bad.apl")


class TestRemoteResolution:
    def test_fetches_http_address(self, resolver: ResourceResolver) -> None:
        resource = resolver.resolve("http://example.test/pkg/lib.apl")
        assert resource.origin == ResourceOrigin.REMOTE
        assert resource.text == "// /pkg/lib.apl"
        assert resource.directory is None

    def test_server_error_is_not_found(self, resolver: ResourceResolver) -> None:
        with pytest.raises(ResourceNotFoundError, match="500") as exc_info:
            resolver.resolve("http://example.test/broken")
        assert exc_info.value.address == "http://example.test/broken"

    def test_non_http_address_is_not_fetched(self, resolver: ResourceResolver) -> None:
        with pytest.raises(LookupError, match="not an http"):
            resolver.resolve_remote("ftp://example.test/lib.apl")

    def test_plain_name_reports_both_stages(self, resolver: ResourceResolver) -> None:
        with pytest.raises(ResourceNotFoundError) as exc_info:
            resolver.resolve("missing.apl")
        message = exc_info.value.message
        assert "doesn't exist" in message
        assert "not an http(s) address" in message
