"""Tests for static file serving."""

import pytest

from wiz.config import gen_server
from wiz.middleware.static import StaticFiles
from wiz.routing import get, post
from wiz.testing import TestClient


async def index(ctx) -> None:
    await ctx.send_text("route")


async def upload(ctx) -> None:
    await ctx.send_text("posted")


@pytest.fixture
def static_dir(tmp_path):
    """Create temporary static files for testing."""
    static = tmp_path / "wwwroot"
    static.mkdir()

    (static / "style.css").write_text("body { color: red; }")
    (static / "app.js").write_text("console.log('hello');")
    (static / "data.unknownext").write_bytes(b"\x00\x01\x02\x03")
    (static / "index.html").write_text("<h1>Home</h1>")

    docs = static / "docs"
    docs.mkdir()
    (docs / "index.html").write_text("<h1>Docs</h1>")

    empty = static / "empty"
    empty.mkdir()

    (tmp_path / "secret.txt").write_text("top secret")
    return static


def _config(static_dir, prefix: str = ""):
    return (
        gen_server()
        .set_routes([get("/", index), post("/upload", upload)])
        .serve_static_files(True)
        .set_static_directory(str(static_dir))
        .set_static_request_path(prefix)
    )


class TestStaticFileServing:
    async def test_serves_css_file(self, static_dir) -> None:
        async with TestClient(_config(static_dir)) as client:
            response = await client.get("/style.css")
            assert response.status == 200
            assert "text/css" in response.content_type
            assert response.text == "body { color: red; }"
            assert response.header("content-length") == str(len(response.body))

    async def test_unknown_extension_is_octet_stream(self, static_dir) -> None:
        async with TestClient(_config(static_dir)) as client:
            response = await client.get("/data.unknownext")
            assert response.content_type == "application/octet-stream"
            assert response.body == b"\x00\x01\x02\x03"

    async def test_missing_file_falls_through(self, static_dir) -> None:
        async with TestClient(_config(static_dir)) as client:
            response = await client.get("/missing.css")
            assert response.status == 404

    async def test_head_request(self, static_dir) -> None:
        async with TestClient(_config(static_dir)) as client:
            response = await client.head("/style.css")
            assert response.status == 200
            assert response.body == b""
            assert response.header("content-length") == "20"

    async def test_post_falls_through_to_routes(self, static_dir) -> None:
        (static_dir / "upload").write_text("file named upload")
        async with TestClient(_config(static_dir)) as client:
            response = await client.post("/upload")
            assert response.text == "posted"

    async def test_traversal_blocked(self, static_dir) -> None:
        async with TestClient(_config(static_dir)) as client:
            response = await client.get("/../secret.txt")
            assert response.status == 404
            assert "top secret" not in response.text

    async def test_nul_byte_in_path_falls_through(self, static_dir) -> None:
        async with TestClient(_config(static_dir)) as client:
            response = await client.get("/a\x00b")
            assert response.status == 404

            response = await client.get("/")
            assert response.text == "<h1>Home</h1>"

    async def test_disabled_by_default(self, static_dir) -> None:
        config = _config(static_dir).serve_static_files(False)
        async with TestClient(config) as client:
            response = await client.get("/style.css")
            assert response.status == 404


class TestIndexFiles:
    async def test_root_index_beats_route(self, static_dir) -> None:
        async with TestClient(_config(static_dir)) as client:
            response = await client.get("/")
            assert response.text == "<h1>Home</h1>"
            assert "text/html" in response.content_type

    async def test_nested_index_without_redirect(self, static_dir) -> None:
        async with TestClient(_config(static_dir)) as client:
            bare = await client.get("/docs")
            slashed = await client.get("/docs/")
            assert bare.status == 200
            assert slashed.status == 200
            assert bare.text == slashed.text == "<h1>Docs</h1>"

    async def test_directory_without_index(self, static_dir) -> None:
        async with TestClient(_config(static_dir)) as client:
            response = await client.get("/empty")
            assert response.status == 404

    async def test_index_disabled_falls_through(self, static_dir) -> None:
        config = _config(static_dir).serve_index_files(False)
        async with TestClient(config) as client:
            response = await client.get("/")
            assert response.text == "route"
            files = await client.get("/style.css")
            assert files.status == 200


class TestRequestPrefix:
    async def test_prefixed_file(self, static_dir) -> None:
        async with TestClient(_config(static_dir, "/assets")) as client:
            response = await client.get("/assets/app.js")
            assert response.status == 200
            assert "console.log" in response.text

    async def test_prefix_root_serves_index(self, static_dir) -> None:
        async with TestClient(_config(static_dir, "/assets")) as client:
            response = await client.get("/assets")
            assert response.text == "<h1>Home</h1>"

    async def test_unprefixed_path_goes_to_routes(self, static_dir) -> None:
        async with TestClient(_config(static_dir, "/assets")) as client:
            assert (await client.get("/")).text == "route"
            assert (await client.get("/style.css")).status == 404

    async def test_prefix_must_match_whole_segment(self, static_dir) -> None:
        async with TestClient(_config(static_dir, "/assets")) as client:
            response = await client.get("/assetsstyle.css")
            assert response.status == 404


class TestResolve:
    def test_prefix_normalization(self, static_dir) -> None:
        for prefix in ("assets", "/assets/", "/assets"):
            files = StaticFiles(static_dir, prefix)
            assert files.resolve("GET", "/assets/style.css") == (static_dir / "style.css").resolve()

    def test_root_prefix(self, static_dir) -> None:
        files = StaticFiles(static_dir, "/")
        assert files.resolve("GET", "/style.css") == (static_dir / "style.css").resolve()

    def test_only_get_and_head(self, static_dir) -> None:
        files = StaticFiles(static_dir)
        assert files.resolve("PUT", "/style.css") is None
        assert files.resolve("HEAD", "/style.css") is not None

    def test_unusable_names_resolve_to_none(self, static_dir) -> None:
        files = StaticFiles(static_dir)
        assert files.resolve("GET", "/a\x00b") is None
        assert files.resolve("GET", "/" + "x" * 5000) is None
