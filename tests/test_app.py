"""Tests for wiz.app — dispatch through a compiled ServerConfig."""

import logging

import pytest

from wiz.app import App, create_app
from wiz.config import gen_server
from wiz.middleware.compression import GZipMiddleware
from wiz.routing import get, post, route
from wiz.server.welcome import WELCOME_HTML
from wiz.testing import TestClient


async def a(ctx) -> None:
    await ctx.send_text("A")


async def b(ctx) -> None:
    await ctx.send_text("B")


async def c(ctx) -> None:
    await ctx.send_text("C")


def sync_handler(ctx) -> None:
    ctx.set_status(204)


async def greet(ctx) -> None:
    await ctx.send_text(f"Hello, {ctx.route_param('name')}")


async def echo(ctx) -> None:
    await ctx.send_json(await ctx.json())


async def forbidden(ctx) -> None:
    ctx.set_status(403)


async def boom(ctx) -> None:
    raise RuntimeError("broken spell")


async def boom_after_send(ctx) -> None:
    await ctx.send_text("partial")
    raise RuntimeError("too late")


async def not_found_page(ctx) -> None:
    await ctx.send_text(f"No spell at {ctx.path}")


async def error_page(ctx) -> None:
    await ctx.send_text("Something went wrong")


class TestDispatch:
    async def test_root_and_spell(self) -> None:
        config = gen_server().set_routes([get("/", a), get("/spell", b)])
        async with TestClient(config) as client:
            root = await client.get("/")
            assert root.status == 200
            assert root.text == "A"
            assert root.content_type == "text/plain; charset=UTF-8"

            spell = await client.get("/spell")
            assert spell.text == "B"

    async def test_first_route_wins(self) -> None:
        config = gen_server().set_routes([get("/", a), get("/", c)])
        async with TestClient(config) as client:
            response = await client.get("/")
            assert response.text == "A"

    async def test_wrong_method_is_405(self) -> None:
        config = gen_server().set_routes([get("/", a)])
        async with TestClient(config) as client:
            response = await client.post("/")
            assert response.status == 405
            assert response.header("allow") == "GET"
            assert response.body == b""
            assert response.completed

    async def test_unknown_path_is_404(self) -> None:
        config = gen_server().set_routes([get("/", a)])
        async with TestClient(config) as client:
            response = await client.get("/missing")
            assert response.status == 404
            assert response.body == b""

    async def test_path_params(self) -> None:
        config = gen_server().set_routes([get("/greet/{name}", greet)])
        async with TestClient(config) as client:
            response = await client.get("/greet/merlin")
            assert response.text == "Hello, merlin"

    async def test_sync_handler(self) -> None:
        config = gen_server().set_routes([route("DELETE", "/item", sync_handler)])  # type: ignore[arg-type]
        async with TestClient(config) as client:
            response = await client.delete("/item")
            assert response.status == 204

    async def test_request_body(self) -> None:
        config = gen_server().set_routes([post("/echo", echo)])
        async with TestClient(config) as client:
            response = await client.post("/echo", json={"spell": "lumos"})
            assert response.status == 200
            assert response.text == '{"spell": "lumos"}'

    async def test_request_body_in_chunks(self) -> None:
        config = gen_server().set_routes([post("/echo", echo)])
        async with TestClient(config) as client:
            response = await client.request(
                "POST", "/echo", chunks=(b'{"a"', b": 1}")
            )
            assert response.text == '{"a": 1}'

    async def test_handler_without_body_completes(self) -> None:
        config = gen_server().set_routes([get("/", forbidden)])
        async with TestClient(config) as client:
            response = await client.get("/")
            assert response.status == 403
            assert response.header("content-length") == "0"
            assert response.completed


class TestWelcomePage:
    async def test_default_config_serves_welcome(self) -> None:
        async with TestClient(gen_server()) as client:
            response = await client.get("/")
            assert response.status == 200
            assert response.content_type == "text/html; charset=UTF-8"
            assert response.text == WELCOME_HTML

    async def test_empty_route_table_serves_welcome(self) -> None:
        async with TestClient(gen_server().set_routes([])) as client:
            response = await client.get("/")
            assert response.text == WELCOME_HTML
            assert (await client.get("/other")).status == 404


class TestStatusHandlers:
    async def test_404_handler(self) -> None:
        config = (
            gen_server()
            .set_routes([get("/", a)])
            .set_default_status_handlers([(404, not_found_page)])
        )
        async with TestClient(config) as client:
            response = await client.get("/nowhere")
            assert response.status == 404
            assert response.text == "No spell at /nowhere"

    async def test_handler_status_is_intercepted(self) -> None:
        async def denied(ctx) -> None:
            await ctx.send_text("denied")

        config = (
            gen_server()
            .set_routes([get("/", forbidden)])
            .set_default_status_handlers([(403, denied)])
        )
        async with TestClient(config) as client:
            response = await client.get("/")
            assert response.status == 403
            assert response.text == "denied"

    async def test_started_response_is_not_intercepted(self) -> None:
        async def sends_404(ctx) -> None:
            await ctx.set_status(404).send_text("own body")

        config = (
            gen_server()
            .set_routes([get("/", sends_404)])
            .set_default_status_handlers([(404, not_found_page)])
        )
        async with TestClient(config) as client:
            response = await client.get("/")
            assert response.text == "own body"

    async def test_200_is_never_intercepted(self) -> None:
        async def silent(ctx) -> None: ...

        config = (
            gen_server()
            .set_routes([get("/", silent)])
            .set_default_status_handlers([(200, error_page)])
        )
        async with TestClient(config) as client:
            response = await client.get("/")
            assert response.body == b""

    async def test_405_handler_keeps_allow(self) -> None:
        async def not_allowed(ctx) -> None:
            await ctx.send_text("nope")

        config = (
            gen_server()
            .set_routes([get("/", a)])
            .set_default_status_handlers([(405, not_allowed)])
        )
        async with TestClient(config) as client:
            response = await client.put("/")
            assert response.status == 405
            assert response.header("allow") == "GET"
            assert response.text == "nope"


class TestHandlerErrors:
    async def test_exception_becomes_500(self, caplog: pytest.LogCaptureFixture) -> None:
        config = gen_server().set_routes([get("/", boom)])
        with caplog.at_level(logging.ERROR, logger="wiz.server"):
            async with TestClient(config) as client:
                response = await client.get("/")
        assert response.status == 500
        assert response.body == b""
        assert "broken spell" in caplog.text

    async def test_500_handler(self) -> None:
        config = (
            gen_server()
            .set_routes([get("/", boom)])
            .set_default_status_handlers([(500, error_page)])
        )
        async with TestClient(config) as client:
            response = await client.get("/")
            assert response.status == 500
            assert response.text == "Something went wrong"

    async def test_headers_written_before_failure_are_dropped(self) -> None:
        async def half_done(ctx) -> None:
            ctx.set_header("X-Partial", "1")
            raise ValueError("oops")

        config = gen_server().set_routes([get("/", half_done)])
        async with TestClient(config) as client:
            response = await client.get("/")
            assert response.status == 500
            assert response.header("x-partial") is None

    async def test_exception_after_start_propagates(self) -> None:
        config = gen_server().set_routes([get("/", boom_after_send)])
        async with TestClient(config) as client:
            with pytest.raises(RuntimeError, match="too late"):
                await client.get("/")


class TestServerHeader:
    async def test_server_header(self) -> None:
        config = gen_server().set_routes([get("/", a)]).set_send_server_header(True)
        async with TestClient(config) as client:
            response = await client.get("/")
            assert response.header("server") == "wiz"

    async def test_no_server_header_by_default(self) -> None:
        async with TestClient(gen_server().set_routes([get("/", a)])) as client:
            response = await client.get("/")
            assert response.header("server") is None

    async def test_server_header_on_bare_status(self) -> None:
        config = gen_server().set_routes([get("/", a)]).set_send_server_header(True)
        async with TestClient(config) as client:
            response = await client.get("/missing")
            assert response.header("server") == "wiz"


class TestAppConstruction:
    def test_create_app_wraps_gzip(self) -> None:
        assert isinstance(create_app(gen_server()), GZipMiddleware)
        assert isinstance(create_app(gen_server().use_compression(False)), App)

    def test_app_default_config(self) -> None:
        app = App()
        assert app.config == gen_server()
        assert len(app.router.routes) == 1

    def test_config_is_shared_not_copied(self) -> None:
        config = gen_server().set_routes([get("/", a)])
        assert App(config).config is config

    async def test_lifespan(self) -> None:
        messages = iter([{"type": "lifespan.startup"}, {"type": "lifespan.shutdown"}])
        sent: list[dict] = []

        async def receive():
            return next(messages)

        async def send(message) -> None:
            sent.append(message)

        await App(gen_server())({"type": "lifespan"}, receive, send)
        assert [m["type"] for m in sent] == [
            "lifespan.startup.complete",
            "lifespan.shutdown.complete",
        ]
