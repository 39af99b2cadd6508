"""Hello World — the simplest wiz server.

Demonstrates a route table, path parameters, query parameters, JSON,
cookies, and a default status handler.

Run:
    python app.py
"""

from wiz import Context, gen_server, get, post, run


async def index(ctx: Context) -> None:
    await ctx.send_text("Hello, World!")


async def greet(ctx: Context) -> None:
    name = ctx.route_param("name")
    punctuation = ctx.query_param("p") or "!"
    await ctx.send_text(f"Hello, {name}{punctuation}")


async def status(ctx: Context) -> None:
    await ctx.send_json({"status": "ok", "version": "0.1.0"})


async def remember(ctx: Context) -> None:
    ctx.set_cookie("spell", await ctx.text(), ctx.cookie_options().with_http_only(True))
    await ctx.set_status(201).send_text("Remembered")


async def recall(ctx: Context) -> None:
    await ctx.send_text(ctx.cookie("spell") or "nothing")


async def not_found(ctx: Context) -> None:
    await ctx.send_text(f"Nothing at {ctx.path}")


config = (
    gen_server()
    .set_name("Hello")
    .set_routes(
        [
            get("/", index),
            get("/greet/{name}", greet),
            get("/api/status", status),
            post("/remember", remember),
            get("/recall", recall),
        ]
    )
    .set_default_status_handlers([(404, not_found)])
    .set_port(8080)
)


if __name__ == "__main__":
    raise SystemExit(run(config))
