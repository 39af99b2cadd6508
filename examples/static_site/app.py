"""Static Site — serve a directory of files beneath a request prefix.

Demonstrates static file serving with index resolution next to a
regular route table. Files under ./public answer ``/site/...``; the
route table answers everything else.

Run:
    python app.py
"""

from pathlib import Path

from wiz import Context, gen_server, get, run

PUBLIC_DIR = Path(__file__).parent / "public"


async def health(ctx: Context) -> None:
    await ctx.send_text("ok")


async def home(ctx: Context) -> None:
    ctx.redirect("/site")


config = (
    gen_server()
    .set_name("Static Site")
    .set_routes([get("/", home), get("/health", health)])
    .serve_static_files(True)
    .set_static_directory(str(PUBLIC_DIR))
    .set_static_request_path("/site")
)


if __name__ == "__main__":
    raise SystemExit(run(config))
