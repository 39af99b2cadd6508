"""ASGI response sending — translates Context writes to ASGI messages.

The Context decides what to send and when; this module only knows the
message shapes.
"""

from wiz._internal.asgi import Send


def body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


async def send_start(send: Send, status: int, headers: list[tuple[bytes, bytes]]) -> None:
    """Send the response head."""
    await send(
        {
            "type": "http.response.start",
            "status": status,
            "headers": headers,
        }
    )


async def send_body(send: Send, body: bytes, *, more_body: bool) -> None:
    """Send one body chunk. ``more_body=False`` ends the exchange."""
    await send(
        {
            "type": "http.response.body",
            "body": body,
            "more_body": more_body,
        }
    )
