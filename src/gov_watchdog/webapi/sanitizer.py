"""Input sanitization applied to every request before routing.

Sanitization never rejects a request. String values have the characters
``< > ' "`` removed and are truncated to a per-field maximum length; values
of any other type pass through untouched.
"""

import json
from typing import Any, Dict, MutableMapping, Optional
from urllib.parse import parse_qsl, urlencode

from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from ..config.logging import get_logger
from ..config.settings import get_settings

logger = get_logger(__name__)

STRIPPED_CHARACTERS = str.maketrans("", "", "<>'\"")

FIELD_MAX_LENGTHS: Dict[str, int] = {
    "username": 50,
    "email": 100,
    "password": 128,
    "search": 100,
    "keyword": 100,
}


def max_length_for(name: str, default: Optional[int] = None) -> int:
    """Maximum length kept for a parameter name."""
    if default is None:
        default = get_settings().sanitize_max_length
    return FIELD_MAX_LENGTHS.get(name, default)


def sanitize_value(name: str, value: Any, default_max_length: Optional[int] = None) -> Any:
    """Strip markup/quote characters from a string value and cap its length."""
    if not isinstance(value, str):
        return value
    cleaned = value.translate(STRIPPED_CHARACTERS)
    return cleaned[: max_length_for(name, default_max_length)]


def sanitize_params(
    params: MutableMapping[str, Any], default_max_length: Optional[int] = None
) -> MutableMapping[str, Any]:
    """Sanitize every entry of ``params`` in place and return the same mapping."""
    for name, value in list(params.items()):
        params[name] = sanitize_value(name, value, default_max_length)
    return params


def sanitize_query_string(query_string: bytes, default_max_length: Optional[int] = None) -> bytes:
    """Rewrite a raw query string with every value sanitized; order and repeats are kept."""
    if not query_string:
        return query_string
    pairs = parse_qsl(query_string.decode("latin-1"), keep_blank_values=True)
    cleaned = [(name, sanitize_value(name, value, default_max_length)) for name, value in pairs]
    return urlencode(cleaned).encode("latin-1")


def sanitize_json_body(body: bytes, default_max_length: Optional[int] = None) -> bytes:
    """Sanitize the top-level string fields of a JSON object body.

    Bodies that are not a JSON object are returned unchanged so request
    validation can report them.
    """
    try:
        payload = json.loads(body)
    except ValueError:
        return body
    if not isinstance(payload, dict):
        return body
    return json.dumps(sanitize_params(payload, default_max_length)).encode("utf-8")


def _is_json(scope: Scope) -> bool:
    for name, value in scope.get("headers", []):
        if name == b"content-type":
            return value.split(b";")[0].strip().lower() == b"application/json"
    return False


class InputSanitizerMiddleware:
    """ASGI middleware sanitizing query parameters and JSON object bodies."""

    def __init__(self, app: ASGIApp, default_max_length: Optional[int] = None):
        self.app = app
        self.default_max_length = default_max_length

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        scope = dict(scope)
        scope["query_string"] = sanitize_query_string(
            scope.get("query_string", b""), self.default_max_length
        )

        if not _is_json(scope):
            await self.app(scope, receive, send)
            return

        chunks = []
        while True:
            message = await receive()
            if message["type"] != "http.request":
                # Client went away before the body was complete.
                await self.app(scope, _replay([message], receive), send)
                return
            chunks.append(message.get("body", b""))
            if not message.get("more_body", False):
                break

        body = sanitize_json_body(b"".join(chunks), self.default_max_length)
        headers = MutableHeaders(scope=scope)
        headers["content-length"] = str(len(body))

        logger.debug("Request body sanitized", path=scope.get("path"), size=len(body))
        await self.app(
            scope,
            _replay([{"type": "http.request", "body": body, "more_body": False}], receive),
            send,
        )


def _replay(messages, receive: Receive) -> Receive:
    """A receive callable yielding ``messages`` first, then the live channel."""
    pending = list(messages)

    async def replay() -> Message:
        if pending:
            return pending.pop(0)
        return await receive()

    return replay
