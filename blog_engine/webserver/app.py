"""FastAPI applications serving the built site and its metrics.

The site app serves the webroot either straight from disk (Starlette
StaticFiles) or from a MemoryStore loaded at startup. Every request is
gzip-compressed when the client accepts it, timed into Prometheus, and
written to the access log.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from email.utils import format_datetime, parsedate_to_datetime
from typing import Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles

from blog_engine.common.config import ServerSettings, settings
from blog_engine.common.logging import sanitize_log_field, setup_access_log, setup_logging

from . import health
from .memory import MemoryStore
from .metrics import metrics_response, record_metrics
from .paths import sanitize_path

logger = setup_logging(module_name="blog_engine.webserver.app")

CACHE_CONTROL = "max-age=31536000"

CallNext = Callable[[Request], Awaitable[Response]]


def client_ip(request: Request) -> str:
    """CF-Connecting-IP, then X-Forwarded-For, then the peer address."""
    for header in ("cf-connecting-ip", "x-forwarded-for"):
        value = request.headers.get(header)
        if value:
            return value
    return request.client.host if request.client else "-"


def format_access_line(request: Request, status: int, size: int, now: datetime | None = None) -> str:
    """One access log line: vhost, client, time, request, status, size, referer, UA."""
    now = now or datetime.now(timezone.utc)
    uri = request.url.path
    if request.url.query:
        uri += "?" + request.url.query
    proto = "HTTP/" + request.scope.get("http_version", "1.1")
    return '%s %s [%s] "%s %s %s" %d %d "%s" "%s"' % (
        sanitize_log_field(request.headers.get("host", "")),
        sanitize_log_field(client_ip(request)),
        now.strftime("%d/%b/%Y:%H:%M:%S %z"),
        request.method,
        sanitize_log_field(uri),
        proto,
        status,
        size,
        sanitize_log_field(request.headers.get("referer", "")),
        sanitize_log_field(request.headers.get("user-agent", "")),
    )


def access_log_middleware(access_logger: logging.Logger):
    async def log_request(request: Request, call_next: CallNext) -> Response:
        response = await call_next(request)
        size = int(response.headers.get("content-length", 0) or 0)
        access_logger.info(format_access_line(request, response.status_code, size))
        return response

    return log_request


async def metrics_middleware(request: Request, call_next: CallNext) -> Response:
    start = time.perf_counter()
    path = sanitize_path(request.url.path)
    logger.debug("Processing request for: %s", path)
    response = await call_next(request)
    duration = time.perf_counter() - start
    logger.debug("Request for %s processed in %f seconds", path, duration)
    record_metrics(path, duration)
    return response


def serve_from_memory(store: MemoryStore, request: Request) -> Response:
    """Answer a GET/HEAD from the memory store.

    Honours ``If-None-Match`` (weak comparison), ``If-Modified-Since`` and a
    single ``Range`` of bytes. Multi-range requests get the full body.
    """
    path = request.scope["path"]
    data = store.lookup(path)
    if data is None:
        logger.debug("Returning 404 for path: %s", sanitize_path(path))
        return PlainTextResponse("404 page not found", status_code=404)

    headers = {
        "Accept-Ranges": "bytes",
        "Cache-Control": CACHE_CONTROL,
        "X-Content-Type-Options": "nosniff",
        "Last-Modified": format_datetime(data.mod_time.astimezone(timezone.utc), usegmt=True),
        "ETag": data.etag,
    }

    if _not_modified(request, data.etag, data.mod_time):
        return Response(status_code=304, headers=headers)

    content = data.content
    status_code = 200
    range_header = request.headers.get("range")
    if range_header:
        try:
            byte_range = parse_range(range_header, len(content))
        except ValueError:
            headers["Content-Range"] = f"bytes */{len(content)}"
            return PlainTextResponse(
                "416 requested range not satisfiable", status_code=416, headers=headers
            )
        if byte_range is not None:
            start, end = byte_range
            headers["Content-Range"] = f"bytes {start}-{end}/{len(content)}"
            content = content[start:end + 1]
            status_code = 206

    if request.method == "HEAD":
        headers["Content-Length"] = str(len(content))
        return Response(status_code=status_code, headers=headers, media_type=data.content_type)

    return Response(
        content=content,
        status_code=status_code,
        headers=headers,
        media_type=data.content_type,
    )


def parse_range(header: str, size: int) -> tuple[int, int] | None:
    """Resolve a ``Range`` header to an inclusive (start, end) byte pair.

    Returns None when the header asks for several ranges, which are answered
    with the whole body.

    Raises:
        ValueError: If the header is malformed or no byte of it is satisfiable.
    """
    unit, _, spec = header.partition("=")
    if unit.strip().lower() != "bytes" or not spec.strip():
        raise ValueError(f"invalid range: {header!r}")
    if "," in spec:
        return None

    first, sep, last = spec.strip().partition("-")
    if not sep:
        raise ValueError(f"invalid range: {header!r}")
    first, last = first.strip(), last.strip()

    if not first:
        # Suffix range: the final N bytes
        if not last.isdigit() or int(last) == 0 or size == 0:
            raise ValueError(f"unsatisfiable range: {header!r}")
        return max(0, size - int(last)), size - 1

    if not first.isdigit() or (last and not last.isdigit()):
        raise ValueError(f"invalid range: {header!r}")
    start = int(first)
    end = int(last) if last else size - 1
    if start >= size or end < start:
        raise ValueError(f"unsatisfiable range: {header!r}")
    return start, min(end, size - 1)


def _strip_weak(tag: str) -> str:
    tag = tag.strip()
    return tag[2:] if tag.startswith("W/") else tag


def _not_modified(request: Request, etag: str, mod_time: datetime) -> bool:
    if_none_match = request.headers.get("if-none-match")
    if if_none_match is not None:
        candidates = {_strip_weak(tag) for tag in if_none_match.split(",")}
        return _strip_weak(etag) in candidates or "*" in candidates

    if_modified_since = request.headers.get("if-modified-since")
    if if_modified_since:
        try:
            since = parsedate_to_datetime(if_modified_since)
        except (TypeError, ValueError):
            return False
        if since.tzinfo is None:
            since = since.replace(tzinfo=timezone.utc)
        return mod_time.replace(microsecond=0) <= since
    return False


def create_app(
    server: ServerSettings | None = None,
    store: MemoryStore | None = None,
    access_logger: logging.Logger | None = None,
) -> FastAPI:
    """Build the site-serving application.

    Args:
        server: Server settings (defaults to the global settings).
        store: Preloaded memory store; loaded from the webroot when
            ``use_memory`` is on and none is given.
        access_logger: Logger receiving access lines; defaults to the
            file logger at ``server.log_file_path``.
    """
    server = server or settings.server
    access_logger = access_logger or setup_access_log(server.log_file_path)

    app = FastAPI(title="Blog", docs_url=None, redoc_url=None, openapi_url=None)

    @app.get("/metrics", include_in_schema=False)
    async def metrics() -> Response:
        return metrics_response()

    if server.use_memory:
        if store is None:
            logger.info("Loading files into memory")
            store = MemoryStore.load(server.webroot)
            logger.info("Files loaded into memory")
        logger.info("Serving files from memory")
        app.state.store = store

        @app.api_route("/{path:path}", methods=["GET", "HEAD"], include_in_schema=False)
        async def serve(request: Request) -> Response:
            return serve_from_memory(app.state.store, request)
    else:
        logger.info("Serving files directly from filesystem")
        app.mount("/", StaticFiles(directory=server.webroot, html=True), name="site")

    # Last added wraps outermost: gzip, then metrics, then the access log
    app.middleware("http")(access_log_middleware(access_logger))
    app.middleware("http")(metrics_middleware)
    app.add_middleware(GZipMiddleware, minimum_size=server.gzip_minimum_size)

    return app


def create_metrics_app() -> FastAPI:
    """Metrics, liveness and version on their own port."""
    app = FastAPI(title="Blog metrics", docs_url=None, redoc_url=None, openapi_url=None)
    app.include_router(health.router)

    @app.get("/metrics", include_in_schema=False)
    async def metrics() -> Response:
        return metrics_response()

    return app
