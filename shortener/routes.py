"""FastAPI route definitions for the URL shortener.

This module is the HTTP collaborator around the key store: it parses requests,
rejects missing input before the store is touched, and turns store results into
HTML pages, JSON bodies and redirects.

API Endpoint Overview
=====================
::
    GET  /
        └─ HTML submission form

    POST /
        └─ 303 Redirect to /shorten

    POST /shorten            (form field "url")
        └─ HTML result page (200) or 400

    GET  /short/:short_key
        └─ 301 Redirect or 404 (400 when the key is empty)

    POST /api/shorten        (JSON {"url": ...})
        └─ URLResponse (201) or 422

    GET  /api/resolve/:short_key
        └─ URLResolution (200) or 404

    GET  /health
        └─ HealthResponse (200)

Key Behaviours
===============
- The key store is injected via ``get_keystore`` and never imported as a global.
- A miss is an ordinary branch that ends in 404, not an error log.
- Redirects are permanent (301), matching a write-once mapping.
- Handlers call the store synchronously; its lock is never held across an ``await``.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from shortener.dependencies import RequestContext, get_keystore, get_request_context
from shortener.enums import HealthStatus
from shortener.keystore import KeyStore
from shortener.pages import render_form, render_result
from shortener.schemas import HealthResponse, URLCreate, URLResolution, URLResponse

__all__ = ["router"]

router = APIRouter()


# ============================================================================
# HTML INTERFACE
# ============================================================================


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def show_form() -> HTMLResponse:
    return HTMLResponse(content=render_form())


@router.post("/", include_in_schema=False)
async def form_post_redirect() -> RedirectResponse:
    return RedirectResponse(url="/shorten", status_code=303)


@router.post("/shorten", response_class=HTMLResponse, include_in_schema=False)
async def shorten_form(
    request: Request,
    url: Optional[str] = Form(None),
    ctx: RequestContext = Depends(get_request_context),
    store: KeyStore = Depends(get_keystore),
) -> HTMLResponse:
    # body value first, then the query string
    original_url = url if url is not None else request.query_params.get("url")
    if not original_url:
        ctx.logger.warning("Shorten rejected: url parameter missing")
        raise HTTPException(status_code=400, detail="URL parameter is missing")

    short_key = store.shorten(original_url)
    short_url = ctx.short_url(short_key)
    ctx.logger.info(
        f"URL shortened: {short_key} -> {original_url}",
        extra={"operation": "shorten", "short_code": short_key, "duration_ms": ctx.get_duration()},
    )
    return HTMLResponse(content=render_result(original_url, short_url))


@router.get("/short/", include_in_schema=False)
async def redirect_missing_key(ctx: RequestContext = Depends(get_request_context)) -> None:
    ctx.logger.warning("Redirect rejected: short key missing")
    raise HTTPException(status_code=400, detail="Shortened key is missing")


@router.get("/short/{short_key}", tags=["redirect"])
async def redirect_to_url(
    short_key: str,
    ctx: RequestContext = Depends(get_request_context),
    store: KeyStore = Depends(get_keystore),
) -> RedirectResponse:
    original_url, found = store.resolve(short_key)
    if not found:
        ctx.logger.warning(
            f"Redirect failed - short key not found: {short_key}",
            extra={"operation": "redirect", "short_code": short_key, "error": "not_found"},
        )
        raise HTTPException(status_code=404, detail="Shortened key not found")

    ctx.logger.info(
        f"Redirect successful: {short_key} -> {original_url}",
        extra={"operation": "redirect", "short_code": short_key, "duration_ms": ctx.get_duration()},
    )
    return RedirectResponse(url=original_url, status_code=301)


# ============================================================================
# JSON API
# ============================================================================


@router.post("/api/shorten", response_model=URLResponse, status_code=201, tags=["urls"])
async def shorten_url(
    payload: URLCreate,
    ctx: RequestContext = Depends(get_request_context),
    store: KeyStore = Depends(get_keystore),
) -> URLResponse:
    short_key = store.shorten(payload.url)
    ctx.logger.info(
        f"URL shortened successfully: {short_key}",
        extra={"operation": "shorten", "short_code": short_key, "duration_ms": ctx.get_duration()},
    )
    return URLResponse(
        short_code=short_key,
        original_url=payload.url,
        short_url=ctx.short_url(short_key),
    )


@router.get("/api/resolve/{short_key}", response_model=URLResolution, tags=["urls"])
async def resolve_url(
    short_key: str,
    ctx: RequestContext = Depends(get_request_context),
    store: KeyStore = Depends(get_keystore),
) -> URLResolution:
    resolution = store.resolve(short_key)
    if not resolution.found:
        ctx.logger.warning(f"Resolve failed - short key not found: {short_key}")
        raise HTTPException(status_code=404, detail="Shortened key not found")
    return URLResolution(short_code=short_key, original_url=resolution.original_url)


@router.get("/health", response_model=HealthResponse, tags=["health"])
async def health_check(
    ctx: RequestContext = Depends(get_request_context),
    store: KeyStore = Depends(get_keystore),
) -> HealthResponse:
    entries = len(store)
    ctx.logger.debug(f"Health check: {entries} entries")
    return HealthResponse(status=HealthStatus.HEALTHY, keystore=HealthStatus.HEALTHY, entries=entries)
