"""aiohttp server for embedded assets.

Serves every request path through a resolver with gzip encoding, long-lived
cache headers and fingerprint-based conditional requests.
"""

import logging

from aiohttp import web

from staticpack.app_keys import max_age_key, resolver_key
from staticpack.config import Config
from staticpack.resolver import Resolver, create_resolver

logger = logging.getLogger(__name__)

DEFAULT_MAX_AGE = 31536000


async def serve_asset(request: web.Request) -> web.Response:
    """Serve the asset resolved for the request path.

    Responds 304 with an empty body when ``If-None-Match`` equals the
    asset's fingerprint.
    """
    resolver = request.app[resolver_key]
    asset = resolver.resolve(request.path)
    logger.debug(f"{request.method} {request.path}")

    headers = {"Cache-Control": f"public, max-age={request.app[max_age_key]}"}
    if asset.mime_type:
        headers["Content-Type"] = asset.mime_type
    if asset.fingerprint:
        headers["ETag"] = asset.fingerprint
        if request.headers.get("If-None-Match") == asset.fingerprint:
            return web.Response(status=304, headers=headers)
    if asset.payload:
        headers["Content-Encoding"] = "gzip"

    return web.Response(status=200, body=asset.payload, headers=headers)


def create_app(resolver: Resolver, *, max_age: int = DEFAULT_MAX_AGE) -> web.Application:
    """Create aiohttp application.

    Args:
        resolver: Development or compiled resolver
        max_age: Cache-Control max-age in seconds

    Returns:
        Configured aiohttp application
    """
    app = web.Application()
    app[resolver_key] = resolver
    app[max_age_key] = max_age

    # Catch-all: every path goes through the resolver (HEAD is added implicitly)
    app.router.add_get("/{path:.*}", serve_asset)

    return app


def run_server(config: Config) -> None:
    """Run the server.

    Args:
        config: Application configuration
    """
    resolver = create_resolver(
        config.assets.mode,
        base_dir=config.assets.base_dir,
        artifact=config.assets.artifact,
        tags=config.assets.tags,
    )
    app = create_app(resolver, max_age=config.server.max_age)
    web.run_app(app, host=config.server.host, port=config.server.port)
