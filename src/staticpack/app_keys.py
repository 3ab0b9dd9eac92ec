"""Application keys for type-safe app configuration access."""

from aiohttp import web

from staticpack.resolver import Resolver

resolver_key = web.AppKey("resolver", Resolver)
max_age_key = web.AppKey("max_age", int)
