from __future__ import annotations

from fastapi.openapi.utils import get_openapi
from fastapi.routing import APIRoute
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from slatecms.api.delivery.router import router as delivery_router
from slatecms.api.v1.router import api_router
from slatecms.core.config import create_app
from slatecms.core.logging import configure_logging
from slatecms.core.settings import settings

configure_logging(settings.LOG_LEVEL)
app = create_app()

app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")


def _inject_bearer_security(app):
    """
    Adds a global bearerAuth requirement to the OpenAPI document. The session
    token is opaque, so no bearerFormat is advertised.
    """
    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title=settings.APP_NAME,
            version="1.0.0",
            description="Multi-tenant CMS API",
            routes=app.routes,
        )

        components = openapi_schema.setdefault("components", {})
        security_schemes = components.setdefault("securitySchemes", {})
        security_schemes["bearerAuth"] = {"type": "http", "scheme": "bearer"}
        security_schemes["apiKey"] = {"type": "apiKey", "in": "header", "name": "X-Api-Key"}
        security_schemes["apiSecret"] = {"type": "apiKey", "in": "header", "name": "X-Api-Secret"}
        openapi_schema["security"] = [{"bearerAuth": []}]

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi


def _mark_delivery_routes_public(app):
    """
    /delivery/... routes drop the global bearer requirement in the docs;
    /delivery/v1/external/... document the key/secret header pair instead.
    """
    for route in app.routes:
        if isinstance(route, APIRoute):
            path = route.path or ""
            if path.startswith("/delivery/"):
                extra = dict(route.openapi_extra or {})
                if path.startswith("/delivery/v1/external/"):
                    extra["security"] = [{"apiKey": [], "apiSecret": []}]
                else:
                    extra["security"] = []
                route.openapi_extra = extra


_inject_bearer_security(app)

# Private API (session bearer)
app.include_router(api_router, prefix=settings.API_V1_STR)

# Public delivery (anonymous + API key)
app.include_router(delivery_router)

_mark_delivery_routes_public(app)
