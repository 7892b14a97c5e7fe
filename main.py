import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from loguru import logger
from strawberry.fastapi import GraphQLRouter

from config.authz_grants import load_grants
from config.settings import Settings, settings
from products_subgraph.api import build_schema
from products_subgraph.authz import Authorizer, GrantAuthorizer, OsoCloudAuthorizer
from products_subgraph.catalog import ProductCatalog
from products_subgraph.telemetry import setup_tracing


def configure_logging(level: str):
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def create_authorizer(app_settings: Settings) -> Authorizer:
    if app_settings.authz_backend == "local":
        return GrantAuthorizer(load_grants(app_settings.authz_grants_path))
    if not app_settings.oso_auth:
        raise RuntimeError("OSO_AUTH must be set when AUTHZ_BACKEND is 'oso'")
    return OsoCloudAuthorizer(app_settings.oso_url, app_settings.oso_auth)


def create_app(app_settings: Settings = settings) -> FastAPI:
    configure_logging(app_settings.log_level)

    authorizer = create_authorizer(app_settings)
    catalog = ProductCatalog(variation_latency=app_settings.variation_latency)
    extensions = setup_tracing(
        app_settings.apollo_otel_exporter_type,
        app_settings.apollo_otel_exporter_host,
        app_settings.apollo_otel_exporter_port,
    )
    schema = build_schema(authorizer, extensions=extensions)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.authorizer = authorizer
        app.state.catalog = catalog
        logger.info("Products subgraph ready at http://{}:{}/graphql", app_settings.host, app_settings.apollo_port)
        try:
            yield
        finally:
            await authorizer.close()

    async def get_context(request: Request):
        # Identity is taken as asserted by the gateway; no authentication here
        return {
            "request": request,
            "catalog": request.app.state.catalog,
            "user_id": request.headers.get(app_settings.user_id_header, ""),
        }

    graphql_app = GraphQLRouter(schema, context_getter=get_context)

    app = FastAPI(lifespan=lifespan)
    app.include_router(graphql_app, prefix="/graphql")
    return app


if __name__ == "__main__":
    uvicorn.run(
        "main:create_app",
        factory=True,
        host=settings.host,
        port=settings.apollo_port,
        reload=settings.reload,
    )
