# main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from storefront.version import VERSION
from storefront.core.config import settings
from storefront.core.errors import install_handlers
from storefront.core.logging import setup_logging
from storefront.db.session import init_db
from storefront.api.v1 import routes_auth, routes_products, routes_orders, routes_payments, routes_contact

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    setup_logging()
    settings.check_production()

    app = FastAPI(title='Storefront API', version=VERSION)

    # Instrument the app BEFORE adding routes or middleware
    Instrumentator().instrument(app).expose(
        app,
        include_in_schema=False,
        endpoint='/metrics',
        should_gzip=True,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )
    install_handlers(app)

    @app.get('/health')
    def health(): return {'status': 'ok'}

    @app.get(f'{settings.API_PREFIX}/health')
    def api_health(): return {'status': 'ok'}

    @app.get('/v1/_info')
    def info(): return {'service': 'storefront', 'version': VERSION}

    @app.on_event('startup')
    async def startup_event():
        if settings.AUTO_CREATE_TABLES:
            init_db()
        for route in app.routes:
            if hasattr(route, 'methods') and hasattr(route, 'path'):
                logger.info('%s %s', sorted(route.methods), route.path)

    for module, tag in (
        (routes_auth, 'auth'),
        (routes_products, 'products'),
        (routes_orders, 'orders'),
        (routes_payments, 'payments'),
        (routes_contact, 'contact'),
    ):
        app.include_router(module.router, prefix=settings.API_PREFIX, tags=[tag])

    return app


app = create_app()
