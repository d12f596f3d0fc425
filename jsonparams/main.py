from fastapi import FastAPI

from jsonparams.api.parse import router as parse_router
from jsonparams.config import Settings, get_settings
from jsonparams.middleware import ParamsParserMiddleware
from jsonparams.observability.logging import configure_logging
from jsonparams.observability.middleware import RequestContextMiddleware
from jsonparams.parsing import ParamsParser, ParserKind, ParserRegistry, default_registry


def create_app(registry: ParserRegistry | None = None, settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    # The caller's registry is left untouched; settings extend a copy.
    registry = registry.copy() if registry is not None else default_registry()
    for media_type in settings.json_mime_types:
        registry.register(media_type, ParserKind.JSON)

    app = FastAPI(title="JSON Params", version="0.1.0")
    app.state.params_registry = registry
    app.include_router(parse_router)

    app.add_middleware(
        ParamsParserMiddleware,
        parser=ParamsParser(registry),
        show_exceptions=settings.show_exceptions,
        max_body_bytes=settings.max_body_bytes,
    )
    # Outermost, so parse-error responses carry X-Request-ID too.
    app.add_middleware(RequestContextMiddleware)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()
