"""Logfire setup and instrumentation.

Services log with ``logfire`` directly and wrap each operation in a span
named ``<component>.<operation>``:

    with logfire.span("post_service.create_post", title=title):
        logfire.info("Post created", post_id=post.id, slug=str(post.slug))
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from quill.config import Settings

SERVICE_NAME = "quill-api"
SERVICE_VERSION = "0.1.0"

# Polled by load balancers; tracing them only adds noise
_UNTRACED_URLS = "/health"


def should_send_to_logfire(settings: Settings) -> bool:
    """Decide whether telemetry leaves the process.

    An explicit ``OBSERVABILITY__SEND_TO_LOGFIRE`` wins; otherwise a
    configured token turns sending on.
    """
    observability = settings.observability
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for the running environment.

    Must run before the FastAPI app is created so its instrumentation
    attaches to a configured Logfire instance.

    Args:
        settings: Application settings
    """
    send = should_send_to_logfire(settings)

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=SERVICE_VERSION,
        environment=settings.environment,
        send_to_logfire=send,
        token=settings.observability.logfire_token,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        git_sha=settings.git_sha,
        send_to_logfire=send,
    )


def _request_attributes(request, attributes: dict) -> dict:
    """Add method and path to each request span (never headers or body)."""
    result = {**attributes, "path": request.url.path}
    if hasattr(request, "method"):  # WebSocket scopes have none
        result["method"] = request.method
    return result


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every API request except health checks.

    Headers are not captured since admin session tokens travel in the
    ``Authorization`` header and ``auth_token`` cookie.

    Args:
        app: FastAPI application instance
    """
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        excluded_urls=_UNTRACED_URLS,
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace every SQL statement issued through ``engine``.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)
    logfire.info("SQLAlchemy instrumented", dialect=engine.dialect.name)
