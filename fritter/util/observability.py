"""Observability configuration using Logfire.

Logfire provides structured logging and tracing on top of OpenTelemetry.

Usage:
    # Services receive a tagged Logfire instance through DI
    log.info("Freet created", freet_id=str(freet.id))

    # Manual spans for store operations
    with log.span("freet_service.update_vote", freet_id=str(freet_id)):
        ...
"""

from typing import Any

import logfire
from sqlalchemy.ext.asyncio import AsyncEngine

from fritter.config import Settings

SERVICE_NAME = "fritter"


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for observability.

    Token Configuration:
    - Set OBSERVABILITY__LOGFIRE_TOKEN to enable cloud sending
    - If a token is present, logs are sent to Logfire cloud by default
    - OBSERVABILITY__SEND_TO_LOGFIRE overrides either way

    Args:
        settings: Application settings
    """
    # Priority: explicit setting > token presence > default (False)
    if settings.observability.send_to_logfire is not None:
        send_to_logfire = settings.observability.send_to_logfire
    elif settings.observability.logfire_token:
        send_to_logfire = True
    else:
        send_to_logfire = False

    config_kwargs: dict[str, Any] = {
        "service_name": SERVICE_NAME,
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    }

    if settings.observability.logfire_token:
        config_kwargs["token"] = settings.observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        debug=settings.debug,
        send_to_logfire=send_to_logfire,
        has_token=bool(settings.observability.logfire_token),
    )


def service_logger() -> logfire.Logfire:
    """Logfire instance handed to domain services.

    Events it emits carry the service tag, so store diagnostics can be
    filtered apart from whatever the host application logs.
    """
    return logfire.with_tags(SERVICE_NAME)


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Instrument SQLAlchemy engine with Logfire.

    Automatically traces all SQL queries and their duration.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(
        engine=engine.sync_engine,
        enable_commenter=True,  # Add SQL comments with span context
    )
    logfire.info("SQLAlchemy instrumented")
