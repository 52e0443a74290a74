"""Observability configuration using Logfire.

Usage:
    import logfire

    logfire.info("Invite issued", invite_id=str(invite.id))

    with logfire.span("invite_service.accept", invite_id=str(invite.id)):
        ...

Raw invite secrets must never be passed as span or log attributes; use
``TokenHash.prefix`` when a correlation key is needed. Attributes whose
names match ``SCRUBBED_ATTRIBUTES`` are redacted as a backstop.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from fieldops.config import Settings

SERVICE_NAME = "fieldops-invites"

# Extra patterns on top of Logfire's defaults (password, secret, ...)
SCRUBBED_ATTRIBUTES = ["token", "invite_link", "service_role"]


def should_send(settings: Settings) -> bool:
    """Whether spans leave the process.

    OBSERVABILITY__SEND_TO_LOGFIRE wins; otherwise send only with a token.
    """
    configured = settings.observability.send_to_logfire
    if configured is not None:
        return configured
    return settings.observability.logfire_token is not None


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for the process. Call once, before the app is built."""
    send_to_logfire = should_send(settings)

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=settings.git_sha,
        environment=settings.environment,
        token=settings.observability.logfire_token,
        send_to_logfire=send_to_logfire,
        scrubbing=logfire.ScrubbingOptions(extra_patterns=SCRUBBED_ATTRIBUTES),
        console=logfire.ConsoleOptions(
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def _request_attributes(request, attributes: dict) -> dict:
    # Query and body values may hold invite secrets or passwords
    return {
        "method": request.method,
        "path": request.url.path,
        "company_id": request.headers.get("x-company-id"),
    }


def instrument_fastapi(app: FastAPI) -> None:
    """Instrument the app without capturing headers or query strings."""
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_request_attributes,
        excluded_urls="/health",
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)


def instrument_httpx() -> None:
    """Trace identity provider calls."""
    logfire.instrument_httpx()
