"""Observability configuration using Logfire.

Every layer logs through ``logfire`` directly:

    logfire.info("Invite created", invite_id=str(invite.id), role=role.value)

    with logfire.span("invite_service.accept_invite", invite_id=str(invite_id)):
        ...

Invite tokens and signup links are bearer credentials, so they are scrubbed
from every attribute before export.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from portal.config import Settings

SERVICE_NAME = "school-portal-invites"

# Attribute name patterns that must never leave the process
SCRUB_PATTERNS = ["token", "signup_url", "auth_token"]


def _should_send(settings: Settings) -> bool:
    if settings.observability.send_to_logfire is not None:
        return settings.observability.send_to_logfire
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for the process.

    Telemetry goes to Logfire cloud when a token is configured or
    OBSERVABILITY__SEND_TO_LOGFIRE is true; otherwise to the console only.
    """
    send_to_logfire = _should_send(settings)

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        scrubbing=logfire.ScrubbingOptions(extra_patterns=SCRUB_PATTERNS),
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
        send_to_logfire=send_to_logfire,
    )


def _request_attributes(request, attributes):
    """Keep method, path and peer; the query string may carry a token."""
    result = {**attributes}
    result["method"] = request.method
    result["path"] = request.url.path
    if request.client:
        result["client_host"] = request.client.host
    return result


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request. Headers are not captured since they carry cookies."""
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries issued through the async engine."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)


def instrument_httpx() -> None:
    """Trace outbound calls to the email API."""
    logfire.instrument_httpx()
