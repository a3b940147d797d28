"""Helpers for sending notification emails via SendGrid."""

from __future__ import annotations

import json
import logging
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from gametracker.config import get_settings

logger = logging.getLogger(__name__)


class EmailDeliveryError(RuntimeError):
    """Raised when SendGrid rejects or fails to accept a message."""


def email_configured() -> bool:
    """Return ``True`` when SendGrid credentials and sender are configured."""

    return get_settings().email_enabled


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        errors = parsed.get("errors")
        if isinstance(errors, list):
            messages = [
                str(item["message"])
                for item in errors
                if isinstance(item, dict) and item.get("message")
            ]
            if messages:
                return "; ".join(messages)
        try:
            return json.dumps(parsed)
        except (TypeError, ValueError):
            return None

    if isinstance(parsed, list):
        return "; ".join(str(item) for item in parsed)

    return None


def _describe_failure(status_code: Any, body: Any) -> str:
    details = _extract_sendgrid_error_details(body)
    if status_code and details:
        return f"SendGrid API request failed with status {status_code}: {details}"
    if status_code:
        return f"SendGrid API request failed with status {status_code}"
    if details:
        return f"SendGrid API request failed: {details}"
    return "SendGrid API request failed"


def send_email(subject: str, text_content: str, recipient: str) -> None:
    """Send a plain-text email using the configured SendGrid credentials.

    Raises :class:`EmailDeliveryError` when SendGrid is not configured or does
    not accept the message, so callers can record the channel outcome.
    """

    settings = get_settings()
    if not settings.email_enabled:
        raise EmailDeliveryError("SendGrid configuration incomplete")

    message = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=recipient,
        subject=subject,
        plain_text_content=text_content,
    )

    try:
        client = SendGridAPIClient(settings.sendgrid_api_key)
        response = client.send(message)
    except Exception as exc:
        description = _describe_failure(
            getattr(exc, "status_code", None), getattr(exc, "body", None)
        )
        logger.error("%s (recipient %s)", description, recipient)
        raise EmailDeliveryError(description) from exc

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        description = _describe_failure(status_code, getattr(response, "body", None))
        logger.error("%s (recipient %s)", description, recipient)
        raise EmailDeliveryError(description)

    logger.info("Email '%s' accepted by SendGrid for %s", subject, recipient)


__all__ = ["EmailDeliveryError", "email_configured", "send_email"]
