"""Publish push notifications to an ntfy server."""

from __future__ import annotations

import logging

import aiohttp

from gametracker.config import get_settings

logger = logging.getLogger(__name__)


class PushDeliveryError(RuntimeError):
    """Raised when the ntfy server does not accept a message."""


def resolve_topic(personal_topic: str | None, default_topic: str | None = None) -> str | None:
    """Return the user's own topic, else the default topic."""

    if default_topic is None:
        default_topic = get_settings().ntfy_default_topic
    return (personal_topic or "").strip() or (default_topic or "").strip() or None


async def send_push(
    title: str,
    message: str,
    topic: str,
    *,
    timeout: float,
    base_url: str | None = None,
) -> None:
    """POST ``message`` to ``{base_url}/{topic}`` with a ``Title`` header."""

    base_url = base_url or get_settings().ntfy_base_url
    if not base_url:
        raise PushDeliveryError("ntfy base URL is not configured")

    url = f"{base_url.rstrip('/')}/{topic}"
    async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=timeout)) as session:
        async with session.post(
            url,
            data=message.encode("utf-8"),
            headers={"Title": title},
        ) as response:
            if response.status >= 400:
                body = await response.text()
                raise PushDeliveryError(f"ntfy responded with HTTP {response.status}: {body}")

    logger.info("Push '%s' published to topic %s", title, topic)


__all__ = ["PushDeliveryError", "resolve_topic", "send_push"]
