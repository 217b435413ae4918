"""Webhook invoker - calls a target over HTTP, normalizes the reply, records it in history."""
import asyncio
import logging
import time

import httpx

from hookwatch.webhooks.extractor import extract_output_content
from hookwatch.webhooks.history import ResponseHistory
from hookwatch.webhooks.models import (
    STATUS_ERROR,
    STATUS_SUCCESS,
    WebhookResponse,
    WebhookTarget,
)

logger = logging.getLogger(__name__)

TRANSPORT_ERROR_STATUS = 500
NOT_CONFIGURED_STATUS = 400


class WebhookInvoker:
    """Invokes webhook targets. Every call ends in exactly one history entry, never an exception."""

    def __init__(self, history: ResponseHistory, transport: httpx.AsyncBaseTransport | None = None):
        self.history = history
        self._transport = transport

    async def invoke(self, target: WebhookTarget) -> WebhookResponse:
        if not target.configured:
            logger.warning("%s webhook URL is not configured", target.name)
            response = WebhookResponse(
                status_code=NOT_CONFIGURED_STATUS,
                status_message=STATUS_ERROR,
                error=f"{target.name} webhook URL is not configured",
                target=target.name,
            )
        else:
            response = await self._call(target)

        self.history.append(response)
        logger.info("Webhook call completed, total history size: %d", len(self.history))
        return response

    async def _call(self, target: WebhookTarget) -> WebhookResponse:
        logger.info("Starting webhook call to: %s", target.url)
        started = time.monotonic()
        try:
            http_response = await asyncio.wait_for(
                self._send(target), timeout=target.timeout_seconds
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.error("Webhook call to %s timed out after %ds", target.url, target.timeout_seconds)
            return self._failure(target, f"Request timed out after {target.timeout_seconds}s")
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error("Error calling webhook %s: %s", target.url, e)
            return self._failure(target, str(e) or type(e).__name__)
        except Exception as e:
            logger.exception("Unexpected error calling webhook %s", target.url)
            return self._failure(target, str(e) or type(e).__name__)

        duration_ms = int((time.monotonic() - started) * 1000)
        body = http_response.text
        logger.info("Received response with status code: %d", http_response.status_code)
        logger.debug("Response body length: %d characters", len(body))

        try:
            parsed = http_response.json()
        except ValueError:
            logger.warning("Response body from %s is not valid JSON, storing raw text", target.url)
            data = {"response": body}
        else:
            data = extract_output_content(parsed)
            logger.info(
                "Extracted data - has title: %s, has content: %s",
                "title" in data,
                "content" in data,
            )

        return WebhookResponse(
            status_code=http_response.status_code,
            status_message=STATUS_SUCCESS,
            data=data,
            target=target.name,
            duration_ms=duration_ms,
        )

    async def _send(self, target: WebhookTarget) -> httpx.Response:
        timeout = httpx.Timeout(target.timeout_seconds)
        async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
            if target.method.upper() == "POST":
                logger.debug("Using POST method")
                return await client.post(
                    target.url, content=b"", headers={"Content-Type": "application/json"}
                )
            logger.debug("Using GET method")
            return await client.get(target.url)

    @staticmethod
    def _failure(target: WebhookTarget, error: str) -> WebhookResponse:
        return WebhookResponse(
            status_code=TRANSPORT_ERROR_STATUS,
            status_message=STATUS_ERROR,
            error=error,
            target=target.name,
        )
