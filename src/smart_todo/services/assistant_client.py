"""HTTP client for the assistant Messages API."""

from __future__ import annotations

from typing import Any

import httpx

from smart_todo.exceptions import UpstreamFailureError
from smart_todo.models.config_models import AssistantConfig


class AssistantClient:
    """Sends one prompt and returns the reply text.

    No retries: a failed or slow request surfaces as ``UpstreamFailureError``
    and the caller decides what to do with it.
    """

    def __init__(
        self,
        config: AssistantConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config
        self.transport = transport

    def _get_headers(self, api_key: str) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "x-api-key": api_key,
            "anthropic-version": self.config.api_version,
        }

    async def complete(self, api_key: str, system: str, message: str) -> str:
        """Send ``message`` with the ``system`` prompt and return the reply text.

        Raises:
            UpstreamFailureError: On timeout, transport error, non-2xx status
                or an unreadable response body
        """
        payload = {
            "model": self.config.model,
            "max_tokens": self.config.max_tokens,
            "system": system,
            "messages": [{"role": "user", "content": message}],
        }

        try:
            async with httpx.AsyncClient(
                base_url=self.config.endpoint,
                timeout=self.config.timeout,
                transport=self.transport,
            ) as client:
                response = await client.post(
                    "/v1/messages", json=payload, headers=self._get_headers(api_key)
                )
                response.raise_for_status()
                data = response.json()
        except httpx.TimeoutException as e:
            raise UpstreamFailureError(
                f"Assistant request timed out after {self.config.timeout:g}s"
            ) from e
        except httpx.HTTPStatusError as e:
            raise UpstreamFailureError(
                f"Assistant request failed ({e.response.status_code}): "
                f"{_error_detail(e.response)}"
            ) from e
        except httpx.RequestError as e:
            raise UpstreamFailureError(f"Assistant request failed: {e}") from e
        except ValueError as e:
            raise UpstreamFailureError("Assistant returned an unreadable response") from e

        return _reply_text(data)


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return response.reason_phrase


def _reply_text(data: Any) -> str:
    """Concatenate the text blocks of a Messages API response."""
    if not isinstance(data, dict):
        raise UpstreamFailureError("Assistant returned an unexpected response")
    blocks = data.get("content") or []
    return "".join(
        block.get("text", "")
        for block in blocks
        if isinstance(block, dict) and block.get("type") == "text"
    )
