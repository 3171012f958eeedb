"""HTTP client for the upstream NIM chat completion API"""

import asyncio
import json
from typing import Any, Dict, Optional

import httpx

from ..models.config import UpstreamConfig
from ..models.openai import UpstreamChatRequest
from .errors import ServerError, UpstreamAPIError, UpstreamTimeoutError


def extract_error_message(response: httpx.Response) -> str:
    """
    Pull a human readable message out of an upstream error reply

    Args:
        response: Upstream response with an error status

    Returns:
        The upstream's own message when it sent one, else a generic message
    """
    try:
        body = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        body = None

    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
        detail = body.get("detail")
        if isinstance(detail, str) and detail:
            return detail

    return f"Request failed with status code {response.status_code}"


class NimClient:
    """Forward chat completion requests to the upstream provider"""

    def __init__(
        self,
        config: UpstreamConfig,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize upstream client

        Args:
            config: Upstream configuration (base URL, credential, timeout)
            http_client: Shared HTTP client; created lazily when omitted
        """
        self.config = config
        self.http_client = http_client

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client"""
        if self.http_client is None:
            self.http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.config.timeout),
            )
        return self.http_client

    async def close(self):
        """Close HTTP client"""
        if self.http_client:
            await self.http_client.aclose()
            self.http_client = None

    @property
    def completions_url(self) -> str:
        return f"{self.config.api_base}/chat/completions"

    async def create_chat_completion(
        self,
        request: UpstreamChatRequest,
    ) -> Dict[str, Any]:
        """
        Send a chat completion request upstream

        Args:
            request: Translated upstream request

        Returns:
            Decoded JSON body of the upstream reply

        Raises:
            UpstreamTimeoutError: If the upstream exceeds the timeout
            UpstreamAPIError: If the upstream answers with an error status
            ServerError: On network failures or an undecodable reply
        """
        client = await self._get_http_client()
        headers = {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json"
        }

        try:
            # httpx timeouts apply per connect/read/write step; cap the whole call
            response = await asyncio.wait_for(
                client.post(
                    self.completions_url,
                    json=request.model_dump(),
                    headers=headers,
                    timeout=self.config.timeout
                ),
                timeout=self.config.timeout,
            )
            response.raise_for_status()
            return response.json()

        except httpx.HTTPStatusError as e:
            raise UpstreamAPIError(
                extract_error_message(e.response),
                status_code=e.response.status_code,
            ) from e

        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            raise UpstreamTimeoutError() from e

        except httpx.RequestError as e:
            raise ServerError(
                str(e) or f"Failed to connect to {self.config.api_base}"
            ) from e

        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ServerError(f"Invalid JSON from upstream: {e}") from e
