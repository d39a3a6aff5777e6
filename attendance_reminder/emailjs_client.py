"""HTTP client for the EmailJS transactional email API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

EMAILJS_API_BASE = "https://api.emailjs.com/api/v1.0"


class EmailJSError(RuntimeError):
    """Raised when EmailJS rejects a send request."""

    def __init__(self, status: int, text: str) -> None:
        super().__init__(f"EmailJS send failed with status {status}: {text}")
        self.status = status
        self.text = text


@dataclass(slots=True)
class EmailJSResponse:
    status: int
    text: str


class EmailJSClient:
    """Simple async wrapper around the EmailJS ``email/send`` endpoint."""

    def __init__(
        self,
        public_key: str,
        private_key: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.public_key = public_key
        self.private_key = private_key
        self._client = httpx.AsyncClient(
            base_url=EMAILJS_API_BASE,
            headers={"Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def send(
        self,
        service_id: str,
        template_id: str,
        template_params: Dict[str, Any],
    ) -> EmailJSResponse:
        payload: Dict[str, Any] = {
            "service_id": service_id,
            "template_id": template_id,
            "user_id": self.public_key,
            "template_params": template_params,
        }
        if self.private_key:
            payload["accessToken"] = self.private_key

        response = await self._client.post("email/send", json=payload)
        if response.status_code != 200:
            raise EmailJSError(response.status_code, response.text)
        return EmailJSResponse(status=response.status_code, text=response.text)


__all__ = ["EmailJSClient", "EmailJSError", "EmailJSResponse", "EMAILJS_API_BASE"]
