import json
import httpx
from typing import Optional, Dict, Any, Tuple
from relay.providers.base import (
    Messages,
    ProviderError,
    UpstreamHTTPError,
    UpstreamTimeout,
)

ASSISTANTS_HEADER = {"OpenAI-Beta": "assistants=v2"}
MAX_ERROR_BODY = 500


def _error_body(r: httpx.Response) -> str:
    try:
        data = r.json()
    except ValueError:
        return r.text[:MAX_ERROR_BODY]
    err = data.get("error") if isinstance(data, dict) else None
    if isinstance(err, dict) and isinstance(err.get("message"), str):
        return err["message"]
    return json.dumps(data)[:MAX_ERROR_BODY]


class OpenAIProvider:
    """Thin async client for the chat-completion, assistants and speech endpoints."""

    def __init__(self, *, api_key: str, base_url: str, timeout: float = 60.0) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = httpx.Timeout(timeout, connect=10.0)

    def _headers(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        headers = {"Authorization": f"Bearer {self.api_key}"}
        if extra:
            headers.update(extra)
        return headers

    async def _send(
        self,
        method: str,
        path: str,
        *,
        json_body: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                return await client.request(method, url, json=json_body, headers=self._headers(headers))
        except httpx.TimeoutException as e:
            raise UpstreamTimeout(f"Upstream timed out: {method} /{path.lstrip('/')}") from e
        except httpx.HTTPError as e:
            raise ProviderError(f"Upstream HTTP error: {e}") from e

    async def _json(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        r = await self._send(method, path, **kwargs)
        if r.status_code >= 400:
            raise UpstreamHTTPError(r.status_code, _error_body(r))
        try:
            data = r.json()
        except ValueError as e:
            raise ProviderError("Upstream returned a non-JSON body.") from e
        if not isinstance(data, dict):
            raise ProviderError("Unexpected response type from upstream.")
        return data

    # --- completion mode ---

    async def chat_completion(
        self,
        messages: Messages,
        *,
        model: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"model": model, "messages": messages}
        if temperature is not None:
            payload["temperature"] = temperature
        if max_tokens is not None:
            payload["max_tokens"] = max_tokens
        return await self._json("POST", "chat/completions", json_body=payload)

    # --- assistant mode ---

    async def create_thread(self) -> str:
        data = await self._json("POST", "threads", json_body={}, headers=ASSISTANTS_HEADER)
        return self._require_id(data, "thread")

    async def add_message(self, thread_id: str, role: str, content: str) -> None:
        await self._json(
            "POST",
            f"threads/{thread_id}/messages",
            json_body={"role": role, "content": content},
            headers=ASSISTANTS_HEADER,
        )

    async def create_run(self, thread_id: str, assistant_id: str) -> Dict[str, Any]:
        data = await self._json(
            "POST",
            f"threads/{thread_id}/runs",
            json_body={"assistant_id": assistant_id},
            headers=ASSISTANTS_HEADER,
        )
        self._require_id(data, "run")
        return data

    async def get_run(self, thread_id: str, run_id: str) -> Dict[str, Any]:
        return await self._json("GET", f"threads/{thread_id}/runs/{run_id}", headers=ASSISTANTS_HEADER)

    async def cancel_run(self, thread_id: str, run_id: str) -> None:
        await self._json("POST", f"threads/{thread_id}/runs/{run_id}/cancel", headers=ASSISTANTS_HEADER)

    async def list_messages(self, thread_id: str) -> Dict[str, Any]:
        # newest first is the upstream default ordering
        return await self._json("GET", f"threads/{thread_id}/messages", headers=ASSISTANTS_HEADER)

    # --- speech ---

    async def speech(self, text: str, *, model: str, voice: str, response_format: str = "mp3") -> bytes:
        payload = {"model": model, "voice": voice, "input": text, "response_format": response_format}
        r = await self._send("POST", "audio/speech", json_body=payload)
        if r.status_code >= 400:
            raise UpstreamHTTPError(r.status_code, _error_body(r))
        if not r.content:
            raise ProviderError("Upstream returned empty audio.")
        return r.content

    # --- pass-through ---

    async def forward(self, path: str, body: Dict[str, Any]) -> Tuple[int, Any]:
        r = await self._send("POST", path, json_body=body)
        try:
            return r.status_code, r.json()
        except ValueError as e:
            raise UpstreamHTTPError(r.status_code, r.text[:MAX_ERROR_BODY]) from e

    @staticmethod
    def _require_id(data: Dict[str, Any], kind: str) -> str:
        ident = data.get("id")
        if not isinstance(ident, str) or not ident:
            raise ProviderError(f"Upstream did not return a {kind} id.")
        return ident
