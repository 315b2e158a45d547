"""Chat-completions client used by ``prcomment generate``."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from ..errors import CompletionError


@dataclass(frozen=True)
class ChatRequest:
    """A prepared ``POST {base_url}/chat/completions`` call."""

    url: str
    body: Dict[str, Any]
    headers: Dict[str, str] = field(default_factory=dict)
    timeout: float = 60.0

    @property
    def model(self) -> str:
        return str(self.body.get("model", ""))


Transport = Callable[[ChatRequest], Dict[str, Any]]


class LLMRunner:
    """Turns a rendered PR prompt into a description via an OpenAI-style API.

    Unset model, base URL and API key fall back to ``PRCOMMENT_*`` then
    ``OPENAI_*`` environment variables. The transport is injectable so tests
    never touch the network; it receives a ``ChatRequest`` and returns the
    decoded JSON response.
    """

    DEFAULT_MODEL = "gpt-4-turbo"
    DEFAULT_BASE_URL = "https://api.openai.com/v1"
    DEFAULT_TEMPERATURE = 0.7
    ENV_MODEL_KEYS = ("PRCOMMENT_LLM_MODEL", "OPENAI_MODEL")
    ENV_BASE_URL_KEYS = ("PRCOMMENT_LLM_BASE_URL", "OPENAI_BASE_URL")
    ENV_API_KEY_KEYS = ("PRCOMMENT_API_KEY", "OPENAI_API_KEY")

    def __init__(
        self,
        model: str | None = None,
        *,
        base_url: str | None = None,
        temperature: Optional[float] = DEFAULT_TEMPERATURE,
        max_tokens: Optional[int] = None,
        api_key: str | None = None,
        request_timeout: Optional[float] = 60.0,
        transport: Transport | None = None,
    ) -> None:
        self.model = model or _from_env(self.ENV_MODEL_KEYS) or self.DEFAULT_MODEL
        base = base_url or _from_env(self.ENV_BASE_URL_KEYS) or self.DEFAULT_BASE_URL
        self.base_url = base.rstrip("/")
        self.api_key = api_key or _from_env(self.ENV_API_KEY_KEYS)
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.request_timeout = request_timeout or 60.0
        self._transport = transport or post_json

    def build_request(self, prompt: str, *, system: str | None = None) -> ChatRequest:
        messages: List[Dict[str, str]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        body: Dict[str, Any] = {"model": self.model, "messages": messages}
        if self.temperature is not None:
            body["temperature"] = self.temperature
        if self.max_tokens is not None:
            body["max_tokens"] = self.max_tokens

        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return ChatRequest(
            url=f"{self.base_url}/chat/completions",
            body=body,
            headers=headers,
            timeout=self.request_timeout,
        )

    def run(self, prompt: str, *, system: str | None = None) -> str:
        """Send the prompt and return the first choice's message content, trimmed."""
        response = self._transport(self.build_request(prompt, system=system))
        return message_content(response).strip()


def post_json(request: ChatRequest) -> Dict[str, Any]:
    """Default transport: POST the body with urllib and decode the JSON reply."""
    http_request = Request(
        request.url,
        data=json.dumps(request.body).encode("utf-8"),
        headers=request.headers,
        method="POST",
    )
    try:
        with urlopen(http_request, timeout=request.timeout) as response:  # type: ignore[arg-type]
            raw = response.read()
    except HTTPError as exc:
        detail = exc.read().decode("utf-8", errors="replace").strip()
        raise CompletionError(
            f"Completion request failed with status {exc.code}: {detail or exc.reason}"
        ) from exc
    except URLError as exc:  # pragma: no cover - depends on network
        raise CompletionError(f"Completion request failed: {exc.reason}") from exc

    try:
        payload = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise CompletionError("Completion endpoint returned invalid JSON") from exc
    if not isinstance(payload, dict):
        raise CompletionError("Completion endpoint returned an unexpected payload")
    return payload


def message_content(payload: Dict[str, Any]) -> str:
    """Read ``choices[0].message.content`` or raise ``CompletionError``."""
    try:
        content = payload["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as exc:
        raise CompletionError("Completion endpoint returned an empty response") from exc
    if not isinstance(content, str) or not content.strip():
        raise CompletionError("Completion endpoint returned an empty response")
    return content


def _from_env(keys: tuple[str, ...]) -> str | None:
    for key in keys:
        value = os.getenv(key)
        if value:
            return value
    return None


__all__ = ["ChatRequest", "LLMRunner", "message_content", "post_json"]
