"""Fetch themed word lists from Gemini as structured JSON."""

from __future__ import annotations

import json
import os
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

import requests

from ..core.exceptions import ThemeWordError
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
RETRY_STATUSES = frozenset({429, 500, 502, 503, 504})


class GeminiAPIError(ThemeWordError):
    """Raised when Gemini cannot produce a usable word list."""


@dataclass
class GeminiSettings:
    api_key: str
    model: str = DEFAULT_MODEL
    timeout: float = 30.0
    retries: int = 1
    retry_delay: float = 1.0

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GeminiSettings":
        """Read ``GEMINI_API_KEY`` and the optional ``GEMINI_MODEL``."""
        env = os.environ if environ is None else environ
        api_key = (env.get("GEMINI_API_KEY") or "").strip()
        if not api_key:
            raise GeminiAPIError("GEMINI_API_KEY is not set")
        return cls(api_key=api_key, model=env.get("GEMINI_MODEL") or DEFAULT_MODEL)


class GeminiWordClient:
    """Asks Gemini for a JSON array of words and returns it as a list."""

    def __init__(
        self,
        settings: Optional[GeminiSettings] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.settings = settings or GeminiSettings.from_env()
        self.session = session or requests.Session()

    def request_words(self, prompt: str, max_words: int) -> List[str]:
        body = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": {"type": "ARRAY", "items": {"type": "STRING"}},
                "temperature": 0.7,
            },
        }
        payload = self._post(body)
        words = self._decode_words(self._candidate_text(payload))
        LOGGER.info("Gemini returned %s words (kept %s)", len(words), min(len(words), max_words))
        return words[:max_words]

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------

    def _post(self, body: Dict[str, Any]) -> Dict[str, Any]:
        response = self._send(body)
        attempt = 0
        while response.status_code in RETRY_STATUSES and attempt < self.settings.retries:
            attempt += 1
            LOGGER.warning(
                "Gemini answered HTTP %s, retry %s/%s",
                response.status_code, attempt, self.settings.retries,
            )
            time.sleep(self.settings.retry_delay * attempt)
            response = self._send(body)

        if response.status_code >= 400:
            raise GeminiAPIError(
                f"Gemini answered HTTP {response.status_code}: {self._error_message(response)}"
            )
        try:
            return response.json()
        except ValueError as exc:
            raise GeminiAPIError("Gemini answered with a body that is not JSON") from exc

    def _send(self, body: Dict[str, Any]) -> requests.Response:
        try:
            return self.session.post(
                ENDPOINT.format(model=self.settings.model),
                headers={"x-goog-api-key": self.settings.api_key},
                json=body,
                timeout=self.settings.timeout,
            )
        except requests.RequestException as exc:
            raise GeminiAPIError(f"Gemini request failed: {exc}") from exc

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            return response.json()["error"]["message"]
        except (ValueError, KeyError, TypeError):
            return (response.text or "").strip()[:200] or "no details"

    # ------------------------------------------------------------------
    # Payload
    # ------------------------------------------------------------------

    @staticmethod
    def _candidate_text(payload: Dict[str, Any]) -> str:
        for candidate in payload.get("candidates") or []:
            parts = (candidate.get("content") or {}).get("parts") or []
            text = "".join(part.get("text", "") for part in parts)
            if text.strip():
                return text
        reason = (payload.get("promptFeedback") or {}).get("blockReason")
        if reason:
            raise GeminiAPIError(f"Gemini blocked the prompt ({reason})")
        raise GeminiAPIError("Gemini answered without any candidate text")

    @staticmethod
    def _decode_words(text: str) -> List[str]:
        cleaned = text.strip()
        if cleaned.startswith("```"):
            cleaned = cleaned.strip("`").removeprefix("json").strip()
        try:
            data = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise GeminiAPIError(f"Gemini word list is not valid JSON: {exc}") from exc
        if not isinstance(data, list):
            raise GeminiAPIError("Gemini word list is not a JSON array")
        return [item for item in data if isinstance(item, str)]
