# src/services/gemini_client.py

"""Gemini ``generateContent`` REST client with model fallback."""

from typing import Any

from src.errors import DescriptionGenerationError
from src.scrapers.base_client import BaseClient


class GeminiClient(BaseClient):
    """Try each configured model in order until one returns text."""

    def __init__(
        self,
        api_key: str | None = None,
        models: list[str] | None = None,
    ) -> None:
        super().__init__("gemini")
        self.api_key = api_key if api_key is not None else self.settings.GEMINI_API_KEY
        self.models = models or list(self.settings.GEMINI_MODELS)

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def _url(self, model: str) -> str:
        return (
            f"{self.settings.GEMINI_API_BASE}/v1beta/models/"
            f"{model}:generateContent?key={self.api_key}"
        )

    @staticmethod
    def _extract_text(body: dict[str, Any]) -> str | None:
        """Pull ``candidates[0].content.parts[0].text`` if present."""
        try:
            text = body["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            return None
        if not isinstance(text, str) or not text.strip():
            return None
        return text.strip()

    def _call_model(
        self,
        model: str,
        prompt: str,
        temperature: float,
        max_output_tokens: int,
    ) -> str:
        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": temperature,
                "maxOutputTokens": max_output_tokens,
                "topK": 40,
                "topP": 0.95,
            },
        }
        resp = self._fetch_post(
            self._url(model), {"Content-Type": "application/json"}, payload
        )
        if resp is None:
            raise DescriptionGenerationError(f"{model}: request failed")
        if resp.status_code != 200:
            raise DescriptionGenerationError(
                f"{model}: HTTP {resp.status_code}"
            )
        try:
            body = resp.json()
        except ValueError as exc:
            raise DescriptionGenerationError(f"{model}: invalid JSON") from exc

        text = self._extract_text(body)
        if text is None:
            raise DescriptionGenerationError(
                f"{model}: response has no candidate text"
            )
        return text

    def generate_content(
        self,
        prompt: str,
        temperature: float | None = None,
        max_output_tokens: int = 300,
    ) -> str:
        """Generate text, falling through the model list on failure.

        Raises:
            DescriptionGenerationError: not configured, or every model
                failed (the message lists each model's error).
        """
        if not self.configured:
            raise DescriptionGenerationError("GEMINI_API_KEY is not set")

        temp = (
            temperature
            if temperature is not None
            else self.settings.GEMINI_TEMPERATURE
        )
        errors: list[str] = []
        for model in self.models:
            try:
                text = self._call_model(model, prompt, temp, max_output_tokens)
            except DescriptionGenerationError as exc:
                self.logger.warning("Gemini model failed: %s", exc)
                errors.append(str(exc))
                continue
            self.logger.info("Generated %d chars with %s", len(text), model)
            return text

        raise DescriptionGenerationError(
            "All Gemini models failed: " + "; ".join(errors)
        )
