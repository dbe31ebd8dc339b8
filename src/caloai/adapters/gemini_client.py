"""Gemini client using the OpenAI-compatible chat completions API."""

import json
import logging
from dataclasses import dataclass

import httpx
import openai
from openai import AsyncOpenAI

from caloai.domain.errors import UpstreamBlocked, UpstreamError, UpstreamMalformed
from caloai.services.analysis import GenerativeClient

logger = logging.getLogger(__name__)

EMPTY_RESPONSE_MESSAGE = "AI response was empty or blocked."


@dataclass
class GeminiGenerativeClient(GenerativeClient):
    """Generative client backed by Gemini through the OpenAI SDK."""

    client: AsyncOpenAI

    @classmethod
    def create(
        cls, api_key: str, base_url: str, timeout: float
    ) -> "GeminiGenerativeClient":
        """Create a client with a managed httpx session and no retries."""
        return cls(
            client=AsyncOpenAI(
                api_key=api_key,
                base_url=base_url,
                max_retries=0,
                http_client=httpx.AsyncClient(timeout=timeout),
            )
        )

    async def generate_json(  # noqa: PLR0913
        self,
        *,
        model: str,
        prompt: str,
        image_data_url: str | None,
        temperature: float,
        max_output_tokens: int,
    ) -> dict[str, object]:
        """Call the model in JSON mode and parse its reply."""
        content: list[dict[str, object]] = [{"type": "text", "text": prompt}]
        if image_data_url:
            content.append({"type": "image_url", "image_url": {"url": image_data_url}})

        logger.info("Sending request to %s", model)
        try:
            response = await self.client.chat.completions.create(
                model=model,
                messages=[{"role": "user", "content": content}],
                response_format={"type": "json_object"},
                temperature=temperature,
                max_tokens=max_output_tokens,
            )
        except openai.APIError as exc:
            logger.exception("Gemini request failed")
            raise UpstreamError(str(exc)) from exc

        if not response.choices:
            raise UpstreamBlocked(EMPTY_RESPONSE_MESSAGE)
        choice = response.choices[0]
        if choice.finish_reason == "content_filter":
            logger.warning("Gemini response blocked by safety filters")
            raise UpstreamBlocked(
                f"Content blocked by AI safety filters ({choice.finish_reason})."
            )
        output_text = choice.message.content if choice.message else None
        if not output_text:
            raise UpstreamBlocked(EMPTY_RESPONSE_MESSAGE)

        try:
            payload = json.loads(_strip_code_fence(output_text))
        except json.JSONDecodeError as exc:
            logger.error("Gemini returned invalid JSON", extra={"text": output_text})
            raise UpstreamMalformed("Failed to parse AI response.") from exc
        if not isinstance(payload, dict):
            raise UpstreamMalformed("AI response was not a JSON object.")
        return payload

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()


def _strip_code_fence(text: str) -> str:
    """Remove a surrounding markdown code fence, if present."""
    stripped = text.strip()
    if stripped.startswith("```"):
        stripped = stripped.split("\n", 1)[1] if "\n" in stripped else ""
        if stripped.rstrip().endswith("```"):
            stripped = stripped.rstrip()[:-3]
    return stripped.strip()
