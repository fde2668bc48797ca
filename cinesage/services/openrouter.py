"""Integration helpers for the OpenRouter API."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

import httpx

from ..config import Settings
from ..models import LikedTitle
from ..prompts import SYSTEM_PROMPT, PromptOptions, build_recommendation_prompt
from ..utils import strip_reasoning

logger = logging.getLogger(__name__)


class OpenRouterClient:
    """Client responsible for requesting free-text insights from OpenRouter."""

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient):
        self._settings = settings
        self._client = http_client

    async def generate(
        self,
        liked: Sequence[LikedTitle],
        *,
        disliked: Iterable[LikedTitle] = (),
        options: PromptOptions | None = None,
    ) -> str:
        """Return a markdown passage of personalised picks for the liked titles.

        Raises ``RuntimeError`` when the API key is missing or the model
        response is unusable; transport errors from httpx propagate.
        """

        resolved_key = self._settings.openrouter_api_key
        if not resolved_key:
            raise RuntimeError("OpenRouter API key is required to generate insights")
        resolved_model = self._settings.openrouter_model

        resolved_options = self._resolve_options(options, disliked)
        prompt = build_recommendation_prompt(liked, resolved_options)

        payload = {
            "model": resolved_model,
            "temperature": self._settings.openrouter_temperature,
            "max_tokens": self._settings.openrouter_max_tokens,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
        }

        headers = {
            "Authorization": f"Bearer {resolved_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": self._settings.openrouter_referer,
            "X-Title": self._settings.app_name,
        }

        response = await self._client.post("/chat/completions", json=payload, headers=headers)
        if response.status_code >= 400:
            raise RuntimeError(response.text)

        data = response.json()
        routed_model = data.get("model")
        if routed_model and routed_model != resolved_model:
            logger.info(
                "OpenRouter routed %s to %s", resolved_model, routed_model
            )

        choices = data.get("choices", [])
        if not choices:
            raise RuntimeError("Model returned no choices")
        message = choices[0].get("message", {})
        content = message.get("content")
        if not isinstance(content, str):
            raise RuntimeError("Model response missing content")

        text = strip_reasoning(content)
        if not text:
            raise RuntimeError("Model returned an empty passage")
        return text

    def _resolve_options(
        self,
        options: PromptOptions | None,
        disliked: Iterable[LikedTitle],
    ) -> PromptOptions:
        """Merge disliked titles into the exclusion list of the prompt options."""

        resolved = options or PromptOptions(count=self._settings.advisory_pick_count)
        exclusions = list(resolved.exclude)
        for title in disliked:
            label = title.label()
            if label not in exclusions:
                exclusions.append(label)
        if exclusions == resolved.exclude:
            return resolved
        return resolved.model_copy(update={"exclude": exclusions})
