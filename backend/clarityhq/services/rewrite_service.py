"""Single-shot LLM rewrite used by the task rewriter UI."""
from __future__ import annotations

import logging

import openai

from clarityhq.core.config import settings

logger = logging.getLogger(__name__)


class RewriteUnavailable(RuntimeError):
    """No API key is configured."""


class RewriteFailed(RuntimeError):
    """The provider call failed or returned nothing."""


def rewrite_prompt(prompt: str, *, client: openai.OpenAI | None = None) -> str:
    """Send ``prompt`` as a single user message and return the model's reply text."""
    if not prompt or not prompt.strip():
        raise ValueError("Missing prompt")

    if client is None:
        if not settings.openai_api_key:
            raise RewriteUnavailable("OPENAI_API_KEY is not configured")
        client = openai.OpenAI(api_key=settings.openai_api_key, timeout=settings.openai_timeout_seconds)

    try:
        completion = client.chat.completions.create(
            model=settings.openai_model,
            messages=[{"role": "user", "content": prompt}],
        )
    except openai.OpenAIError as exc:
        logger.warning("OpenAI rewrite failed: %s", exc)
        raise RewriteFailed(str(exc)) from exc

    content = completion.choices[0].message.content if completion.choices else None
    if not content:
        raise RewriteFailed("Empty completion")
    return content
