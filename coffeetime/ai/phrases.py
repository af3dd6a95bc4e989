"""OpenAI integration for motivational phrases shown during rest."""

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from openai import OpenAI

from coffeetime import config

logger = logging.getLogger(__name__)

PROMPT = (
    "You are a productivity guru. Generate an inspirational quote about "
    "productivity, focus, or taking breaks. Reply with the quote only."
)


class PhraseSource(Protocol):
    def fetch_phrase(self) -> str: ...


@dataclass(frozen=True)
class PhraseResult:
    text: str
    fallback_used: bool = False
    notice: str = ""


class RestPhraseService:
    """
    Asks an OpenAI chat model for a short inspirational quote.
    """

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        """
        Initialize the service with an OpenAI client.

        Args:
            api_key: OpenAI API key (defaults to config.OPENAI_API_KEY)
            model: Model name (defaults to config.OPENAI_MODEL)
        """
        self.api_key = api_key or config.OPENAI_API_KEY
        self.model = model or config.OPENAI_MODEL

        if not self.api_key:
            logger.warning("OpenAI API key not found. Rest phrases will use fallback text.")
            self.client = None
        else:
            self.client = OpenAI(api_key=self.api_key, timeout=config.OPENAI_TIMEOUT_SECONDS)

    def fetch_phrase(self) -> str:
        """
        Fetch one quote.

        Raises:
            RuntimeError: If no client is configured or the reply is empty.
            openai.OpenAIError: If the API call fails.
        """
        if not self.client:
            raise RuntimeError("OpenAI client is not configured")

        response = self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": PROMPT}],
            temperature=0.9,
            max_tokens=80,
        )
        content = (response.choices[0].message.content or "").strip().strip('"')
        if not content:
            raise RuntimeError("Empty phrase returned")
        logger.info("Fetched rest phrase from OpenAI")
        return content


def resolve_phrase(source: PhraseSource, fallback: str = config.FALLBACK_PHRASE) -> PhraseResult:
    """
    Fetch a phrase, substituting the fallback on any failure.

    Returns:
        PhraseResult whose notice is set when the fallback was used.
    """
    try:
        return PhraseResult(source.fetch_phrase())
    except Exception as e:
        logger.warning("Could not fetch rest phrase: %s", e)
        return PhraseResult(fallback, fallback_used=True, notice="Couldn't fetch a new quote, enjoy a classic.")
