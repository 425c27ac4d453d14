"""
OpenAI embeddings provider.
"""
import logging
from typing import Optional
from openai import OpenAI, APIError

from interview_capture.core import config
from interview_capture.llm.provider import EmbeddingProvider, EmbeddingResult

logger = logging.getLogger(__name__)


class OpenAIEmbeddingProvider(EmbeddingProvider):
    """Embeddings through the official OpenAI SDK."""

    def __init__(self, api_key: Optional[str] = None):
        self.api_key = api_key or config.OPENAI_API_KEY
        if not self.api_key:
            raise ValueError("OPENAI_API_KEY not configured")
        self.client = OpenAI(api_key=self.api_key)
        logger.info("OpenAI embedding provider initialized")

    def embed(self, text: str, model: str = "text-embedding-3-small") -> EmbeddingResult:
        try:
            response = self.client.embeddings.create(model=model, input=text)
            return EmbeddingResult(
                vector=list(response.data[0].embedding),
                model=response.model or model,
                tokens=response.usage.total_tokens if response.usage else 0,
            )
        except APIError as e:
            logger.error(f"OpenAI embeddings API error: {e}", exc_info=True)
            raise
        except Exception as e:
            logger.error(f"OpenAI embeddings error: {e}", exc_info=True)
            raise
