"""
Embedding provider interface for abstracting embedding model implementations.
"""
from abc import ABC, abstractmethod
from typing import List, Dict, Any
from dataclasses import dataclass, field


@dataclass
class EmbeddingResult:
    """Standardized embedding response."""
    vector: List[float]
    model: str = ""
    tokens: int = 0
    metadata: Dict[str, Any] = field(default_factory=dict)


class EmbeddingProvider(ABC):
    """Abstract base class for embedding providers."""

    @abstractmethod
    def embed(self, text: str, model: str) -> EmbeddingResult:
        """
        Embed a single piece of text.

        Args:
            text: Text to embed
            model: Model identifier

        Returns:
            EmbeddingResult with the vector and the model that produced it

        Raises:
            Exception: Provider errors propagate; callers decide whether to swallow them
        """
        pass
