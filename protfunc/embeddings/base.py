"""
Abstract base classes for protein embedding providers.

An embedding provider turns a protein sequence into a fixed-length numeric
vector from a pretrained protein language model. The classifier only needs
"a sequence in, a vector out", so providers are interchangeable: a
deterministic local generator for offline work and tests, and a
network-backed model for real analyses. Which one is used is a matter of
configuration.

Key design principles:
1. All providers expose the same `embed()` interface
2. Caching is built-in to avoid redundant network calls
3. Transient failures (timeouts, rate limits, server errors) are retried with
   a linear backoff; every other failure is raised on the first attempt
4. Errors are standardized as EmbeddingProviderError
"""

from __future__ import annotations

import hashlib
import logging
import os
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from diskcache import Cache

from ..core.sequence import sequence_hash

logger = logging.getLogger(__name__)


DEFAULT_LAYER = 12
DEFAULT_DIMENSION = 1280


@dataclass
class EmbeddingConfig:
    """
    Configuration for embedding provider behavior.

    Allows selecting the model layer, API credentials, caching and
    runtime parameters without modifying provider code.
    """
    # Model
    layer: int = DEFAULT_LAYER
    dimension: int = DEFAULT_DIMENSION  # Expected vector length

    # Remote API
    api_url: str = "https://biolm.ai/api/v3/esm2-35m/encode/"
    api_key: Optional[str] = None  # Falls back to LM_API_KEY

    # Caching
    use_cache: bool = True
    cache_dir: Optional[Path] = None
    cache_ttl: int = 86400 * 30  # 30 days default

    # Runtime
    timeout_seconds: float = 60.0
    max_retries: int = 3
    retry_delay: float = 2.0

    def __post_init__(self):
        if self.api_key is None:
            self.api_key = os.environ.get("LM_API_KEY")
        if self.cache_dir is None:
            env_dir = os.environ.get("PROTFUNC_CACHE_DIR")
            self.cache_dir = Path(env_dir) if env_dir else Path.home() / ".cache" / "protfunc"


class EmbeddingProviderError(Exception):
    """Base exception for embedding provider errors."""
    pass


class EmbeddingTransientError(EmbeddingProviderError):
    """A failure worth retrying: transport errors, HTTP 429 and 5xx."""
    pass


class EmbeddingProvider(ABC):
    """
    Abstract base class for all embedding providers.

    Subclasses implement `_embed_impl()` with the actual model call while
    this base class handles caching, retries and dimension checks.

    Example:
        class MyProvider(EmbeddingProvider):
            name = "my_model"
            model = "my-model-v1"

            def _embed_impl(self, sequence: str) -> list[float]:
                return call_model(sequence)
    """

    # Class attributes - must be set by subclasses
    name: str = "base"
    model: str = ""
    description: str = ""

    # Local generators are cheap and deterministic; skip the disk cache
    cacheable: bool = True

    def __init__(self, config: Optional[EmbeddingConfig] = None):
        """
        Initialize provider with configuration.

        Args:
            config: Provider configuration (uses defaults if None)
        """
        self.config = config or EmbeddingConfig()
        self._cache: Optional[Cache] = None

        if self.cacheable and self.config.use_cache:
            cache_path = self.config.cache_dir / self.name.lower().replace(" ", "_")
            cache_path.mkdir(parents=True, exist_ok=True)
            self._cache = Cache(str(cache_path))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, layer={self.config.layer})"

    def _get_cache_key(self, sequence: str) -> str:
        """Generate cache key for a sequence."""
        seq_hash = sequence_hash(sequence)
        config_hash = hashlib.md5(f"{self.model}:{self.config.layer}".encode()).hexdigest()[:8]
        return f"{self.name}:{seq_hash}:{config_hash}"

    @abstractmethod
    def _embed_impl(self, sequence: str) -> list[float]:
        """
        Internal embedding implementation.

        Args:
            sequence: Cleaned, validated protein sequence

        Returns:
            Embedding vector

        Raises:
            EmbeddingTransientError: On failures that may succeed if retried
            EmbeddingProviderError: On any other failure
        """
        pass

    def embed(self, sequence: str) -> list[float]:
        """
        Compute the embedding of a protein sequence.

        Args:
            sequence: Cleaned, validated protein sequence

        Returns:
            Embedding vector for the configured layer

        Raises:
            EmbeddingProviderError: On a non-transient failure, or when every
                attempt fails transiently
        """
        sequence = sequence.upper()

        if self._cache is not None:
            key = self._get_cache_key(sequence)
            cached = self._cache.get(key)
            if cached is not None:
                logger.debug(f"{self.name}: Using cached embedding for {key}")
                return cached

        last_error: Optional[EmbeddingTransientError] = None
        for attempt in range(self.config.max_retries):
            try:
                embedding = self._embed_impl(sequence)
                break
            except EmbeddingTransientError as e:
                last_error = e
                logger.warning(f"{self.name}: Attempt {attempt + 1} failed: {e}")
                if attempt < self.config.max_retries - 1:
                    time.sleep(self.config.retry_delay * (attempt + 1))
        else:
            raise EmbeddingProviderError(
                f"{self.name}: Failed to generate embeddings after "
                f"{self.config.max_retries} attempts: {last_error}"
            )

        if len(embedding) != self.config.dimension:
            logger.warning(
                f"{self.name}: Embedding dimension {len(embedding)} differs from "
                f"expected {self.config.dimension}"
            )

        if self._cache is not None:
            self._cache.set(self._get_cache_key(sequence), embedding, expire=self.config.cache_ttl)

        return embedding

    def get_info(self) -> dict[str, Any]:
        """
        Get provider information for documentation/logging.

        Returns:
            Dictionary with provider metadata
        """
        return {
            "name": self.name,
            "model": self.model,
            "layer": self.config.layer,
            "dimension": self.config.dimension,
            "cached": self._cache is not None,
            "description": self.description,
        }

    def clear_cache(self):
        """Clear the embedding cache for this provider."""
        if self._cache is not None:
            self._cache.clear()

    def close(self):
        """Release provider resources."""
        if self._cache is not None:
            self._cache.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


# Registry for available providers
_PROVIDER_REGISTRY: dict[str, type[EmbeddingProvider]] = {}


def register_provider(provider_class: type[EmbeddingProvider]) -> type[EmbeddingProvider]:
    """
    Decorator to register a provider class.

    Usage:
        @register_provider
        class MyProvider(EmbeddingProvider):
            name = "my_model"
            ...
    """
    _PROVIDER_REGISTRY[provider_class.name] = provider_class
    return provider_class


def get_provider(name: str, config: Optional[EmbeddingConfig] = None) -> EmbeddingProvider:
    """
    Get a provider instance by name.

    Args:
        name: Provider name
        config: Optional configuration

    Returns:
        Provider instance

    Raises:
        KeyError: If provider not found
    """
    if name not in _PROVIDER_REGISTRY:
        available = ", ".join(_PROVIDER_REGISTRY.keys())
        raise KeyError(f"Embedding provider '{name}' not found. Available: {available}")

    return _PROVIDER_REGISTRY[name](config)


def list_providers() -> list[dict[str, Any]]:
    """
    List all registered providers with their info.

    Returns:
        List of provider info dictionaries
    """
    return [
        cls(EmbeddingConfig(use_cache=False)).get_info()
        for cls in _PROVIDER_REGISTRY.values()
    ]
