"""
Protein language model embedding providers.

Available providers:
    - mock: Deterministic offline generator for development and tests
    - esm2: ESM-2 embeddings from the hosted BioLM encode API

Usage:
    >>> from protfunc.embeddings import get_provider
    >>> provider = get_provider("mock")
    >>> vector = provider.embed("MVLSPADKTNVKAAWGKVGAHAGEYGAEALERMFLSFPTTKTYFPHFDLSH")
    >>> len(vector)
    1280
"""

from .base import (
    DEFAULT_DIMENSION,
    DEFAULT_LAYER,
    EmbeddingConfig,
    EmbeddingProvider,
    EmbeddingProviderError,
    EmbeddingTransientError,
    get_provider,
    list_providers,
    register_provider,
)

# Import concrete providers to register them
from .esm2 import (
    ESM2Provider,
    ESM2Response,
    build_esm2_response,
    parse_esm2_response,
)
from .mock import MockEmbeddingProvider, generate_mock_embedding

__all__ = [
    "EmbeddingConfig",
    "EmbeddingProvider",
    "EmbeddingProviderError",
    "EmbeddingTransientError",
    "get_provider",
    "list_providers",
    "register_provider",
    "DEFAULT_LAYER",
    "DEFAULT_DIMENSION",
    "ESM2Provider",
    "ESM2Response",
    "parse_esm2_response",
    "build_esm2_response",
    "MockEmbeddingProvider",
    "generate_mock_embedding",
]
