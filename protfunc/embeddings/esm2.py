"""
ESM-2 embedding provider and response decoding.

ESM-2 (Lin et al. 2023) is a transformer protein language model trained on
UniRef sequences. Its per-protein representations capture structural and
functional information learned without supervision, and intermediate layers
(layer 12 by default here) are a common choice for downstream features.

The hosted encode endpoint returns, for every submitted sequence, a list of
per-layer embeddings:

    {
      "results": [
        {"sequence_index": 0,
         "embeddings": [{"layer": 12, "embedding": [0.01, -0.3, ...]}]}
      ]
    }

Only the vector of the requested layer for the first sequence is used.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx
from pydantic import BaseModel, Field, ValidationError

from .base import (
    EmbeddingConfig,
    EmbeddingProvider,
    EmbeddingProviderError,
    EmbeddingTransientError,
    register_provider,
)

logger = logging.getLogger(__name__)

RETRYABLE_STATUS = frozenset({408, 429})


# =============================================================================
# Response schema
# =============================================================================

class ESM2Layer(BaseModel):
    layer: int
    embedding: list[float]


class ESM2Result(BaseModel):
    sequence_index: int = 0
    embeddings: list[ESM2Layer] = Field(default_factory=list)


class ESM2Response(BaseModel):
    """Decoded ESM-2 encode response."""
    results: list[ESM2Result] = Field(default_factory=list)


def parse_esm2_response(response: dict[str, Any] | ESM2Response, layer: int = 12) -> list[float]:
    """
    Extract the embedding of one layer from an ESM-2 response.

    Args:
        response: Raw JSON payload or decoded ESM2Response
        layer: Layer whose embedding to return

    Returns:
        Embedding vector of the first result

    Raises:
        EmbeddingProviderError: If the payload is malformed, empty,
            or lacks the requested layer
    """
    if not isinstance(response, ESM2Response):
        try:
            response = ESM2Response.model_validate(response)
        except ValidationError as e:
            raise EmbeddingProviderError(f"Failed to parse ESM-2 response: {e}") from e

    if not response.results:
        raise EmbeddingProviderError("Failed to parse ESM-2 response: No results in ESM-2 response")

    for entry in response.results[0].embeddings:
        if entry.layer == layer:
            return entry.embedding

    raise EmbeddingProviderError(
        f"Failed to parse ESM-2 response: Layer {layer} not found in ESM-2 response"
    )


def build_esm2_response(embedding: list[float], layer: int = 12) -> ESM2Response:
    """Wrap a single vector in the ESM-2 response shape."""
    return ESM2Response(
        results=[ESM2Result(sequence_index=0, embeddings=[ESM2Layer(layer=layer, embedding=embedding)])]
    )


# =============================================================================
# Network provider
# =============================================================================

@register_provider
class ESM2Provider(EmbeddingProvider):
    """
    ESM-2 embeddings from the hosted BioLM encode API.

    Requires an API token, read from `EmbeddingConfig.api_key` or the
    LM_API_KEY environment variable.
    """

    name = "esm2"
    model = "esm2-35m"
    description = "ESM-2 protein language model via the BioLM encode API"

    def __init__(
        self,
        config: Optional[EmbeddingConfig] = None,
        client: Optional[httpx.Client] = None,
    ):
        super().__init__(config)
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=self.config.timeout_seconds)
        return self._client

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.config.api_key:
            headers["Authorization"] = f"Token {self.config.api_key}"
        return headers

    def _embed_impl(self, sequence: str) -> list[float]:
        payload = {"items": [{"sequence": sequence}], "params": {}}

        logger.info(f"{self.name}: Requesting embedding for {len(sequence)}-residue sequence")
        try:
            response = self.client.post(self.config.api_url, json=payload, headers=self._headers())
        except httpx.TransportError as e:
            raise EmbeddingTransientError(f"ESM-2 request failed: {e}") from e
        except httpx.HTTPError as e:
            raise EmbeddingProviderError(f"ESM-2 request failed: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.is_error:
            message = data.get("error") if isinstance(data, dict) else None
            message = message or f"Failed to generate embeddings from sequence (HTTP {response.status_code})"
            # Rate limits and server-side failures are worth another attempt
            if response.status_code in RETRYABLE_STATUS or response.is_server_error:
                raise EmbeddingTransientError(message)
            raise EmbeddingProviderError(message)

        return parse_esm2_response(data, layer=self.config.layer)

    def close(self):
        if self._owns_client and self._client is not None:
            self._client.close()
            self._client = None
        super().close()
