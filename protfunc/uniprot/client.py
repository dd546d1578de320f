"""UniProt REST API client.

Docs: https://www.uniprot.org/help/api
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from .parser import UniProtEntry, parse_uniprot_entry

logger = logging.getLogger(__name__)


@dataclass
class UniProtConfig:
    base_url: str = "https://rest.uniprot.org"
    timeout_seconds: float = 30.0


class UniProtError(Exception):
    """Raised when a UniProt entry cannot be fetched."""
    pass


class UniProtClient:
    """Fetches UniProtKB entries by accession."""

    def __init__(
        self,
        config: Optional[UniProtConfig] = None,
        client: Optional[httpx.Client] = None,
    ):
        self.config = config or UniProtConfig()
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=self.config.timeout_seconds)
        return self._client

    def fetch_entry(self, accession: str) -> dict[str, Any]:
        """
        Get a full UniProt entry by accession.

        Raises:
            UniProtError: On transport errors, non-2xx responses or invalid JSON
        """
        accession = accession.strip()
        url = f"{self.config.base_url}/uniprotkb/{accession}.json"
        logger.info(f"Fetching UniProt entry {accession}")

        try:
            resp = self.client.get(url)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPStatusError as e:
            raise UniProtError(
                f"Failed to fetch UniProt sequence: UniProt API error: "
                f"{e.response.status_code} {e.response.reason_phrase}"
            ) from e
        except httpx.HTTPError as e:
            raise UniProtError(f"Failed to fetch UniProt sequence: {e}") from e
        except ValueError as e:
            raise UniProtError(f"Failed to fetch UniProt sequence: invalid JSON ({e})") from e

    def get_entry(self, accession: str) -> UniProtEntry:
        """Fetch and decode a UniProt entry."""
        return parse_uniprot_entry(self.fetch_entry(accession))

    def close(self):
        if self._owns_client and self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
