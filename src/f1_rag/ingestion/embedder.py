"""Embedding generation with a cascading fallback chain.

Tiers are tried in order until one yields a vector:

1. ``primary``   — hosted ``all-mpnet-base-v2`` (768-d, zero-padded), retried.
2. ``secondary`` — hosted ``e5-large-v2``, single attempt, reconciled.
3. ``synthetic`` — deterministic hash-derived unit vector; cannot fail.

Each tier returns ``list[float] | None``; the chain never raises for a
provider failure, so ingestion is never blocked on embedding availability.
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable
from typing import Any

import requests

from f1_rag.config import settings
from f1_rag.ingestion.reconcile import reconcile_dimension

logger = logging.getLogger(__name__)

EmbeddingTier = Callable[[str], "list[float] | None"]


def _unwrap_vector(payload: Any) -> list[float] | None:
    """Accept ``[x, ...]`` or ``[[x, ...]]``; anything else is ``None``."""
    if isinstance(payload, list) and payload and isinstance(payload[0], list):
        payload = payload[0]
    if not isinstance(payload, list) or not payload:
        return None
    if not all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in payload):
        return None
    return [float(v) for v in payload]


def _string_hash(text: str) -> int:
    """32-bit signed rolling hash (``h * 31 + c``)."""
    h = 0
    for ch in text:
        h = (h * 31 + ord(ch)) & 0xFFFFFFFF
    return h - 0x100000000 if h & 0x80000000 else h


def synthetic_embedding(text: str, dimension: int = settings.vector_dimension) -> list[float]:
    """Return a deterministic, L2-normalised placeholder vector for *text*.

    Same text always maps to the same vector; no semantic meaning is implied.
    """
    h = _string_hash(text)
    vector = []
    for i in range(dimension):
        seed = h + i
        vector.append(math.sin(seed) * math.cos(seed * 0.1) * math.tanh(seed * 0.01))
    norm = math.sqrt(sum(v * v for v in vector))
    if norm == 0.0:
        return vector
    return [v / norm for v in vector]


class Embedder:
    """Convert chunk text into a fixed-length vector.

    Parameters
    ----------
    api_key:
        Bearer token for the hosted inference API.
    dimension:
        Target vector length.
    primary_url / secondary_url:
        Feature-extraction endpoints for tier 1 and tier 2.
    timeout:
        Per-request timeout in seconds.
    max_retries:
        Attempts for the primary model.
    retry_delay:
        Fixed sleep between primary attempts, in seconds.
    input_limit:
        Number of characters sent per request.
    """

    def __init__(
        self,
        api_key: str = settings.huggingface_api_key,
        *,
        dimension: int = settings.vector_dimension,
        primary_url: str = settings.primary_embedding_url,
        secondary_url: str = settings.secondary_embedding_url,
        timeout: float = settings.embedding_timeout,
        max_retries: int = settings.embedding_max_retries,
        retry_delay: float = settings.embedding_retry_delay,
        input_limit: int = settings.embedding_input_limit,
    ) -> None:
        self.api_key = api_key
        self.dimension = dimension
        self.primary_url = primary_url
        self.secondary_url = secondary_url
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.input_limit = input_limit

    # -- tiers ---------------------------------------------------------------

    @property
    def remote_tiers(self) -> list[tuple[str, EmbeddingTier]]:
        return [("primary", self.primary), ("secondary", self.secondary)]

    def _request(self, url: str, text: str, options: dict[str, Any]) -> Any:
        resp = requests.post(
            url,
            json={"inputs": text[: self.input_limit], "options": options},
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            timeout=self.timeout,
        )
        resp.raise_for_status()
        return resp.json()

    def primary(self, text: str) -> list[float] | None:
        for attempt in range(1, self.max_retries + 1):
            try:
                payload = self._request(
                    self.primary_url, text, {"wait_for_model": True, "use_cache": False}
                )
            except requests.RequestException as exc:
                logger.warning("Primary embedding attempt %d/%d failed: %s",
                               attempt, self.max_retries, exc)
                if attempt < self.max_retries:
                    time.sleep(self.retry_delay)
                continue

            vector = _unwrap_vector(payload)
            if vector is None:
                logger.warning("Unexpected primary embedding format: %.200r", payload)
                return None

            logger.debug("Primary embedding has %d dimensions", len(vector))
            if len(vector) * 2 == self.dimension:
                return reconcile_dimension(vector, self.dimension)
            return vector

        return None

    def secondary(self, text: str) -> list[float] | None:
        try:
            payload = self._request(self.secondary_url, text, {"wait_for_model": True})
        except requests.RequestException as exc:
            logger.warning("Secondary embedding failed: %s", exc)
            return None

        vector = _unwrap_vector(payload)
        if vector is None:
            logger.warning("Unexpected secondary embedding format: %.200r", payload)
            return None
        logger.debug("Secondary embedding has %d dimensions", len(vector))
        return reconcile_dimension(vector, self.dimension)

    def synthetic(self, text: str) -> list[float]:
        return synthetic_embedding(text, self.dimension)

    # -- public API ----------------------------------------------------------

    def embed_with_tier(self, text: str) -> tuple[str, list[float]]:
        """Return ``(tier_name, vector)`` from the first tier that succeeds."""
        for name, tier in self.remote_tiers:
            vector = tier(text)
            if vector is not None:
                return name, vector
            logger.info("No %s embedding, falling back", name)
        return "synthetic", self.synthetic(text)

    def embed(self, text: str) -> list[float]:
        return self.embed_with_tier(text)[1]
