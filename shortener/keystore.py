"""In-memory key store mapping short keys to original URLs.

This module holds the whole core of the service: random key generation,
collision handling and thread-safe access to the key-to-URL mapping. The HTTP
layer only ever calls :meth:`KeyStore.shorten` and :meth:`KeyStore.resolve`.

Flow Diagram — shorten()
========================
::
    ┌─────────────┐
    │ shorten(url)│
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │ Reject empty│
    │ URL         │
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │ Acquire lock│
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │ Draw random │◄──────┐
    │ candidate   │       │
    └──────┬──────┘       │
    TAKEN? │              │
    ┌──────┴─────┐        │
    │ NO         │ YES ───┘
    ▼
┌─────────────┐
│ Insert entry│
│ release lock│
└──────┬──────┘
       ▼
┌─────────────┐
│ Return key  │
└─────────────┘

How to Use
===========
**Step 1 — Create one store per application**::
    store = KeyStore()

**Step 2 — Shorten**::
    key = store.shorten("https://example.com/a")

**Step 3 — Resolve**::
    original_url, found = store.resolve(key)

Key Behaviours
===============
- Keys are drawn uniformly from a 62 character alphanumeric alphabet.
- A candidate that is already mapped is discarded and redrawn.
- The collision check and the insert run under the same lock as lookups.
- One random source lives for the whole life of the store.
- Entries are never updated or removed; the mapping only grows.
- Shortening the same URL twice yields two independent keys.
- A miss is a normal result (``found`` is ``False``), not an exception.
"""

__all__ = [
    "KEY_ALPHABET",
    "DEFAULT_KEY_LENGTH",
    "InvalidURLError",
    "KeyStore",
    "Resolution",
]

import logging
import secrets
import string
import threading
from typing import NamedTuple, Optional, Protocol, Sequence

from prometheus_client import Counter

from shortener.enums import LookupStatus

logger = logging.getLogger(__name__)

KEY_ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits
DEFAULT_KEY_LENGTH = 6


# ============================================================================
# PROMETHEUS METRICS
# ============================================================================

KEYS_ISSUED_TOTAL = Counter(
    "shortener_keys_issued_total",
    "Total short keys issued",
)
KEY_COLLISIONS_TOTAL = Counter(
    "shortener_key_collisions_total",
    "Candidate keys discarded because they were already mapped",
)
LOOKUPS_TOTAL = Counter(
    "shortener_lookups_total",
    "Total short key lookups",
    ["status"],
)


class InvalidURLError(ValueError):
    """Raised when an empty original URL is handed to the store."""


class RandomSource(Protocol):
    def choice(self, seq: Sequence[str]) -> str: ...


class Resolution(NamedTuple):
    """Result of a lookup: the stored URL and whether the key was found."""

    original_url: str
    found: bool


MISS = Resolution("", False)


class KeyStore:
    """Thread-safe mapping from generated short keys to original URLs.

    A single instance is shared by every request handler of an application.
    All access to the mapping goes through one ``threading.Lock``; the random
    source is consulted only while that lock is held.

    Example:
        >>> store = KeyStore()
        >>> key = store.shorten("https://example.com/a")
        >>> store.resolve(key)
        Resolution(original_url='https://example.com/a', found=True)
        >>> store.resolve("zzzzzz")
        Resolution(original_url='', found=False)
    """

    def __init__(
        self,
        key_length: int = DEFAULT_KEY_LENGTH,
        alphabet: str = KEY_ALPHABET,
        rng: Optional[RandomSource] = None,
    ):
        """Initialize an empty store.

        Args:
            key_length: Number of characters in every generated key
            alphabet: Characters keys are drawn from
            rng: Random source with a ``choice`` method; defaults to a
                ``secrets.SystemRandom`` instance kept for the store's lifetime

        Raises:
            ValueError: If the key length or alphabet cannot produce keys
        """
        if key_length < 1:
            raise ValueError("Key length must be positive")
        if len(set(alphabet)) < 2:
            raise ValueError("Alphabet must contain at least two distinct characters")

        self._key_length = key_length
        self._alphabet = alphabet
        self._rng = rng if rng is not None else secrets.SystemRandom()
        self._urls: dict[str, str] = {}
        self._lock = threading.Lock()

    def shorten(self, original_url: str) -> str:
        """Store ``original_url`` under a newly generated, unused key.

        Args:
            original_url: URL to store; kept verbatim, not validated

        Returns:
            str: The new short key

        Raises:
            InvalidURLError: If ``original_url`` is empty
        """
        if not original_url:
            raise InvalidURLError("Original URL must be a non-empty string")

        with self._lock:
            short_key = self._generate_key()
            while short_key in self._urls:
                KEY_COLLISIONS_TOTAL.inc()
                logger.debug(f"Key collision on {short_key}, drawing again")
                short_key = self._generate_key()
            self._urls[short_key] = original_url

        KEYS_ISSUED_TOTAL.inc()
        return short_key

    def resolve(self, short_key: str) -> Resolution:
        """Look up the URL stored under ``short_key``.

        Args:
            short_key: Key to look up; any string is accepted

        Returns:
            Resolution: ``(original_url, True)`` on a hit, ``("", False)`` on a miss
        """
        with self._lock:
            original_url = self._urls.get(short_key)

        if original_url is None:
            LOOKUPS_TOTAL.labels(status=LookupStatus.MISS).inc()
            return MISS

        LOOKUPS_TOTAL.labels(status=LookupStatus.HIT).inc()
        return Resolution(original_url, True)

    def __len__(self) -> int:
        with self._lock:
            return len(self._urls)

    def __contains__(self, short_key: object) -> bool:
        with self._lock:
            return short_key in self._urls

    def _generate_key(self) -> str:
        # caller holds self._lock
        return "".join(self._rng.choice(self._alphabet) for _ in range(self._key_length))
