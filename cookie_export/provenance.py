"""
Provenance Tracking

Remembers every scope key a tracked jar has written to. The set only grows:
a key whose cookies have since expired or been evicted simply yields nothing
when it is queried again at export time.
"""

import logging
import threading
from typing import List, Set
from urllib.parse import SplitResult, urlsplit

from .config import Config
from .exceptions import ProvenanceCorruption

logger = logging.getLogger(__name__)


class ProvenanceTracker:
    """Append-only, thread-safe set of observed scope keys"""

    def __init__(self):
        self._keys: Set[str] = set()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, key: object) -> bool:
        return key in self._keys

    def add(self, key: str) -> None:
        """Record a scope key. Idempotent."""
        # Most writes repeat a known scope, skip the lock for those
        if key in self._keys:
            return

        with self._lock:
            if key not in self._keys:
                self._keys.add(key)
                logger.debug(f"[PROVENANCE] New scope key: {key}")

    def keys(self) -> List[str]:
        """Current scope keys, sorted"""
        with self._lock:
            return sorted(self._keys)

    def snapshot(self) -> List[SplitResult]:
        """
        Re-parse every tracked key into a URL

        Returns:
            One parsed URL per tracked key, in key order

        Raises:
            ProvenanceCorruption: If any key no longer parses as an http(s)
                URL with a host. Keys are only ever produced by scope key
                derivation, so this means the tracker state was tampered with.
        """
        urls = []
        for key in self.keys():
            try:
                url = urlsplit(key)
                host = url.hostname
            except ValueError as e:
                raise ProvenanceCorruption(key, str(e)) from e

            if url.scheme not in (Config.SECURE_SCHEME, Config.INSECURE_SCHEME):
                raise ProvenanceCorruption(key, f"unexpected scheme {url.scheme!r}")
            if not host:
                raise ProvenanceCorruption(key, "missing host")

            urls.append(url)

        return urls
