"""
Tracked cookie jar

Wraps any cookie store so that its whole content can be exported and later
replayed into a fresh store.
"""

import logging
from typing import List, Optional, Sequence

from .models import Cookie, ExportMap
from .provenance import ProvenanceTracker
from .reconciler import ExportReconciler
from .registrable_domain import RegistrableDomainResolver
from .scope_key import derive_scope_key
from .store import CookieStore

logger = logging.getLogger(__name__)


class TrackedCookieJar:
    """
    Cookie store wrapper that records the scope of every write

    Usage:
        jar = TrackedCookieJar(JarCookieStore())
        jar.write("https://example.com/", [Cookie("sid", "abc")])
        exported = jar.export()

        fresh = TrackedCookieJar(JarCookieStore())
        fresh.restore(exported)
    """

    def __init__(
        self,
        store: CookieStore,
        resolver: Optional[RegistrableDomainResolver] = None,
        probe_label: Optional[str] = None
    ):
        self.store = store
        self.tracker = ProvenanceTracker()
        self.reconciler = ExportReconciler(store, self.tracker, resolver=resolver, probe_label=probe_label)

    @property
    def tracked_scopes(self) -> int:
        return len(self.tracker)

    def write(self, url: str, cookies: Sequence[Cookie]) -> None:
        """Record the scope of each cookie, then hand them to the store unchanged"""
        for cookie in cookies:
            self.tracker.add(derive_scope_key(url, cookie))
        self.store.write(url, cookies)

    def read(self, url: str) -> List[Cookie]:
        return self.store.read(url)

    def export(self) -> ExportMap:
        """Every live cookie under its canonical URL. See ExportReconciler."""
        return self.reconciler.export()

    def restore(self, export_map: ExportMap) -> None:
        """Replay an export map, e.g. one taken from another jar"""
        for url, cookies in export_map.items():
            self.write(url, cookies)
        logger.info(f"♻️ [RESTORE] Replayed {sum(len(c) for c in export_map.values())} cookies "
                    f"for {len(export_map)} URLs")
