"""
Export Reconciliation

Rebuilds the full content of a cookie store as a minimal set of
(canonical URL, cookie) pairs. The store can only say which cookies apply to
a URL, so every tracked scope is queried again and the observations are
folded back into one entry per logical cookie:

1. Each tracked scope URL is queried as-is, and once more with a synthetic
   label prepended to its host. Cookies carrying a Domain attribute show up
   under both hosts; host-only cookies only under the literal one.
2. Observations are grouped by (name, value), then split by registrable
   domain so unrelated sites never merge.
3. The observation with the shortest URL is kept as the canonical one. Its
   URL gives the cookie's path and Secure flag, and if the group saw more
   than one host the cookie gets a Domain attribute for the canonical host.
"""

import ipaddress
import logging
from collections import defaultdict
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Tuple
from urllib.parse import SplitResult

from .config import Config
from .models import Cookie, ExportMap
from .provenance import ProvenanceTracker
from .registrable_domain import RegistrableDomainResolver
from .store import CookieStore

logger = logging.getLogger(__name__)


@dataclass
class Observation:
    """One cookie returned by one store query during an export"""

    url: SplitResult
    url_string: str
    site: str  # registrable domain of the tracked scope that produced the query
    cookie: Cookie

    @property
    def host(self) -> str:
        return self.url.netloc


def with_probe_label(url: SplitResult, label: str) -> SplitResult:
    """Same URL with `label.` prepended to its host"""
    return url._replace(netloc=f"{label}.{url.netloc}")


def is_ip_address(host: str) -> bool:
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return False
    return True


def pick_representative(observations: List[Observation]) -> Observation:
    """Shortest URL wins; equal lengths fall back to lexicographic URL order"""
    return min(observations, key=lambda o: (len(o.url_string), o.url_string))


class ExportReconciler:
    """Produces export maps from a provenance snapshot and live store queries"""

    def __init__(
        self,
        store: CookieStore,
        tracker: ProvenanceTracker,
        resolver: Optional[RegistrableDomainResolver] = None,
        probe_label: Optional[str] = None
    ):
        self.store = store
        self.tracker = tracker
        self.resolver = resolver or RegistrableDomainResolver()
        self.probe_label = probe_label or Config.get_probe_label()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def observe(self) -> List[Observation]:
        """Query the store for every tracked scope and its probe variant"""
        observations = []

        for url in self.tracker.snapshot():
            if not url.path:
                url = url._replace(path="/")

            site = self.resolver.resolve(url.hostname)

            query_urls = [url]
            # IP hosts have no subdomains, so no Domain= cookies to probe for
            if not is_ip_address(url.hostname):
                query_urls.append(with_probe_label(url, self.probe_label))

            for query_url in query_urls:
                url_string = query_url.geturl()
                for cookie in self.store.read(url_string):
                    observations.append(Observation(
                        url=query_url,
                        url_string=url_string,
                        site=site,
                        cookie=cookie
                    ))

        return observations

    @staticmethod
    def group(observations: List[Observation]) -> Dict[Tuple[str, str, str], List[Observation]]:
        """Group observations by cookie name, value and registrable domain"""
        groups: Dict[Tuple[str, str, str], List[Observation]] = defaultdict(list)
        for observation in observations:
            cookie = observation.cookie
            groups[(cookie.name, cookie.value, observation.site)].append(observation)
        return groups

    @staticmethod
    def canonicalize(observations: List[Observation]) -> Observation:
        """Pick the canonical observation of one cookie and rewrite its scope"""
        chosen = pick_representative(observations)
        hosts = {o.url.hostname for o in observations}

        cookie = replace(
            chosen.cookie,
            secure=chosen.url.scheme == Config.SECURE_SCHEME,
            path=chosen.url.path,
            # Seen from more than one host: the cookie was set with Domain=
            domain=chosen.host if len(hosts) > 1 else "",
        )
        return replace(chosen, cookie=cookie)

    def export(self) -> ExportMap:
        """
        Build the export map

        Returns:
            Canonical URL -> cookies live at that scope. Empty when nothing
            was ever written or every tracked cookie is gone.

        Raises:
            ProvenanceCorruption: If a tracked key cannot be re-parsed. The
                whole export is aborted rather than silently dropping it.
        """
        observations = self.observe()
        groups = self.group(observations)

        export_map: ExportMap = {}
        for group_key in sorted(groups):
            chosen = self.canonicalize(groups[group_key])
            export_map.setdefault(chosen.url_string, []).append(chosen.cookie)

        self.logger.info(
            f"📦 [EXPORT] {len(self.tracker)} scopes, {len(observations)} observations, "
            f"{len(groups)} cookies under {len(export_map)} URLs"
        )
        return export_map
