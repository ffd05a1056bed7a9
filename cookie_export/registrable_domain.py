"""
Effective registrable domain lookup

Groups hosts by site ("public suffix plus one label") so that cookies from
unrelated sites never merge during export, even when their name and value
collide. Backed by tldextract; hosts the suffix list cannot place (IP
addresses, single-label hosts such as localhost) form a group of their own.
"""

import logging
from typing import Optional

import tldextract

from .config import Config

logger = logging.getLogger(__name__)


def build_extractor() -> tldextract.TLDExtract:
    """Build a TLDExtract instance from the configured PSL settings"""
    settings = Config.get_psl_settings()

    if settings['online']:
        return tldextract.TLDExtract(
            include_psl_private_domains=settings['include_private_domains']
        )

    # Bundled snapshot only, no network and no disk cache
    return tldextract.TLDExtract(
        suffix_list_urls=(),
        cache_dir=None,
        include_psl_private_domains=settings['include_private_domains']
    )


class RegistrableDomainResolver:
    """Maps hosts to their effective registrable domain"""

    def __init__(self, extractor: Optional[tldextract.TLDExtract] = None):
        self.extractor = extractor or build_extractor()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def lookup(self, host: str) -> str:
        """
        Strict lookup of the registrable domain for a host

        Raises:
            ValueError: If the host has no registrable domain
        """
        extracted = self.extractor(host)
        if not extracted.domain or not extracted.suffix:
            raise ValueError(f"Cannot extract registrable domain from host: {host!r}")
        return f"{extracted.domain}.{extracted.suffix}"

    def resolve(self, host: str) -> str:
        """
        Registrable domain for a host, or the host itself when lookup fails

        Examples:
            >>> RegistrableDomainResolver().resolve("sub.example.co.uk")
            'example.co.uk'
            >>> RegistrableDomainResolver().resolve("localhost")
            'localhost'
        """
        try:
            return self.lookup(host)
        except Exception as e:
            self.logger.debug(f"[PSL] Falling back to full host for {host!r}: {e}")
            return host
