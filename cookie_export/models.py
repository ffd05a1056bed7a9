"""
Cookie records

The record shape shared by the tracked jar, the reconciler and any store
plugged underneath them.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass
class Cookie:
    """
    A single cookie as written by a caller or returned by a store

    Scope fields (domain, path, secure) on a record returned by a store reflect
    what that store reported for one query, not necessarily what the cookie
    was originally written with.
    """

    name: str
    value: str

    # Scope
    domain: str = ""  # empty means host-only
    path: str = ""  # empty means "derive the default path from the request URL"
    secure: bool = False

    # Pass-through attributes, never interpreted here
    http_only: bool = False
    expires: Optional[int] = None  # epoch seconds, None for a session cookie
    same_site: Optional[str] = None

    def __str__(self) -> str:
        parts = [f"{self.name}={self.value}"]
        if self.path:
            parts.append(f"Path={self.path}")
        if self.domain:
            parts.append(f"Domain={self.domain}")
        if self.expires is not None:
            parts.append(f"Expires={self.expires}")
        if self.http_only:
            parts.append("HttpOnly")
        if self.secure:
            parts.append("Secure")
        if self.same_site:
            parts.append(f"SameSite={self.same_site}")
        return "; ".join(parts)


# Canonical URL (scheme + host + path) -> cookies live at that scope
ExportMap = Dict[str, List[Cookie]]
