"""Exportable cookie jar: track write scopes, export and replay a store's content."""

from .exceptions import CookieExportError, ProvenanceCorruption, ScopeKeyDerivationError
from .jar import TrackedCookieJar
from .models import Cookie, ExportMap
from .store import CookieStore, JarCookieStore

__all__ = [
    "Cookie",
    "CookieExportError",
    "CookieStore",
    "ExportMap",
    "JarCookieStore",
    "ProvenanceCorruption",
    "ScopeKeyDerivationError",
    "TrackedCookieJar",
]
