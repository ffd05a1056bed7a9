"""
Exceptions raised by cookie_export

Errors from an underlying cookie store are never wrapped; they reach the
caller as the store raised them.
"""


class CookieExportError(Exception):
    """Base class for cookie_export errors"""


class ScopeKeyDerivationError(CookieExportError):
    """A scope key could not be derived from a written (url, cookie) pair"""


class ProvenanceCorruption(CookieExportError):
    """A tracked scope key no longer parses back into an http(s) URL"""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Tracked scope key {key!r} is not a valid URL: {reason}")
