"""
Scope Key Derivation

Turns a (request URL, cookie) pair into the canonical key of the scope the
cookie was written against:

    {http|https}://{domain}{path}

The scheme only records whether the cookie is Secure; domain and path follow
the RFC 6265 defaults when the cookie does not carry them explicitly.
"""

from urllib.parse import urljoin, urlsplit

from .config import Config
from .exceptions import ScopeKeyDerivationError
from .models import Cookie


def request_host(url: str) -> str:
    """
    Host of a request URL, lowercased and without port

    Raises:
        ScopeKeyDerivationError: If the URL has no host
    """
    try:
        host = urlsplit(url).hostname
    except ValueError as e:
        raise ScopeKeyDerivationError(f"Cannot parse request URL {url!r}: {e}") from e

    if not host:
        raise ScopeKeyDerivationError(f"Request URL {url!r} has no host")

    # IPv6 literals must stay bracketed to survive re-parsing
    if ':' in host:
        host = f"[{host}]"
    return host


def default_path(url: str) -> str:
    """
    Default cookie path for a request URL (RFC 6265 section 5.1.4)

    The "directory" of the request path, without its trailing slash unless
    it is the root.

    Examples:
        >>> default_path("https://example.com/test/1234")
        '/test'
        >>> default_path("https://example.com")
        '/'
    """
    try:
        directory = urlsplit(urljoin(url, ".")).path
    except ValueError as e:
        raise ScopeKeyDerivationError(
            f"Unexpected, unrecoverable failure resolving '.' against {url!r}: {e}"
        ) from e

    path = directory or "/"
    if path != "/" and path.endswith("/"):
        path = path[:-1]
    return path


def derive_scope_key(url: str, cookie: Cookie) -> str:
    """
    Derive the scope key for a cookie written at a request URL

    Args:
        url: Request URL the cookie was written for
        cookie: Cookie as given by the caller

    Returns:
        Scope key string, e.g. 'https://example.com/test'

    Raises:
        ScopeKeyDerivationError: If the key cannot be derived
    """
    scheme = Config.SECURE_SCHEME if cookie.secure else Config.INSECURE_SCHEME

    domain = (cookie.domain or request_host(url)).lower()
    if domain.startswith('.'):
        domain = domain[1:]
    if not domain:
        raise ScopeKeyDerivationError(f"Cookie {cookie.name!r} has an empty domain attribute")

    # A missing or non-absolute Path attribute falls back to the default path
    path = cookie.path if cookie.path.startswith("/") else default_path(url)

    return f"{scheme}://{domain}{path}"
