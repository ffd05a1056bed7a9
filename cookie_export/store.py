"""
Cookie store capability and the requests-backed reference store

A tracked jar only needs two things from the store underneath it: write
cookies for a URL, and read back the cookies that currently apply to a URL.
Storage, domain/path matching, secure gating and expiry all belong to the
store.

JarCookieStore provides those semantics on top of a requests cookie jar,
using the same urllib-style request adaptor requests uses for its own
cookie handling.
"""

import logging
import threading
import time
from http.cookiejar import Cookie as JarCookie, CookieJar, DefaultCookiePolicy, eff_request_host
from typing import List, Optional, Protocol, Sequence

import requests
from requests.cookies import MockRequest, RequestsCookieJar

from .models import Cookie
from .scope_key import default_path

logger = logging.getLogger(__name__)


class CookieStore(Protocol):
    """Anything that can store cookies and answer which apply to a URL"""

    def write(self, url: str, cookies: Sequence[Cookie]) -> None:
        ...

    def read(self, url: str) -> List[Cookie]:
        ...


class HostOnlyCookiePolicy(DefaultCookiePolicy):
    """
    Cookie policy with RFC 6265 host-only semantics

    DefaultCookiePolicy is liberal by default and returns a cookie without a
    Domain attribute to subdomains of the host that set it. Strict non-domain
    matching restricts such cookies to the exact host.
    """

    def __init__(self, **kwargs):
        kwargs.setdefault('strict_ns_domain', DefaultCookiePolicy.DomainStrictNonDomain)
        super().__init__(**kwargs)

    def return_ok_at(self, cookie: JarCookie, request, now: int) -> bool:
        """Whether a stored cookie applies to a request at time `now`"""
        # return_ok_expires() compares against _now, which CookieJar sets the same way
        self._now = now
        return (
            self.domain_return_ok(cookie.domain, request)
            and self.path_return_ok(cookie.path, request)
            and self.return_ok(cookie, request)
        )


def build_request(url: str) -> MockRequest:
    """Wrap a URL in the urllib-style request object http.cookiejar expects"""
    return MockRequest(requests.Request('GET', url).prepare())


class JarCookieStore:
    """Cookie store backed by a requests cookie jar"""

    def __init__(self, jar: Optional[CookieJar] = None, policy: Optional[HostOnlyCookiePolicy] = None):
        """
        Args:
            jar: Jar to store cookies in, e.g. a requests.Session().cookies.
                A fresh RequestsCookieJar is created when omitted.
            policy: Matching policy. HostOnlyCookiePolicy() when omitted.
        """
        self.policy = policy or HostOnlyCookiePolicy()
        self.jar = jar if jar is not None else RequestsCookieJar(policy=self.policy)
        self._lock = threading.RLock()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def __len__(self) -> int:
        with self._lock:
            return len(self.jar)

    def write(self, url: str, cookies: Sequence[Cookie]) -> None:
        """
        Store cookies received for a URL

        Cookies the policy rejects (e.g. a Domain attribute the request host
        does not domain-match) are dropped. A new cookie replaces any stored
        cookie with the same name, domain and path, whether it was stored
        with or without a Domain attribute. A cookie whose expiry is already
        in the past only removes the cookie it replaces.
        """
        request = build_request(url)
        now = int(time.time())

        with self._lock:
            for cookie in cookies:
                jar_cookie = self._to_jar_cookie(request, cookie)

                if not self.policy.set_ok(jar_cookie, request):
                    self.logger.debug(f"[STORE] Rejected {cookie.name!r} for {url}")
                    continue

                self._clear_replaced(jar_cookie)
                if jar_cookie.is_expired(now):
                    continue

                self.jar.set_cookie(jar_cookie)

    def _clear_replaced(self, jar_cookie: JarCookie) -> None:
        """
        Remove the stored cookie a new one replaces

        Same name, path and domain, where a Domain cookie for example.com
        (stored as '.example.com') and a host-only cookie of example.com
        (stored as 'example.com') count as the same domain.
        """
        domain = jar_cookie.domain
        other_form = domain[1:] if domain.startswith('.') else '.' + domain

        for candidate in (domain, other_form):
            try:
                self.jar.clear(candidate, jar_cookie.path, jar_cookie.name)
            except KeyError:
                pass

    def read(self, url: str) -> List[Cookie]:
        """Return the unexpired cookies that apply to a URL, longest path first"""
        request = build_request(url)
        now = int(time.time())

        with self._lock:
            matched = [
                jar_cookie for jar_cookie in self.jar
                if self.policy.return_ok_at(jar_cookie, request, now)
            ]

        matched.sort(key=lambda c: len(c.path), reverse=True)
        return [self._from_jar_cookie(c) for c in matched]

    @staticmethod
    def _to_jar_cookie(request: MockRequest, cookie: Cookie) -> JarCookie:
        _, erhn = eff_request_host(request)

        if cookie.domain:
            domain = cookie.domain.lower()
            domain_initial_dot = domain.startswith('.')
            if not domain_initial_dot:
                domain = '.' + domain
            domain_specified = True
        else:
            domain, domain_specified, domain_initial_dot = erhn, False, False

        if cookie.path.startswith('/'):
            path, path_specified = cookie.path, True
        else:
            path, path_specified = default_path(request.get_full_url()), False

        rest = {}
        if cookie.http_only:
            rest['HttpOnly'] = None
        if cookie.same_site:
            rest['SameSite'] = cookie.same_site

        return JarCookie(
            version=0,
            name=cookie.name,
            value=cookie.value,
            port=None,
            port_specified=False,
            domain=domain,
            domain_specified=domain_specified,
            domain_initial_dot=domain_initial_dot,
            path=path,
            path_specified=path_specified,
            secure=cookie.secure,
            expires=cookie.expires,
            discard=cookie.expires is None,
            comment=None,
            comment_url=None,
            rest=rest,
        )

    @staticmethod
    def _from_jar_cookie(jar_cookie: JarCookie) -> Cookie:
        return Cookie(
            name=jar_cookie.name,
            value=jar_cookie.value or "",
            domain=jar_cookie.domain if jar_cookie.domain_specified else "",
            path=jar_cookie.path,
            secure=bool(jar_cookie.secure),
            http_only=jar_cookie.has_nonstandard_attr('HttpOnly'),
            expires=jar_cookie.expires,
            same_site=jar_cookie.get_nonstandard_attr('SameSite'),
        )
