"""
Shared pytest fixtures for cookie_export tests

This file contains fixtures that are available to all test files.
"""

import pytest
from typing import Dict, List

from cookie_export import Cookie, JarCookieStore, TrackedCookieJar
from cookie_export.registrable_domain import RegistrableDomainResolver


class FakeStore:
    """
    Store double answering reads from a fixed URL -> cookies table

    Records writes so tests can check what was forwarded.
    """

    def __init__(self, responses: Dict[str, List[Cookie]] = None):
        self.responses = responses or {}
        self.writes = []
        self.reads = []

    def write(self, url, cookies):
        self.writes.append((url, list(cookies)))

    def read(self, url):
        self.reads.append(url)
        return list(self.responses.get(url, []))


@pytest.fixture
def sample_urls() -> Dict[str, str]:
    """Sample request URLs for testing"""
    return {
        'root': 'https://example.com/',
        'bare': 'https://example.com',
        'subdir': 'https://example.com/test/1234',
        'dir_slash': 'https://example.com/a/b/',
        'with_query': 'https://example.com/docs/page?lang=en#top',
        'with_port': 'http://example.com:8080/app/index.html',
        'subdomain': 'https://sub.example.com/',
        'other_site': 'https://example.jp/',
        'localhost': 'http://localhost/',
        'ipv4': 'http://127.0.0.1/login',
    }


@pytest.fixture
def resolver() -> RegistrableDomainResolver:
    """Offline registrable domain resolver (bundled suffix list)"""
    return RegistrableDomainResolver()


@pytest.fixture
def store() -> JarCookieStore:
    return JarCookieStore()


@pytest.fixture
def jar(store, resolver) -> TrackedCookieJar:
    return TrackedCookieJar(store, resolver=resolver)


@pytest.fixture
def make_jar(resolver):
    """Factory for fresh tracked jars over fresh stores"""
    def _make() -> TrackedCookieJar:
        return TrackedCookieJar(JarCookieStore(), resolver=resolver)
    return _make


@pytest.fixture
def fake_store():
    return FakeStore
