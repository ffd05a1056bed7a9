#!/usr/bin/env python3
"""
Export Demo

Writes a handful of sample cookies into a tracked jar, prints the export,
and optionally replays it into a fresh jar to check both exports agree.

Usage:
    python3 scripts/export_demo.py [--restore] [--log-dir logs/]
"""

import os
import sys
import argparse
from pathlib import Path
from typing import List, Optional

# Add parent directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from cookie_export import Cookie, ExportMap, JarCookieStore, TrackedCookieJar
from cookie_export.config import Config

SAMPLE_WRITES = [
    ("https://httpbin.org/cookies/set", [Cookie("abc", "123"), Cookie("edf", "123")]),
    ("https://example.com/", [Cookie("session", "s3cr3t", secure=True, http_only=True)]),
    ("https://example.com/account/settings", [Cookie("tab", "privacy")]),
    ("https://example.com/", [Cookie("prefs", "dark", domain="example.com")]),
    ("https://shop.example.com/", [Cookie("cart", "42", secure=True)]),
]


def build_sample_jar() -> TrackedCookieJar:
    """Tracked jar over a requests-backed store, filled with SAMPLE_WRITES"""
    jar = TrackedCookieJar(JarCookieStore())
    for url, cookies in SAMPLE_WRITES:
        jar.write(url, cookies)
    return jar


def format_export(export_map: ExportMap) -> List[str]:
    """One `url: cookie` line per exported cookie, sorted"""
    return sorted(
        f"{url}: {cookie}"
        for url, cookies in export_map.items()
        for cookie in cookies
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description='Export the content of a tracked cookie jar'
    )
    parser.add_argument(
        '--restore',
        action='store_true',
        help='Replay the export into a fresh jar and compare the two exports'
    )
    parser.add_argument(
        '--log-dir',
        type=Path,
        default=None,
        help='Also write logs to a dated file in this directory'
    )
    args = parser.parse_args(argv)

    logger = Config.setup_logging('ExportDemo', args.log_dir)

    jar = build_sample_jar()
    exported = jar.export()
    lines = format_export(exported)

    print(f"\n🍪 Exported {len(lines)} cookies from {jar.tracked_scopes} tracked scopes:")
    for line in lines:
        print(f"   {line}")

    if not args.restore:
        return 0

    restored = TrackedCookieJar(JarCookieStore())
    restored.restore(exported)
    restored_lines = format_export(restored.export())

    if restored_lines == lines:
        print("\n✅ Restored jar exports the same cookies")
        return 0

    logger.error("❌ Restored jar export differs from the original")
    for line in sorted(set(lines) ^ set(restored_lines)):
        print(f"   {line}")
    return 1


if __name__ == '__main__':
    sys.exit(main())
