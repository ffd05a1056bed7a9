"""
Tests for scripts/export_demo.py
"""

import pytest

from cookie_export import Cookie
from export_demo import build_sample_jar, format_export, main


class TestFormatExport:
    """Tests for format_export() function"""

    @pytest.mark.unit
    def test_one_sorted_line_per_cookie(self):
        lines = format_export({
            "https://example.com/": [Cookie("b", "2", path="/", secure=True)],
            "http://example.com/": [Cookie("a", "1", path="/")],
        })
        assert lines == [
            "http://example.com/: a=1; Path=/",
            "https://example.com/: b=2; Path=/; Secure",
        ]


class TestSampleJar:
    """Tests for the sample data the demo exports"""

    @pytest.mark.integration
    def test_sample_export(self):
        exported = build_sample_jar().export()

        assert exported["http://httpbin.org/cookies"] == [
            Cookie("abc", "123", path="/cookies"),
            Cookie("edf", "123", path="/cookies"),
        ]
        assert exported["http://example.com/"] == [Cookie("prefs", "dark", domain="example.com", path="/")]
        assert exported["https://shop.example.com/"] == [Cookie("cart", "42", path="/", secure=True)]

    @pytest.mark.integration
    def test_main_restore_matches(self, capsys):
        assert main(['--restore']) == 0
        assert "Restored jar exports the same cookies" in capsys.readouterr().out
