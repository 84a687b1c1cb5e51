"""
Tests for short-name replacement and Digital Link normalization.
"""

import pytest

from gs1_translator.normalizer import (
    canonicalize_domain,
    normalize_digital_link,
    short_name_replacer,
)


class TestShortNameReplacer:
    """Legacy short names to AI codes."""

    @pytest.mark.parametrize("identifier,expected", [
        ("https://example.org/giai/401234599999", "https://id.gs1.org/8004/401234599999"),
        ("https://example.com/gdti/4012345000054987", "https://id.gs1.org/253/4012345000054987"),
        ("https://id.gs1.org/giai/4000001111", "https://id.gs1.org/8004/4000001111"),
        ("https://hello.comain//cpi/381366783201294-5A", "https://id.gs1.org/8010/381366783201294-5A"),
        ("https://id.gs1.org/gln/1234567890111", "https://id.gs1.org/414/1234567890111"),
        ("https://id.gs1.org/gcn/4343884394893", "https://id.gs1.org/255/4343884394893"),
        ("https://myownDomain/gtin/12345678901231/ser/9999",
         "https://id.gs1.org/01/12345678901231/21/9999"),
        ("https://example.com/253/4012345000054987", "https://id.gs1.org/253/4012345000054987"),
        ("https://id.gs1.de/01/04012345999990/21/XYZ-1234",
         "https://id.gs1.org/01/04012345999990/21/XYZ-1234"),
        ("https://id.gs1.de/01/84384384898340/ser/894893894838934893",
         "https://id.gs1.org/01/84384384898340/21/894893894838934893"),
        ("https://id.gs1.org/gsrnp/123456789012345675", "https://id.gs1.org/8017/123456789012345675"),
    ])
    def test_replacements(self, identifier, expected):
        assert short_name_replacer(identifier) == expected

    @pytest.mark.parametrize("identifier", [
        "https://www.ncbi.nlm.nih.gov/taxonomy/1126011",
        "https://identifiers.org/inchikey:CZMRCDWAGMRECN-UGDNZRGBSA-N",
        "testing:123",
        "urn:epc:id:gsin:8439589358.953939",
        "https://id.example/4343884394893",
    ])
    def test_unrelated_strings_unchanged(self, identifier):
        assert short_name_replacer(identifier) == identifier

    def test_none(self):
        assert short_name_replacer(None) is None

    def test_empty(self):
        assert short_name_replacer("") == ""


class TestCanonicalizeDomain:
    """Scheme and host to the GS1 resolver."""

    def test_foreign_host(self):
        assert canonicalize_domain("http://example.com/01/12345678901231/21/9999?linktype=all") == (
            "https://id.gs1.org/01/12345678901231/21/9999?linktype=all"
        )

    def test_already_canonical(self):
        uri = "https://id.gs1.org/414/1234567890128"
        assert canonicalize_domain(uri) == uri

    @pytest.mark.parametrize("identifier", [
        "https://www.ncbi.nlm.nih.gov/taxonomy/1126011",
        "urn:epc:id:sgtin:234567890.1123.9999",
        "",
        None,
    ])
    def test_passthrough(self, identifier):
        assert canonicalize_domain(identifier) == identifier


class TestNormalizeDigitalLink:
    """GS1 Digital Link short codes in path and query."""

    @pytest.mark.parametrize("uri,expected", [
        ("https://id.gs1.org/gtin/09506000164908",
         "https://id.gs1.org/01/09506000164908"),
        ("https://id.gs1.org/gtin/09506000164908/lot/ABC123/ser/XYZ789",
         "https://id.gs1.org/01/09506000164908/10/ABC123/21/XYZ789"),
        ("https://id.gs1.org?gtin=09506000164908&lot=ABC123",
         "https://id.gs1.org?01=09506000164908&10=ABC123"),
        ("https://id.gs1.org/gtin/09506000164908?lot=ABC123&ser=XYZ789",
         "https://id.gs1.org/01/09506000164908?10=ABC123&21=XYZ789"),
        ("https://id.gs1.org/01/09506000164908/lot/ABC123?21=XYZ789&exp=230101",
         "https://id.gs1.org/01/09506000164908/10/ABC123?21=XYZ789&17=230101"),
        ("https://id.gs1.org/gtin/09506000164908?linktype=all&lot=ABC123",
         "https://id.gs1.org/01/09506000164908?linktype=all&10=ABC123"),
        ("https://id.gs1.org/gtin/09506000164908?lot=",
         "https://id.gs1.org/01/09506000164908?10="),
        ("https://id.gs1.org/gtin/09506000164908?novalue",
         "https://id.gs1.org/01/09506000164908?novalue"),
    ])
    def test_normalize(self, uri, expected):
        assert normalize_digital_link(uri) == expected

    def test_trailing_slash_removed(self):
        assert normalize_digital_link("https://id.gs1.org/01/09506000164908/") == (
            "https://id.gs1.org/01/09506000164908"
        )

    def test_values_are_not_rewritten(self):
        """A serial that happens to equal a short code stays as it is."""
        assert normalize_digital_link("https://id.gs1.org/gtin/09506000164908/ser/lot") == (
            "https://id.gs1.org/01/09506000164908/21/lot"
        )

    def test_foreign_host_kept(self):
        assert normalize_digital_link("https://brand.example/gtin/09506000164908") == (
            "https://brand.example/01/09506000164908"
        )

    @pytest.mark.parametrize("value", [None, "", "urn:epc:id:sgtin:234567890.1123.9999"])
    def test_passthrough(self, value):
        assert normalize_digital_link(value) == value
