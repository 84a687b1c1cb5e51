"""
Tests for the AI descriptor table and identifier type detection.
"""

import pytest

from gs1_translator.ai_descriptors import (
    CLASS_LEVEL_TYPES,
    DESCRIPTORS,
    INSTANCE_LEVEL_TYPES,
    ApplicationIdentifierType as T,
    KeyLayout,
    SerialPlacement,
    candidates,
    descriptor_for_scheme,
    descriptors_for_ai,
    get_descriptor,
    sniff,
)


class TestDescriptorTable:
    """Static descriptor metadata."""

    def test_all_types_present(self):
        assert set(DESCRIPTORS) == set(T)

    def test_instance_level_types(self):
        assert set(INSTANCE_LEVEL_TYPES) == set(T) - {T.LGTIN}

    def test_class_level_types(self):
        assert set(CLASS_LEVEL_TYPES) == {
            T.LGTIN, T.SGTIN, T.GRAI, T.GDTI, T.GCN, T.CPI, T.ITIP,
        }

    def test_sgtin_descriptor(self):
        d = get_descriptor(T.SGTIN)
        assert d.ai_code == "01"
        assert d.serial_ai_code == "21"
        assert d.layout is KeyLayout.INDICATOR
        assert d.serial_placement is SerialPlacement.MARKER
        assert d.fixed_width == 14
        assert d.checksum_required
        assert d.has_serial
        assert d.raw_key == "gtin"
        assert d.urn_prefix == "urn:epc:id:sgtin:"
        assert d.class_urn_prefix == "urn:epc:idpat:sgtin:"

    def test_gcn_uses_sgcn_scheme(self):
        """GCN is written as 'sgcn' in EPC URNs."""
        d = get_descriptor(T.GCN)
        assert d.urn_scheme == "sgcn"
        assert descriptor_for_scheme("sgcn") is d

    def test_variable_width_keys(self):
        for ai_type in (T.GIAI, T.GINC, T.CPI):
            d = get_descriptor(ai_type)
            assert (d.min_width, d.max_width) == (7, 30)
            assert d.fixed_width is None
            assert not d.checksum_required
        assert not get_descriptor(T.GIAI).has_serial

    def test_itip_key_width_is_gtin(self):
        d = get_descriptor(T.ITIP)
        assert d.max_width == 18
        assert d.key_width == 14
        assert d.urn_fields == 5

    def test_lgtin_prefixes(self):
        d = get_descriptor(T.LGTIN)
        assert d.urn_prefix == "urn:epc:class:lgtin:"
        assert d.class_urn_prefix == "urn:epc:class:lgtin:"
        assert not d.instance_level

    def test_gcp_bounds(self):
        assert all(d.gcp_bounds == (6, 12) for d in DESCRIPTORS.values())

    def test_descriptors_for_ai_01(self):
        """Three types share AI 01."""
        types = {d.type for d in descriptors_for_ai("01")}
        assert types == {T.SGTIN, T.UPUI, T.LGTIN}

    def test_descriptors_are_immutable(self):
        d = get_descriptor(T.SSCC)
        with pytest.raises(AttributeError):
            d.ai_code = "99"


class TestSniffURN:
    """Type detection for EPC URNs."""

    @pytest.mark.parametrize("urn,expected", [
        ("urn:epc:id:sgtin:234567890.1123.9999", T.SGTIN),
        ("urn:epc:idpat:sgtin:234567.1890123.*", T.SGTIN),
        ("urn:epc:id:sscc:123456.06663868985", T.SSCC),
        ("urn:epc:id:sgln:1234567890.11.1111", T.SGLN),
        ("urn:epc:id:sgcn:1234567890.12.1234", T.GCN),
        ("urn:epc:id:gsrnp:843984.93439439493", T.GSRNP),
        ("urn:epc:id:gsrn:1234567890.1234567", T.GSRN),
        ("urn:epc:class:lgtin:4023333.002000.2019-10-07", T.LGTIN),
        ("urn:epc:id:upui:234567.1890123.1111ANC", T.UPUI),
        ("urn:epc:id:itip:234567.1890123.01.02.ABC", T.ITIP),
    ])
    def test_scheme_detection(self, urn, expected):
        assert sniff(urn) is expected

    def test_unknown_scheme(self):
        assert sniff("urn:epc:id:foo:123456.1") is None


class TestSniffURI:
    """Type detection for Digital Link URIs."""

    @pytest.mark.parametrize("uri,expected", [
        ("https://id.gs1.org/01/12345678901231/21/9999", T.SGTIN),
        ("https://id.gs1.org/01/12345678901231", T.SGTIN),
        ("https://id.gs1.org/01/12345678901231/10/LOT1", T.LGTIN),
        ("https://id.gs1.org/01/12345678901231/235/1111ANC", T.UPUI),
        ("https://id.gs1.org/00/012345666638689852", T.SSCC),
        ("https://id.gs1.org/414/1234567890128/254/1234", T.SGLN),
        ("https://id.gs1.org/8010/0614141123ABC/8011/123456789", T.CPI),
        ("https://id.gs1.org/8006/123456789012310102/21/ABC", T.ITIP),
        ("https://id.gs1.org/8017/843984934394394932", T.GSRNP),
        ("https://id.gs1.org/8018/123456789012345675", T.GSRN),
    ])
    def test_marker_detection(self, uri, expected):
        assert sniff(uri) is expected

    def test_detection_does_not_depend_on_host(self):
        assert sniff("https://maps.google.com.in.de.00/12/01/12345678901231/235/1111ANC") is T.UPUI

    def test_lot_and_third_party_serial_together(self):
        """AI 01 with both /10/ and /235/ fits no single type."""
        uri = "https://id.gs1.org/01/12345678901231/10/LOT/235/TPX"
        assert candidates(uri) == []
        assert sniff(uri) is None

    def test_ambiguous_markers(self):
        """Two primary keys in one URI are rejected rather than guessed."""
        uri = "https://id.gs1.org/00/012345666638689852/414/1234567890128"
        assert set(candidates(uri)) == {T.SSCC, T.SGLN}
        assert sniff(uri) is None

    @pytest.mark.parametrize("value", [None, "", "https://example.com/foo", "testing:123"])
    def test_no_match(self, value):
        assert sniff(value) is None


class TestClassLevelDetection:
    """Class vs instance level shape."""

    def test_grai_without_serial_is_class_level(self):
        d = get_descriptor(T.GRAI)
        assert d.is_class_level_uri("https://id.gs1.org/8003/1234567890128")
        assert not d.is_class_level_uri("https://id.gs1.org/8003/1234567890128ABC")

    def test_sgtin_without_serial_marker_is_class_level(self):
        d = get_descriptor(T.SGTIN)
        assert d.is_class_level_uri("https://id.gs1.org/01/12345678901231")
        assert not d.is_class_level_uri("https://id.gs1.org/01/12345678901231/21/1")

    def test_types_without_class_level(self):
        d = get_descriptor(T.SSCC)
        assert not d.is_class_level_uri("https://id.gs1.org/00/012345666638689852")

    def test_class_urn(self):
        d = get_descriptor(T.SGTIN)
        assert d.is_class_level_urn("urn:epc:idpat:sgtin:234567.1890123.*")
        assert not d.is_class_level_urn("urn:epc:id:sgtin:234567.1890123.1")

    def test_lgtin_is_always_class_level(self):
        d = get_descriptor(T.LGTIN)
        assert d.is_class_level_urn("urn:epc:class:lgtin:4023333.002000.2019-10-07")
        assert d.is_class_level_uri("https://id.gs1.org/01/04023333020008/10/2019-10-07")
