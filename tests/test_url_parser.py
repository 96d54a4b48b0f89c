"""Tests for URL parsing and UTM extraction."""

import pytest

from traffic_source_941.url_parser import parse_url
from traffic_source_941.utm import UTMParams, extract_utm, merge_utm


class TestParseURL:
    """Test URL normalization and parameter extraction."""

    def test_bare_domain_gets_scheme(self):
        parsed = parse_url("facebook.com")
        assert parsed is not None
        assert parsed.hostname == "facebook.com"
        assert parsed.url == "https://facebook.com/"
        assert parsed.pathname == "/"

    def test_existing_scheme_kept(self):
        """Scheme detection is case-insensitive, host is lowercased."""
        parsed = parse_url("HTTP://Example.COM/Landing?x=1")
        assert parsed.hostname == "example.com"
        assert parsed.url == "http://example.com/Landing?x=1"
        assert parsed.pathname == "/Landing"

    def test_surrounding_whitespace_trimmed(self):
        parsed = parse_url("   example.com/page?a=1  ")
        assert parsed.hostname == "example.com"
        assert parsed.params == {"a": "1"}

    def test_param_keys_lowercased(self):
        parsed = parse_url("https://example.com/?UTM_Source=Google&GCLID=abc")
        assert parsed.params["utm_source"] == "Google"
        assert parsed.utm_params.source == "Google"
        assert parsed.params["gclid"] == "abc"

    def test_repeated_key_last_value_wins(self):
        parsed = parse_url("https://example.com/?utm_source=first&UTM_SOURCE=last")
        assert parsed.utm_params.source == "last"

    def test_values_are_decoded(self):
        parsed = parse_url("https://example.com/?utm_campaign=spring+sale&utm_term=a%20b")
        assert parsed.utm_params.campaign == "spring sale"
        assert parsed.utm_params.term == "a b"

    def test_blank_utm_values_omitted(self):
        """Blank values stay in params but never become UTM fields."""
        parsed = parse_url("https://example.com/?utm_source=&utm_medium=%20%20&utm_campaign=launch")
        assert parsed.params["utm_source"] == ""
        assert parsed.utm_params.source is None
        assert parsed.utm_params.medium is None
        assert parsed.utm_params.campaign == "launch"

    def test_all_utm_fields(self):
        url = ("https://example.com/?utm_source=newsletter&utm_medium=email"
               "&utm_campaign=launch&utm_content=variant_a&utm_term=keyword")
        utm = parse_url(url).utm_params
        assert utm == UTMParams(
            source="newsletter",
            medium="email",
            campaign="launch",
            content="variant_a",
            term="keyword",
        )

    def test_click_ids_detected(self):
        parsed = parse_url("https://example.com/?gclid=abc123")
        assert [c.param for c in parsed.click_ids] == ["gclid"]
        assert parsed.click_ids[0].value == "abc123"

    def test_internationalized_domain(self):
        parsed = parse_url("bücher.de/katalog")
        assert parsed.hostname == "xn--bcher-kva.de"

    def test_percent_encoded_host_decoded(self):
        parsed = parse_url("https://face%62ook.com/?utm_source=fb")
        assert parsed.hostname == "facebook.com"
        assert parsed.url == "https://facebook.com/?utm_source=fb"

    def test_backslash_is_path_separator(self):
        parsed = parse_url("example.com\\landing?gclid=1")
        assert parsed.hostname == "example.com"
        assert parsed.pathname == "/landing"
        assert [c.param for c in parsed.click_ids] == ["gclid"]

    def test_backslash_in_query_untouched(self):
        parsed = parse_url("https://example.com/?utm_term=a\\b")
        assert parsed.utm_params.term == "a\\b"

    def test_port_and_credentials_kept(self):
        parsed = parse_url("https://user@Example.com:8443/x")
        assert parsed.hostname == "example.com"
        assert parsed.url == "https://user@example.com:8443/x"

    @pytest.mark.parametrize("raw", [
        "",
        "   ",
        None,
        "https://exa mple.com",
        "https://",
        "http://example.com:99999/",
        "https://[::1",
        "https://exa<mple.com",
        "https://exa%3Cmple.com",
        "https://%%%",
    ])
    def test_invalid_input_returns_none(self, raw):
        assert parse_url(raw) is None


class TestUTMHelpers:
    """Test UTM extraction and merging."""

    def test_extract_trims_values(self):
        utm = extract_utm({"utm_source": "  google  ", "utm_medium": "cpc"})
        assert utm.source == "google"
        assert utm.medium == "cpc"

    def test_extract_keeps_long_values_whole(self):
        utm = extract_utm({"utm_campaign": "x" * 500})
        assert len(utm.campaign) == 500

    def test_to_dict_uses_query_keys(self):
        utm = UTMParams(source="google", term="shoes")
        assert utm.to_dict() == {"utm_source": "google", "utm_term": "shoes"}
        assert utm.has_utm is True
        assert UTMParams().has_utm is False

    def test_override_wins(self):
        merged = merge_utm(UTMParams(source="foo", medium="cpc"), UTMParams(source="bar"))
        assert merged.source == "bar"
        assert merged.medium == "cpc"

    def test_blank_override_clears_url_value(self):
        merged = merge_utm(UTMParams(source="foo", medium="cpc"), UTMParams(source="  "))
        assert merged.source is None
        assert merged.to_dict() == {"utm_medium": "cpc"}

    def test_from_mapping_keeps_presence(self):
        """A present empty value differs from an absent one until merged."""
        utm = UTMParams.from_mapping({"utm_source": "", "other": "x"})
        assert utm.source == ""
        assert utm.medium is None
