#!/usr/bin/env python3
"""Tests for provider alias resolution."""

import json

import pytest

from bills.matching.providers import DEFAULT_PROVIDER_ALIASES, ProviderAliasResolver, load_provider_aliases


@pytest.mark.matching
class TestDefaultAliases:
    """Resolution against the built-in UK alias table."""

    def setup_method(self):
        self.resolver = ProviderAliasResolver()

    def test_hint_found_verbatim_in_merchant(self):
        assert self.resolver.resolve("Netflix", "NETFLIX.COM", "") == "netflix"

    def test_hint_found_in_description_when_merchant_missing(self):
        assert self.resolver.resolve("Netflix", None, "NETFLIX.COM 866-579-7172") == "netflix"

    def test_hint_names_a_canonical_key(self):
        assert self.resolver.resolve("British Gas", "CENTRICA PLC", "DD") == "british gas"
        assert self.resolver.resolve("Sky TV", "SKY DIGITAL", "") == "sky"

    def test_hint_contains_an_alias(self):
        assert self.resolver.resolve("Centrica Energy", "BRITISH GAS", "") == "british gas"

    def test_unrelated_text_does_not_match(self):
        assert self.resolver.resolve("Window Cleaner", "JOHN SMITH", "CARD PAYMENT") is None
        assert self.resolver.resolve("Netflix", "SPOTIFY P0123", "") is None

    def test_empty_hint_never_matches(self):
        assert self.resolver.resolve("", "NETFLIX.COM", "NETFLIX") is None
        assert self.resolver.resolve(None, "NETFLIX.COM", "NETFLIX") is None
        assert self.resolver.resolve("   ", "NETFLIX.COM", "NETFLIX") is None

    def test_table_is_not_mutated_by_resolver(self):
        ProviderAliasResolver()
        assert DEFAULT_PROVIDER_ALIASES["netflix"] == ["netflix", "nflx"]


@pytest.mark.matching
class TestInjectedAliases:
    """Resolvers built from a caller-supplied alias dictionary."""

    def test_custom_dictionary_replaces_defaults(self):
        resolver = ProviderAliasResolver({"Acme Energy": ["ACME PWR"]})

        assert resolver.resolve("acme energy", "ACME PWR LTD", "") == "acme energy"
        assert resolver.resolve("British Gas", "CENTRICA", "") is None

    def test_keys_and_aliases_are_normalized(self):
        resolver = ProviderAliasResolver({"  Local Gym ": [" FLEXFIT ", ""]})
        assert resolver.aliases == {"local gym": ("flexfit",)}

    def test_load_from_file(self, temp_dir):
        path = temp_dir / "aliases.json"
        path.write_text(json.dumps({"acme energy": ["acme pwr", "acme"]}))

        aliases = load_provider_aliases(path)
        assert aliases == {"acme energy": ["acme pwr", "acme"]}

    def test_load_rejects_bad_shape(self, temp_dir):
        path = temp_dir / "aliases.json"
        path.write_text(json.dumps({"acme energy": "acme pwr"}))

        with pytest.raises(ValueError, match="list of strings"):
            load_provider_aliases(path)

    def test_load_rejects_non_object(self, temp_dir):
        path = temp_dir / "aliases.json"
        path.write_text(json.dumps(["acme"]))

        with pytest.raises(ValueError, match="JSON object"):
            load_provider_aliases(path)
