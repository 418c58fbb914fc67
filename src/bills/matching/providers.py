#!/usr/bin/env python3
"""
Provider Alias Resolution

Bank statements rarely spell a provider the way the user typed it on the bill
("SKY DIGITAL" vs "Sky", "CENTRICA" vs "British Gas"). The resolver maps a
bill's provider hint and a transaction's merchant/description text to a shared
canonical provider key using an alias dictionary supplied at construction.
"""

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path

from ..core.json_utils import read_json

logger = logging.getLogger(__name__)

# Common UK utilities and subscriptions: canonical key -> statement aliases
DEFAULT_PROVIDER_ALIASES: dict[str, list[str]] = {
    "netflix": ["netflix", "nflx"],
    "spotify": ["spotify"],
    "amazon prime": ["amazon", "prime video", "amzn", "amazon prime"],
    "disney+": ["disney", "disney plus", "disneyplus"],
    "apple": ["apple.com", "apple music", "icloud"],
    "virgin media": ["virgin", "vm", "virgin media"],
    "british gas": ["british gas", "bg", "centrica"],
    "thames water": ["thames", "thames water"],
    "council tax": ["council", "local authority", "district council", "borough council"],
    "sky": ["sky uk", "sky digital", "sky.com"],
    "bt": ["bt group", "british telecom", "bt.com"],
    "ee": ["ee limited", "everything everywhere", "ee.co.uk"],
    "vodafone": ["vodafone", "voda"],
    "o2": ["o2", "telefonica"],
    "three": ["three", "three.co.uk", "hutchison"],
    "now tv": ["now tv", "nowtv"],
    "youtube": ["youtube", "google youtube"],
    "audible": ["audible"],
    "gym": ["puregym", "the gym", "gym group", "virgin active", "nuffield"],
    "insurance": ["aviva", "direct line", "admiral", "axa", "more than"],
}


class ProviderAliasResolver:
    """Case-insensitive provider matcher over an injectable alias dictionary."""

    def __init__(self, aliases: Mapping[str, Sequence[str]] | None = None):
        """
        Initialize the resolver.

        Args:
            aliases: Canonical provider key -> list of text aliases. Defaults
                to DEFAULT_PROVIDER_ALIASES.
        """
        source = DEFAULT_PROVIDER_ALIASES if aliases is None else aliases
        self.aliases: dict[str, tuple[str, ...]] = {
            key.strip().lower(): tuple(a.strip().lower() for a in values if a.strip())
            for key, values in source.items()
            if key.strip()
        }

    def resolve(
        self,
        hint: str | None,
        merchant_text: str | None,
        description_text: str | None,
    ) -> str | None:
        """
        Resolve the provider shared by a bill hint and a transaction.

        Lookup order, first hit wins:
        1. the hint appears verbatim in the merchant or description text
        2. the hint names a canonical key (either contains the other) and the
           transaction text contains one of that key's aliases
        3. one of a key's aliases appears in the hint and another (or the same)
           alias of that key appears in the transaction text

        Args:
            hint: Bill provider, or bill name when no provider was recorded
            merchant_text: Transaction merchant, may be missing
            description_text: Transaction description

        Returns:
            The hint (rule 1) or the canonical key (rules 2 and 3); None when
            nothing matches
        """
        provider = (hint or "").strip().lower()
        if not provider:
            return None

        merchant = (merchant_text or "").lower()
        description = (description_text or "").lower()

        if provider in merchant or provider in description:
            return provider

        for key, aliases in self.aliases.items():
            if key in provider or provider in key:
                if _mentions_any(aliases, merchant, description):
                    return key

        for key, aliases in self.aliases.items():
            if any(alias in provider for alias in aliases) and _mentions_any(aliases, merchant, description):
                return key

        return None


def _mentions_any(aliases: Sequence[str], merchant: str, description: str) -> bool:
    return any(alias in merchant or alias in description for alias in aliases)


def load_provider_aliases(filepath: str | Path) -> dict[str, list[str]]:
    """
    Load an alias dictionary from a JSON object of key -> list of aliases.

    Raises:
        ValueError: If the file does not hold an object of string lists
    """
    data = read_json(filepath)
    if not isinstance(data, dict):
        raise ValueError(f"{filepath} must contain a JSON object of provider aliases")

    aliases: dict[str, list[str]] = {}
    for key, values in data.items():
        if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
            raise ValueError(f"Aliases for provider {key!r} in {filepath} must be a list of strings")
        aliases[str(key)] = values

    logger.info("Loaded %d provider alias entries from %s", len(aliases), filepath)
    return aliases
