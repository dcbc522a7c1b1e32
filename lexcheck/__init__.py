"""lexcheck: verify that AT Protocol lexicon NSIDs are authoritatively published."""

__version__ = "0.1.0"
