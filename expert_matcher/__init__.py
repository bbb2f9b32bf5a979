"""Expert Matcher — explainable candidate scoring and ranking for a two-sided marketplace."""

__version__ = "0.1.0"
