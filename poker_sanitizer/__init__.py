"""Hand-history sanitizer: drop CSV rows that carry personal data."""

__version__ = "0.1.0"
