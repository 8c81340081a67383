"""
SEO Boost client core.

Turns article content and a target keyword into SEO metadata by
delegating generation to a backend proxy for the selected AI provider.
"""

__version__ = "0.1.0"
