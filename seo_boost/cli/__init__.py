"""
Command-line interface for SEO Boost.
"""
