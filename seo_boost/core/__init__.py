"""
Core modules for SEO Boost.

This package contains the generation orchestrator, usage accounting,
connectivity monitoring and the provider reference data.
"""
