"""
Shared fixtures and payload builders.
"""

import pytest

CONTENT_60_WORDS = " ".join(f"word{i}" for i in range(60))


def make_result_payload(**overrides) -> dict:
    """Build a valid optimize ``data`` object."""
    payload = {
        "h2": "Best Hotels in London for Every Budget",
        "h3": "Where to Stay Near the Thames",
        "paragraph1": "London offers hotels for every traveller.",
        "paragraph2": "Riverside stays combine views and access.",
        "metaTitle": "Best Hotels in London | Guide",
        "metaDescription": "Find the best hotels in London, from budget stays to luxury suites.",
        "internalLinks": [
            {"anchorText": "luxury hotels", "url": "https://a.test", "isLive": False},
        ],
        "placementRecommendation": "Place after the introduction.",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def result_payload():
    return make_result_payload()
