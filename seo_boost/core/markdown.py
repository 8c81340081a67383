"""
Markdown export of a generated result.
"""

from .models import META_DESCRIPTION_LIMIT, META_TITLE_LIMIT, SEOResult


def format_results_as_markdown(result: SEOResult) -> str:
    """Render a result as Markdown for copying into an editor."""
    links = "\n\n".join(
        f'{i}. **Anchor text:** "{link.anchor_text}"\n   **Link to:** {link.url}'
        for i, link in enumerate(result.internal_links, start=1)
    )

    return f"""## {result.h2}

**Heading 2:** {result.h2}

**Paragraph 1:**
{result.paragraph1}

**Heading 3:** {result.h3}

**Paragraph 2:**
{result.paragraph2}

**Meta Title:** {result.meta_title} ({len(result.meta_title)}/{META_TITLE_LIMIT} chars)

**Meta Description:** {result.meta_description} ({len(result.meta_description)}/{META_DESCRIPTION_LIMIT} chars)

**Internal Links with Anchor Texts:**

{links}

**PLACEMENT RECOMMENDATION:**
{result.placement_recommendation}"""
