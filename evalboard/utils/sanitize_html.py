from typing import Optional

import bleach

from evalboard.core.config import settings


def sanitize_html_content(html: Optional[str]) -> Optional[str]:
    """Strip markup outside the whitelist from free-text fields."""
    if not html:
        return html

    return bleach.clean(
        html,
        tags=settings.ALLOWED_TAGS,
        attributes=settings.ALLOWED_ATTRIBUTES,
        strip=True,
        strip_comments=True,
    ).strip()
