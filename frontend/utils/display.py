from typing import Any, Dict, Optional


def displayable_image_url(destination: Dict[str, Any]) -> Optional[str]:
    """The destination's picture if it is a web URL ``st.image`` can fetch.

    Anything else would be read as a local file path, so it is skipped.
    """
    url = (destination.get("image_url") or "").strip()
    if url.lower().startswith(("http://", "https://")):
        return url
    return None
