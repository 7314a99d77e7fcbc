"""Injection of artifact data into served HTML pages."""

import json
import logging
import re
from typing import Any, Callable, Dict, Optional

from .constants import STORAGE_KEY
from .types import AddressMap, ArtifactData

logger = logging.getLogger(__name__)

ArtifactLoader = Callable[[], Optional[AddressMap]]

_BODY_TAG = re.compile(r"<body\b[^>]*>", re.IGNORECASE)
_SCRIPT_CLOSE = re.compile(r"</script", re.IGNORECASE)


def serialize_address_map(address_map: AddressMap) -> Dict[str, Any]:
    return {
        address: artifact.to_dict() if isinstance(artifact, ArtifactData) else artifact
        for address, artifact in address_map.items()
    }


def build_injection_script(address_map: AddressMap, storage_key: str = STORAGE_KEY) -> str:
    """
    Build the <script> fragment that stores the address map in localStorage.

    The map is JSON-encoded twice: the outer encoding turns the document into
    a JavaScript string literal, and the stored value is the inner JSON text.
    Any "</script" inside the literal is written as "<\\/script" so the
    browser cannot end the element early.

    Args:
        address_map: Address map to inject
        storage_key: localStorage key read by the webapp

    Returns:
        Script element as a string

    Raises:
        ValueError: If the map holds a NaN or infinite number
    """
    inner = json.dumps(
        serialize_address_map(address_map), separators=(",", ":"), allow_nan=False
    )
    literal = _SCRIPT_CLOSE.sub(lambda m: "<\\/" + m.group(0)[2:], json.dumps(inner))

    return (
        "<script>"
        f"try{{localStorage.setItem({json.dumps(storage_key)},{literal})}}"
        'catch(e){console.warn("[openscan] Failed to inject artifacts:",e)}'
        "</script>"
    )


def inject_artifacts(
    html: str, loader: Optional[ArtifactLoader], storage_key: str = STORAGE_KEY
) -> str:
    """
    Insert current artifact data right after the page's opening body tag.

    The page is returned unchanged when there is no loader, the loader fails,
    it reports nothing to inject, or the page has no body tag.

    Args:
        html: Page content
        loader: Callable returning the current address map (or None)
        storage_key: localStorage key read by the webapp

    Returns:
        Page content, possibly with the injected script
    """
    if loader is None:
        return html

    try:
        artifacts = loader()
        if not artifacts:
            return html
        script_tag = build_injection_script(artifacts, storage_key)
    except Exception as e:
        logger.warning("Failed to inject artifacts: %s", e)
        return html

    return _BODY_TAG.sub(lambda m: m.group(0) + script_tag, html, count=1)
