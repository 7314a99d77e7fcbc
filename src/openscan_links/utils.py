"""Terminal, browser and network helpers for openscan-links."""

import logging
import socket
import time
import webbrowser
from typing import Optional

import requests

from .constants import CHAIN_ID, WEBAPP_HOST
from .exceptions import ServiceNotReadyError

logger = logging.getLogger(__name__)


def create_clickable_link(url: str, text: Optional[str] = None) -> str:
    """Wrap a URL in an OSC 8 terminal hyperlink escape sequence."""
    display_text = text or url
    return f"\x1b]8;;{url}\x1b\\{display_text}\x1b]8;;\x1b\\"


def is_port_available(port: int, host: str = WEBAPP_HOST) -> bool:
    """
    Check whether a TCP port can be bound.

    Args:
        port: Port number to check
        host: Interface to bind on

    Returns:
        True if the port is free, False otherwise
    """
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        try:
            sock.bind((host, port))
        except OSError:
            return False
    return True


def open_browser(url: str, chain_id: int = CHAIN_ID) -> None:
    """
    Open the explorer's network page in the default browser.

    Browser opening is optional; failures are logged, not raised.
    """
    network_page_url = f"{url}/#/{chain_id}"
    try:
        if not webbrowser.open(network_page_url):
            logger.warning("Could not auto-open browser for %s", network_page_url)
    except webbrowser.Error as e:
        logger.warning("Could not auto-open browser: %s", e)


def wait_for_http_service(url: str, max_attempts: int = 20, delay: float = 0.5) -> None:
    """
    Poll an HTTP endpoint until it answers with a 2xx status.

    Args:
        url: URL to poll
        max_attempts: Maximum number of polling attempts
        delay: Seconds to wait between attempts

    Raises:
        ServiceNotReadyError: If the service does not become ready
    """
    for _ in range(max_attempts):
        try:
            response = requests.get(url, timeout=5)
            if response.ok:
                return
        except requests.RequestException:
            # Not ready yet
            pass

        time.sleep(delay)

    raise ServiceNotReadyError(
        f"HTTP service at {url} did not become ready after {max_attempts} attempts"
    )
