"""Configuration constants for openscan-links."""

# Hardhat's in-process network
CHAIN_ID = 31337

# Fixed webapp endpoint
WEBAPP_HOST = "127.0.0.1"
WEBAPP_PORT = 3030
DEFAULT_EXPLORER_URL = f"http://localhost:{WEBAPP_PORT}"

# localStorage key read by the explorer bundle
STORAGE_KEY = "OPENSCAN_ARTIFACTS_JSON_V1"

ARTIFACT_SUFFIX = ".json"
DEPLOYED_ADDRESSES_FILE = "deployed_addresses.json"

# Separator in Ignition future ids, e.g. "LockModule#Lock"
MODULE_SEPARATOR = "#"

# Width of the label column in link log lines
LINK_LABEL_WIDTH = 18

MIME_TYPES = {
    ".html": "text/html; charset=utf-8",
    ".js": "application/javascript; charset=utf-8",
    ".css": "text/css; charset=utf-8",
    ".json": "application/json; charset=utf-8",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".svg": "image/svg+xml",
    ".ico": "image/x-icon",
    ".txt": "text/plain; charset=utf-8",
    ".woff": "font/woff",
    ".woff2": "font/woff2",
    ".ttf": "font/ttf",
    ".eot": "application/vnd.ms-fontobject",
}
