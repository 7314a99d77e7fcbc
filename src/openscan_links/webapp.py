"""Static explorer webapp server for openscan-links."""

import logging
import threading
from pathlib import Path
from typing import Optional, Union

import uvicorn
from fastapi import FastAPI
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from .constants import MIME_TYPES, WEBAPP_HOST, WEBAPP_PORT
from .exceptions import PortInUseError, WebappNotFoundError
from .injection import ArtifactLoader, inject_artifacts
from .utils import is_port_available, wait_for_http_service

logger = logging.getLogger(__name__)


class WebappService:
    """
    Serves the explorer bundle with SPA fallback.

    Every HTML response is rendered with the current artifact data injected,
    so deployments show up on the next page load without a rebuild.
    """

    def __init__(
        self,
        dist_path: Union[Path, str],
        artifact_loader: Optional[ArtifactLoader] = None,
        host: str = WEBAPP_HOST,
        port: int = WEBAPP_PORT,
    ):
        self.dist_path = Path(dist_path).absolute()
        self.host = host
        self.port = port
        self._artifact_loader = artifact_loader
        self._server: Optional[uvicorn.Server] = None
        self._thread: Optional[threading.Thread] = None
        self.app = self.create_app()

    @property
    def url(self) -> str:
        return f"http://localhost:{self.port}"

    @property
    def running(self) -> bool:
        return self._server is not None

    def create_app(self) -> FastAPI:
        app = FastAPI(title="OpenScan Explorer", docs_url=None, redoc_url=None, openapi_url=None)

        @app.get("/{requested_path:path}")
        def serve(requested_path: str) -> Response:
            return self.handle_request(requested_path)

        return app

    def handle_request(self, requested_path: str) -> Response:
        """
        Resolve a request path to a file in the dist folder.

        Args:
            requested_path: URL path without query string or fragment

        Returns:
            File response, index.html for unknown paths, or 404 for paths
            outside the dist folder
        """
        dist_root = self.dist_path.resolve()
        index_path = dist_root / "index.html"

        relative = requested_path.lstrip("/")
        if not relative:
            return self.serve_file(index_path)

        candidate = (dist_root / relative).resolve()
        if not candidate.is_relative_to(dist_root):
            return PlainTextResponse("404 Not Found", status_code=404)

        if not candidate.is_file():
            # Client-side routing
            return self.serve_file(index_path)

        return self.serve_file(candidate)

    def serve_file(self, file_path: Path) -> Response:
        ext = file_path.suffix.lower()

        try:
            if ext == ".html":
                html = file_path.read_text(encoding="utf-8")
            else:
                content = file_path.read_bytes()
        except OSError as e:
            logger.error("Error reading file %s: %s", file_path, e)
            return PlainTextResponse("500 Internal Server Error", status_code=500)

        # HTML is never cached so injected artifacts stay fresh
        if ext == ".html":
            return HTMLResponse(
                inject_artifacts(html, self._artifact_loader),
                headers={"Cache-Control": "no-cache"},
            )

        return Response(
            content,
            media_type=MIME_TYPES.get(ext, "application/octet-stream"),
            headers={"Cache-Control": "public, max-age=3600"},
        )

    def start(self, block_process: bool = False) -> None:
        """
        Start serving.

        Args:
            block_process: If True, serve in the calling thread until stopped

        Raises:
            WebappNotFoundError: If the dist folder or index.html is missing
            PortInUseError: If the port is already bound
        """
        if not self.dist_path.is_dir():
            raise WebappNotFoundError(f"Webapp dist folder not found at: {self.dist_path}")
        if not (self.dist_path / "index.html").is_file():
            raise WebappNotFoundError(f"index.html not found in dist folder: {self.dist_path}")
        if not is_port_available(self.port, self.host):
            raise PortInUseError(f"Port {self.port} is already in use")

        config = uvicorn.Config(
            self.app,
            host=self.host,
            port=self.port,
            log_level="warning",
            access_log=False,
        )
        self._server = uvicorn.Server(config)
        logger.info("Explorer webapp running at %s", self.url)

        if block_process:
            try:
                self._server.run()
            finally:
                self._server = None
            return

        self._thread = threading.Thread(
            target=self._server.run, name="openscan-webapp", daemon=True
        )
        self._thread.start()

    def wait_for_ready(self, max_attempts: int = 20, delay: float = 0.1) -> None:
        """
        Block until the server answers HTTP requests.

        Raises:
            ServiceNotReadyError: If the server does not become ready
        """
        wait_for_http_service(f"http://{self.host}:{self.port}/", max_attempts, delay)

    def stop(self, timeout: float = 5.0) -> None:
        if self._server is None:
            return

        self._server.should_exit = True
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        self._server = None
        logger.info("Webapp server stopped")
