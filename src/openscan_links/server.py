"""Explorer session: the per-node-process owner of all explorer state."""

import logging
import threading
from typing import Any, Optional

from .aggregator import ArtifactAggregator
from .artifacts import DeploymentRecordReader
from .config import ExplorerConfig
from .exceptions import (
    ExplorerStartError,
    OpenScanError,
    PortInUseError,
    ServiceNotReadyError,
)
from .files import FileReader
from .interceptor import RequestInterceptor
from .tracker import DeploymentTracker
from .utils import is_port_available, open_browser
from .webapp import WebappService

logger = logging.getLogger(__name__)


class ExplorerSession:
    """
    Wires the deployment tracker, Ignition records, webapp and interceptor.

    Construct one per node process. The session does not see node traffic
    itself: the host must pass every answered JSON-RPC request to
    ``on_request`` or deployments are never tracked.
    """

    def __init__(self, config: ExplorerConfig, reader: Optional[FileReader] = None):
        """
        Initialize the session.

        Args:
            config: Explorer configuration
            reader: File reader shared by the tracker and record reader
        """
        self.config = config
        reader = reader or FileReader()

        self.tracker = DeploymentTracker(config.project_root, reader=reader)
        self.records = DeploymentRecordReader(
            config.project_root, chain_id=config.chain_id, reader=reader
        )
        self.aggregator = ArtifactAggregator(self.records, self.tracker)
        self.interceptor = RequestInterceptor(self.tracker, config)
        self.webapp: Optional[WebappService] = None

    def on_request(self, method: str, params: Any, response: Any) -> None:
        """
        Hook for the host's JSON-RPC layer, called after the node answers.

        Args:
            method: JSON-RPC method name
            params: Request params
            response: JSON-RPC response object ({"result": ...})
        """
        self.interceptor.on_request(method, params, response)

    @property
    def webapp_url(self) -> Optional[str]:
        if self.webapp is None or not self.webapp.running:
            return None
        return self.webapp.url

    def start(self, block_process: bool = False) -> bool:
        """
        Start the explorer webapp.

        Args:
            block_process: If True, serve in the calling thread until stopped

        Returns:
            True if the webapp started, False if the port was already taken

        Raises:
            ExplorerStartError: If the webapp fails to start for another reason
        """
        if not is_port_available(self.config.port, self.config.host):
            logger.warning(
                "Port %d is already in use. Explorer not started.", self.config.port
            )
            return False

        self.webapp = WebappService(
            self.config.dist_path,
            artifact_loader=self.aggregator,
            host=self.config.host,
            port=self.config.port,
        )

        try:
            if block_process:
                if self.config.open_browser:
                    threading.Thread(
                        target=self._open_browser_when_ready,
                        name="openscan-browser",
                        daemon=True,
                    ).start()
                self.webapp.start(block_process=True)
                return True

            self.webapp.start()
            self.webapp.wait_for_ready()
        except PortInUseError:
            logger.warning(
                "Port %d is already in use. Explorer not started.", self.config.port
            )
            self.webapp = None
            return False
        except (OpenScanError, OSError) as e:
            self.stop()
            raise ExplorerStartError(f"Failed to start OpenScan Explorer: {e}") from e

        if self.config.open_browser:
            open_browser(self.webapp.url, self.config.chain_id)
        return True

    def _open_browser_when_ready(self) -> None:
        webapp = self.webapp
        if webapp is None:
            return
        try:
            webapp.wait_for_ready()
        except ServiceNotReadyError as e:
            logger.warning("Not opening browser: %s", e)
            return
        open_browser(webapp.url, self.config.chain_id)

    def stop(self) -> None:
        if self.webapp is not None:
            self.webapp.stop()
            self.webapp = None
