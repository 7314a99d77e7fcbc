"""
openscan-links: OpenScan block explorer integration for local Hardhat nodes
"""

from importlib.metadata import PackageNotFoundError, version

from .aggregator import ArtifactAggregator, merge_address_maps
from .artifacts import DeploymentRecordReader, load_artifacts
from .config import ExplorerConfig
from .exceptions import (
    ConfigurationError,
    ExplorerStartError,
    OpenScanError,
    PortInUseError,
    ServiceNotReadyError,
    WebappNotFoundError,
)
from .files import FileReader
from .injection import build_injection_script, inject_artifacts
from .interceptor import RequestInterceptor
from .server import ExplorerSession
from .tracker import DeploymentTracker
from .types import AddressMap, ArtifactData, CompiledArtifact, ReadOutcome
from .webapp import WebappService

try:
    __version__ = version("openscan-links")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "ExplorerSession",
    "ExplorerConfig",
    "DeploymentTracker",
    "DeploymentRecordReader",
    "ArtifactAggregator",
    "RequestInterceptor",
    "WebappService",
    "FileReader",
    "load_artifacts",
    "merge_address_maps",
    "build_injection_script",
    "inject_artifacts",
    "AddressMap",
    "ArtifactData",
    "CompiledArtifact",
    "ReadOutcome",
    "OpenScanError",
    "ConfigurationError",
    "WebappNotFoundError",
    "PortInUseError",
    "ServiceNotReadyError",
    "ExplorerStartError",
]
