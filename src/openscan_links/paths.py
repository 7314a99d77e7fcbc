"""Path management utilities for openscan-links."""

from pathlib import Path
from typing import Union

from .constants import CHAIN_ID


def get_default_dist_dir() -> Path:
    """
    Get default webapp bundle directory (shipped inside the package).

    Returns:
        Path to <package>/bundle
    """
    return Path(__file__).parent / "bundle"


def get_compiled_artifacts_dir(project_root: Union[Path, str]) -> Path:
    """Return the Hardhat compiled-artifacts directory: <root>/artifacts/contracts."""
    return Path(project_root).absolute() / "artifacts" / "contracts"


def get_build_info_dir(project_root: Union[Path, str]) -> Path:
    """Return the Hardhat build-info directory: <root>/artifacts/build-info."""
    return Path(project_root).absolute() / "artifacts" / "build-info"


def get_contracts_dir(project_root: Union[Path, str]) -> Path:
    """Return the project's Solidity source directory: <root>/contracts."""
    return Path(project_root).absolute() / "contracts"


def get_ignition_deployment_dir(
    project_root: Union[Path, str], chain_id: int = CHAIN_ID
) -> Path:
    """
    Get the Ignition deployment directory for a chain.

    Args:
        project_root: Hardhat project root
        chain_id: Chain identifier (defaults to the local Hardhat chain)

    Returns:
        Path to <root>/ignition/deployments/chain-<chain_id>
    """
    return (
        Path(project_root).absolute()
        / "ignition"
        / "deployments"
        / f"chain-{chain_id}"
    )
