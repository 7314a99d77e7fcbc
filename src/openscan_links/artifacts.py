"""Hardhat Ignition deployment records for openscan-links."""

import logging
from pathlib import Path
from typing import Optional, Union

from .constants import ARTIFACT_SUFFIX, CHAIN_ID, DEPLOYED_ADDRESSES_FILE
from .files import FileReader
from .parsers import (
    load_build_info,
    load_source_code,
    parse_deployed_addresses,
)
from .paths import get_contracts_dir, get_ignition_deployment_dir
from .types import AddressMap, ArtifactData

logger = logging.getLogger(__name__)


def load_artifacts(
    deployment_path: Path,
    project_root: Union[Path, str],
    reader: Optional[FileReader] = None,
) -> AddressMap:
    """
    Build an address map from an Ignition deployment directory.

    Args:
        deployment_path: Path to ignition/deployments/chain-<id>
        project_root: Hardhat project root (for contracts/ sources)
        reader: File reader to use (defaults to the local filesystem)

    Returns:
        Lowercased address -> ArtifactData for every artifact whose contract
        name has a recorded address. Empty if the address list or the
        artifacts directory is missing or unreadable.
    """
    reader = reader or FileReader()
    address_map: AddressMap = {}

    deployed_addresses_path = deployment_path / DEPLOYED_ADDRESSES_FILE
    if not reader.exists(deployed_addresses_path):
        logger.warning("%s not found in %s", DEPLOYED_ADDRESSES_FILE, deployment_path)
        return address_map

    outcome = reader.read_json(deployed_addresses_path)
    if not outcome.ok:
        logger.warning("Could not read %s: %s", deployed_addresses_path, outcome.error)
        return address_map

    contract_deployments = parse_deployed_addresses(outcome.value)

    artifacts_dir = deployment_path / "artifacts"
    if not reader.is_dir(artifacts_dir):
        logger.warning("artifacts directory not found in %s", deployment_path)
        return address_map

    build_info_dir = deployment_path / "build-info"
    contracts_dir = get_contracts_dir(project_root)

    for artifact_file in reader.list_files(artifacts_dir, ARTIFACT_SUFFIX):
        artifact_outcome = reader.read_json(artifact_file)
        if not artifact_outcome.ok or not isinstance(artifact_outcome.value, dict):
            continue
        artifact = artifact_outcome.value

        contract_name = artifact.get("contractName")
        if not isinstance(contract_name, str) or not contract_name:
            continue

        deployed_address = contract_deployments.get(contract_name)
        if not deployed_address:
            continue

        source_name = artifact.get("sourceName")
        build_info_id = artifact.get("buildInfoId")

        artifact_data = ArtifactData(
            abi=artifact.get("abi") or [],
            contract_name=contract_name,
            source_name=source_name if isinstance(source_name, str) else None,
            build_info_id=build_info_id if isinstance(build_info_id, str) else None,
            deployments=[deployed_address],
        )

        # Optional enrichment
        artifact_data.build_info = load_build_info(
            build_info_dir, artifact_data.build_info_id, reader
        )
        artifact_data.source_code = load_source_code(
            contracts_dir, artifact_data.source_name, reader
        )

        address_map[deployed_address.lower()] = artifact_data

    return address_map


class DeploymentRecordReader:
    """
    Reads the Ignition deployment record set for one chain.

    One instance lives for the whole node process. It announces the
    deployment directory the first time it is found and stays quiet on
    every later poll.
    """

    def __init__(
        self,
        project_root: Union[Path, str],
        chain_id: int = CHAIN_ID,
        reader: Optional[FileReader] = None,
    ):
        self.project_root = Path(project_root).absolute()
        self.chain_id = chain_id
        self._reader = reader or FileReader()
        self._has_logged = False

    def find_deployment(self) -> Optional[Path]:
        """
        Locate the Ignition deployment directory.

        Returns:
            Deployment directory if its deployed_addresses.json exists, else None
        """
        deployment_path = get_ignition_deployment_dir(self.project_root, self.chain_id)
        if self._reader.exists(deployment_path / DEPLOYED_ADDRESSES_FILE):
            return deployment_path
        return None

    def load(self) -> Optional[AddressMap]:
        """
        Load the current deployment records.

        Returns:
            None if the project has no Ignition deployment for this chain;
            otherwise the (possibly empty) address map
        """
        deployment_path = self.find_deployment()
        if deployment_path is None:
            return None

        should_log = not self._has_logged
        if should_log:
            self._has_logged = True
            logger.info("Found Ignition deployment at: %s", deployment_path)

        result = load_artifacts(deployment_path, self.project_root, self._reader)

        if should_log:
            logger.info("Loaded %d contract artifacts", len(result))

        return result
