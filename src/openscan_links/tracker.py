"""Tracking of raw contract deployments for openscan-links."""

import copy
import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from .files import FileReader
from .parsers import load_build_info, load_source_code, scan_compiled_artifacts
from .paths import get_build_info_dir, get_compiled_artifacts_dir, get_contracts_dir
from .types import AddressMap, ArtifactData, CompiledArtifact

logger = logging.getLogger(__name__)


def match_creation_bytecode(
    creation_data: str, candidates: Sequence[CompiledArtifact]
) -> Optional[CompiledArtifact]:
    """
    Find the compiled artifact whose bytecode begins the creation data.

    Comparison is case-insensitive. Creation data is the artifact bytecode
    followed by ABI-encoded constructor arguments, so a prefix match is
    enough. Candidates with no code ("0x") never match. The first matching
    candidate in scan order wins; overlapping prefixes are not ranked.

    Args:
        creation_data: The data field of a deployment transaction
        candidates: Compiled artifacts in scan order

    Returns:
        Matching artifact or None
    """
    normalized_data = creation_data.lower()
    for artifact in candidates:
        normalized_bytecode = artifact.bytecode.lower()
        if len(normalized_bytecode) > 2 and normalized_data.startswith(normalized_bytecode):
            return artifact
    return None


class DeploymentTracker:
    """
    Tracks contract deployments sent by raw deploy scripts.

    Deployment transactions are remembered by hash until their receipt
    arrives; the creation bytecode is then matched against the compiled
    artifacts snapshot taken at construction.
    """

    def __init__(self, project_root: Union[Path, str], reader: Optional[FileReader] = None):
        """
        Initialize the tracker and scan compiled artifacts.

        Args:
            project_root: Hardhat project root
            reader: File reader to use (defaults to the local filesystem)
        """
        self.project_root = Path(project_root).absolute()
        self._reader = reader or FileReader()
        self._compiled_artifacts: List[CompiledArtifact] = scan_compiled_artifacts(
            get_compiled_artifacts_dir(self.project_root), self._reader
        )
        self._tracked_deployments: AddressMap = {}
        self._pending_txs: Dict[str, str] = {}

        logger.debug(
            "Loaded %d compiled artifacts from %s",
            len(self._compiled_artifacts),
            get_compiled_artifacts_dir(self.project_root),
        )

    @property
    def compiled_artifacts(self) -> List[CompiledArtifact]:
        return list(self._compiled_artifacts)

    def is_pending(self, tx_hash: str) -> bool:
        return tx_hash in self._pending_txs

    def track_send_transaction(self, tx_hash: str, data: str) -> None:
        """
        Remember the creation bytecode of a deployment transaction.

        Called for eth_sendTransaction requests without a "to" address.
        A second call for the same hash replaces the stored data.
        """
        if not data:
            return
        self._pending_txs[tx_hash] = data

    def track_deployment_receipt(self, tx_hash: str, contract_address: str) -> None:
        """
        Resolve a pending deployment once its receipt reports a contract address.

        Unknown transaction hashes are ignored. The pending entry is consumed
        whether or not a compiled artifact matches.
        """
        data = self._pending_txs.pop(tx_hash, None)
        if not data:
            return

        artifact = match_creation_bytecode(data, self._compiled_artifacts)
        if artifact is None:
            logger.debug("No compiled artifact matches deployment %s", tx_hash)
            return

        entry = ArtifactData(
            abi=copy.deepcopy(artifact.abi),
            contract_name=artifact.contract_name,
            source_name=artifact.source_name,
            build_info_id=artifact.build_info_id,
            deployments=[contract_address],
        )
        entry.source_code = load_source_code(
            get_contracts_dir(self.project_root), artifact.source_name, self._reader
        )
        entry.build_info = load_build_info(
            get_build_info_dir(self.project_root), artifact.build_info_id, self._reader
        )

        self._tracked_deployments[contract_address.lower()] = entry
        logger.info("Tracked deployment of %s at %s", artifact.contract_name, contract_address)

    def get_artifacts(self) -> AddressMap:
        """Return a deep copy of the tracked deployments."""
        return copy.deepcopy(self._tracked_deployments)
