"""Artifact file parsers for openscan-links."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from .constants import ARTIFACT_SUFFIX, MODULE_SEPARATOR
from .files import FileReader
from .types import CompiledArtifact

logger = logging.getLogger(__name__)


def parse_compiled_artifact(data: Any) -> Optional[CompiledArtifact]:
    """
    Interpret a decoded JSON document as a compiled Hardhat artifact.

    Args:
        data: Decoded JSON content of an artifact file

    Returns:
        CompiledArtifact if the document has a non-empty contractName, an abi
        field and a non-empty bytecode string; None otherwise
    """
    if not isinstance(data, dict):
        return None

    contract_name = data.get("contractName")
    abi = data.get("abi")
    bytecode = data.get("bytecode")

    if not isinstance(contract_name, str) or not contract_name:
        return None
    if abi is None:
        return None
    if not isinstance(bytecode, str) or not bytecode:
        return None

    source_name = data.get("sourceName")
    build_info_id = data.get("buildInfoId")

    return CompiledArtifact(
        contract_name=contract_name,
        abi=abi,
        bytecode=bytecode,
        source_name=source_name if isinstance(source_name, str) and source_name else None,
        build_info_id=build_info_id if isinstance(build_info_id, str) and build_info_id else None,
    )


def scan_compiled_artifacts(
    root: Path, reader: Optional[FileReader] = None
) -> List[CompiledArtifact]:
    """
    Recursively collect compiled artifacts under a directory.

    Malformed or unreadable files are skipped; they never abort the scan.

    Args:
        root: Compiled artifacts root (usually <project>/artifacts/contracts)
        reader: File reader to use (defaults to the local filesystem)

    Returns:
        Artifacts in scan order (sorted path order); empty if root is missing
    """
    reader = reader or FileReader()
    if not reader.is_dir(root):
        return []

    artifacts: List[CompiledArtifact] = []
    for file_path in reader.iter_files(root):
        if not file_path.name.endswith(ARTIFACT_SUFFIX):
            continue

        outcome = reader.read_json(file_path)
        if not outcome.ok:
            logger.debug("Skipping unreadable artifact %s: %s", file_path, outcome.error)
            continue

        artifact = parse_compiled_artifact(outcome.value)
        if artifact is not None:
            artifacts.append(artifact)

    return artifacts


def parse_deployed_addresses(data: Any) -> Dict[str, str]:
    """
    Convert an Ignition deployed_addresses.json document to name -> address.

    Keys have the form "<module>#<contractName>"; the segment after the first
    separator is the contract name. Keys without a separator are ignored.

    Args:
        data: Decoded deployed_addresses.json content

    Returns:
        Dictionary mapping contract name to deployed address
    """
    if not isinstance(data, dict):
        return {}

    contract_deployments: Dict[str, str] = {}
    for future_id, address in data.items():
        parts = str(future_id).split(MODULE_SEPARATOR)
        if len(parts) < 2 or not parts[1]:
            continue
        if isinstance(address, str) and address:
            contract_deployments[parts[1]] = address

    return contract_deployments


def load_source_code(
    contracts_dir: Path, source_name: Optional[str], reader: Optional[FileReader] = None
) -> Optional[str]:
    """
    Best-effort read of a contract's source file.

    Only the basename of source_name is used: "contracts/sub/Lock.sol" is
    looked up as <contracts_dir>/Lock.sol.

    Returns:
        Source text, or None if it cannot be read
    """
    if not source_name:
        return None

    file_name = source_name.split("/")[-1]
    if not file_name:
        return None

    reader = reader or FileReader()
    source_path = contracts_dir / file_name
    if not reader.exists(source_path):
        return None

    outcome = reader.read_text(source_path)
    return outcome.value if outcome.ok else None


def load_build_info(
    build_info_dir: Path, build_info_id: Optional[str], reader: Optional[FileReader] = None
) -> Optional[Any]:
    """
    Best-effort read of a compiler build-info record.

    Returns:
        Decoded <build_info_dir>/<build_info_id>.json, or None if unavailable
    """
    if not build_info_id:
        return None

    reader = reader or FileReader()
    build_info_path = build_info_dir / f"{build_info_id}.json"
    if not reader.exists(build_info_path):
        return None

    outcome = reader.read_json(build_info_path)
    return outcome.value if outcome.ok else None
