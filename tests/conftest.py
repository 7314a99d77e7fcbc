"""Shared pytest fixtures for openscan-links tests."""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import pytest

LOCK_BYTECODE = "0x6080604052348015600f57600080fd5b50"
TOKEN_BYTECODE = "0x60a0604052600a6080523480156200001557600080fd5b50"
LOCK_ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
TOKEN_ADDRESS = "0xe7f1725E7734CE288F8367e1Bb143E90bb3F0512"

LOCK_ABI = [
    {"type": "constructor", "inputs": [{"name": "_unlockTime", "type": "uint256"}]},
    {"type": "function", "name": "withdraw", "inputs": [], "outputs": []},
]
TOKEN_ABI = [{"type": "event", "name": "Transfer", "inputs": []}]


def write_json(path: Path, data: Any) -> Path:
    """Write JSON to path, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data))
    return path


def compiled_artifact(
    contract_name: str,
    bytecode: str,
    abi: Optional[list] = None,
    source_name: Optional[str] = None,
    build_info_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Build a Hardhat compiled artifact document."""
    data: Dict[str, Any] = {
        "_format": "hh3-artifact-1",
        "contractName": contract_name,
        "abi": abi if abi is not None else [],
        "bytecode": bytecode,
        "deployedBytecode": "0x",
    }
    if source_name is not None:
        data["sourceName"] = source_name
    if build_info_id is not None:
        data["buildInfoId"] = build_info_id
    return data


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Create an empty Hardhat project directory."""
    root = tmp_path / "hardhat-project"
    root.mkdir()
    return root


@pytest.fixture
def hardhat_project(project_root: Path) -> Path:
    """
    Create a compiled Hardhat project with two contracts, their sources and
    one build-info record.
    """
    artifacts_dir = project_root / "artifacts" / "contracts"
    write_json(
        artifacts_dir / "Lock.sol" / "Lock.json",
        compiled_artifact(
            "Lock",
            LOCK_BYTECODE,
            abi=LOCK_ABI,
            source_name="contracts/Lock.sol",
            build_info_id="solc-0_8_28-abc123",
        ),
    )
    write_json(
        artifacts_dir / "tokens" / "Token.sol" / "Token.json",
        compiled_artifact(
            "Token",
            TOKEN_BYTECODE,
            abi=TOKEN_ABI,
            source_name="contracts/tokens/Token.sol",
        ),
    )
    write_json(
        project_root / "artifacts" / "build-info" / "solc-0_8_28-abc123.json",
        {"id": "solc-0_8_28-abc123", "solcVersion": "0.8.28"},
    )

    contracts_dir = project_root / "contracts"
    contracts_dir.mkdir()
    (contracts_dir / "Lock.sol").write_text("pragma solidity ^0.8.28;\ncontract Lock {}\n")
    (contracts_dir / "Token.sol").write_text("pragma solidity ^0.8.28;\ncontract Token {}\n")

    return project_root


@pytest.fixture
def ignition_deployment(hardhat_project: Path) -> Path:
    """Create an Ignition deployment for chain 31337 recording the Lock contract."""
    deployment_dir = hardhat_project / "ignition" / "deployments" / "chain-31337"
    write_json(
        deployment_dir / "deployed_addresses.json",
        {"LockModule#Lock": LOCK_ADDRESS},
    )
    write_json(
        deployment_dir / "artifacts" / "LockModule#Lock.json",
        compiled_artifact(
            "Lock",
            LOCK_BYTECODE,
            abi=LOCK_ABI,
            source_name="contracts/Lock.sol",
            build_info_id="solc-0_8_28-ignition",
        ),
    )
    write_json(
        deployment_dir / "build-info" / "solc-0_8_28-ignition.json",
        {"id": "solc-0_8_28-ignition"},
    )
    return deployment_dir


@pytest.fixture
def dist_dir(tmp_path: Path) -> Path:
    """Create a minimal explorer bundle."""
    dist = tmp_path / "dist"
    dist.mkdir()
    (dist / "index.html").write_text(
        "<!DOCTYPE html><html><head><title>OpenScan</title></head>"
        "<body><div id=\"root\"></div></body></html>"
    )
    (dist / "main.js").write_text("console.log('openscan');")
    (dist / "logo.bin").write_bytes(b"\x00\x01\x02")
    return dist
