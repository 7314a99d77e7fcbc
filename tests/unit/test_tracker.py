"""Unit tests for the deployment tracker."""

from pathlib import Path

from conftest import (
    LOCK_ABI,
    LOCK_ADDRESS,
    LOCK_BYTECODE,
    TOKEN_ADDRESS,
    TOKEN_BYTECODE,
    compiled_artifact,
    write_json,
)

from openscan_links.tracker import DeploymentTracker, match_creation_bytecode
from openscan_links.types import CompiledArtifact

CONSTRUCTOR_ARGS = "00000000000000000000000000000000000000000000000000000000675f3a00"


def _candidate(name: str, bytecode: str) -> CompiledArtifact:
    return CompiledArtifact(contract_name=name, abi=[], bytecode=bytecode)


class TestMatchCreationBytecode:
    """Test the match_creation_bytecode function."""

    def test_exact_bytecode_matches(self):
        candidate = _candidate("A", "0x6001")
        assert match_creation_bytecode("0x6001", [candidate]) is candidate

    def test_prefix_with_constructor_args_matches(self):
        """Test that creation data = bytecode + encoded args still matches."""
        candidate = _candidate("A", "0x6001")
        assert match_creation_bytecode("0x6001deadbeef", [candidate]) is candidate

    def test_empty_bytecode_never_matches(self):
        """Test that a "0x" bytecode never matches any creation data."""
        empty = _candidate("Interface", "0x")
        assert match_creation_bytecode("0x6001", [empty]) is None
        assert match_creation_bytecode("0x", [empty]) is None

    def test_comparison_is_case_insensitive(self):
        candidate = _candidate("A", "0x60ABcd")
        assert match_creation_bytecode("0x60abCDef", [candidate]) is candidate

    def test_first_match_in_scan_order_wins(self):
        """Test that overlapping prefixes resolve to the first candidate."""
        short = _candidate("Short", "0x6001")
        long = _candidate("Long", "0x60016002")
        assert match_creation_bytecode("0x60016002", [short, long]) is short
        assert match_creation_bytecode("0x60016002", [long, short]) is long

    def test_no_match(self):
        assert match_creation_bytecode("0x6002", [_candidate("A", "0x6001")]) is None


class TestDeploymentTrackerInitialization:
    """Test DeploymentTracker construction."""

    def test_scans_compiled_artifacts(self, hardhat_project: Path):
        tracker = DeploymentTracker(hardhat_project)

        names = sorted(a.contract_name for a in tracker.compiled_artifacts)
        assert names == ["Lock", "Token"]

    def test_project_without_artifacts(self, project_root: Path):
        """Test that an uncompiled project yields an empty tracker."""
        tracker = DeploymentTracker(project_root)

        assert tracker.compiled_artifacts == []
        assert tracker.get_artifacts() == {}


class TestDeploymentTracking:
    """Test send/receipt tracking."""

    def test_send_then_receipt_tracks_deployment(self, hardhat_project: Path):
        """Test that a matching receipt yields one entry keyed by lowercased address."""
        tracker = DeploymentTracker(hardhat_project)

        tracker.track_send_transaction("0xtx1", LOCK_BYTECODE + CONSTRUCTOR_ARGS)
        tracker.track_deployment_receipt("0xtx1", LOCK_ADDRESS)

        artifacts = tracker.get_artifacts()
        assert list(artifacts.keys()) == [LOCK_ADDRESS.lower()]

        entry = artifacts[LOCK_ADDRESS.lower()]
        assert entry.contract_name == "Lock"
        assert entry.abi == LOCK_ABI
        assert entry.deployments == [LOCK_ADDRESS]
        assert entry.source_name == "contracts/Lock.sol"
        assert entry.build_info_id == "solc-0_8_28-abc123"

    def test_exact_bytecode_yields_single_entry(self, hardhat_project: Path):
        tracker = DeploymentTracker(hardhat_project)

        tracker.track_send_transaction("0xtx1", TOKEN_BYTECODE)
        tracker.track_deployment_receipt("0xtx1", TOKEN_ADDRESS)

        artifacts = tracker.get_artifacts()
        assert len(artifacts) == 1
        assert artifacts[TOKEN_ADDRESS.lower()].deployments == [TOKEN_ADDRESS]

    def test_enriches_with_source_and_build_info(self, hardhat_project: Path):
        """Test best-effort loading of source code and build info."""
        tracker = DeploymentTracker(hardhat_project)

        tracker.track_send_transaction("0xtx1", LOCK_BYTECODE)
        tracker.track_deployment_receipt("0xtx1", LOCK_ADDRESS)

        entry = tracker.get_artifacts()[LOCK_ADDRESS.lower()]
        assert "contract Lock" in entry.source_code
        assert entry.build_info == {"id": "solc-0_8_28-abc123", "solcVersion": "0.8.28"}

    def test_missing_enrichment_files_leave_fields_absent(self, project_root: Path):
        """Test that missing source/build info does not fail the match."""
        write_json(
            project_root / "artifacts" / "contracts" / "Lock.sol" / "Lock.json",
            compiled_artifact(
                "Lock", LOCK_BYTECODE, source_name="contracts/Lock.sol", build_info_id="gone"
            ),
        )
        tracker = DeploymentTracker(project_root)

        tracker.track_send_transaction("0xtx1", LOCK_BYTECODE)
        tracker.track_deployment_receipt("0xtx1", LOCK_ADDRESS)

        entry = tracker.get_artifacts()[LOCK_ADDRESS.lower()]
        assert entry.source_code is None
        assert entry.build_info is None
        assert "sourceCode" not in entry.to_dict()

    def test_receipt_for_unknown_hash_is_noop(self, hardhat_project: Path):
        """Test that an unknown transaction hash changes nothing."""
        tracker = DeploymentTracker(hardhat_project)
        tracker.track_send_transaction("0xtx1", LOCK_BYTECODE)

        tracker.track_deployment_receipt("0xunknown", LOCK_ADDRESS)

        assert tracker.get_artifacts() == {}
        assert tracker.is_pending("0xtx1")

    def test_unmatched_deployment_is_consumed(self, hardhat_project: Path):
        """Test that a non-matching receipt removes the pending entry."""
        tracker = DeploymentTracker(hardhat_project)
        tracker.track_send_transaction("0xtx1", "0xfeedface")

        tracker.track_deployment_receipt("0xtx1", LOCK_ADDRESS)

        assert tracker.get_artifacts() == {}
        assert not tracker.is_pending("0xtx1")

    def test_matched_deployment_is_consumed(self, hardhat_project: Path):
        """Test that a second receipt for the same hash is ignored."""
        tracker = DeploymentTracker(hardhat_project)
        tracker.track_send_transaction("0xtx1", LOCK_BYTECODE)
        tracker.track_deployment_receipt("0xtx1", LOCK_ADDRESS)

        tracker.track_deployment_receipt("0xtx1", TOKEN_ADDRESS)

        assert list(tracker.get_artifacts().keys()) == [LOCK_ADDRESS.lower()]
        assert not tracker.is_pending("0xtx1")

    def test_resend_overwrites_pending_data(self, hardhat_project: Path):
        """Test that the last submitted data for a hash wins."""
        tracker = DeploymentTracker(hardhat_project)
        tracker.track_send_transaction("0xtx1", LOCK_BYTECODE)
        tracker.track_send_transaction("0xtx1", TOKEN_BYTECODE)

        tracker.track_deployment_receipt("0xtx1", TOKEN_ADDRESS)

        assert tracker.get_artifacts()[TOKEN_ADDRESS.lower()].contract_name == "Token"

    def test_empty_data_is_not_tracked(self, hardhat_project: Path):
        tracker = DeploymentTracker(hardhat_project)

        tracker.track_send_transaction("0xtx1", "")

        assert not tracker.is_pending("0xtx1")


class TestGetArtifacts:
    """Test copy-on-read semantics of get_artifacts."""

    def test_returns_a_copy(self, hardhat_project: Path):
        """Test that mutating the returned map does not affect the tracker."""
        tracker = DeploymentTracker(hardhat_project)
        tracker.track_send_transaction("0xtx1", LOCK_BYTECODE)
        tracker.track_deployment_receipt("0xtx1", LOCK_ADDRESS)

        first = tracker.get_artifacts()
        first.clear()
        first["0xdead"] = None

        second = tracker.get_artifacts()
        assert list(second.keys()) == [LOCK_ADDRESS.lower()]
        assert second is not first

    def test_entries_are_copied(self, hardhat_project: Path):
        """Test that mutating a returned entry changes neither the tracker nor its snapshot."""
        tracker = DeploymentTracker(hardhat_project)
        tracker.track_send_transaction("0xtx1", LOCK_BYTECODE)
        tracker.track_deployment_receipt("0xtx1", LOCK_ADDRESS)
        address = LOCK_ADDRESS.lower()
        abi_length = len(LOCK_ABI)

        first = tracker.get_artifacts()
        first[address].deployments.append("0x0000000000000000000000000000000000000001")
        first[address].abi.append({"type": "fallback"})
        first[address].contract_name = "Other"

        second = tracker.get_artifacts()[address]
        assert second.deployments == [LOCK_ADDRESS]
        assert len(second.abi) == abi_length
        assert second.contract_name == "Lock"
        lock = next(a for a in tracker.compiled_artifacts if a.contract_name == "Lock")
        assert len(lock.abi) == abi_length
