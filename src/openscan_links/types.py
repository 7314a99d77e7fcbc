"""Data types and dataclasses for openscan-links."""

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ReadOutcome(Generic[T]):
    """Result of a single file read: either a value or the error that prevented it."""

    value: Optional[T] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "ReadOutcome[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: Exception) -> "ReadOutcome[T]":
        return cls(error=error)


@dataclass(frozen=True)
class CompiledArtifact:
    """A compiled contract as written by the Hardhat build."""

    contract_name: str  # Unique within a source file only
    abi: List[Dict[str, Any]]
    bytecode: str  # Creation bytecode, unlinked
    source_name: Optional[str] = None  # e.g. "contracts/Lock.sol"
    build_info_id: Optional[str] = None


@dataclass
class ArtifactData:
    """Explorer metadata for one deployed contract."""

    # Required fields
    abi: List[Dict[str, Any]]
    contract_name: str
    deployments: List[str] = field(default_factory=list)

    # Optional fields (best-effort enrichment)
    source_name: Optional[str] = None
    build_info_id: Optional[str] = None
    source_code: Optional[str] = None
    build_info: Optional[Any] = None

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to the JSON shape read by the explorer webapp.

        Returns:
            Dictionary with camelCase keys; absent optional fields are omitted
        """
        result: Dict[str, Any] = {
            "abi": self.abi,
            "contractName": self.contract_name,
        }

        if self.source_name is not None:
            result["sourceName"] = self.source_name
        if self.build_info_id is not None:
            result["buildInfoId"] = self.build_info_id
        if self.source_code is not None:
            result["sourceCode"] = self.source_code
        if self.build_info is not None:
            result["buildInfo"] = self.build_info

        result["deployments"] = list(self.deployments)
        return result


# Lowercased address -> artifact data
AddressMap = Dict[str, ArtifactData]
