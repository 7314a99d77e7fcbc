"""Merging of deployment sources for openscan-links."""

from typing import Any, Dict, Optional

from .artifacts import DeploymentRecordReader
from .tracker import DeploymentTracker
from .types import AddressMap


def merge_address_maps(
    structured: Optional[AddressMap], tracked: AddressMap
) -> Optional[AddressMap]:
    """
    Combine Ignition records with tracked deployments.

    Tracked entries overwrite Ignition entries for the same address.

    Args:
        structured: Ignition address map, or None if Ignition is not used
        tracked: Address map from the deployment tracker

    Returns:
        Merged map with lowercased keys, or None if it would be empty
    """
    merged: AddressMap = {}
    for address, artifact in (structured or {}).items():
        merged[address.lower()] = artifact
    for address, artifact in tracked.items():
        merged[address.lower()] = artifact

    return merged or None


class ArtifactAggregator:
    """Produces the explorer's address map on demand. Nothing is cached."""

    def __init__(self, records: DeploymentRecordReader, tracker: DeploymentTracker):
        self._records = records
        self._tracker = tracker

    def __call__(self) -> Optional[AddressMap]:
        return merge_address_maps(self._records.load(), self._tracker.get_artifacts())

    def to_json(self) -> Optional[Dict[str, Any]]:
        """
        Get the merged map in the webapp's JSON shape.

        Returns:
            Address -> artifact dictionary, or None if nothing is known
        """
        address_map = self()
        if address_map is None:
            return None
        return {address: artifact.to_dict() for address, artifact in address_map.items()}
