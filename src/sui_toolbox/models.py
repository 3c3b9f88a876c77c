"""
Sui Toolbox - Data Models

Data classes passed between the workflow stages. Every stage hands its
output to the next one by value; none of these are mutated after creation.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class TestAccount:
    """
    Freshly generated keypair plus the address derived from it.

    Lives for the duration of the test process; never persisted.
    """

    __test__ = False  # not a pytest test class

    keypair: Any
    address: str


@dataclass(frozen=True)
class BuildArtifact:
    """Compiled package: base64 bytecode modules and dependency package ids."""

    modules: Tuple[str, ...]
    dependencies: Tuple[str, ...] = ()

    @classmethod
    def from_build_output(cls, data: Dict[str, Any]) -> "BuildArtifact":
        """
        Create BuildArtifact from the JSON printed by `sui move build --dump-bytecode-as-base64`.

        Raises:
            ValueError: Output does not have the expected shape
        """
        if not isinstance(data, dict):
            raise ValueError(f"build output must be a JSON object, got {type(data).__name__}")

        modules = data.get("modules")
        dependencies = data.get("dependencies", [])

        if not isinstance(modules, list) or not all(isinstance(m, str) for m in modules):
            raise ValueError("build output 'modules' must be a list of base64 strings")
        if not isinstance(dependencies, list) or not all(isinstance(d, str) for d in dependencies):
            raise ValueError("build output 'dependencies' must be a list of package ids")

        # Keep first-seen order, drop repeats
        unique_deps = tuple(dict.fromkeys(dependencies))
        return cls(modules=tuple(modules), dependencies=unique_deps)


@dataclass(frozen=True)
class ObjectChange:
    """One entry of a transaction's objectChanges list."""

    type: str
    object_id: Optional[str] = None
    package_id: Optional[str] = None
    object_type: Optional[str] = None
    sender: Optional[str] = None
    owner: Any = None
    version: Optional[str] = None
    digest: Optional[str] = None
    modules: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ObjectChange":
        """Create ObjectChange from a JSON-RPC objectChanges entry."""
        return cls(
            type=data.get("type", ""),
            object_id=data.get("objectId"),
            package_id=data.get("packageId"),
            object_type=data.get("objectType"),
            sender=data.get("sender"),
            owner=data.get("owner"),
            version=None if data.get("version") is None else str(data["version"]),
            digest=data.get("digest"),
            modules=tuple(data.get("modules") or ()),
        )


@dataclass(frozen=True)
class TransactionEffectsResult:
    """
    Finalized transaction as reported by the node.

    status is "success" or "failure"; object_changes keeps the node's order.
    """

    digest: str
    status: str
    error: Optional[str] = None
    object_changes: Tuple[ObjectChange, ...] = ()
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def succeeded(self) -> bool:
        return self.status == "success"

    def changes_of_type(self, change_type: str) -> List[ObjectChange]:
        """Object changes tagged with the given kind, in order."""
        return [c for c in self.object_changes if c.type == change_type]

    @classmethod
    def from_response(cls, data: Dict[str, Any]) -> "TransactionEffectsResult":
        """Create TransactionEffectsResult from a sui_getTransactionBlock response."""
        effects = data.get("effects") or {}
        status_info = effects.get("status") or {}
        changes = tuple(ObjectChange.from_dict(c) for c in (data.get("objectChanges") or []))

        return cls(
            digest=data.get("digest", ""),
            status=status_info.get("status", "unknown"),
            error=status_info.get("error"),
            object_changes=changes,
            raw=data,
        )


@dataclass(frozen=True)
class PublishResult:
    """What downstream tests receive: the package id and the publish transaction."""

    package_id: str
    publish_txn: TransactionEffectsResult

    def to_dict(self) -> Dict[str, Any]:
        return {"packageId": self.package_id, "publishTxn": self.publish_txn.raw}
