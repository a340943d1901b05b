# Savesync Remote Gateway
# Contract for the three remote calls and their outcome variant

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from savesync.sync.status import ItemAction


class OutcomeKind(str, Enum):
    """Kinds of remote outcome."""

    CONFIRMED = "confirmed"
    REJECTED = "rejected"  # Server answered and refused the intent
    UNREACHABLE = "unreachable"  # No usable answer from the server


@dataclass(frozen=True)
class RemoteOutcome:
    """
    Outcome of a single remote call.

    Only ``confirmed`` drives reconciliation; rejected and unreachable
    collapse to "not yet confirmed" and leave the record pending.
    """

    kind: OutcomeKind
    reason: str = ""

    @classmethod
    def ok(cls) -> "RemoteOutcome":
        return cls(OutcomeKind.CONFIRMED)

    @classmethod
    def rejected(cls, reason: str) -> "RemoteOutcome":
        return cls(OutcomeKind.REJECTED, reason)

    @classmethod
    def unreachable(cls, reason: str) -> "RemoteOutcome":
        return cls(OutcomeKind.UNREACHABLE, reason)

    @property
    def confirmed(self) -> bool:
        """Check if server state now matches the intent."""
        return self.kind == OutcomeKind.CONFIRMED

    def __bool__(self) -> bool:
        return self.confirmed


class RemoteGateway(Protocol):
    """Remote calls the action handlers issue."""

    async def archive(self, item_id: str) -> RemoteOutcome: ...

    async def unarchive(self, item_id: str) -> RemoteOutcome: ...

    async def delete(self, item_id: str) -> RemoteOutcome: ...


async def gateway_call(gateway: RemoteGateway, action: ItemAction, item_id: str) -> RemoteOutcome:
    """
    Issue the remote call matching an action.

    Args:
        gateway: Remote gateway.
        action: The action to confirm remotely.
        item_id: Record id.

    Returns:
        RemoteOutcome from the gateway.
    """
    if action == ItemAction.ARCHIVE:
        return await gateway.archive(item_id)
    if action == ItemAction.UNARCHIVE:
        return await gateway.unarchive(item_id)
    return await gateway.delete(item_id)
