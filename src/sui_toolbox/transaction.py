"""
Sui Toolbox - Publish Transaction Assembly

A small programmable-transaction model: an ordered list of commands, the
sender, and a gas budget. Commands refer to earlier command results through
Result arguments, the way the upgrade capability returned by Publish is
handed to TransferObjects.

A Transaction is single use. Submitting it calls consume(); a second
submission of the same object raises TransactionConsumedError.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from .errors import TransactionConsumedError
from .models import BuildArtifact

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Result:
    """Output of the command at `index`, not known until execution."""

    index: int


@dataclass(frozen=True)
class PublishCommand:
    modules: Tuple[str, ...]
    dependencies: Tuple[str, ...]


@dataclass(frozen=True)
class TransferObjectsCommand:
    objects: Tuple[Result, ...]
    address: str


Command = Union[PublishCommand, TransferObjectsCommand]


class Transaction:
    """
    Programmable transaction under construction.

    Usage:
        tx = Transaction()
        cap = tx.publish(modules=modules, dependencies=dependencies)
        tx.transfer_objects([cap], address)
        tx.set_sender(address)
    """

    def __init__(self, sender: Optional[str] = None, gas_budget: Optional[int] = None):
        self.sender = sender
        self.gas_budget = gas_budget
        self._commands: List[Command] = []
        self._consumed = False

    @property
    def commands(self) -> Tuple[Command, ...]:
        return tuple(self._commands)

    @property
    def consumed(self) -> bool:
        return self._consumed

    def set_sender(self, sender: str):
        self.sender = sender

    def set_gas_budget(self, gas_budget: int):
        self.gas_budget = gas_budget

    def _add(self, command: Command) -> Result:
        if self._consumed:
            raise TransactionConsumedError("Cannot add commands to a submitted transaction")
        self._commands.append(command)
        return Result(len(self._commands) - 1)

    def publish(self, modules: Sequence[str], dependencies: Sequence[str]) -> Result:
        """Publish a package. The returned Result is the package's UpgradeCap."""
        return self._add(PublishCommand(tuple(modules), tuple(dependencies)))

    def transfer_objects(self, objects: Sequence[Result], address: str) -> Result:
        return self._add(TransferObjectsCommand(tuple(objects), address))

    def consume(self):
        """
        Mark the transaction as submitted.

        Raises:
            TransactionConsumedError: Already submitted once
        """
        if self._consumed:
            raise TransactionConsumedError(
                "Transaction was already submitted; build a new Transaction for every submission"
            )
        self._consumed = True

    def __repr__(self) -> str:
        names = ", ".join(type(c).__name__ for c in self._commands)
        return f"Transaction(sender={self.sender}, commands=[{names}], consumed={self._consumed})"


def assemble(artifact: BuildArtifact, recipient: str, gas_budget: Optional[int] = None) -> Transaction:
    """
    Build the publish transaction for artifact.

    The upgrade capability produced by Publish is transferred to recipient,
    who is also the sender, so the publishing account keeps upgrade rights.
    """
    tx = Transaction(sender=recipient, gas_budget=gas_budget)
    cap = tx.publish(modules=artifact.modules, dependencies=artifact.dependencies)
    tx.transfer_objects([cap], recipient)
    logger.debug(f"Assembled publish transaction for {recipient}")
    return tx
