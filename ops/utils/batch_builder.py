from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from ops.utils import log
from ops.utils.calldata import to_payload
from ops.utils.constants import ZERO_ADDRESS
from ops.utils.errors import (AlreadyFinalizedError, EmptyBatchError,
                              GuardEvaluationError, InvalidTargetError)


@dataclass(frozen=True)
class Operation:
    target: str
    payload: bytes
    value: int = 0
    description: str = ""

    def __str__(self):
        label = self.description or f"0x{self.payload[:4].hex()}"
        return f"{self.target} - {label}"


@dataclass(frozen=True)
class FinalizedBatch:
    operations: Tuple[Operation, ...]
    origin: str

    def __len__(self):
        return len(self.operations)


def validate_target(target):
    if not isinstance(target, str) or target.strip() == "":
        raise InvalidTargetError(target, "Target is empty")
    if target.lower() == ZERO_ADDRESS:
        raise InvalidTargetError(target, "Target is the zero address")
    return target


class BatchBuilder:
    """
    Accumulates the calls of a single batch, in order, until `finalize` hands
    them over for proposal.

    `append_if_guard_fails` is the usual entry point: it evaluates a guard
    (a zero-argument callable reading live state) and only appends the call
    when the guard reports that the target state does not hold yet.
    """

    def __init__(self, require_non_empty=True):
        self.require_non_empty = require_non_empty
        self._operations = []
        self._finalized = None

    def __len__(self):
        return len(self._operations)

    @property
    def operations(self) -> Tuple[Operation, ...]:
        return tuple(self._operations)

    @property
    def finalized(self) -> bool:
        return self._finalized is not None

    def append(self, target, payload, value=0, description="") -> Operation:
        if self.finalized:
            raise AlreadyFinalizedError("Cannot append to a finalized batch")
        validate_target(target)

        operation = Operation(target, to_payload(payload), int(value), description)
        self._operations.append(operation)
        log.h3(f"Operation {len(self._operations)} added - {operation}")
        return operation

    def append_if_guard_fails(
        self, guard: Callable[[], bool], target, payload, value=0, description=""
    ) -> Optional[Operation]:
        if self.finalized:
            raise AlreadyFinalizedError("Cannot append to a finalized batch")
        # a bad target is rejected whether or not the guard holds
        validate_target(target)

        try:
            satisfied = guard()
        except Exception as exception:
            raise GuardEvaluationError(guard) from exception

        if not isinstance(satisfied, bool):
            raise GuardEvaluationError(
                guard, f"Guard returned {type(satisfied).__name__} instead of bool")

        if satisfied:
            reason = getattr(guard, "description", None) or "precondition already holds"
            log.skip(f"Skipping {description or target}: {reason}")
            return None

        return self.append(target, payload, value, description)

    def finalize(self, origin) -> FinalizedBatch:
        if self.finalized:
            raise AlreadyFinalizedError()
        if not origin:
            raise ValueError("Batch origin is required")
        if self.require_non_empty and len(self._operations) == 0:
            raise EmptyBatchError()

        self._finalized = FinalizedBatch(tuple(self._operations), origin)
        log.h3(f"Batch finalized with {len(self._operations)} operations for origin `{origin}`")
        return self._finalized
