"""Thread data handed over by the collector that groups threads by call stack.

Everything here is immutable; the renderer only reads it.
"""

from __future__ import annotations

import dataclasses

SINGLE = "single"
GROUP = "group"


@dataclasses.dataclass(frozen=True)
class LockCount:
    """Number of locks held, a range when threads of a group differ."""

    low: int = 0
    high: int | None = None

    @property
    def is_empty(self) -> bool:
        return max(self.low, self.high or 0) == 0

    def __str__(self) -> str:
        if self.high is None or self.high == self.low:
            return str(self.low)
        return f"{self.low}-{self.high}"


@dataclasses.dataclass(frozen=True)
class ExceptionInfo:
    type_name: str
    message: str | None = None


@dataclasses.dataclass(frozen=True)
class StackFrame:
    type_name: str
    method: str
    # Raw signature text without the parentheses, e.g. "ref System.Int32, System.String"
    arguments: str = ""


@dataclasses.dataclass(frozen=True)
class ThreadInfo:
    lock_count: LockCount = LockCount()
    exception: ExceptionInfo | None = None
    stack_frames: tuple[StackFrame, ...] = ()
    raw_stack_frames: tuple[str, ...] = ()


@dataclasses.dataclass(frozen=True)
class ThreadGroup:
    """Threads sharing one call stack, shown once under a header.

    The variant is either SINGLE (one thread, possibly with a captured
    exception) or GROUP (several threads aggregated together).
    """

    variant: str
    header: str
    thread_info: ThreadInfo

    def __post_init__(self) -> None:
        if self.variant not in (SINGLE, GROUP):
            raise ValueError(f"Unknown thread group variant {self.variant!r}")

    @classmethod
    def single(cls, header: str, thread_info: ThreadInfo) -> ThreadGroup:
        return cls(SINGLE, header, thread_info)

    @classmethod
    def aggregated(cls, header: str, thread_info: ThreadInfo) -> ThreadGroup:
        return cls(GROUP, header, thread_info)

    @property
    def exception(self) -> ExceptionInfo | None:
        """The captured exception, only ever reported for a single thread."""
        if self.variant == SINGLE:
            return self.thread_info.exception
        return None


@dataclasses.dataclass(frozen=True)
class ParallelThreads:
    thread_count: int
    grouped_threads: tuple[ThreadGroup, ...] = ()
