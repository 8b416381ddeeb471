"""Ordered fallback: try each option in turn, first success wins."""
from typing import Awaitable, Callable, List, Sequence, Tuple, TypeVar

T = TypeVar("T")
R = TypeVar("R")


class AttemptFailed(Exception):
    """Raised by an attempt to move on to the next option."""


class AllAttemptsFailed(Exception):
    def __init__(self, failures: List[Tuple[object, AttemptFailed]]):
        self.failures = failures
        names = ", ".join(str(option) for option, _ in failures) or "<none>"
        super().__init__(f"all options failed: {names}")


async def first_success(
    options: Sequence[T], attempt: Callable[[T], Awaitable[R]]
) -> Tuple[T, R]:
    failures: List[Tuple[object, AttemptFailed]] = []
    for option in options:
        try:
            return option, await attempt(option)
        except AttemptFailed as e:
            failures.append((option, e))
    raise AllAttemptsFailed(failures)
