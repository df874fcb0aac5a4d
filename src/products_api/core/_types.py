from collections.abc import Awaitable, Callable, Mapping
from enum import StrEnum
from typing import Any

type Arguments = Mapping[str, Any]
type CheckResult = bool | Awaitable[bool]
type CheckFn = Callable[[Any], CheckResult]
type Continuation = Callable[[], Awaitable[Any]]


class Decision(StrEnum):
    """Outcome of running the validation filter over an action invocation."""

    CONTINUE = "continue"
    SHORT_CIRCUIT = "short_circuit"
