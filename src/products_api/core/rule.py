import inspect
from dataclasses import dataclass
from typing import Any

from products_api.core._types import CheckFn


@dataclass(frozen=True, slots=True)
class Rule:
    """A single check over one field of a validated object.

    Rules are pure data plus a predicate: ``check`` receives the field value
    (or the whole instance when ``field`` is empty) and returns ``True`` when
    the value is acceptable.  The predicate may be a coroutine function.

    Example::

        ID_REQUIRED = Rule(
            field="id",
            property_name="Id",
            message="id is required",
            check=lambda v: bool(v),
        )
    """

    field: str
    property_name: str
    message: str
    check: CheckFn

    def value_of(self, instance: Any) -> Any:
        """Return the value this rule inspects on *instance*."""
        if not self.field:
            return instance
        return getattr(instance, self.field, None)

    async def passes(self, instance: Any) -> bool:
        """Evaluate the rule against *instance*, awaiting async checks."""
        result = self.check(self.value_of(instance))
        if inspect.isawaitable(result):
            result = await result
        return bool(result)

    def __str__(self) -> str:
        return f"[{self.property_name or '<object>'}] {self.message}"
