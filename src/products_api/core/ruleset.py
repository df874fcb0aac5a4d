"""Rulesets and the fluent builder used to declare them."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Sized
from dataclasses import dataclass, field
from typing import Any, Self

from products_api.core.rule import Rule


@dataclass(frozen=True, slots=True)
class Ruleset:
    """An ordered, immutable collection of rules bound to one target type."""

    target: type
    rules: tuple[Rule, ...] = ()
    name: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            object.__setattr__(self, "name", self.target.__name__)

    def __len__(self) -> int:
        return len(self.rules)

    @property
    def fields(self) -> list[str]:
        """Property names covered by this ruleset, in declaration order."""
        seen: dict[str, None] = {}
        for rule in self.rules:
            seen.setdefault(rule.property_name, None)
        return list(seen)


def property_name_for(attr: str) -> str:
    """``correlation_id`` -> ``CorrelationId``."""
    return "".join(part[:1].upper() + part[1:] for part in attr.split("_"))


def _is_present(value: Any) -> bool:
    return value is not None


def _is_not_empty(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, Sized):
        return len(value) > 0
    return True


@dataclass
class _Check:
    check: Callable[[Any], Any]
    message: str


@dataclass
class RuleChain:
    """Checks declared for a single property via :meth:`RulesetBuilder.rule_for`."""

    builder: RulesetBuilder
    attr: str
    property_name: str
    checks: list[_Check] = field(default_factory=list)

    def not_null(self) -> Self:
        return self._add(_is_present, f"'{self.property_name}' must not be empty.")

    def not_empty(self) -> Self:
        return self._add(_is_not_empty, f"'{self.property_name}' must not be empty.")

    def must(self, predicate: Callable[[Any], bool]) -> Self:
        if inspect.iscoroutinefunction(predicate):
            msg = "must() takes a plain predicate; use must_async() for coroutines"
            raise TypeError(msg)
        return self._add(predicate, self._condition_message())

    def must_async(self, predicate: Callable[[Any], Awaitable[bool]]) -> Self:
        return self._add(predicate, self._condition_message())

    def with_message(self, message: str) -> Self:
        """Override the message of the most recently declared check."""
        if not self.checks:
            msg = f"with_message() called before any check on {self.property_name!r}"
            raise ValueError(msg)
        self.checks[-1].message = message
        return self

    def rule_for(self, attr: str, *, name: str | None = None) -> RuleChain:
        return self.builder.rule_for(attr, name=name)

    def build(self) -> Ruleset:
        return self.builder.build()

    def _condition_message(self) -> str:
        return f"The specified condition was not met for '{self.property_name}'."

    def _add(self, check: Callable[[Any], Any], message: str) -> Self:
        self.checks.append(_Check(check, message))
        return self


class RulesetBuilder:
    """Declare a :class:`Ruleset` with a fluent chain.

    Example::

        ruleset = (
            RulesetBuilder(AddProductRequestDto)
            .rule_for("id").not_null().not_empty().with_message("id is required")
            .rule_for("name").must_async(has_name).with_message("name is required")
            .build()
        )

    """

    def __init__(self, target: type, *, name: str = "") -> None:
        self._target = target
        self._name = name
        self._chains: list[RuleChain] = []

    def rule_for(self, attr: str, *, name: str | None = None) -> RuleChain:
        property_name = property_name_for(attr) if name is None else name
        chain = RuleChain(self, attr, property_name)
        self._chains.append(chain)
        return chain

    def build(self) -> Ruleset:
        rules = tuple(
            Rule(
                field=chain.attr,
                property_name=chain.property_name,
                message=c.message,
                check=c.check,
            )
            for chain in self._chains
            for c in chain.checks
        )
        return Ruleset(target=self._target, rules=rules, name=self._name)
