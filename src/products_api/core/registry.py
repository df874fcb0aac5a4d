"""Validator registry: exact-type lookup of rulesets."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from products_api.core.config import ApiConfig
    from products_api.core.ruleset import Ruleset


class ValidatorRegistry:
    """Rulesets keyed by the exact runtime type they validate.

    Populated once at startup and frozen; afterwards it is only read, so
    concurrent lookups need no synchronisation.
    """

    def __init__(self) -> None:
        self._rulesets: dict[type, Ruleset] = {}
        self._frozen = False

    def register(self, ruleset: Ruleset) -> None:
        """Register *ruleset* for its target type."""
        if self._frozen:
            msg = f"Registry is frozen; cannot register {ruleset.name}"
            raise RuntimeError(msg)
        if ruleset.target in self._rulesets:
            msg = f"Duplicate ruleset for {ruleset.target.__qualname__}"
            raise ValueError(msg)
        self._rulesets[ruleset.target] = ruleset

    def freeze(self) -> ValidatorRegistry:
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get_validator_for(self, tp: type) -> Ruleset | None:
        """Return the ruleset registered for exactly *tp*, or ``None``.

        Subclasses do not inherit their base class's ruleset.
        """
        return self._rulesets.get(tp)

    def find(self, name: str) -> Ruleset | None:
        """Look a ruleset up by its name."""
        for ruleset in self._rulesets.values():
            if ruleset.name == name:
                return ruleset
        return None

    @property
    def rulesets(self) -> list[Ruleset]:
        """Registered rulesets in registration order."""
        return list(self._rulesets.values())

    def __len__(self) -> int:
        return len(self._rulesets)


def create_default_registry(config: ApiConfig | None = None) -> ValidatorRegistry:
    """Create a frozen registry with every feature ruleset."""
    from products_api.core.config import ApiConfig
    from products_api.features.add_product.rules import build_ruleset as add_product_rules

    _config = config or ApiConfig()
    registry = ValidatorRegistry()

    registry.register(add_product_rules(rule_delay=_config.rule_delay))

    return registry.freeze()
