from __future__ import annotations

import json
import os
from typing import TYPE_CHECKING

from products_api import __version__
from products_api.core.problem import to_problem_details

if TYPE_CHECKING:
    from products_api.core.failure import ValidationOutcome
    from products_api.core.ruleset import Ruleset

_RED = "\033[31m"
_GREEN = "\033[32m"
_BOLD = "\033[1m"
_DIM = "\033[2m"
_RESET = "\033[0m"

_LINE_WIDTH = 66


def _use_color(no_color_flag: bool) -> bool:
    if no_color_flag:
        return False
    return not os.environ.get("NO_COLOR", "")


def _c(text: str, code: str, *, color: bool) -> str:
    if not color:
        return text
    return f"{code}{text}{_RESET}"


def _rule(title: str) -> str:
    header = f"── {title} "
    return header + "─" * max(0, _LINE_WIDTH - len(header))


def format_rules_text(rulesets: list[Ruleset], *, no_color: bool = False) -> str:
    color = _use_color(no_color)
    lines: list[str] = []
    w = lines.append

    total = sum(len(rs) for rs in rulesets)
    w(f"products-api {__version__} - {len(rulesets)} rulesets, {total} rules")

    for ruleset in rulesets:
        w("")
        w(_c(_rule(f"{ruleset.name} ({len(ruleset)})"), _BOLD, color=color))
        w("")
        name_w = max((len(r.property_name) for r in ruleset.rules), default=0)
        for r in ruleset.rules:
            prop = _c((r.property_name or "<object>").ljust(name_w), _BOLD, color=color)
            w(f"  {prop}  {r.message}")

    return "\n".join(lines)


def format_rules_json(rulesets: list[Ruleset]) -> str:
    data = {
        "version": __version__,
        "rulesets": [
            {
                "name": rs.name,
                "target": f"{rs.target.__module__}.{rs.target.__qualname__}",
                "rules": [{"field": r.property_name, "message": r.message} for r in rs.rules],
            }
            for rs in rulesets
        ],
        "total": len(rulesets),
    }
    return json.dumps(data, indent=2)


def format_outcome_text(
    name: str,
    outcome: ValidationOutcome,
    *,
    no_color: bool = False,
) -> str:
    color = _use_color(no_color)
    lines: list[str] = []
    w = lines.append

    w(_c(_rule(name), _BOLD, color=color))
    if outcome.is_valid:
        w(f"  {_c('OK', _GREEN, color=color)}")
        return "\n".join(lines)

    for failure in outcome.failures:
        field = _c(f"[{failure.field or '<object>'}]", _BOLD, color=color)
        w(f"  {field} {_c('invalid', _RED, color=color)}: {failure.message}")

    count = len(outcome.failures)
    noun = "failure" if count == 1 else "failures"
    w("")
    w(_c(f"{count} {noun}", _DIM, color=color))
    return "\n".join(lines)


def format_outcome_json(outcome: ValidationOutcome) -> str:
    """Problem-Details JSON for an invalid outcome, ``{"valid": true}`` otherwise."""
    if outcome.is_valid:
        return json.dumps({"valid": True}, indent=2)
    return json.dumps(to_problem_details(outcome.failures).to_dict(), indent=2)
