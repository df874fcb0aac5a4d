from importlib.metadata import version

from products_api.app import Services, create_app
from products_api.core.config import BUILTIN_PROFILES, ApiConfig, ConfigError
from products_api.core.engine import validate
from products_api.core.failure import ResolutionFault, ValidationFailure, ValidationOutcome
from products_api.core.filter import FilterResult, ValidationFilter
from products_api.core.problem import ProblemDetails, to_problem_details
from products_api.core.registry import ValidatorRegistry
from products_api.core.rule import Rule
from products_api.core.ruleset import Ruleset, RulesetBuilder

__version__ = version("products-api")


__all__ = [
    "BUILTIN_PROFILES",
    "ApiConfig",
    "ConfigError",
    "FilterResult",
    "ProblemDetails",
    "ResolutionFault",
    "Rule",
    "Ruleset",
    "RulesetBuilder",
    "Services",
    "ValidationFailure",
    "ValidationFilter",
    "ValidationOutcome",
    "ValidatorRegistry",
    "__version__",
    "create_app",
    "to_problem_details",
    "validate",
]
