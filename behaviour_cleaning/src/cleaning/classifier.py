"""Column classification by naming convention.

Rules are evaluated in a fixed order and the first match wins:

1. name contains ``nonzero``                       -> RedundantDerived
2. name ends with ``_sqrt`` (not ``_sqrt_zeros``)  -> DuplicateTransformed
3. name ends with ``_sqrt_zeros``                  -> BehavioralFeature
4. name equals the missing-block indicator         -> MissingIndicator
5. name equals the target                          -> Target
   (configured identifier names                    -> Identifier)
6. name contains a behavioural lexicon token       -> BehavioralFeature
7. anything else                                   -> DemographicFeature

Substring and suffix checks are case-insensitive; the name-equality rules are
exact. The order matters: ``casino_nonzero`` must be dropped as redundant, not
kept as behavioural.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .config import CleaningConfig
from .dataset import Role, Schema
from .errors import ConfigError

logger = logging.getLogger(__name__)

REDUNDANT_TOKEN = "nonzero"
DUPLICATE_SUFFIX = "_sqrt"
ZERO_FILLED_SUFFIX = "_sqrt_zeros"

RoleMap = Dict[str, Role]
Rule = Tuple[str, Callable[[str], bool], Role]


def _build_rules(config: CleaningConfig) -> List[Rule]:
    indicator = config.missing_indicator_column
    target = config.target_column
    identifiers = set(config.identifier_columns)
    lexicon = sorted(token.lower() for token in config.behavioral_lexicon)

    return [
        ("redundant", lambda n: REDUNDANT_TOKEN in n.lower(), Role.REDUNDANT_DERIVED),
        (
            "duplicate",
            lambda n: n.lower().endswith(DUPLICATE_SUFFIX)
            and not n.lower().endswith(ZERO_FILLED_SUFFIX),
            Role.DUPLICATE_TRANSFORMED,
        ),
        ("zero_filled", lambda n: n.lower().endswith(ZERO_FILLED_SUFFIX), Role.BEHAVIORAL_FEATURE),
        ("indicator", lambda n: n == indicator, Role.MISSING_INDICATOR),
        ("target", lambda n: n == target, Role.TARGET),
        ("identifier", lambda n: n in identifiers, Role.IDENTIFIER),
        ("lexicon", lambda n: any(tok in n.lower() for tok in lexicon), Role.BEHAVIORAL_FEATURE),
    ]


def classify_name(name: str, rules: Iterable[Rule]) -> Role:
    for rule_name, predicate, role in rules:
        if predicate(name):
            logger.debug("Column %r -> %s (rule: %s)", name, role.value, rule_name)
            return role
    logger.debug("Column %r -> %s (default)", name, Role.DEMOGRAPHIC_FEATURE.value)
    return Role.DEMOGRAPHIC_FEATURE


def classify(schema: Schema, config: CleaningConfig) -> RoleMap:
    """Assign exactly one role to every column of ``schema``.

    Raises
    ------
    ConfigError
        If the indicator/target names or the behavioural lexicon are missing
        from ``config``, or a configured column name is claimed by an
        earlier naming rule.
    """
    config.validate()
    rules = _build_rules(config)
    role_map: RoleMap = {col.name: classify_name(col.name, rules) for col in schema}

    # Configured names must not be shadowed by an earlier naming rule,
    # otherwise later stages would silently prune or impute them.
    configured = [
        (config.missing_indicator_column, Role.MISSING_INDICATOR),
        (config.target_column, Role.TARGET),
    ]
    configured.extend((name, Role.IDENTIFIER) for name in config.identifier_columns)
    for required, role in configured:
        if required in role_map and role_map[required] is not role:
            raise ConfigError(
                f"Configured column '{required}' matches an earlier naming rule and was "
                f"classified as {role_map[required].value}, not {role.value}.",
                column=required,
            )

    return role_map


def columns_with_role(role_map: RoleMap, role: Role, order: Optional[Iterable[str]] = None) -> List[str]:
    names = order if order is not None else role_map.keys()
    return [n for n in names if role_map.get(n) is role]


def summarize_roles(role_map: RoleMap) -> Dict[str, int]:
    counts: Dict[str, int] = {role.value: 0 for role in Role}
    for role in role_map.values():
        counts[role.value] += 1
    return counts


__all__ = ["classify", "classify_name", "columns_with_role", "summarize_roles", "RoleMap"]
