"""Static rule matching.

Rules are admin-authored regular expressions. A rule whose pattern does not
compile is a data-quality problem: it is skipped and reported, and the
remaining rules are still evaluated.
"""

import re
from dataclasses import dataclass
from typing import List, Tuple
from models.classification import CandidateMatch, SOURCE_RULE
from models.rule import Rule
from logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CompiledRule:
    """A rule paired with its compiled case-insensitive regex."""

    rule: Rule
    regex: re.Pattern


def compile_rules(rules: List[Rule]) -> List[CompiledRule]:
    """Compile the active rules, skipping malformed patterns.

    Args:
        rules: Rules ordered by priority (highest first).

    Returns:
        Compiled rules in the same order, without inactive or malformed ones.
    """
    compiled = []
    for rule in rules:
        if not rule.is_active:
            continue
        try:
            regex = re.compile(rule.pattern, re.IGNORECASE)
        except re.error as e:
            logger.warning(
                f"Skipping rule '{rule.name}' (ID: {rule.id}): "
                f"invalid pattern {rule.pattern!r}: {e}"
            )
            continue
        compiled.append(CompiledRule(rule=rule, regex=regex))
    return compiled


def find_invalid_rules(rules: List[Rule]) -> List[Tuple[Rule, str]]:
    """Report rules whose pattern is not a valid regular expression.

    Args:
        rules: Rules to check, active or not.

    Returns:
        List of (rule, error message) pairs.
    """
    invalid = []
    for rule in rules:
        try:
            re.compile(rule.pattern, re.IGNORECASE)
        except re.error as e:
            invalid.append((rule, str(e)))
    return invalid


def match_rules(
    normalized: str, description: str, compiled_rules: List[CompiledRule]
) -> List[CandidateMatch]:
    """Find every rule matching a description.

    Each rule is tested against both the normalized and the raw description.
    All matching rules produce a candidate; ranking happens later.

    Args:
        normalized: Normalized description.
        description: Raw description.
        compiled_rules: Output of compile_rules().

    Returns:
        One CandidateMatch per matching rule, in rule order.
    """
    candidates = []
    for compiled in compiled_rules:
        if compiled.regex.search(normalized) or compiled.regex.search(description):
            rule = compiled.rule
            candidates.append(
                CandidateMatch(
                    category_id=rule.category_id,
                    confidence=rule.confidence,
                    source=SOURCE_RULE,
                    explanation=f"Matched rule: {rule.name}",
                )
            )
    return candidates
