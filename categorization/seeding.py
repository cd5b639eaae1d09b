"""Seeding of default categories and categorization rules.

The default rule table is declarative data (db/seed/default_rules.yaml),
validated on load and passed into seed_default_rules(), so it can be swapped
out or built in tests without touching the database code.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional
import yaml
from pydantic import BaseModel, Field, field_validator
from config import get_seed_dir
from logger import get_logger

logger = get_logger(__name__)


class RuleSeed(BaseModel):
    """A single entry of the default rule table."""

    name: str = Field(min_length=1)
    pattern: str = Field(min_length=1)
    category: str = Field(min_length=1)
    confidence: float = Field(ge=0.0, le=1.0)
    priority: int = 1


class RuleTable(BaseModel):
    """The full default rule table."""

    version: int = 1
    rules: List[RuleSeed]

    @field_validator("rules")
    @classmethod
    def names_are_unique(cls, rules: List[RuleSeed]) -> List[RuleSeed]:
        seen = set()
        for rule in rules:
            if rule.name in seen:
                raise ValueError(f"duplicate rule name: {rule.name}")
            seen.add(rule.name)
        return rules


@dataclass
class SeedReport:
    """Outcome of a seeding run."""

    created: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    missing_category: List[str] = field(default_factory=list)


def load_rule_table(path: Optional[Path] = None) -> RuleTable:
    """Load and validate a rule table from YAML.

    Args:
        path: YAML file to load. Defaults to db/seed/default_rules.yaml.

    Returns:
        Validated RuleTable.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        yaml.YAMLError: If the YAML is invalid.
        pydantic.ValidationError: If an entry is malformed.
    """
    path = path or get_seed_dir() / "default_rules.yaml"

    logger.info(f"Loading rule table from {path}")
    with open(path, "r") as f:
        data = yaml.safe_load(f)

    return RuleTable.model_validate(data)


def seed_default_rules(services, rule_table: Optional[RuleTable] = None) -> SeedReport:
    """Create the rules of a rule table that don't exist yet.

    Idempotent: a rule is created only if no rule with the same name and
    pattern exists. Entries whose category can't be resolved by name are
    skipped with a warning; the rest of the table is still seeded.

    Args:
        services: Services container.
        rule_table: Table to seed. Defaults to load_rule_table().

    Returns:
        SeedReport listing created, skipped and unresolved rule names.
    """
    rule_table = rule_table or load_rule_table()
    report = SeedReport()

    logger.info("Seeding default categorization rules...")

    for seed in rule_table.rules:
        category = services.categories.find_by_name(seed.category)
        if category is None:
            logger.warning(
                f"Category '{seed.category}' not found, skipping rule '{seed.name}'"
            )
            report.missing_category.append(seed.name)
            continue

        if services.rules.find_by_name_and_pattern(seed.name, seed.pattern):
            logger.debug(f"Rule '{seed.name}' already exists")
            report.skipped.append(seed.name)
            continue

        services.rules.create(
            name=seed.name,
            pattern=seed.pattern,
            category_id=category.id,
            confidence=seed.confidence,
            priority=seed.priority,
        )
        logger.info(f"Created rule: {seed.name}")
        report.created.append(seed.name)

    logger.info(
        f"Rule seeding complete: {len(report.created)} created, "
        f"{len(report.skipped)} already present, "
        f"{len(report.missing_category)} skipped for missing categories"
    )
    return report


def seed_categories(services, path: Optional[Path] = None) -> SeedReport:
    """Create the default category tree from JSON.

    Seeded categories are system categories. Existing names are left alone.

    Args:
        services: Services container.
        path: JSON file to load. Defaults to db/seed/categories.json.

    Returns:
        SeedReport listing created and skipped category names.

    Raises:
        json.JSONDecodeError: If the file is not valid JSON.
    """
    path = path or get_seed_dir() / "categories.json"
    with open(path, "r") as f:
        categories_data = json.load(f)

    report = SeedReport()

    for category_data in categories_data:
        name = category_data.get("name")
        if not name:
            logger.warning("Skipping category with no name")
            continue

        parent = _seed_category(services, category_data, None, report)

        for child_data in category_data.get("children", []):
            if not child_data.get("name"):
                logger.warning(f"Skipping child of '{name}' with no name")
                continue
            _seed_category(services, child_data, parent.id, report)

    logger.info(
        f"Category seeding complete: {len(report.created)} created, "
        f"{len(report.skipped)} already present"
    )
    return report


def _seed_category(services, data: dict, parent_id: Optional[int], report: SeedReport):
    name = data["name"]
    existing = services.categories.find_by_name(name)
    if existing:
        report.skipped.append(name)
        return existing

    category = services.categories.create(
        name,
        parent_id=parent_id,
        color=data.get("color"),
        icon=data.get("icon"),
        is_system=True,
    )
    logger.info(f"Created category '{name}' (ID: {category.id})")
    report.created.append(name)
    return category
