"""Transaction auto-categorization engine.

Classification loads an immutable snapshot (active rules plus the user's
learned patterns) and then works purely in memory, so one snapshot can be
shared by many worker threads. Feedback goes through a single atomic upsert.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Optional, Sequence, Tuple
from config import CategorizationSettings
from models.category import Category
from models.classification import ClassificationResult
from models.learned_pattern import LearnedPattern
from models.transaction import Transaction
from categorization.arbitration import arbitrate
from categorization.learning import match_learned_patterns
from categorization.rules import CompiledRule, compile_rules, match_rules
from categorization.seeding import RuleTable, SeedReport, seed_default_rules
from categorization.text import extract_merchant_name, normalize_description
from logger import get_logger

logger = get_logger(__name__)

REVIEW_CATEGORY_COLOR = "#FFA500"
REVIEW_CATEGORY_ICON = "🔍"


@dataclass(frozen=True)
class CategorizationSnapshot:
    """Rules and learned patterns loaded once for a batch of classifications."""

    user_id: str
    rules: Tuple[CompiledRule, ...]
    patterns: Tuple[LearnedPattern, ...]


def classify_description(
    description: str,
    snapshot: CategorizationSnapshot,
    settings: CategorizationSettings,
) -> ClassificationResult:
    """Classify a description against a snapshot without touching the database.

    Args:
        description: Raw transaction description.
        snapshot: Rules and learned patterns to match against.
        settings: Review threshold and similarity floor.

    Returns:
        ClassificationResult for the best candidate.
    """
    normalized = normalize_description(description)
    merchant = extract_merchant_name(normalized)

    candidates = match_learned_patterns(
        normalized,
        merchant,
        snapshot.user_id,
        list(snapshot.patterns),
        similarity_floor=settings.similarity_floor,
    )
    candidates += match_rules(normalized, description, list(snapshot.rules))

    result = arbitrate(candidates, review_threshold=settings.review_threshold)
    logger.debug(
        f"Categorized {description!r} (normalized: {normalized!r}, "
        f"merchant: {merchant!r}) from {len(candidates)} candidate(s): "
        f"{result.reason} (confidence: {result.confidence:.2f})"
    )
    return result


class CategorizationEngine:
    """Classifies transactions and learns from user corrections.

    Args:
        services: Services container providing categories, rules,
                  learned_patterns and transactions.
        settings: Categorization policy settings.
    """

    def __init__(self, services, settings: Optional[CategorizationSettings] = None):
        self.services = services
        self.settings = settings or CategorizationSettings()

    def load_snapshot(self, user_id: str) -> CategorizationSnapshot:
        """Load the active rules and a user's learned patterns.

        Raises:
            sqlite3.Error: If the database can't be read.
        """
        rules = compile_rules(self.services.rules.find_active())
        patterns = self.services.learned_patterns.find_by_user(user_id)
        return CategorizationSnapshot(
            user_id=user_id, rules=tuple(rules), patterns=tuple(patterns)
        )

    def classify(
        self, description: str, amount: Decimal, user_id: str
    ) -> ClassificationResult:
        """Classify a single transaction description for a user.

        The amount is accepted for interface stability but does not influence
        the result.

        Args:
            description: Raw transaction description.
            amount: Transaction amount.
            user_id: The user whose learned patterns apply.

        Returns:
            ClassificationResult. No match is a valid result, not an error.

        Raises:
            sqlite3.Error: If rules or learned patterns can't be loaded.
        """
        snapshot = self.load_snapshot(user_id)
        return classify_description(description, snapshot, self.settings)

    def classify_many(
        self, items: Sequence[Tuple[str, Decimal]], user_id: str
    ) -> List[ClassificationResult]:
        """Classify many (description, amount) pairs for one user in parallel.

        One snapshot is loaded for the whole batch.

        Returns:
            Results in the same order as items.
        """
        if not items:
            return []

        snapshot = self.load_snapshot(user_id)
        workers = min(self.settings.worker_count, len(items))

        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(
                executor.map(
                    lambda item: classify_description(item[0], snapshot, self.settings),
                    items,
                )
            )

    def categorize_transactions(
        self, transactions: List[Transaction]
    ) -> List[ClassificationResult]:
        """Classify transactions and assign their categories in place.

        Transactions flagged for review are routed to the review category.
        The caller is responsible for persisting the transactions.

        Args:
            transactions: Transactions to categorize, possibly of several users.

        Returns:
            ClassificationResult per transaction, in input order.
        """
        by_user: Dict[str, List[int]] = {}
        for index, txn in enumerate(transactions):
            by_user.setdefault(txn.user_id, []).append(index)

        results: List[Optional[ClassificationResult]] = [None] * len(transactions)
        for user_id, indexes in by_user.items():
            user_results = self.classify_many(
                [(transactions[i].description, transactions[i].amount) for i in indexes],
                user_id,
            )
            for i, result in zip(indexes, user_results):
                results[i] = result

        review_category = None
        for txn, result in zip(transactions, results):
            if result.needs_review:
                if review_category is None:
                    review_category = self.get_review_category()
                txn.category_id = review_category.id
            else:
                txn.category_id = result.category_id
            txn.auto_confidence = result.confidence

        flagged = sum(1 for r in results if r.needs_review)
        logger.info(
            f"Auto-categorized {len(transactions) - flagged}/{len(transactions)} "
            f"transactions, {flagged} flagged for review"
        )
        return results

    def record_feedback(
        self, description: str, category_id: int, user_id: str
    ) -> Optional[LearnedPattern]:
        """Learn from a user assigning or confirming a category.

        Creates the learned pattern for the description's merchant token, or
        reinforces it (confidence + step, capped at 1.0) if it exists.

        Args:
            description: Raw transaction description.
            category_id: The category the user chose.
            user_id: The user giving feedback.

        Returns:
            The stored LearnedPattern, or None if the description has no
            usable merchant token.

        Raises:
            ValueError: If the category doesn't exist.
            sqlite3.Error: If the write fails.
        """
        if self.services.categories.find(category_id) is None:
            raise ValueError(f"Category with ID {category_id} not found")

        merchant = extract_merchant_name(description)
        if not merchant:
            logger.warning(f"No merchant token in {description!r}, nothing to learn")
            return None

        pattern = self.services.learned_patterns.upsert(
            user_id,
            merchant,
            category_id,
            confidence_delta=self.settings.reinforcement_step,
            initial_confidence=self.settings.initial_confidence,
        )
        logger.info(
            f"Learned pattern: {merchant!r} -> {category_id} "
            f"(confidence: {pattern.confidence:.2f}, matches: {pattern.match_count})"
        )
        return pattern

    def categorize_manually(
        self, transaction_id: str, category_id: int, user_id: str
    ) -> Transaction:
        """Assign a category chosen by the user and learn from it.

        Raises:
            ValueError: If the transaction doesn't belong to the user or the
                        category doesn't exist.
        """
        txn = self.services.transactions.find(transaction_id)
        if txn is None or txn.user_id != user_id:
            raise ValueError(f"Transaction {transaction_id} not found")

        self.record_feedback(txn.description, category_id, user_id)

        txn.category_id = category_id
        txn.auto_confidence = None
        self.services.transactions.update(txn, ["category_id", "auto_confidence"])
        return txn

    def seed_default_rules(self, rule_table: Optional[RuleTable] = None) -> SeedReport:
        """Create missing default rules. See categorization.seeding."""
        return seed_default_rules(self.services, rule_table)

    def get_review_category(self) -> Category:
        """Get the reserved review category, creating it if needed."""
        return self.services.categories.get_or_create_system(
            self.settings.review_category,
            color=REVIEW_CATEGORY_COLOR,
            icon=REVIEW_CATEGORY_ICON,
        )

    def transactions_needing_review(
        self, user_id: str, limit: int = 50
    ) -> List[Transaction]:
        """Get a user's transactions waiting for a manual category."""
        review_category = self.get_review_category()
        return self.services.transactions.find_needing_review(
            user_id, review_category.id, limit=limit
        )
