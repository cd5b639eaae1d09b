from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional
import hashlib


@dataclass
class Transaction:
    id: str  # checksum of raw transaction data
    user_id: str
    transaction_date: date
    description: str
    amount: Decimal
    category_id: Optional[int] = None
    auto_confidence: Optional[float] = None  # set when categorized automatically

    @classmethod
    def create_with_checksum(
        cls,
        raw_data: str,
        user_id: str,
        transaction_date: date,
        description: str,
        amount: Decimal,
        category_id: Optional[int] = None,
    ) -> "Transaction":
        """Create a Transaction with auto-generated checksum ID."""
        transaction_id = hashlib.sha256(raw_data.encode("utf-8")).hexdigest()
        return cls(
            id=transaction_id,
            user_id=user_id,
            transaction_date=transaction_date,
            description=description,
            amount=amount,
            category_id=category_id,
        )
