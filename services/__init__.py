"""
Services package for LedgerDesk.
Provides core business logic separated from presentation and data layers.
"""

from services.validation import (
    to_decimal,
    validate_transaction_type,
    validate_status,
    validate_item,
    validate_create_request,
    validate_update_request,
    validate_filter,
)
from services.calculator import (
    MONEY_QUANT,
    quantize_money,
    calculate_line,
    calculate_totals,
)
from services.reference_resolver import ReferenceResolver
from services.transaction_store import TransactionStore
from services.lifecycle import StatusLifecycleManager, TRANSITIONS, can_transition
from services.summary import SummaryAggregator
from services.transaction_service import TransactionService

__all__ = [
    # Validation
    'to_decimal',
    'validate_transaction_type',
    'validate_status',
    'validate_item',
    'validate_create_request',
    'validate_update_request',
    'validate_filter',
    # Line-item arithmetic
    'MONEY_QUANT',
    'quantize_money',
    'calculate_line',
    'calculate_totals',
    # Components
    'ReferenceResolver',
    'TransactionStore',
    'StatusLifecycleManager',
    'TRANSITIONS',
    'can_transition',
    'SummaryAggregator',
    'TransactionService',
]
