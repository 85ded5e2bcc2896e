# Services Package
from .ledger_service import LedgerService
from .record_service import RecordService
from .customer_service import CustomerService
from .stats_service import StatsService, SpendStrategy

__all__ = [
    "LedgerService",
    "RecordService",
    "CustomerService",
    "StatsService",
    "SpendStrategy",
]
