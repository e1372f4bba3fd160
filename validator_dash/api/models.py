from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel


class ValidatorList(BaseModel):
    validators: List[str]


class StakingRow(BaseModel):
    id: Optional[int] = None
    validator_name: Optional[str] = None
    commission: Optional[float] = None
    delegated_shares: Optional[Union[Decimal, str]] = None
    apr: Optional[float] = None


class Transaction(BaseModel):
    tx_hash: Optional[str] = None
    slot: Optional[int] = None
    timestamp: Optional[str] = None


class Statistics(BaseModel):
    average_response_latency: Optional[Union[Decimal, str]] = None
    total_proposers: Optional[int] = None
    upcoming_slots: Optional[int] = None
    last_updated: Optional[str] = None


class PreconfTransactions(BaseModel):
    transactions: List[Transaction]
    totalPreconfTxsIn24Hours: float
    label: str
    debug: Dict[str, Any]


class PreconfStats(BaseModel):
    totalPreconfs: int
    totalPreconfTxsIn24Hours: float


class HealthStatus(BaseModel):
    status: str
    database: bool
