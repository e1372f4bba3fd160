from .stats import router as stats_router
from .transactions import router as transactions_router
from .validators import router as validators_router

__all__ = ["stats_router", "transactions_router", "validators_router"]
