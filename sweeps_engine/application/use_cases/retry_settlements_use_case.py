"""Retry queued settlements use case"""
import logging
from typing import Any, Dict

from sweeps_engine.application.services.settlement_service import SettlementService

logger = logging.getLogger(__name__)


class RetrySettlementsUseCase:
    """Re-attempts credits for wins whose settlement failed"""

    def __init__(self, settlement: SettlementService):
        self.settlement = settlement

    async def execute(self) -> Dict[str, Any]:
        settled = await self.settlement.retry_pending()
        remaining = self.settlement.retry_queue.pending()
        if remaining:
            logger.warning(f"{len(remaining)} settlement(s) still pending after retry")
        return {
            "settled": [r.to_dict() for r in settled],
            "pending": [p.to_dict() for p in remaining]
        }
