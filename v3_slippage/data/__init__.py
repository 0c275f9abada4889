"""
Data layer for the slippage simulator

풀 스냅샷, 틱 유동성, 스왑 결과 타입 및 JSON 입력 스키마
"""

from .types import (
    PoolSnapshot,
    TickLiquidityDelta,
    SwapRequest,
    SwapStatus,
    SwapStep,
    SwapResult,
    PoolSummary,
    RequiredLiquidity,
)
from .schemas import QuoteInput, PoolSnapshotInput, TickDeltaInput
