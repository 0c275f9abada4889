"""
Concentrated Liquidity Slippage Simulator

Uniswap V3 틱/유동성 표현을 사용하는 집중 유동성 풀에서
스왑 비용(가격 영향도, 슬리피지, 예상 출력량)을 추정하는 라이브러리.

- precise mode: 틱별 유동성 분포를 따라 스왑 시뮬레이션
- fast-path mode: TVL 기반 O(1) 선형 근사
"""

__version__ = "0.1.0"

from .constants import Q96, MIN_TICK, MAX_TICK
from .data.types import (
    PoolSnapshot,
    TickLiquidityDelta,
    SwapRequest,
    SwapResult,
    SwapStatus,
)
from .simulator import calculate_swap_output
from .estimator import estimate_simple_slippage
