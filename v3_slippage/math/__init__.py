"""
Math layer for the slippage simulator

고정소수점 가격 수학:
- tick_math: Tick ↔ sqrtPriceX96 변환
- sqrt_price_math: sqrtPriceX96 ↔ 가격 변환
- swap_math: 단일 스왑 스텝
- liquidity_math: 틱 크로싱 유동성 갱신
"""

from .tick_math import (
    get_sqrt_ratio_at_tick,
    get_tick_at_sqrt_ratio,
    clamp_tick,
    tick_to_price,
    MIN_SQRT_RATIO,
    MAX_SQRT_RATIO,
)
from .sqrt_price_math import (
    sqrt_price_x96_to_price,
    adjust_api_price_to_usd,
)
from .swap_math import compute_swap_step
from .liquidity_math import apply_liquidity_net
