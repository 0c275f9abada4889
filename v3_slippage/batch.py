"""
Batch Slippage Tables

여러 풀 또는 여러 거래 규모에 대한 슬리피지를 DataFrame으로 정리합니다.
각 풀/금액은 독립적으로 계산되며 호출 간 공유 상태는 없습니다.
"""

from typing import Iterable, Optional, Sequence

import numpy as np
import pandas as pd

from .constants import DEFAULT_TRADE_SIZES_USD, MAX_SLIPPAGE_PERCENT
from .data.types import PoolSnapshot, PoolSummary, SwapRequest, TickLiquidityDelta
from .estimator import estimate_simple_slippage, fee_percent, required_liquidity
from .simulator import calculate_swap_output


POOL_COLUMNS = [
    "pool_key_id",
    "token0_symbol",
    "token1_symbol",
    "token0_address",
    "token1_address",
    "token0_price_usd",
    "token1_price_usd",
    "fee_percent",
    "tick_spacing",
    "current_tick",
    "tvl_usd",
]


def pool_slippage_table(
    pools: Iterable[PoolSummary],
    trade_sizes: Sequence[float] = DEFAULT_TRADE_SIZES_USD,
    target_slippage: Optional[float] = None,
    range_width_percent: Optional[float] = None,
) -> pd.DataFrame:
    """풀별 fast-path 슬리피지 테이블

    거래 규모마다 두 컬럼을 만듭니다:
    - slippage_<size>: 선형 근사 슬리피지 (100% 상한)
    - liquidity_needed_<size>: 목표 슬리피지에 필요한 추가 집중 유동성
      (수수료가 이미 목표 이상이면 0)

    Args:
        pools: 풀 요약 목록
        trade_sizes: 거래 규모 (USD)
        target_slippage: 목표 슬리피지 퍼센트
        range_width_percent: 유동성 범위 ±폭 퍼센트

    Returns:
        TVL 내림차순으로 정렬된 DataFrame
    """
    size_labels = [_size_label(size) for size in trade_sizes]
    columns = POOL_COLUMNS \
        + [f"slippage_{label}" for label in size_labels] \
        + [f"liquidity_needed_{label}" for label in size_labels]

    rows = []
    for pool in pools:
        pool_fee = fee_percent(pool.fee, pool.fee_denominator)
        row = {
            "pool_key_id": pool.pool_key_id,
            "token0_symbol": pool.token0_symbol,
            "token1_symbol": pool.token1_symbol,
            "token0_address": pool.token0,
            "token1_address": pool.token1,
            "token0_price_usd": pool.token0_price_usd,
            "token1_price_usd": pool.token1_price_usd,
            "fee_percent": pool_fee,
            "tick_spacing": pool.tick_spacing,
            "current_tick": pool.current_tick,
            "tvl_usd": pool.tvl_usd,
        }
        for size, label in zip(trade_sizes, size_labels):
            row[f"slippage_{label}"] = estimate_simple_slippage(size, pool.tvl_usd, pool_fee * 100)
            needed = required_liquidity(
                size,
                pool.tvl_usd,
                pool_fee,
                target_slippage=target_slippage,
                range_width_percent=range_width_percent,
            )
            row[f"liquidity_needed_{label}"] = needed.capital_needed if needed else 0.0
        rows.append(row)

    df = pd.DataFrame(rows, columns=columns)
    if df.empty:
        return df

    slippage_cols = [f"slippage_{label}" for label in size_labels]
    df[slippage_cols] = np.minimum(df[slippage_cols].to_numpy(dtype=float), MAX_SLIPPAGE_PERCENT)

    return df.sort_values("tvl_usd", ascending=False, kind="stable").reset_index(drop=True)


def swap_curve(
    pool: PoolSnapshot,
    tick_deltas: Sequence[TickLiquidityDelta],
    amounts: Iterable[int],
    zero_for_one: bool = True,
) -> pd.DataFrame:
    """여러 입력량에 대한 precise-mode 스왑 결과 (가격 영향도 곡선)

    Args:
        pool: 풀 스냅샷
        tick_deltas: 틱 유동성 목록
        amounts: 입력량 목록 (최소 단위)
        zero_for_one: 스왑 방향

    Returns:
        입력량별 한 행의 DataFrame
    """
    rows = []
    for amount in amounts:
        result = calculate_swap_output(pool, tick_deltas, SwapRequest(amount_in=int(amount), zero_for_one=zero_for_one))
        rows.append({
            "amount_in": int(amount),
            "expected_output": result.expected_output,
            "price_impact_percent": result.price_impact_percent,
            "effective_price": result.effective_price,
            "slippage_bps": result.slippage_bps,
            "status": result.status,
            "steps": len(result.steps),
            "is_approximate": result.is_approximate,
        })

    return pd.DataFrame(rows, columns=[
        "amount_in", "expected_output", "price_impact_percent", "effective_price",
        "slippage_bps", "status", "steps", "is_approximate",
    ])


def _size_label(size: float) -> str:
    return str(int(size)) if float(size).is_integer() else str(size).replace(".", "_")
