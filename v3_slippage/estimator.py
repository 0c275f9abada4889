"""
Fast Slippage Estimator - O(1) 슬리피지 근사

틱 유동성 데이터가 없거나 속도가 중요할 때 사용하는 선형 근사 (fast-path mode).

핵심 공식:
    가격 영향도 ≈ (amountInUSD / TVL) × 100
    총 슬리피지 = 가격 영향도 + 수수료 (bps / 100)

집중 유동성 요구량 추정:
    자본 효율 ≈ 1 / (범위 폭)        # ±0.5% → 1 / 0.01 = 100x
    필요 유효 TVL = amount × 100 / (목표 슬리피지 - 수수료)
    추가 자본 = max(0, 필요 유효 TVL - 현재 TVL) / 자본 효율
"""

import math
from typing import Optional, Tuple

from .config import settings
from .constants import MAX_SLIPPAGE_PERCENT
from .data.types import RequiredLiquidity


def estimate_simple_slippage(
    amount_in_usd: float,
    tvl_usd: float,
    fee_bps: Optional[float] = None
) -> float:
    """선형 근사 슬리피지 (퍼센트)

    결과는 상한 없이 반환합니다. 표시용 100% 상한은 cap_slippage로 적용.

    Args:
        amount_in_usd: 스왑 금액 (USD)
        tvl_usd: 풀 TVL (USD)
        fee_bps: 수수료 basis points. None이면 settings.DEFAULT_FEE_BPS
            (기본 30 = 0.30%, 환경변수 SLIPPAGE_DEFAULT_FEE_BPS로 변경 가능)

    Returns:
        총 슬리피지 퍼센트. TVL이 0이면 100 (유동성 없음)

    Example:
        $1K 스왑, $1M TVL, 30 bps → 0.1% + 0.3% ≈ 0.4%
    """
    if fee_bps is None:
        fee_bps = settings.DEFAULT_FEE_BPS
    if amount_in_usd < 0:
        raise ValueError(f"스왑 금액은 음수일 수 없습니다: {amount_in_usd}")
    if tvl_usd < 0:
        raise ValueError(f"TVL은 음수일 수 없습니다: {tvl_usd}")
    if fee_bps < 0:
        raise ValueError(f"수수료는 음수일 수 없습니다: {fee_bps}")

    if tvl_usd == 0:
        return MAX_SLIPPAGE_PERCENT

    price_impact = (amount_in_usd / tvl_usd) * 100
    fee_impact = fee_bps / 100

    return price_impact + fee_impact


def cap_slippage(slippage: float, cap: float = MAX_SLIPPAGE_PERCENT) -> float:
    """표시용 슬리피지 상한 적용"""
    return min(slippage, cap)


def fee_percent(fee: int, fee_denominator: int) -> float:
    """풀 수수료를 퍼센트로 변환: fee / fee_denominator × 100"""
    if fee_denominator <= 0:
        raise ValueError(f"fee_denominator는 양수여야 합니다: {fee_denominator}")
    return fee / fee_denominator * 100


def capital_efficiency(range_width_percent: float) -> float:
    """±range_width_percent 범위 집중 유동성의 자본 효율 배수

    Example:
        ±0.5% → 전체 폭 1% → 100x
    """
    if range_width_percent <= 0:
        raise ValueError(f"범위 폭은 양수여야 합니다: {range_width_percent}")
    return 1 / ((range_width_percent / 100) * 2)


def price_bounds(price: float, range_width_percent: float) -> Tuple[float, float]:
    """현재 가격 기준 ±range_width_percent 가격 범위 (lower, upper)"""
    multiplier = 1 - range_width_percent / 100
    return price * multiplier, price * (2 - multiplier)


def required_liquidity(
    amount_usd: float,
    tvl_usd: float,
    pool_fee_percent: float,
    target_slippage: Optional[float] = None,
    range_width_percent: Optional[float] = None,
    token0_price_usd: Optional[float] = None
) -> Optional[RequiredLiquidity]:
    """목표 슬리피지를 달성하기 위해 추가로 필요한 집중 유동성 추정

    Args:
        amount_usd: 스왑 금액 (USD)
        tvl_usd: 현재 풀 TVL (USD)
        pool_fee_percent: 풀 수수료 (퍼센트, 0.3 = 0.3%)
        target_slippage: 목표 슬리피지 퍼센트 (기본 0.5)
        range_width_percent: 유동성 범위 ±폭 퍼센트 (기본 0.5)
        token0_price_usd: 주어지면 가격 범위(lower/upper) 함께 계산

    Returns:
        RequiredLiquidity, 수수료만으로 목표를 넘는 경우 None
    """
    if target_slippage is None:
        target_slippage = settings.TARGET_SLIPPAGE
    if range_width_percent is None:
        range_width_percent = settings.RANGE_WIDTH_PERCENT
    if amount_usd < 0:
        raise ValueError(f"스왑 금액은 음수일 수 없습니다: {amount_usd}")

    target_price_impact = target_slippage - pool_fee_percent
    if target_price_impact <= 0:
        return None

    efficiency = capital_efficiency(range_width_percent)
    if tvl_usd > 0:
        current_price_impact = (amount_usd / tvl_usd) * 100
    else:
        current_price_impact = MAX_SLIPPAGE_PERCENT

    required_effective_tvl = (amount_usd * 100) / target_price_impact
    additional_effective_tvl = max(0.0, required_effective_tvl - tvl_usd)

    lower_price = upper_price = None
    if token0_price_usd:
        lower_price, upper_price = price_bounds(token0_price_usd, range_width_percent)

    return RequiredLiquidity(
        capital_needed=additional_effective_tvl / efficiency,
        efficiency=efficiency,
        range_width_percent=range_width_percent,
        current_price_impact=current_price_impact,
        target_price_impact=target_price_impact,
        target_slippage=target_slippage,
        lower_price=lower_price,
        upper_price=upper_price,
    )


def slippage_label(slippage: float) -> str:
    """슬리피지 등급: Excellent (<0.5) / Good (<1) / Moderate (<5) / High"""
    if slippage < 0.5:
        return "Excellent"
    if slippage < 1:
        return "Good"
    if slippage < 5:
        return "Moderate"
    return "High"


def tvl_usd_from_balances(
    balance0: int,
    balance1: int,
    decimals0: int,
    decimals1: int,
    price0_usd: float,
    price1_usd: float
) -> float:
    """풀 잔고(최소 단위)와 토큰 USD 가격으로 TVL 계산"""
    tvl = (balance0 / 10 ** decimals0) * price0_usd + (balance1 / 10 ** decimals1) * price1_usd
    return tvl if math.isfinite(tvl) else 0.0
