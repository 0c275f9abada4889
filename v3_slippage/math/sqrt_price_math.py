"""
Sqrt Price Math - sqrtPriceX96 ↔ 가격 변환

sqrtPriceX96 = sqrt(price) * 2^96

가격 변환 결과는 퍼센트 계산(가격 영향도)에만 쓰이므로 float로 반환합니다.
시뮬레이션 중간 상태는 항상 정수 sqrtPriceX96으로 유지합니다.
"""

import math

from ..constants import Q192


def sqrt_price_x96_to_price(
    sqrt_price_x96: int,
    decimals0: int = 18,
    decimals1: int = 18
) -> float:
    """sqrtPriceX96을 human-readable 가격으로 변환 (sqrtPriceToPrice)

    가격 = (sqrtPriceX96 / 2^96)^2 × 10^(decimals0 - decimals1)

    제곱은 정수로 계산한 뒤 2^192로 한 번만 나누므로
    (정수 / 정수 → 정확히 반올림된 float) 중간 정밀도 손실이 없습니다.

    Args:
        sqrt_price_x96: sqrtPriceX96 값
        decimals0: token0 소수점 자릿수
        decimals1: token1 소수점 자릿수

    Returns:
        가격 (token1/token0 기준, human-readable)
    """
    if sqrt_price_x96 < 0:
        raise ValueError(f"sqrtPriceX96은 음수일 수 없습니다: {sqrt_price_x96}")

    price_raw = (sqrt_price_x96 * sqrt_price_x96) / Q192

    # 소수점 조정
    return price_raw * (10 ** (decimals0 - decimals1))


def adjust_api_price_to_usd(
    raw_price: float,
    token_decimals: int,
    quote_decimals: int = 6
) -> float:
    """견적 토큰 최소 단위 기준 가격을 USD 가격으로 변환

    가격 API는 "토큰 1 최소단위당 견적 토큰(USDC) 최소단위" 형식으로 가격을 줍니다.

    공식: price_USD = raw_price × 10^(token_decimals - quote_decimals)

    Example:
        ETH (18 decimals), raw_price = 3.04e-9
        → 3.04e-9 × 10^(18-6) ≈ 3,040 USD

    Args:
        raw_price: API 원시 가격
        token_decimals: 토큰 소수점 자릿수
        quote_decimals: 견적 토큰 소수점 자릿수 (USDC = 6)

    Returns:
        USD 가격. 비정상 값(0 이하, 무한대, 1e-30 미만, 1e30 초과)이면 0.0
    """
    if not math.isfinite(raw_price) or raw_price <= 0:
        return 0.0

    # 너무 작거나 큰 값은 오류로 간주
    if raw_price < 1e-30 or raw_price > 1e30:
        return 0.0

    return raw_price * (10 ** (token_decimals - quote_decimals))
