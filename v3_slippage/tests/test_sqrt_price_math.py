"""
Sqrt Price Math 테스트
"""

import math

import pytest

from ..math.sqrt_price_math import sqrt_price_x96_to_price, adjust_api_price_to_usd
from ..math.tick_math import get_sqrt_ratio_at_tick
from ..constants import Q96


class TestSqrtPriceX96ToPrice:
    """sqrt_price_x96_to_price 테스트"""

    @pytest.mark.parametrize("decimals", [0, 6, 8, 18])
    def test_q96_equal_decimals_is_one(self, decimals):
        """2^96, 동일 소수점 → 정확히 1.0"""
        assert sqrt_price_x96_to_price(Q96, decimals, decimals) == 1.0

    def test_decimal_adjustment(self):
        """가격 × 10^(decimals0 - decimals1)"""
        assert sqrt_price_x96_to_price(Q96, 18, 6) == pytest.approx(1e12)
        assert sqrt_price_x96_to_price(Q96, 6, 18) == pytest.approx(1e-12)

    def test_double_sqrt(self):
        """sqrtPrice 2배 → 가격 4배"""
        assert sqrt_price_x96_to_price(2 * Q96) == 4.0

    def test_matches_tick_price(self):
        """틱 가격과 1.0001^tick 일치"""
        for tick in [-20000, -60, 60, 20000]:
            price = sqrt_price_x96_to_price(get_sqrt_ratio_at_tick(tick))
            assert price == pytest.approx(1.0001 ** tick, rel=1e-9)

    def test_negative_raises(self):
        with pytest.raises(ValueError):
            sqrt_price_x96_to_price(-1)


class TestAdjustApiPriceToUsd:
    """adjust_api_price_to_usd 테스트"""

    def test_eth_price(self):
        """ETH (18 decimals): 3.04e-9 × 10^12 ≈ 3040"""
        assert adjust_api_price_to_usd(3.04e-9, 18) == pytest.approx(3040.0)

    def test_stablecoin(self):
        """USDC (6 decimals): 조정 없음"""
        assert adjust_api_price_to_usd(1.0, 6) == pytest.approx(1.0)

    @pytest.mark.parametrize("raw", [0.0, -1.0, math.inf, math.nan, 1e-31, 1e31])
    def test_invalid_prices_map_to_zero(self, raw):
        assert adjust_api_price_to_usd(raw, 18) == 0.0
