"""
Fast Slippage Estimator 테스트
"""

import pytest

from ..config import settings
from ..estimator import (
    estimate_simple_slippage,
    cap_slippage,
    fee_percent,
    capital_efficiency,
    price_bounds,
    required_liquidity,
    slippage_label,
    tvl_usd_from_balances,
)


class TestEstimateSimpleSlippage:
    """estimate_simple_slippage 테스트"""

    def test_small_trade(self):
        """$1K / $1M TVL / 30 bps → 0.1 + 0.3 = 0.4%"""
        assert estimate_simple_slippage(1000, 1_000_000, 30) == pytest.approx(0.4)

    def test_large_trade(self):
        """$50K / $1M TVL / 30 bps → 5 + 0.3 = 5.3%"""
        assert estimate_simple_slippage(50000, 1_000_000, 30) == pytest.approx(5.3)

    def test_zero_tvl(self):
        """TVL 0 → 100%"""
        assert estimate_simple_slippage(1000, 0, 30) == 100.0

    def test_large_trade_not_clamped(self):
        """$2M / $1M TVL → 200.3% (상한 없음)"""
        assert estimate_simple_slippage(2_000_000, 1_000_000, 30) == pytest.approx(200.3)

    def test_default_fee(self):
        assert estimate_simple_slippage(1000, 1_000_000) == pytest.approx(0.4)

    def test_default_fee_from_settings(self, monkeypatch):
        """fee_bps 생략 시 settings.DEFAULT_FEE_BPS 사용"""
        monkeypatch.setattr(settings, "DEFAULT_FEE_BPS", 5.0)
        assert estimate_simple_slippage(1000, 1_000_000) == pytest.approx(0.15)
        assert estimate_simple_slippage(1000, 1_000_000, 30) == pytest.approx(0.4)

    def test_zero_amount_is_fee_only(self):
        assert estimate_simple_slippage(0, 1_000_000, 5) == pytest.approx(0.05)

    def test_monotonic_in_amount(self):
        values = [estimate_simple_slippage(a, 1_000_000, 30) for a in [100, 1000, 10_000, 100_000]]
        assert values == sorted(values)

    def test_monotonic_in_tvl(self):
        values = [estimate_simple_slippage(10_000, tvl, 30) for tvl in [10_000, 100_000, 1_000_000]]
        assert values == sorted(values, reverse=True)

    @pytest.mark.parametrize("args", [(-1, 1000, 30), (1, -1000, 30), (1, 1000, -1)])
    def test_negative_inputs_raise(self, args):
        with pytest.raises(ValueError):
            estimate_simple_slippage(*args)


class TestHelpers:
    """보조 함수 테스트"""

    def test_cap_slippage(self):
        assert cap_slippage(200.3) == 100.0
        assert cap_slippage(0.4) == 0.4

    def test_fee_percent(self):
        assert fee_percent(3000, 1_000_000) == pytest.approx(0.3)
        assert fee_percent(500, 1_000_000) == pytest.approx(0.05)
        with pytest.raises(ValueError):
            fee_percent(3000, 0)

    def test_capital_efficiency(self):
        """±0.5% → 100x, ±0.1% → 500x"""
        assert capital_efficiency(0.5) == pytest.approx(100.0)
        assert capital_efficiency(0.1) == pytest.approx(500.0)
        with pytest.raises(ValueError):
            capital_efficiency(0)

    def test_price_bounds(self):
        lower, upper = price_bounds(3000, 0.5)
        assert lower == pytest.approx(2985.0)
        assert upper == pytest.approx(3015.0)

    @pytest.mark.parametrize("slippage,label", [
        (0.1, "Excellent"),
        (0.5, "Good"),
        (0.99, "Good"),
        (1.0, "Moderate"),
        (4.9, "Moderate"),
        (5.0, "High"),
        (100.0, "High"),
    ])
    def test_slippage_label(self, slippage, label):
        assert slippage_label(slippage) == label

    def test_tvl_from_balances(self):
        """1 ETH ($3000) + 3000 USDC ($1) = $6000"""
        tvl = tvl_usd_from_balances(10 ** 18, 3000 * 10 ** 6, 18, 6, 3000.0, 1.0)
        assert tvl == pytest.approx(6000.0)


class TestRequiredLiquidity:
    """required_liquidity 테스트"""

    def test_basic(self):
        """$100K, 목표 0.5%, 수수료 0.3% → 유효 TVL 5e7 필요"""
        needed = required_liquidity(100_000, 57_000, 0.3, target_slippage=0.5, range_width_percent=0.5)

        assert needed is not None
        assert needed.target_price_impact == pytest.approx(0.2)
        assert needed.efficiency == pytest.approx(100.0)
        assert needed.current_price_impact == pytest.approx(100_000 / 57_000 * 100)
        assert needed.capital_needed == pytest.approx((50_000_000 - 57_000) / 100)
        assert needed.lower_price is None

    def test_already_deep_enough(self):
        needed = required_liquidity(1000, 10_000_000, 0.05, target_slippage=0.5)
        assert needed.capital_needed == 0.0

    def test_fee_exceeds_target(self):
        """수수료만으로 목표 초과 → None"""
        assert required_liquidity(1000, 1_000_000, 1.0, target_slippage=0.5) is None
        assert required_liquidity(1000, 1_000_000, 0.5, target_slippage=0.5) is None

    def test_zero_tvl(self):
        needed = required_liquidity(1000, 0, 0.3, target_slippage=0.5, range_width_percent=0.5)
        assert needed.current_price_impact == 100.0
        assert needed.capital_needed == pytest.approx(1000 * 100 / 0.2 / 100)

    def test_price_range(self):
        needed = required_liquidity(
            1000, 1_000_000, 0.3, target_slippage=0.5, range_width_percent=0.5, token0_price_usd=3000.0
        )
        assert needed.lower_price == pytest.approx(2985.0)
        assert needed.upper_price == pytest.approx(3015.0)
