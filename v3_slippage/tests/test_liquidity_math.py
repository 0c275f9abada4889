"""
Liquidity Math 테스트
"""

from ..math.liquidity_math import apply_liquidity_net


class TestApplyLiquidityNet:
    """apply_liquidity_net 테스트"""

    def test_upward_crossing_adds(self):
        assert apply_liquidity_net(1000, 500, zero_for_one=False) == 1500
        assert apply_liquidity_net(1000, -500, zero_for_one=False) == 500

    def test_downward_crossing_subtracts(self):
        assert apply_liquidity_net(1000, 500, zero_for_one=True) == 500
        assert apply_liquidity_net(1000, -500, zero_for_one=True) == 1500

    def test_negative_result_is_returned(self):
        """음수 결과는 호출자가 처리"""
        assert apply_liquidity_net(100, 500, zero_for_one=True) == -400
