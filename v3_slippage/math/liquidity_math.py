"""
Liquidity Math - 틱 크로싱 시 활성 유동성 갱신

References:
- Uniswap V3 Core: contracts/libraries/LiquidityMath.sol
- 백서 Section 6.3: liquidityNet (ΔL)

liquidityNet은 가격이 "위로" 틱을 지날 때의 유동성 변화량입니다.
    위로 크로싱 (oneForZero): L' = L + ΔL
    아래로 크로싱 (zeroForOne): L' = L - ΔL
"""


def apply_liquidity_net(liquidity: int, liquidity_net: int, zero_for_one: bool) -> int:
    """틱 크로싱 후 활성 유동성 계산

    결과가 음수이면 그대로 반환합니다. 음수 처리(거부 또는 0으로 제한)는
    호출자가 결정합니다.

    Args:
        liquidity: 현재 활성 유동성
        liquidity_net: 틱의 liquidityNet (부호 있음)
        zero_for_one: True면 가격 하락 방향 크로싱

    Returns:
        크로싱 후 유동성
    """
    if zero_for_one:
        return liquidity - liquidity_net
    return liquidity + liquidity_net
