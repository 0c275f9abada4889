"""
Swap Math - 단일 스왑 스텝 계산

하나의 틱 구간(현재 가격 → 목표 경계 가격) 안에서 소비되는 입력량,
받는 출력량, 스텝 후 가격을 계산합니다. 구간 내 유동성은 일정합니다.

Notation:
    sc = 현재 sqrtPriceX96
    st = 목표 sqrtPriceX96 (틱 경계)
    L  = 활성 유동성

입력량 상한 (목표 가격까지 이동하는 데 필요한 입력):
    zeroForOne: L * (sc - st) / sc
    oneForZero: L * (st - sc) / Q96

부분 스텝 (경계 전에 입력 a 소진) 후 가격:
    zeroForOne: sc - a * sc / L
    oneForZero: sc + a * Q96 / L
"""

from typing import Tuple

from ..constants import Q96


def compute_swap_step(
    sqrt_price_current: int,
    sqrt_price_target: int,
    liquidity: int,
    amount_remaining: int,
    zero_for_one: bool
) -> Tuple[int, int, int]:
    """한 구간에서의 스왑 스텝 계산

    남은 입력이 경계까지 가는 데 필요한 양 이상이면 경계까지 이동하고,
    아니면 남은 입력을 전부 소비하고 구간 내부에서 멈춥니다.

    Args:
        sqrt_price_current: 현재 sqrtPriceX96
        sqrt_price_target: 목표 경계 sqrtPriceX96
        liquidity: 활성 유동성
        amount_remaining: 남은 입력량
        zero_for_one: True면 token0 → token1 (가격 하락)

    Returns:
        (amount_in, amount_out, sqrt_price_next) 튜플
        - amount_in <= amount_remaining
        - sqrt_price_next는 현재 가격과 목표 가격 사이 (경계 포함)

    Raises:
        ValueError: 음수 입력, 0 이하 가격, 방향과 반대쪽 목표 가격
    """
    if liquidity < 0:
        raise ValueError(f"유동성은 음수일 수 없습니다: {liquidity}")
    if amount_remaining < 0:
        raise ValueError(f"남은 입력량은 음수일 수 없습니다: {amount_remaining}")
    if sqrt_price_current <= 0 or sqrt_price_target <= 0:
        raise ValueError(
            f"sqrtPriceX96은 양수여야 합니다: current={sqrt_price_current}, target={sqrt_price_target}"
        )
    if zero_for_one and sqrt_price_target > sqrt_price_current:
        raise ValueError("zeroForOne 스왑의 목표 가격이 현재 가격보다 높습니다")
    if not zero_for_one and sqrt_price_target < sqrt_price_current:
        raise ValueError("oneForZero 스왑의 목표 가격이 현재 가격보다 낮습니다")

    if liquidity == 0:
        return 0, 0, sqrt_price_current

    if zero_for_one:
        amount_in_max = liquidity * (sqrt_price_current - sqrt_price_target) // sqrt_price_current
    else:
        amount_in_max = liquidity * (sqrt_price_target - sqrt_price_current) // Q96

    if amount_remaining >= amount_in_max:
        # 경계까지 이동 (틱 크로싱)
        amount_in = amount_in_max
        sqrt_price_next = sqrt_price_target
    else:
        # 경계 전에 입력 소진
        amount_in = amount_remaining
        if zero_for_one:
            # amount_in_max 관계식의 역: sc - a * sc / L
            # 가격 이동량 올림: 출력량이 정확한 값 이상이 되는 쪽 (트레이더 유리)
            price_delta = -(-amount_in * sqrt_price_current // liquidity)
            sqrt_price_next = sqrt_price_current - price_delta
        else:
            sqrt_price_next = sqrt_price_current + amount_in * Q96 // liquidity

    if zero_for_one:
        amount_out = liquidity * (sqrt_price_current - sqrt_price_next) // Q96
    else:
        amount_out = liquidity * (sqrt_price_next - sqrt_price_current) // sqrt_price_next

    return amount_in, amount_out, sqrt_price_next
