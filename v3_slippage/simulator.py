"""
Swap Simulator - 틱 크로싱 스왑 시뮬레이션

풀의 틱별 유동성 분포를 따라 스왑을 단계별로 진행하여
예상 출력량, 가격 영향도, 슬리피지를 계산합니다 (precise mode).

알고리즘:
    1. 틱 유동성 변화량을 진행 방향으로 정렬 (zeroForOne: 내림차순)
    2. 다음 경계 틱의 sqrtPrice까지 compute_swap_step으로 진행
    3. 경계에 도달하면 틱 크로싱: liquidityNet 적용, 현재 틱 이동
    4. 입력 소진 / 유동성 소진 / 가격 한계 / 반복 상한 중 하나로 종료

References:
- Uniswap V3 Core: contracts/UniswapV3Pool.sol (swap 루프)
"""

import logging
from bisect import bisect_left, bisect_right
from typing import Iterable, List, Optional

from .config import settings
from .constants import MIN_TICK, MAX_TICK, MAX_TOKEN_DECIMALS
from .data.types import (
    PoolSnapshot,
    SwapRequest,
    SwapResult,
    SwapStatus,
    SwapStep,
    TickLiquidityDelta,
)
from .math.liquidity_math import apply_liquidity_net
from .math.sqrt_price_math import sqrt_price_x96_to_price
from .math.swap_math import compute_swap_step
from .math.tick_math import (
    MIN_SQRT_RATIO,
    MAX_SQRT_RATIO,
    clamp_tick,
    get_sqrt_ratio_at_tick,
    get_tick_at_sqrt_ratio,
)

logger = logging.getLogger(__name__)


def calculate_swap_output(
    pool: PoolSnapshot,
    tick_deltas: Iterable[TickLiquidityDelta],
    request: SwapRequest,
    max_steps: Optional[int] = None,
    far_boundary_ticks: Optional[int] = None,
) -> SwapResult:
    """틱 유동성 분포를 따라 스왑 결과 계산

    호출자의 tick_deltas는 변경하지 않습니다 (정렬된 복사본 사용).

    유동성 0, 빈 틱 목록, 반복 상한 도달은 예외가 아니라
    SwapResult.status로 표현됩니다.

    Args:
        pool: 풀 스냅샷
        tick_deltas: 틱별 liquidityNet 목록 (순서 무관, 틱당 하나)
        request: 스왑 요청 (amount_in, zero_for_one)
        max_steps: 반복 상한 (기본: settings.MAX_SWAP_STEPS)
        far_boundary_ticks: 틱 데이터 소진 시 가상 경계 거리 (기본: settings.FAR_BOUNDARY_TICKS)

    Returns:
        SwapResult

    Raises:
        ValueError: 음수 입력량, 잘못된 풀 스냅샷, 중복/비정렬/범위 밖 틱
    """
    if max_steps is None:
        max_steps = settings.MAX_SWAP_STEPS
    if far_boundary_ticks is None:
        far_boundary_ticks = settings.FAR_BOUNDARY_TICKS
    if max_steps <= 0:
        raise ValueError(f"max_steps는 양수여야 합니다: {max_steps}")
    if far_boundary_ticks <= 0:
        raise ValueError(f"far_boundary_ticks는 양수여야 합니다: {far_boundary_ticks}")

    _validate_pool(pool)
    if request.amount_in < 0:
        raise ValueError(f"입력량은 음수일 수 없습니다: {request.amount_in}")

    zero_for_one = request.zero_for_one
    schedule = _sorted_schedule(tick_deltas, pool.tick_spacing, zero_for_one)

    amount_remaining = request.amount_in
    amount_out = 0
    sqrt_price = pool.sqrt_price_x96
    liquidity = pool.liquidity
    tick = pool.tick
    used_synthetic = False
    steps: List[SwapStep] = []

    index = _first_tick_index(schedule, tick, zero_for_one)

    while True:
        if amount_remaining == 0:
            status = SwapStatus.FILLED
            break
        if liquidity == 0:
            status = SwapStatus.LIQUIDITY_EXHAUSTED
            break
        if len(steps) >= max_steps:
            status = SwapStatus.CAPPED
            logger.warning(
                "Swap simulation capped after %d steps (%d of %d input left)",
                len(steps), amount_remaining, request.amount_in
            )
            break

        if index < len(schedule):
            tick_next = schedule[index].tick
            liquidity_net = schedule[index].liquidity_delta
            synthetic = False
        else:
            # 틱 데이터 소진: 현재 틱에서 일정 거리 떨어진 가상 경계
            tick_next = clamp_tick(tick - far_boundary_ticks if zero_for_one else tick + far_boundary_ticks)
            liquidity_net = 0
            synthetic = True
            used_synthetic = True

        sqrt_price_target = get_sqrt_ratio_at_tick(tick_next)
        # 현재 가격 반대편에 있는 경계는 즉시 크로싱
        if zero_for_one:
            sqrt_price_target = min(sqrt_price_target, sqrt_price)
        else:
            sqrt_price_target = max(sqrt_price_target, sqrt_price)

        if synthetic and sqrt_price_target == sqrt_price:
            status = SwapStatus.PRICE_LIMIT
            break

        amount_in, amount_out_step, sqrt_price_next = compute_swap_step(
            sqrt_price, sqrt_price_target, liquidity, amount_remaining, zero_for_one
        )
        crossed = sqrt_price_next == sqrt_price_target

        steps.append(SwapStep(
            tick_next=tick_next,
            sqrt_price_start=sqrt_price,
            sqrt_price_target=sqrt_price_target,
            sqrt_price_next=sqrt_price_next,
            liquidity=liquidity,
            amount_remaining=amount_remaining,
            amount_in=amount_in,
            amount_out=amount_out_step,
            crossed=crossed,
            synthetic=synthetic,
        ))

        amount_remaining -= amount_in
        amount_out += amount_out_step
        sqrt_price = sqrt_price_next

        if crossed:
            if not synthetic:
                liquidity_after = apply_liquidity_net(liquidity, liquidity_net, zero_for_one)
                if liquidity_after < 0:
                    logger.warning(
                        "Liquidity went negative crossing tick %d (%d), clamping to 0",
                        tick_next, liquidity_after
                    )
                    liquidity_after = 0
                liquidity = liquidity_after
                index += 1
            tick = tick_next - pool.tick_spacing if zero_for_one else tick_next
            logger.debug("Crossed tick %d, liquidity=%d, remaining=%d", tick_next, liquidity, amount_remaining)

    return _build_result(pool, request, status, amount_out, amount_remaining, sqrt_price, used_synthetic, steps)


def _validate_pool(pool: PoolSnapshot) -> None:
    if pool.tick_spacing <= 0:
        raise ValueError(f"tick_spacing은 양수여야 합니다: {pool.tick_spacing}")
    if pool.liquidity < 0:
        raise ValueError(f"유동성은 음수일 수 없습니다: {pool.liquidity}")
    if pool.tick < MIN_TICK or pool.tick > MAX_TICK:
        raise ValueError(f"현재 틱이 유효 범위를 벗어났습니다: {pool.tick}")
    if pool.sqrt_price_x96 < MIN_SQRT_RATIO or pool.sqrt_price_x96 > MAX_SQRT_RATIO:
        raise ValueError(f"sqrtPriceX96이 유효 범위를 벗어났습니다: {pool.sqrt_price_x96}")
    for decimals in (pool.token0_decimals, pool.token1_decimals):
        if decimals < 0 or decimals > MAX_TOKEN_DECIMALS:
            raise ValueError(f"토큰 소수점 자릿수가 유효 범위를 벗어났습니다: {decimals} (범위: 0 ~ {MAX_TOKEN_DECIMALS})")


def _sorted_schedule(
    tick_deltas: Iterable[TickLiquidityDelta],
    tick_spacing: int,
    zero_for_one: bool
) -> List[TickLiquidityDelta]:
    """틱 목록 검증 후 진행 방향으로 정렬한 새 리스트 반환"""
    deltas = list(tick_deltas)
    seen = set()
    for delta in deltas:
        if delta.tick in seen:
            raise ValueError(f"중복된 틱: {delta.tick}")
        if delta.tick < MIN_TICK or delta.tick > MAX_TICK:
            raise ValueError(f"틱이 유효 범위를 벗어났습니다: {delta.tick}")
        if delta.tick % tick_spacing != 0:
            raise ValueError(f"틱 {delta.tick}이 tick_spacing {tick_spacing}의 배수가 아닙니다")
        seen.add(delta.tick)

    return sorted(deltas, key=lambda d: d.tick, reverse=zero_for_one)


def _first_tick_index(schedule: List[TickLiquidityDelta], tick: int, zero_for_one: bool) -> int:
    """진행 방향에서 처음 만나는 틱의 인덱스

    zeroForOne (내림차순): tick_i <= 현재 틱인 첫 항목
    oneForZero (오름차순): tick_i > 현재 틱인 첫 항목
    """
    if zero_for_one:
        negated = [-d.tick for d in schedule]
        return bisect_left(negated, -tick)
    return bisect_right([d.tick for d in schedule], tick)


def _build_result(
    pool: PoolSnapshot,
    request: SwapRequest,
    status: str,
    amount_out: int,
    amount_remaining: int,
    sqrt_price: int,
    used_synthetic: bool,
    steps: List[SwapStep],
) -> SwapResult:
    initial_price = sqrt_price_x96_to_price(pool.sqrt_price_x96, pool.token0_decimals, pool.token1_decimals)
    final_price = sqrt_price_x96_to_price(sqrt_price, pool.token0_decimals, pool.token1_decimals)

    price_impact = abs((final_price - initial_price) / initial_price) * 100 if initial_price > 0 else 0.0
    effective_price = amount_out / request.amount_in if request.amount_in > 0 else 0.0

    if sqrt_price < MAX_SQRT_RATIO:
        final_tick = get_tick_at_sqrt_ratio(sqrt_price)
    else:
        final_tick = MAX_TICK

    return SwapResult(
        expected_output=amount_out,
        price_impact_percent=price_impact,
        effective_price=effective_price,
        slippage_bps=price_impact * 100,
        status=status,
        amount_in_used=request.amount_in - amount_remaining,
        amount_in_remaining=amount_remaining,
        final_sqrt_price_x96=sqrt_price,
        final_tick=final_tick,
        used_synthetic_boundary=used_synthetic,
        steps=steps,
    )
