"""
슬리피지 시뮬레이터 데이터 타입 정의

외부 저장소(풀 상태, 틱 유동성 테이블)에서 넘어오는 데이터와
시뮬레이션 결과를 Python dataclass로 정의.
모든 온체인 수량 필드는 정밀도를 위해 int 타입 사용.
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Union


def _to_int(value: Union[int, str]) -> int:
    """int 또는 10진/16진 문자열을 int로 변환 (uint256/int128 값은 문자열로 전달됨)"""
    if isinstance(value, str):
        value = value.strip()
        if value.lower().startswith(("0x", "-0x")):
            return int(value, 16)
        return int(value)
    return int(value)


def _first(data: dict, *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


@dataclass(frozen=True)
class PoolSnapshot:
    """시뮬레이션 호출 시점의 풀 상태 스냅샷

    - tick: 현재 틱 인덱스 (i_c)
    - sqrt_price_x96: 현재 √가격 (Q96 인코딩)
    - liquidity: 현재 틱에서 활성화된 유동성 (L)
    - tick_spacing: 틱 간격
    """
    tick: int
    sqrt_price_x96: int
    liquidity: int
    tick_spacing: int
    token0_decimals: int = 18
    token1_decimals: int = 18

    @classmethod
    def from_dict(cls, data: dict) -> "PoolSnapshot":
        return cls(
            tick=int(_first(data, "currentTick", "current_tick", "tick")),
            sqrt_price_x96=_to_int(_first(data, "currentSqrtPrice", "sqrt_ratio", "sqrtPrice", "sqrt_price_x96")),
            liquidity=_to_int(_first(data, "currentLiquidity", "liquidity")),
            tick_spacing=int(_first(data, "tickSpacing", "tick_spacing")),
            token0_decimals=int(_first(data, "token0Decimals", "token0_decimals", default=18)),
            token1_decimals=int(_first(data, "token1Decimals", "token1_decimals", default=18)),
        )


@dataclass(frozen=True)
class TickLiquidityDelta:
    """틱별 유동성 변화량 (liquidityNet, ΔL)

    가격이 위로 틱을 지날 때 활성 유동성에 더해지는 값.
    """
    tick: int
    liquidity_delta: int

    @classmethod
    def from_dict(cls, data: dict) -> "TickLiquidityDelta":
        return cls(
            tick=int(_first(data, "tick", "tickIdx")),
            liquidity_delta=_to_int(_first(data, "liquidityDelta", "liquidity_delta", "liquidityNet")),
        )


@dataclass(frozen=True)
class SwapRequest:
    """스왑 요청

    - amount_in: 입력 토큰 수량 (최소 단위)
    - zero_for_one: True면 token0 → token1 (가격 하락)
    """
    amount_in: int
    zero_for_one: bool = True


class SwapStatus:
    """스왑 시뮬레이션 종료 상태"""
    FILLED = "filled"                            # 입력 전부 소진 (정상)
    LIQUIDITY_EXHAUSTED = "liquidity_exhausted"  # 활성 유동성 0
    PRICE_LIMIT = "price_limit"                  # 가격이 MIN/MAX 틱에 도달
    CAPPED = "capped"                            # 반복 상한 도달 (근사값)


@dataclass
class SwapStep:
    """스왑 루프 한 스텝 기록"""
    tick_next: int
    sqrt_price_start: int
    sqrt_price_target: int
    sqrt_price_next: int
    liquidity: int
    amount_remaining: int  # 스텝 이전 남은 입력량
    amount_in: int
    amount_out: int
    crossed: bool
    synthetic: bool  # 틱 데이터가 끝나 가상 경계를 사용했는지


@dataclass
class SwapResult:
    """스왑 시뮬레이션 결과"""
    expected_output: int
    price_impact_percent: float
    effective_price: float
    slippage_bps: float
    status: str = SwapStatus.FILLED
    amount_in_used: int = 0
    amount_in_remaining: int = 0
    final_sqrt_price_x96: int = 0
    final_tick: int = 0
    used_synthetic_boundary: bool = False
    steps: List[SwapStep] = field(default_factory=list)

    @property
    def is_partial(self) -> bool:
        """입력을 전부 소진하지 못했는지"""
        return self.status != SwapStatus.FILLED

    @property
    def is_approximate(self) -> bool:
        """반복 상한 도달 또는 가상 경계 사용 시 근사값으로 취급"""
        return self.status == SwapStatus.CAPPED or self.used_synthetic_boundary

    def to_dict(self, include_steps: bool = False) -> Dict[str, Any]:
        data = {
            "expectedOutput": str(self.expected_output),
            "priceImpactPercent": self.price_impact_percent,
            "effectivePrice": self.effective_price,
            "slippageBps": self.slippage_bps,
            "status": self.status,
            "amountInUsed": str(self.amount_in_used),
            "amountInRemaining": str(self.amount_in_remaining),
            "finalSqrtPriceX96": str(self.final_sqrt_price_x96),
            "finalTick": self.final_tick,
            "isPartial": self.is_partial,
            "isApproximate": self.is_approximate,
            "stepCount": len(self.steps),
        }
        if include_steps:
            data["steps"] = [
                {k: (str(v) if isinstance(v, int) and not isinstance(v, bool) else v)
                 for k, v in asdict(step).items()}
                for step in self.steps
            ]
        return data


@dataclass
class PoolSummary:
    """저장소에서 조회한 풀 요약 행 (대시보드 테이블용)

    fee / fee_denominator는 문자열로 저장된 큰 정수입니다.
    """
    pool_key_id: str
    token0: str
    token1: str
    fee: int
    fee_denominator: int
    tick_spacing: int
    current_tick: int
    tvl_usd: float = 0.0
    token0_symbol: str = "Unknown"
    token1_symbol: str = "Unknown"
    token0_decimals: int = 18
    token1_decimals: int = 18
    token0_price_usd: float = 0.0
    token1_price_usd: float = 0.0
    sqrt_ratio: int = 0
    liquidity: int = 0
    chain_id: Optional[str] = None

    def to_snapshot(self) -> PoolSnapshot:
        return PoolSnapshot(
            tick=self.current_tick,
            sqrt_price_x96=self.sqrt_ratio,
            liquidity=self.liquidity,
            tick_spacing=self.tick_spacing,
            token0_decimals=self.token0_decimals,
            token1_decimals=self.token1_decimals,
        )

    @classmethod
    def from_dict(cls, data: dict) -> "PoolSummary":
        return cls(
            pool_key_id=str(data["pool_key_id"]),
            token0=str(data.get("token0", "")),
            token1=str(data.get("token1", "")),
            fee=_to_int(data["fee"]),
            fee_denominator=_to_int(data["fee_denominator"]),
            tick_spacing=int(data["tick_spacing"]),
            current_tick=int(data["current_tick"]),
            tvl_usd=float(data.get("tvl_usd") or 0),
            token0_symbol=data.get("token0_symbol") or "Unknown",
            token1_symbol=data.get("token1_symbol") or "Unknown",
            token0_decimals=int(data.get("token0_decimals") or 18),
            token1_decimals=int(data.get("token1_decimals") or 18),
            token0_price_usd=float(data.get("token0_price_usd") or 0),
            token1_price_usd=float(data.get("token1_price_usd") or 0),
            sqrt_ratio=_to_int(data.get("sqrt_ratio") or 0),
            liquidity=_to_int(data.get("liquidity") or 0),
            chain_id=str(data["chain_id"]) if data.get("chain_id") else None,
        )


@dataclass
class RequiredLiquidity:
    """목표 슬리피지 달성에 필요한 집중 유동성 추정치"""
    capital_needed: float
    efficiency: float
    range_width_percent: float
    current_price_impact: float
    target_price_impact: float
    target_slippage: float
    lower_price: Optional[float] = None
    upper_price: Optional[float] = None
