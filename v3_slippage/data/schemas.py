"""
Quote Input Schemas using Pydantic

Defines the JSON document accepted by the `quote` command:
a pool snapshot plus its tick-liquidity schedule.
"""
from typing import List

from pydantic import BaseModel, Field

from ..constants import MAX_TOKEN_DECIMALS
from .types import PoolSnapshot, TickLiquidityDelta


class PoolSnapshotInput(BaseModel):
    """Pool state at quote time"""
    current_tick: int = Field(..., alias="currentTick", description="Current tick index")
    current_sqrt_price: int = Field(..., alias="currentSqrtPrice", description="Current sqrtPriceX96 (Q64.96)", gt=0)
    current_liquidity: int = Field(..., alias="currentLiquidity", description="Active liquidity at the current tick", ge=0)
    tick_spacing: int = Field(..., alias="tickSpacing", description="Tick spacing of the pool", gt=0)
    token0_decimals: int = Field(default=18, alias="token0Decimals", description="token0 decimals", ge=0, le=MAX_TOKEN_DECIMALS)
    token1_decimals: int = Field(default=18, alias="token1Decimals", description="token1 decimals", ge=0, le=MAX_TOKEN_DECIMALS)

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "currentTick": 0,
                "currentSqrtPrice": "79228162514264337593543950336",
                "currentLiquidity": "79228162514264337593543950336000000",
                "tickSpacing": 1
            }
        }

    def to_snapshot(self) -> PoolSnapshot:
        return PoolSnapshot(
            tick=self.current_tick,
            sqrt_price_x96=self.current_sqrt_price,
            liquidity=self.current_liquidity,
            tick_spacing=self.tick_spacing,
            token0_decimals=self.token0_decimals,
            token1_decimals=self.token1_decimals,
        )


class TickDeltaInput(BaseModel):
    """Net liquidity change at an initialized tick"""
    tick: int = Field(..., description="Tick index (multiple of tick spacing)")
    liquidity_delta: int = Field(..., alias="liquidityDelta", description="Signed liquidityNet for upward crossing")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "tick": -60,
                "liquidityDelta": "-1000000000000000000"
            }
        }

    def to_delta(self) -> TickLiquidityDelta:
        return TickLiquidityDelta(tick=self.tick, liquidity_delta=self.liquidity_delta)


class QuoteInput(BaseModel):
    """Input document for a precise swap quote"""
    pool: PoolSnapshotInput = Field(..., description="Pool snapshot")
    ticks: List[TickDeltaInput] = Field(default_factory=list, description="Tick liquidity schedule (any order)")

    class Config:
        json_schema_extra = {
            "example": {
                "pool": {
                    "currentTick": 0,
                    "currentSqrtPrice": "79228162514264337593543950336",
                    "currentLiquidity": "79228162514264337593543950336000000",
                    "tickSpacing": 1
                },
                "ticks": [
                    {"tick": -60, "liquidityDelta": "-1000000000000000000"}
                ]
            }
        }

    def to_tick_deltas(self) -> List[TickLiquidityDelta]:
        return [t.to_delta() for t in self.ticks]
