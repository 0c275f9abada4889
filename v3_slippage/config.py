"""
Configuration settings for the slippage simulator

Loads environment variables and provides simulation defaults.
"""
import os

from dotenv import load_dotenv

from .constants import (
    DEFAULT_FEE_BPS,
    FAR_BOUNDARY_TICKS,
    MAX_SWAP_STEPS,
)

# Load environment variables from .env file
load_dotenv()


class Settings:
    """Simulation settings"""

    # Swap simulation
    MAX_SWAP_STEPS: int = int(os.getenv("SLIPPAGE_MAX_SWAP_STEPS", MAX_SWAP_STEPS))
    FAR_BOUNDARY_TICKS: int = int(os.getenv("SLIPPAGE_FAR_BOUNDARY_TICKS", FAR_BOUNDARY_TICKS))

    # Fast-path estimator
    DEFAULT_FEE_BPS: float = float(os.getenv("SLIPPAGE_DEFAULT_FEE_BPS", DEFAULT_FEE_BPS))
    TARGET_SLIPPAGE: float = float(os.getenv("SLIPPAGE_TARGET", 0.5))
    RANGE_WIDTH_PERCENT: float = float(os.getenv("SLIPPAGE_RANGE_WIDTH", 0.5))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "WARNING").upper()


# Create global settings instance
settings = Settings()


# Validate critical settings on import
if settings.MAX_SWAP_STEPS <= 0:
    raise ValueError(f"SLIPPAGE_MAX_SWAP_STEPS must be positive, got {settings.MAX_SWAP_STEPS}")
if settings.FAR_BOUNDARY_TICKS <= 0:
    raise ValueError(f"SLIPPAGE_FAR_BOUNDARY_TICKS must be positive, got {settings.FAR_BOUNDARY_TICKS}")
