"""
슬리피지 시뮬레이터 상수 정의

고정소수점 가격 표현과 시뮬레이션 한계값:
- Q96: sqrt price 인코딩에 사용 (2^96)
- MIN_TICK / MAX_TICK: 유효 틱 범위
- FAR_BOUNDARY_TICKS: 틱 데이터가 끝났을 때 사용하는 가상 경계 거리
- MAX_SWAP_STEPS: 스왑 루프 반복 상한
"""

from typing import Tuple

# Fixed-point 인코딩 상수
Q96: int = 2 ** 96
Q192: int = 2 ** 192

# 틱 범위 상수
MIN_TICK: int = -887272
MAX_TICK: int = 887272

# 시뮬레이션 기본값
FAR_BOUNDARY_TICKS: int = 10_000
MAX_SWAP_STEPS: int = 1000

# 기본 수수료 (basis points, 30 = 0.30%)
DEFAULT_FEE_BPS: float = 30

# 슬리피지 계산 결과 상한 (퍼센트)
MAX_SLIPPAGE_PERCENT: float = 100.0

# 배치 테이블 기본 거래 규모 (USD)
DEFAULT_TRADE_SIZES_USD: Tuple[int, ...] = (1000, 5000, 10000, 50000)

# 토큰 소수점 자릿수 상한 (10^77 < 2^256, float 변환 가능 범위)
MAX_TOKEN_DECIMALS: int = 77
