"""
Command-line interface

Examples:
  # 틱 데이터 기반 정밀 견적 (JSON 입력)
  python -m v3_slippage quote pool.json --amount 1000000000000000000

  # TVL 기반 빠른 추정
  python -m v3_slippage estimate --amount 5000 --tvl 1000000 --fee-bps 30

  # 풀 목록 CSV → 슬리피지 테이블
  python -m v3_slippage table pools.csv --sizes 1000,5000,10000 --output table.csv
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import pandas as pd
from pydantic import ValidationError

from .batch import pool_slippage_table
from .config import settings
from .data.schemas import QuoteInput
from .data.types import PoolSummary, SwapRequest
from .estimator import cap_slippage, estimate_simple_slippage, slippage_label
from .simulator import calculate_swap_output

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="v3-slippage",
        description="집중 유동성 풀 스왑 슬리피지 추정",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--log-level", type=str, default=settings.LOG_LEVEL, help="로그 레벨 (기본: LOG_LEVEL)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # precise mode
    quote = subparsers.add_parser("quote", help="틱 유동성 기반 정밀 견적")
    quote.add_argument("input", type=str, help="풀 스냅샷 + 틱 목록 JSON 파일")
    quote.add_argument("--amount", type=int, required=True, help="입력량 (최소 단위)")
    quote.add_argument("--one-for-zero", action="store_true", help="token1 → token0 방향 (가격 상승)")
    quote.add_argument("--max-steps", type=int, default=None, help="반복 상한")
    quote.add_argument("--steps", action="store_true", help="스텝별 기록 포함")

    # fast path
    estimate = subparsers.add_parser("estimate", help="TVL 기반 선형 근사")
    estimate.add_argument("--amount", type=float, required=True, help="스왑 금액 (USD)")
    estimate.add_argument("--tvl", type=float, required=True, help="풀 TVL (USD)")
    estimate.add_argument("--fee-bps", type=float, default=None, help="수수료 bps (기본: 30)")

    # batch table
    table = subparsers.add_parser("table", help="풀 목록 CSV → 슬리피지 테이블")
    table.add_argument("input", type=str, help="풀 목록 CSV (pool_key_id, fee, fee_denominator, tvl_usd, ...)")
    table.add_argument("--sizes", type=str, default=None, help="거래 규모 USD (쉼표 구분)")
    table.add_argument("--target", type=float, default=None, help="목표 슬리피지 %%")
    table.add_argument("--range-width", type=float, default=None, help="유동성 범위 ±%%")
    table.add_argument("--output", type=str, default=None, help="결과 CSV 경로 (미지정시 stdout)")

    return parser


def run_quote(args: argparse.Namespace) -> int:
    payload = QuoteInput.model_validate_json(Path(args.input).read_text())
    pool = payload.pool.to_snapshot()
    ticks = payload.to_tick_deltas()

    logger.info("Quoting %d in %d ticks (zero_for_one=%s)", args.amount, len(ticks), not args.one_for_zero)
    result = calculate_swap_output(
        pool,
        ticks,
        SwapRequest(amount_in=args.amount, zero_for_one=not args.one_for_zero),
        max_steps=args.max_steps,
    )

    print(json.dumps(result.to_dict(include_steps=args.steps), indent=2))
    return 0


def run_estimate(args: argparse.Namespace) -> int:
    slippage = estimate_simple_slippage(args.amount, args.tvl, args.fee_bps)
    capped = cap_slippage(slippage)
    print(json.dumps({
        "amountInUSD": args.amount,
        "tvlUSD": args.tvl,
        "slippagePercent": slippage,
        "displaySlippagePercent": capped,
        "label": slippage_label(capped),
    }, indent=2))
    return 0


def run_table(args: argparse.Namespace) -> int:
    # 큰 정수(fee, sqrt_ratio, liquidity)는 문자열로 읽어 정밀도 유지
    rows = pd.read_csv(args.input, dtype=str, keep_default_na=False).to_dict(orient="records")
    pools = [PoolSummary.from_dict(row) for row in rows]

    kwargs = {}
    if args.sizes:
        kwargs["trade_sizes"] = [float(s.strip()) for s in args.sizes.split(",")]
    df = pool_slippage_table(
        pools,
        target_slippage=args.target,
        range_width_percent=args.range_width,
        **kwargs,
    )

    if args.output:
        df.to_csv(args.output, index=False)
        logger.info("Wrote %d pools to %s", len(df), args.output)
    else:
        print(df.to_csv(index=False), end="")
    return 0


COMMANDS = {
    "quote": run_quote,
    "estimate": run_estimate,
    "table": run_table,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return COMMANDS[args.command](args)
    except ValidationError as e:
        print(f"❌ 입력 형식 오류: {e}", file=sys.stderr)
        return 2
    except KeyError as e:
        print(f"❌ 필수 컬럼 누락: {e}", file=sys.stderr)
        return 2
    except (ValueError, OSError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
