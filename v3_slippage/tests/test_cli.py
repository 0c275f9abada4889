"""
CLI 테스트
"""

import json

from ..cli import main
from ..constants import Q96


class TestEstimateCommand:
    def test_estimate(self, capsys):
        assert main(["estimate", "--amount", "1000", "--tvl", "1000000", "--fee-bps", "30"]) == 0
        data = json.loads(capsys.readouterr().out)

        assert abs(data["slippagePercent"] - 0.4) < 1e-9
        assert data["label"] == "Excellent"

    def test_estimate_display_cap(self, capsys):
        assert main(["estimate", "--amount", "2000000", "--tvl", "1000000"]) == 0
        data = json.loads(capsys.readouterr().out)

        assert data["slippagePercent"] > 100
        assert data["displaySlippagePercent"] == 100.0
        assert data["label"] == "High"

    def test_negative_amount(self, capsys):
        assert main(["estimate", "--amount", "-1", "--tvl", "1000"]) == 1
        assert "❌" in capsys.readouterr().err


class TestQuoteCommand:
    def write_input(self, tmp_path, liquidity):
        path = tmp_path / "pool.json"
        path.write_text(json.dumps({
            "pool": {
                "currentTick": 0,
                "currentSqrtPrice": str(Q96),
                "currentLiquidity": str(liquidity),
                "tickSpacing": 60,
            },
            "ticks": [{"tick": -60, "liquidityDelta": str(liquidity)}],
        }))
        return path

    def test_quote(self, tmp_path, capsys):
        path = self.write_input(tmp_path, 10 ** 18)
        assert main(["quote", str(path), "--amount", "1000000000000", "--steps"]) == 0
        data = json.loads(capsys.readouterr().out)

        assert data["status"] == "filled"
        assert int(data["expectedOutput"]) > 0
        assert data["stepCount"] == len(data["steps"])

    def test_quote_liquidity_exhausted(self, tmp_path, capsys):
        path = self.write_input(tmp_path, 10 ** 18)
        assert main(["quote", str(path), "--amount", str(10 ** 30)]) == 0
        data = json.loads(capsys.readouterr().out)

        assert data["status"] == "liquidity_exhausted"
        assert data["isPartial"] is True
        assert data["finalTick"] == -60

    def test_invalid_input(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text('{"pool": {"currentTick": 0}}')
        assert main(["quote", str(path), "--amount", "1"]) == 2
        assert "❌" in capsys.readouterr().err

    def test_missing_file(self, tmp_path):
        assert main(["quote", str(tmp_path / "missing.json"), "--amount", "1"]) == 1


class TestTableCommand:
    def test_table(self, tmp_path):
        source = tmp_path / "pools.csv"
        source.write_text(
            "pool_key_id,token0,token1,fee,fee_denominator,tick_spacing,current_tick,tvl_usd,token0_symbol\n"
            "a,0x1,0x2,3000,1000000,60,0,100000,WETH\n"
            "b,0x1,0x3,500,1000000,10,5,1000000,\n"
        )
        output = tmp_path / "table.csv"
        assert main(["table", str(source), "--sizes", "1000,5000", "--output", str(output)]) == 0

        lines = output.read_text().splitlines()
        header = lines[0].split(",")
        assert "slippage_1000" in header and "liquidity_needed_5000" in header
        assert lines[1].startswith("b,")
        assert len(lines) == 3

    def test_table_missing_column(self, tmp_path, capsys):
        source = tmp_path / "pools.csv"
        source.write_text("pool_key_id,tvl_usd\na,1000\n")
        assert main(["table", str(source)]) == 2
