# tests/test_cli.py
import json

import pytest
import yaml

from seasonchain.cli.cli import CLI

class TestCLI:
    @pytest.fixture
    def config_path(self, tmp_path):
        path = tmp_path / "simulator.yaml"
        with open(path, 'w') as f:
            yaml.dump({
                "emissions": {
                    "season_days": 0.01,
                    "target_block_interval_seconds": 1,
                    "total_emission": 1000,
                    "halving_epochs": 4
                },
                "ledger": {"starting_balance": 1e9}
            }, f)
        return str(path)

    def test_no_command_prints_help(self, capsys):
        assert CLI().main([]) == 1
        assert "usage" in capsys.readouterr().out

    def test_preview(self, config_path, capsys):
        assert CLI().main(["--config", config_path, "preview"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["total_blocks"] == 864
        assert data["halving_heights"] == [216, 432, 648]

    def test_audit(self, config_path, capsys):
        assert CLI().main(["--config", config_path, "audit"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["passed"] is True
        assert data["final_height"] <= 864

    def test_simulate_blocks(self, config_path, capsys):
        assert CLI().main(["--config", config_path, "simulate", "--blocks", "5", "--seed", "1"]) == 0
        out = capsys.readouterr().out
        assert "Produced 5 blocks, height 5" in out
        assert "Season ended: False" in out

    def test_simulate_to_season_end(self, config_path, capsys):
        args = ["--config", config_path, "simulate", "--blocks", "0", "--seed", "1", "--buy", "antminer-s9"]
        assert CLI().main(args) == 0
        out = capsys.readouterr().out
        assert "Season ended: True" in out
        assert "demo-user" in out

    def test_simulate_purchase_error(self, tmp_path, capsys):
        # Default starting balance cannot cover a rig priced at the reference reward
        path = str(tmp_path / "defaults.yaml")
        assert CLI().main(["--config", path, "simulate", "--blocks", "1", "--buy", "antminer-s9"]) == 2
        assert "Insufficient balance" in capsys.readouterr().err

    def test_invalid_config(self, tmp_path, capsys):
        path = tmp_path / "bad.yaml"
        path.write_text("emissions:\n  season_days: 7\n")
        assert CLI().main(["--config", str(path), "preview"]) == 2
        assert "Error" in capsys.readouterr().err
