"""Tests for the rcc-deploy operator script."""

import json
import logging
from pathlib import Path

from rcc_deployer.cli import build_parser, main


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args([])

        assert args.network == "local"
        assert args.account_index == 0
        assert args.contract == "RCCStake"
        assert args.timeout is None
        assert args.verify is False
        assert args.log_level == "INFO"


class TestMain:
    def test_deploys_and_prints_address(self, attach_identities, artifacts_dir: Path, capsys):
        exit_code = main(["--network", "local", "--artifacts", str(artifacts_dir)])

        assert exit_code == 0
        out = capsys.readouterr().out.strip()
        assert out.startswith("RCCStake address: 0x")
        assert len(out.split(": ")[1]) == 42
        assert attach_identities.sent == 1

    def test_verify_flag_runs_initial_state_checks(self, attach_identities, artifacts_dir: Path):
        exit_code = main(["--artifacts", str(artifacts_dir), "--verify", "--poll-interval", "0.01"])

        assert exit_code == 0
        assert attach_identities.count("eth_call") == 1

    def test_failed_verification_exits_nonzero(self, attach_identities, artifacts_dir: Path, capsys):
        attach_identities.set_view("poolLength()", ["uint256"], [4])

        exit_code = main(["--artifacts", str(artifacts_dir), "--verify"])

        assert exit_code == 1
        # The address is still reported: the contract exists
        assert "RCCStake address" in capsys.readouterr().out

    def test_unknown_network_exits_nonzero_without_network_calls(
        self, attach_identities, artifacts_dir: Path, capsys
    ):
        exit_code = main(["--network", "nonexistent", "--artifacts", str(artifacts_dir)])

        assert exit_code == 1
        assert attach_identities.methods == []
        assert capsys.readouterr().out == ""

    def test_missing_artifact_exits_nonzero(self, attach_identities, tmp_path: Path):
        assert main(["--artifacts", str(tmp_path)]) == 1
        assert attach_identities.methods == []

    def test_unreachable_node_exits_nonzero(self, attach_identities, artifacts_dir: Path):
        attach_identities.reachable = False

        assert main(["--artifacts", str(artifacts_dir)]) == 1

    def test_rejection_exits_nonzero(self, attach_identities, artifacts_dir: Path):
        attach_identities.reject_with = "insufficient funds for gas * price + value"

        assert main(["--artifacts", str(artifacts_dir)]) == 1
        assert attach_identities.sent == 0

    def test_timeout_exits_nonzero(self, attach_identities, artifacts_dir: Path, capsys):
        attach_identities.auto_mine = False

        exit_code = main(
            ["--artifacts", str(artifacts_dir), "--timeout", "0.05", "--poll-interval", "0.01"]
        )

        assert exit_code == 1
        assert attach_identities.sent == 1
        assert capsys.readouterr().out == ""

    def test_unknown_log_level_exits_nonzero(self, attach_identities, artifacts_dir: Path, caplog):
        with caplog.at_level(logging.ERROR, logger="rcc_deployer.cli"):
            exit_code = main(["--artifacts", str(artifacts_dir), "--log-level", "bogus"])

        assert exit_code == 1
        assert "Unknown log level: bogus" in caplog.text
        assert attach_identities.methods == []

    def test_log_level_is_case_insensitive(self, attach_identities, artifacts_dir: Path):
        assert main(["--artifacts", str(artifacts_dir), "--log-level", "debug"]) == 0

    def test_profiles_from_config_file(self, attach_identities, artifacts_dir: Path, tmp_path: Path):
        config = tmp_path / "networks.json"
        config.write_text(
            json.dumps(
                {
                    "devnet": {
                        "url": "http://127.0.0.1:8545",
                        "accounts": ["0x" + "44" * 32],
                        "chain_id": 31337,
                    }
                }
            )
        )

        exit_code = main(
            ["--network", "devnet", "--config", str(config), "--artifacts", str(artifacts_dir)]
        )

        assert exit_code == 0
        assert attach_identities.sent == 1

    def test_chain_id_mismatch_exits_nonzero(
        self, attach_identities, artifacts_dir: Path, tmp_path: Path
    ):
        config = tmp_path / "networks.json"
        config.write_text(
            json.dumps(
                {"mainnet-ish": {"url": "http://127.0.0.1:8545", "accounts": ["0x" + "44" * 32], "chain_id": 1}}
            )
        )

        exit_code = main(
            ["--network", "mainnet-ish", "--config", str(config), "--artifacts", str(artifacts_dir)]
        )

        assert exit_code == 1
        assert attach_identities.sent == 0
