from twentyone.cli import build_config, build_parser, build_supply, main
from twentyone.supply.local import LocalCardSupply
from twentyone.supply.remote import DEFAULT_BASE_URL, RemoteCardSupply


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.balance == 1000
    assert args.decks == 6
    assert args.rounds is None
    assert not args.remote
    assert args.base_url == DEFAULT_BASE_URL
    assert args.seed is None
    assert args.log_file is None
    assert args.log_level == "WARNING"


def test_build_config():
    args = build_parser().parse_args(["--balance", "500", "--decks", "2"])
    config = build_config(args)
    assert config["starting_balance"] == 500
    assert config["deck_count"] == 2
    assert config["bet_unit"] == 10
    assert config["reshuffle_fraction"] == 0.4


def test_build_local_supply():
    supply = build_supply(build_parser().parse_args(["--seed", "7"]))
    assert isinstance(supply, LocalCardSupply)


def test_build_remote_supply():
    args = build_parser().parse_args(["--remote", "--base-url", "http://localhost:8000/api/deck/"])
    supply = build_supply(args)
    try:
        assert isinstance(supply, RemoteCardSupply)
        assert supply.base_url == "http://localhost:8000/api/deck"
    finally:
        supply.close()


def test_main_plays_one_round(mocker, capsys):
    # Bet, then stand if the deal leaves a decision
    mocker.patch("builtins.input", side_effect=["100", "s", "", ""])

    assert main(["--seed", "3", "--rounds", "1"]) == 0

    out = capsys.readouterr().out
    assert "=== Round 1" in out
    assert "Final balance" in out


def test_main_writes_transcript(mocker, tmp_path):
    log_file = tmp_path / "table.log"
    mocker.patch("builtins.input", side_effect=[""])

    assert main(["--log-file", str(log_file)]) == 0
    assert log_file.read_text(encoding="utf-8").startswith("Balance 1000.")
