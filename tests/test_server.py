import random

import pytest

from mcp_tabletop_dice import server
from mcp_tabletop_dice.config import Settings


def _roll_twice(monkeypatch, seed):
    monkeypatch.setattr(server, "settings", Settings(rng_seed=seed))
    return server.roll_dice("4d6:dis3 +2"), server.roll_dice("4d6:dis3 +2")


def test_roll_dice_returns_total_and_table(monkeypatch):
    first, _ = _roll_twice(monkeypatch, 1234)

    assert first["rng"] == {"source": "Random"}
    kept = first["terms"][0]["kept"]
    assert first["total"] == sum(kept) + 2
    assert sorted(first["terms"][0]["rolls"])[:3] == sorted(kept)
    assert first["table"].splitlines()[-1].strip() == str(first["total"])


def test_seeded_server_replays_sequence_across_restarts(monkeypatch):
    run_a = _roll_twice(monkeypatch, 1234)
    run_b = _roll_twice(monkeypatch, 1234)

    assert [r["terms"] for r in run_a] == [r["terms"] for r in run_b]


def test_seeded_server_advances_between_requests(monkeypatch):
    monkeypatch.setattr(server, "settings", Settings(rng_seed=99))
    rolls = [tuple(server.roll_dice("10d20")["terms"][0]["rolls"]) for _ in range(5)]

    assert len(set(rolls)) > 1


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("other", "Error parsing `other`.\nInvalid token"),
        ("d0", "Error parsing `d0`.\nDie: Error parsing `0`."),
        ("4d6:other", "Modifier: Error parsing `other`.\nInvalid modifier"),
        ("", "No tokens to roll."),
    ],
)
def test_roll_dice_rejects_with_value_error(text, message):
    with pytest.raises(ValueError) as exc:
        server.roll_dice(text)
    assert message in str(exc.value)
    assert exc.value.__cause__ is None


def test_dice_help_lists_examples():
    text = server.dice_help()
    for example in ("d20", "4d6", "2d20:adv", "4d6:dis3"):
        assert example in text


def test_settings_make_rng():
    assert isinstance(Settings(rng_seed=None).make_rng(), random.SystemRandom)

    seeded = Settings(rng_seed=7)
    assert seeded.make_rng() is seeded.make_rng()
    assert seeded.make_rng().randint(1, 1000) == Settings(rng_seed=7).make_rng().randint(1, 1000)


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("DICE_RNG_SEED", "42")
    monkeypatch.setenv("DICE_SERVER_NAME", "table-dice")

    settings = Settings()
    assert settings.rng_seed == 42
    assert settings.server_name == "table-dice"
