import json
from decimal import Decimal

import pytest

from endzone_trades.services.valuation import EndzoneValueModel, scale_value
from endzone_trades.services.valuation_tables import load_valuation_tables

# 400, 390, ..., 210
POOL = [float(400 - 10 * i) for i in range(20)]


def _model(tables, is_dynasty=False, pool=POOL):
    return EndzoneValueModel(tables, projection_pool=pool, is_dynasty=is_dynasty)


def test_scale_value_rounds_half_up():
    assert scale_value(950, 0.93) == 884
    assert scale_value(940, Decimal("1.075")) == 1011
    assert scale_value(5, 0.5) == 3


def test_rank_counts_strictly_greater_projections(tables):
    model = _model(tables)
    assert model.rank(400) == 1
    assert model.rank(390) == 2
    assert model.rank(395) == 2
    assert model.rank(100) == 21


def test_base_value_is_pool_percentile(tables):
    model = _model(tables)
    assert model.base_value(400) == 1000
    assert model.base_value(390) == 950
    assert model.base_value(210) == 50


def test_projection_below_pool_is_worth_nothing(tables):
    model = _model(tables)
    assert model.base_value(100) == 0
    assert model.value(100, "WR", "Nobody") == 0


def test_empty_pool_falls_back_to_scaled_points(tables):
    model = _model(tables, pool=[])
    assert model.pool_size == 0
    assert model.base_value(12.34) == 123
    assert model.base_value(12.35) == 124


def test_non_positive_pool_entries_are_ignored(tables):
    model = _model(tables, pool=[0, -5, 100])
    assert model.pool_size == 1


def test_zero_projection_has_zero_value(tables):
    assert _model(tables).value(0, "QB", "Josh Allen", age=28) == 0


def test_s_tier_qb_example(tables):
    # rank 2 of 20 -> 950, then the S-tier multiplier
    model = _model(tables)
    assert model.base_value(390) == 950
    assert model.value(390, "QB", "Josh Allen") == 884


def test_redraft_age_adjustment_is_halved(tables):
    model = _model(tables)
    # 1000 * 0.94 -> 940, then +15% at half impact
    assert model.value(400, "RB", "Young Back", age=23) == 1011


def test_dynasty_young_rb_gets_age_bonus_and_position_multiplier(tables):
    model = _model(tables, is_dynasty=True)
    # 1000 * 0.94 = 940, * 1.15 = 1081, * 0.90 = 972.9 -> 973
    assert model.value(400, "RB", "Young Back", age=23) == 973


def test_dynasty_qb_multiplier_after_tier_and_age(tables):
    model = _model(tables, is_dynasty=True)
    # 1000 * 0.93 = 930, * 1.05 = 976.5 -> 977, * 1.15 = 1123.55 -> 1124
    assert model.value(400, "QB", "Josh Allen", age=28) == 1124


def test_dynasty_te_multiplier(tables):
    dynasty = _model(tables, is_dynasty=True)
    redraft = _model(tables)
    # 1000 * 0.98 = 980, * 1.10 in dynasty only
    assert redraft.value(400, "TE", "Tight End") == 980
    assert dynasty.value(400, "TE", "Tight End") == 1078
    assert dynasty.value(400, "K", "Kicker") == 300


def test_unknown_age_leaves_value_unchanged(tables):
    model = _model(tables, is_dynasty=True)
    assert model.age_multiplier("RB", None) == 1
    assert model.age_multiplier("RB", 0) == 1
    assert model.age_multiplier("K", 40) == 1


def test_age_curve_breakpoints(tables):
    model = _model(tables, is_dynasty=True)
    assert model.age_multiplier("RB", 24) == Decimal("1.15")
    assert model.age_multiplier("RB", 25) == Decimal("1.05")
    assert model.age_multiplier("RB", 28) == Decimal("1.0")
    assert model.age_multiplier("RB", 30) == Decimal("0.85")
    assert model.age_multiplier("RB", 31) == Decimal("0.70")


@pytest.mark.parametrize(
    "position,age,expected",
    [
        ("WR", 24, "1.10"),
        ("WR", 27, "1.05"),
        ("WR", 29, "1.0"),
        ("WR", 31, "0.90"),
        ("WR", 32, "0.75"),
        ("TE", 25, "1.10"),
        ("TE", 28, "1.05"),
        ("TE", 30, "1.0"),
        ("TE", 32, "0.90"),
        ("TE", 33, "0.80"),
        ("QB", 25, "1.10"),
        ("QB", 30, "1.05"),
        ("QB", 34, "1.0"),
        ("QB", 37, "0.90"),
        ("QB", 38, "0.80"),
    ],
)
def test_age_curves_by_position(tables, position, age, expected):
    model = _model(tables, is_dynasty=True)
    assert model.age_multiplier(position, age) == Decimal(expected)


def test_redraft_age_curve_is_half_strength(tables):
    model = _model(tables)
    assert model.age_multiplier("WR", 32) == Decimal("0.875")
    assert model.age_multiplier("QB", 38) == Decimal("0.90")


def test_qb_tier_matching(tables):
    model = _model(tables)
    assert model.qb_multiplier("Josh Allen") == 0.93
    assert model.qb_multiplier("Patrick Mahomes II") == 0.91
    assert model.qb_multiplier("Lamar Smith") == 0.93  # first-name fallback
    assert model.qb_multiplier("Zzyzx Qwerty") == 0.65
    assert model.qb_multiplier("") == 0.65


def test_full_name_match_beats_earlier_first_name_match(tables):
    model = _model(tables)
    # "Justin Herbert" (A) shares the first name, but the full name is listed in Poop
    assert model.qb_multiplier("Justin Fields") == 0.65
    # no full-name match anywhere, so the first A-tier "Justin" wins
    assert model.qb_multiplier("Justin Tucker") == 0.91


def test_position_multiplier_defaults_to_one(tables):
    model = _model(tables)
    assert model.position_multiplier("K", "Any Kicker") == 0.3
    assert model.position_multiplier("LB", "Some Linebacker") == 1.0


def test_value_is_monotone_in_projection(tables):
    model = _model(tables)
    values = [model.value(points, "WR", "Receiver", age=27) for points in sorted(POOL)]
    assert values == sorted(values)
    assert all(v >= 0 for v in values)


def test_tables_reject_unknown_default_tier(tmp_path):
    raw = json.loads(load_valuation_tables().model_dump_json())
    raw["default_qb_tier"] = "Elite"
    path = tmp_path / "tables.json"
    path.write_text(json.dumps(raw))

    with pytest.raises(ValueError, match="default_qb_tier"):
        load_valuation_tables(path)


def test_tables_require_open_ended_age_curve(tmp_path):
    raw = json.loads(load_valuation_tables().model_dump_json())
    raw["age_curves"]["RB"] = [{"max_age": 24, "delta": 0.15}]
    path = tmp_path / "tables.json"
    path.write_text(json.dumps(raw))

    with pytest.raises(ValueError, match="open-ended"):
        load_valuation_tables(path)


def test_tables_load_from_custom_path(tmp_path):
    raw = json.loads(load_valuation_tables().model_dump_json())
    raw["version"] = "custom"
    raw["position_multipliers"]["K"] = 0.5
    path = tmp_path / "tables.json"
    path.write_text(json.dumps(raw))

    tables = load_valuation_tables(path)
    assert tables.version == "custom"
    assert tables.position_multipliers["K"] == 0.5
    assert [tier.name for tier in tables.qb_tiers] == ["S", "A", "Mid", "Meh", "Poop"]
