#!filepath: tests/sweep/test_grid.py

from entropy_sweep.sweep.grid import Combination, expand, partition


def test_expand_is_sorted_cartesian_product(make_sweep_config):
    cfg = make_sweep_config(
        periods=[50, 20, 50],
        zscore_thresholds=[1.5, None, 1.0],
        fee_regimes=[10.0, 0.0],
    )

    combos = expand(cfg)

    assert len(combos) == cfg.n_combinations == 2 * 3 * 2
    assert combos[0] == Combination(20, None, 0.0)
    assert combos[1] == Combination(20, None, 10.0)
    assert combos[2] == Combination(20, 1.0, 0.0)
    assert combos[-1] == Combination(50, 1.5, 10.0)


def test_fraction_fees_are_converted_to_bps(make_sweep_config):
    cfg = make_sweep_config(
        periods=[10], zscore_thresholds=[None], fee_regimes=[0.0005, 0.0007], fee_unit="fraction"
    )

    # 精确值：不带浮点尾巴进入 Summary / CSV
    assert [c.fee_bps for c in expand(cfg)] == [5.0, 7.0]


def test_partition_groups_by_period(make_sweep_config, random_walk):
    cfg = make_sweep_config(periods=[20, 50, 100])
    combos = expand(cfg)

    parts = partition(combos, random_walk, cfg)

    assert [p.period for p in parts] == [20, 50, 100]
    assert all(c.period == p.period for p in parts for c in p.combinations)
    assert [c for p in parts for c in p.combinations] == combos
    assert all(p.series is random_walk for p in parts)
