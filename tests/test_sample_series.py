import math

import numpy as np
import pytest

from osmotic_dashboard.sample_series import (
    FRESH_SALINITY_FLOOR,
    NOISE_STRENGTHS,
    add_noise,
    base_curves,
    compute_qml_output,
    compute_regular_output,
    generate_sample_series,
    samples_to_frame,
)

CHART_KEYS = [
    "name",
    "regularOutput",
    "qmlOutput",
    "freshTemp",
    "salineTemp",
    "freshPressure",
    "salinePressure",
    "freshSalinity",
    "salineSalinity",
]


def _column(samples, key):
    return np.array([s.to_dict()[key] for s in samples])


def test_generates_24_samples_with_hour_labels_in_order():
    samples = generate_sample_series(np.random.default_rng(1))

    assert len(samples) == 24
    assert [s.hour_label for s in samples] == [f"{h}:00" for h in range(24)]
    assert samples[0].hour_label == "0:00"
    assert samples[-1].hour_label == "23:00"


def test_to_dict_uses_chart_identifiers():
    sample = generate_sample_series(np.random.default_rng(2))[5]
    row = sample.to_dict()

    assert list(row) == CHART_KEYS
    assert row["name"] == "5:00"
    assert row["regularOutput"] == sample.regular_output
    assert row["salineSalinity"] == sample.saline_salinity


def test_samples_are_immutable():
    sample = generate_sample_series(np.random.default_rng(3))[0]
    with pytest.raises(AttributeError):
        sample.fresh_temp = 0.0


def test_zero_noise_is_bit_identical_and_matches_base_curves():
    first = generate_sample_series(np.random.default_rng(10), noise_scale=0.0)
    second = generate_sample_series(np.random.default_rng(99), noise_scale=0.0)

    assert [s.to_dict() for s in first] == [s.to_dict() for s in second]

    base = base_curves()
    for key in ["freshTemp", "salineTemp", "freshPressure", "salinePressure", "salineSalinity"]:
        assert np.array_equal(_column(first, key), base[key])


def test_base_curves_are_deterministic():
    first = base_curves()
    second = base_curves()
    for key in first:
        assert np.array_equal(first[key], second[key])


def test_midpoint_draws_give_exact_fresh_temperature_at_hour_14(midpoint_rng):
    samples = generate_sample_series(midpoint_rng)
    assert samples[14].fresh_temp == 15.0


def test_saline_pressure_at_midnight_is_base_value(midpoint_rng):
    samples = generate_sample_series(midpoint_rng)
    assert samples[0].saline_pressure == 7.2
    assert base_curves()["salinePressure"][0] == 7.2


def test_base_curve_values_at_selected_hours():
    base = base_curves(np.array([0, 6, 9]))

    # Peaks of each daily cycle
    assert base["freshPressure"][1] == pytest.approx(2.8)
    assert base["salineSalinity"][1] == pytest.approx(37.0)
    assert base["freshSalinity"][0] == pytest.approx(0.5)
    assert base["salineTemp"][0] == pytest.approx(18.0)


def test_fresh_salinity_never_below_floor():
    for seed in range(50):
        samples = generate_sample_series(np.random.default_rng(seed))
        assert _column(samples, "freshSalinity").min() >= FRESH_SALINITY_FLOOR


def test_fresh_salinity_clamped_when_noise_pushes_below_floor(low_rng):
    # Band of +-0.5 drives every base value (0.4 .. 0.6) down to at most 0.1
    samples = generate_sample_series(low_rng, noise_scale=10.0)
    assert np.all(_column(samples, "freshSalinity") == FRESH_SALINITY_FLOOR)


def test_only_fresh_salinity_is_clamped(low_rng):
    samples = generate_sample_series(low_rng)
    base = base_curves()

    assert np.allclose(_column(samples, "freshTemp"), base["freshTemp"] - 0.5)
    assert np.allclose(_column(samples, "salineSalinity"), base["salineSalinity"] - 0.8)
    assert np.allclose(_column(samples, "freshPressure"), base["freshPressure"] - 0.1)


def test_jitter_stays_within_strength_band():
    base = base_curves()
    samples = generate_sample_series(np.random.default_rng(5))

    for key in ["freshTemp", "salineTemp", "freshPressure", "salinePressure", "salineSalinity"]:
        deviation = np.abs(_column(samples, key) - base[key])
        assert deviation.max() <= NOISE_STRENGTHS[key] + 1e-9


def test_qml_maximum_bounded_by_headroom_without_noise():
    samples = generate_sample_series(noise_scale=0.0)
    regular = _column(samples, "regularOutput")
    qml = _column(samples, "qmlOutput")

    assert regular.max() > 0
    assert qml.max() <= 1.3 * regular.max()
    # Every sample moves toward the theoretical maximum
    assert np.all(qml > regular)


def test_qml_maximum_bounded_within_noise_band():
    for seed in range(20):
        samples = generate_sample_series(np.random.default_rng(seed))
        regular = _column(samples, "regularOutput")
        qml = _column(samples, "qmlOutput")
        assert qml.max() <= 1.3 * regular.max() + NOISE_STRENGTHS["qmlOutput"]


def test_compute_qml_output_closes_headroom():
    qml = compute_qml_output(np.array([1.0, 2.0]))

    # theoretical max 2.6, improved [1.02, 2.04]
    assert qml[0] == pytest.approx(1.02 + 0.4 * (2.6 - 1.02))
    assert qml[1] == pytest.approx(2.04 + 0.4 * (2.6 - 2.04))


def test_compute_regular_output_formula():
    output = compute_regular_output(
        fresh_temp=np.array([15.0, 10.0]),
        saline_temp=np.array([15.0, 20.0]),
        fresh_pressure=np.array([2.5, 2.0]),
        saline_pressure=np.array([7.5, 7.0]),
        fresh_salinity=np.array([0.5, 0.5]),
        saline_salinity=np.array([35.5, 35.5]),
    )

    # Equal temperatures -> no damping
    assert output[0] == pytest.approx(5.0 * 35.0 * 1.0 * 0.2)
    # 10 degree mismatch halves the output
    assert output[1] == pytest.approx(5.0 * 35.0 * 0.5 * 0.2)


def test_seeded_generators_reproduce_batch():
    first = generate_sample_series(np.random.default_rng(42))
    second = generate_sample_series(np.random.default_rng(42))
    assert [s.to_dict() for s in first] == [s.to_dict() for s in second]


def test_unseeded_calls_differ_but_keep_shape():
    first = generate_sample_series()
    second = generate_sample_series()

    assert len(first) == len(second) == 24
    assert [s.hour_label for s in first] == [s.hour_label for s in second]
    assert not np.array_equal(
        _column(first, "regularOutput"), _column(second, "regularOutput")
    )


def test_each_series_draws_once_per_hour(midpoint_rng):
    generate_sample_series(midpoint_rng)
    assert midpoint_rng.calls == [(24,)] * 8


def test_add_noise_bounds_and_validation(low_rng):
    noisy = add_noise([1.0, 2.0], 0.25, low_rng)
    assert noisy.tolist() == [0.75, 1.75]

    with pytest.raises(ValueError):
        add_noise([1.0], -0.1, low_rng)


def test_negative_noise_scale_rejected():
    with pytest.raises(ValueError):
        generate_sample_series(noise_scale=-1.0)


def test_samples_to_frame_columns():
    df = samples_to_frame(generate_sample_series(np.random.default_rng(7)))

    assert list(df.columns) == CHART_KEYS
    assert len(df) == 24
    assert df["name"].iloc[12] == "12:00"
    assert not df.isna().any().any()
    assert all(math.isfinite(v) for v in df["qmlOutput"])


@pytest.mark.parametrize("scale", [1.0, 10.0])
def test_low_draws_give_exact_outputs_with_clamped_salinity(low_rng, scale):
    samples = generate_sample_series(low_rng, noise_scale=scale)
    base = base_curves()

    sensors = {name: base[name] - NOISE_STRENGTHS[name] * scale for name in base}
    sensors["freshSalinity"] = np.maximum(sensors["freshSalinity"], FRESH_SALINITY_FLOOR)
    regular = (
        compute_regular_output(
            sensors["freshTemp"],
            sensors["salineTemp"],
            sensors["freshPressure"],
            sensors["salinePressure"],
            sensors["freshSalinity"],
            sensors["salineSalinity"],
        )
        - NOISE_STRENGTHS["regularOutput"] * scale
    )
    qml = compute_qml_output(regular) - NOISE_STRENGTHS["qmlOutput"] * scale

    assert np.allclose(_column(samples, "regularOutput"), regular)
    assert np.allclose(_column(samples, "qmlOutput"), qml)
    if scale == 10.0:
        # Every fresh salinity reading sits on the floor
        assert np.allclose(_column(samples, "freshSalinity"), FRESH_SALINITY_FLOOR)
