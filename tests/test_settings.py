import json
import logging

import pytest

from trendline.settings import ChartSettings, load_config, save_config


def test_defaults():
    s = ChartSettings()
    assert (s.width, s.height) == (1200, 500)
    assert (s.plot_width, s.plot_height) == (1090, 370)
    assert s.n_points == 10
    assert s.data_path.endswith("airlines.csv")


def test_missing_file_gives_defaults(tmp_path):
    assert load_config(tmp_path / "none.json") == ChartSettings()


def test_user_values_merge_over_defaults(tmp_path, caplog):
    p = tmp_path / "cfg.json"
    p.write_text(json.dumps({"n_points": 4, "seed": 9, "colour": "x"}), encoding="utf-8")
    with caplog.at_level(logging.WARNING):
        s = load_config(p)
    assert (s.n_points, s.seed) == (4, 9)
    assert s.width == 1200
    assert "colour" in caplog.text


@pytest.mark.parametrize(
    "payload",
    [{"width": "wide"}, {"n_points": 2.5}, {"seed": "abc"}, {"margin_left": True}, {"data_path": 7}],
)
def test_wrong_typed_value_falls_back(tmp_path, caplog, payload):
    p = tmp_path / "cfg.json"
    p.write_text(json.dumps(payload), encoding="utf-8")
    with caplog.at_level(logging.WARNING):
        s = load_config(p)
    assert s == ChartSettings()
    s.validate()
    assert "wrong type" in caplog.text


def test_seed_may_be_null(tmp_path):
    p = tmp_path / "cfg.json"
    p.write_text(json.dumps({"seed": None, "n_points": 3}), encoding="utf-8")
    assert load_config(p) == ChartSettings(n_points=3)


def test_corrupt_file_falls_back(tmp_path, caplog):
    p = tmp_path / "cfg.json"
    p.write_text("{not json", encoding="utf-8")
    with caplog.at_level(logging.WARNING):
        assert load_config(p) == ChartSettings()
    assert "using defaults" in caplog.text


def test_env_overrides_data_path(tmp_path, monkeypatch):
    p = tmp_path / "cfg.json"
    p.write_text(json.dumps({"data_path": "from_file.csv"}), encoding="utf-8")
    monkeypatch.setenv("TRENDLINE_DATA", "from_env.csv")
    assert load_config(p).data_path == "from_env.csv"


def test_save_then_load(tmp_path):
    p = tmp_path / "cfg.json"
    s = ChartSettings(n_points=3, seed=1, fallback_color="purple")
    save_config(s, p)
    assert load_config(p) == s


def test_validate():
    ChartSettings().validate()
    with pytest.raises(ValueError):
        ChartSettings(width=100).validate()
    with pytest.raises(ValueError):
        ChartSettings(n_points=0).validate()
