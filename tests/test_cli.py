import json

from PIL import Image

import airfares

SAMPLE_ROWS = "date,price,airline\n01/01/23,10,AAL\n01/05/23,20,AAL\n01/10/23,30,AAL\n"


def test_png_export(tmp_path):
    data = tmp_path / "prices.csv"
    data.write_text(SAMPLE_ROWS, encoding="utf-8")
    out = tmp_path / "chart.png"
    rc = airfares.main([
        "--config", str(tmp_path / "cfg.json"),
        "--data", str(data),
        "--seed", "3",
        "--png", str(out),
    ])
    assert rc == 0
    with Image.open(out) as img:
        assert img.size == (1200, 500)


def test_png_export_with_bad_data_fails(tmp_path):
    data = tmp_path / "prices.csv"
    data.write_text("date,price,airline\nyesterday,10,AAL\n", encoding="utf-8")
    rc = airfares.main([
        "--config", str(tmp_path / "cfg.json"),
        "--data", str(data),
        "--png", str(tmp_path / "chart.png"),
    ])
    assert rc == 1
    assert not (tmp_path / "chart.png").exists()


def test_png_export_with_undecodable_data_fails(tmp_path):
    data = tmp_path / "prices.csv"
    data.write_bytes(b"date,price,airline\n01/01/23,10,A\xffL\n")
    rc = airfares.main([
        "--config", str(tmp_path / "cfg.json"),
        "--data", str(data),
        "--png", str(tmp_path / "chart.png"),
    ])
    assert rc == 1
    assert not (tmp_path / "chart.png").exists()


def test_wrong_typed_config_value_falls_back(tmp_path):
    cfg = tmp_path / "cfg.json"
    cfg.write_text(json.dumps({"width": "wide"}), encoding="utf-8")
    data = tmp_path / "prices.csv"
    data.write_text(SAMPLE_ROWS, encoding="utf-8")
    out = tmp_path / "chart.png"
    rc = airfares.main(["--config", str(cfg), "--data", str(data), "--png", str(out)])
    assert rc == 0
    with Image.open(out) as img:
        assert img.size == (1200, 500)


def test_invalid_settings_exit_code(tmp_path):
    rc = airfares.main(["--config", str(tmp_path / "cfg.json"), "--points", "0", "--png", str(tmp_path / "x.png")])
    assert rc == 2


def test_save_config_writes_effective_settings(tmp_path):
    data = tmp_path / "prices.csv"
    data.write_text(SAMPLE_ROWS, encoding="utf-8")
    cfg = tmp_path / "cfg.json"
    rc = airfares.main([
        "--config", str(cfg),
        "--data", str(data),
        "--points", "4",
        "--save-config",
        "--png", str(tmp_path / "chart.png"),
    ])
    assert rc == 0
    saved = json.loads(cfg.read_text(encoding="utf-8"))
    assert saved["n_points"] == 4
    assert saved["data_path"] == str(data)
