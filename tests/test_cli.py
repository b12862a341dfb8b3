import run_pipeline
from culinary_jobs import config


def test_dry_run_completes_offline(tmp_path, monkeypatch):
    settings_file = tmp_path / "settings.yaml"
    settings_file.write_text("queries: [chefs]\nwrite_report: false\nsave_to_dataset: false\n", encoding="utf-8")
    monkeypatch.setattr(config, "REPORTS_DIR", tmp_path / "reports")
    monkeypatch.setattr(config, "DATA_DIR", tmp_path / "data")

    assert run_pipeline.main(["--dry-run", "--config", str(settings_file)]) == 0


def test_invalid_config_exits_with_2(tmp_path):
    assert run_pipeline.main(["--config", str(tmp_path / "missing.yaml")]) == 2
