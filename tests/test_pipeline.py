"""
End-to-end tests for the pipeline, the report writers and the CLI entry points.
"""

import json
import sys
from pathlib import Path

import pandas as pd
import pytest
from PIL import Image

from corn_eda import run_eda, summarize_data
from corn_eda.color_summary import make_rng
from corn_eda.config import PipelineConfig
from corn_eda.errors import NotFoundError
from corn_eda.pipeline import run_pipeline
from corn_eda.summarize_data import signature_frame, write_summary, write_tables


@pytest.fixture
def cfg(corn_dataset, tmp_path):
	return PipelineConfig(dataset_root=corn_dataset, output_root=tmp_path / "processed_data", random_seed=42)


@pytest.mark.integration
class TestRunPipeline:

	def test_scenario(self, cfg):
		report = run_pipeline(cfg)
		assert report.categories == ["Blight", "Healthy", "Rust"]
		assert report.distribution == {"Blight": 0, "Healthy": 5, "Rust": 3}
		assert set(report.signatures) == {"Healthy", "Rust"}
		assert report.resized == 8
		assert [(f.category, f.error) for f in report.failures] == [("Blight", "EmptyCategoryError")]
		with Image.open(cfg.output_root / "Rust" / "rust_0.jpg") as img:
			assert img.size == (128, 128)

	def test_same_seed_same_report(self, cfg):
		assert run_pipeline(cfg, resize=False) == run_pipeline(cfg, resize=False)

	def test_injected_rng(self, cfg):
		a = run_pipeline(cfg, rng=make_rng(1), resize=False)
		b = run_pipeline(cfg, rng=make_rng(1), resize=False)
		assert a.signatures == b.signatures

	def test_no_resize_writes_nothing(self, cfg):
		report = run_pipeline(cfg, resize=False)
		assert report.resized == 0
		assert report.output_root is None
		assert not cfg.output_root.exists()

	def test_corrupt_file_reported_once_per_step(self, cfg, corrupt_file):
		bad = corrupt_file(cfg.dataset_root / "Rust" / "zz_broken.jpg")
		report = run_pipeline(cfg)
		assert report.distribution["Rust"] == 4
		assert report.signatures["Rust"].sampled == 3
		bad_entries = [f for f in report.failures if f.path == str(bad)]
		assert len(bad_entries) == 2
		assert {f.error for f in bad_entries} == {"ImageReadError"}

	def test_missing_root_aborts(self, tmp_path):
		with pytest.raises(NotFoundError):
			run_pipeline(PipelineConfig(dataset_root=tmp_path / "missing"))

	def test_output_inside_dataset_is_not_a_category(self, corn_dataset):
		nested = PipelineConfig(dataset_root=corn_dataset, output_root=corn_dataset / "processed_data", random_seed=42)
		run_pipeline(nested)
		report = run_pipeline(nested)
		assert report.categories == ["Blight", "Healthy", "Rust"]
		assert "processed_data" not in report.distribution
		assert [f.category for f in report.failures] == ["Blight"]

	def test_skipped_files_are_logged(self, cfg, caplog):
		with caplog.at_level("WARNING", logger="corn_eda"):
			run_pipeline(cfg, resize=False)
		assert "EmptyCategoryError" in caplog.text


@pytest.mark.integration
class TestReportWriters:

	def test_write_summary_round_trips_json(self, cfg, tmp_path):
		report = run_pipeline(cfg, resize=False)
		path = write_summary(report, str(tmp_path / "reports" / "data_summary.json"))
		data = json.loads(Path(path).read_text())
		assert data["distribution"] == {"Blight": 0, "Healthy": 5, "Rust": 3}
		assert set(data["signatures"]["Healthy"]) == {"red", "green", "blue", "sampled"}

	def test_write_tables(self, cfg, tmp_path):
		report = run_pipeline(cfg, resize=False)
		paths = write_tables(report, str(tmp_path / "tables"))
		dist = pd.read_csv(paths["distribution"])
		assert dist["count"].tolist() == [0, 5, 3]
		sigs = pd.read_csv(paths["signatures"])
		assert sigs["category"].tolist() == ["Healthy", "Rust"]

	def test_signature_frame_empty(self):
		assert list(signature_frame({}).columns) == ["category", "red", "green", "blue", "sampled"]


@pytest.mark.integration
class TestCli:

	def test_run_eda_main(self, corn_dataset, tmp_path, capsys):
		reports = tmp_path / "reports"
		out = tmp_path / "resized"
		report = run_eda.main([
			"--root", str(corn_dataset),
			"--out", str(out),
			"--width", "32",
			"--height", "16",
			"--seed", "42",
			"--reports", str(reports),
		])
		assert report.resized == 8
		with Image.open(out / "Healthy" / "healthy_0.jpg") as img:
			assert img.size == (32, 16)
		for name in ("data_summary.json", "class_distribution.csv", "color_signatures.csv",
				"class_distribution.png", "color_signatures.png", "category_samples.png"):
			assert (reports / name).exists()
		assert "Wrote" in capsys.readouterr().out

	def test_run_eda_missing_root_exits(self, tmp_path):
		with pytest.raises(SystemExit) as exc:
			run_eda.main(["--root", str(tmp_path / "missing"), "--no-plots", "--reports", str(tmp_path)])
		assert "not found" in str(exc.value.code)

	def test_run_eda_with_config_file(self, corn_dataset, tmp_path):
		config = tmp_path / "eda.json"
		config.write_text(json.dumps({"dataset_root": str(corn_dataset), "sample_size": 2, "random_seed": 0}))
		report = run_eda.main(["--config", str(config), "--no-resize", "--no-plots", "--reports", str(tmp_path / "r")])
		assert report.signatures["Healthy"].sampled == 2

	def test_summarize_data_main(self, corn_dataset, tmp_path, monkeypatch):
		out = tmp_path / "summary.json"
		monkeypatch.setattr(sys, "argv", ["summarize_data", "--root", str(corn_dataset), "--seed", "1", "--out", str(out)])
		summarize_data.main()
		assert json.loads(out.read_text())["distribution"]["Healthy"] == 5
