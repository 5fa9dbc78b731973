import argparse
import os
from typing import Dict

import pandas as pd

from .config import REPORTS_DIR, load_config
from .distribution import distribution_frame
from .errors import EdaError
from .logging_utils import setup_logging
from .pipeline import run_pipeline
from .schemas import ColorSignature, RunReport


def signature_frame(signatures: Dict[str, ColorSignature]) -> pd.DataFrame:
	rows = [
		{"category": label, "red": s.red, "green": s.green, "blue": s.blue, "sampled": s.sampled}
		for label, s in signatures.items()
	]
	return pd.DataFrame(rows, columns=["category", "red", "green", "blue", "sampled"])


def write_summary(report: RunReport, path: str) -> str:
	"""Write the run report as JSON and return the path."""
	parent = os.path.dirname(path)
	if parent:
		os.makedirs(parent, exist_ok=True)
	with open(path, "w") as f:
		f.write(report.model_dump_json(indent=2))
	return path


def write_tables(report: RunReport, out_dir: str) -> Dict[str, str]:
	os.makedirs(out_dir, exist_ok=True)
	paths = {
		"distribution": os.path.join(out_dir, "class_distribution.csv"),
		"signatures": os.path.join(out_dir, "color_signatures.csv"),
	}
	distribution_frame(report.distribution).to_csv(paths["distribution"], index=False)
	signature_frame(report.signatures).to_csv(paths["signatures"], index=False)
	return paths


def main():
	ap = argparse.ArgumentParser(description="Summarize class counts and color signatures into data_summary.json")
	ap.add_argument("--root", help="Dataset root with one subfolder per class")
	ap.add_argument("--config", default="", help="Optional JSON config file")
	ap.add_argument("--sample-size", type=int, default=None)
	ap.add_argument("--seed", type=int, default=None)
	ap.add_argument("--out", default=os.path.join(REPORTS_DIR, "data_summary.json"))
	ap.add_argument("--log-level", default="INFO")
	args = ap.parse_args()

	setup_logging(args.log_level)
	try:
		cfg = load_config(args.config or None, dataset_root=args.root, sample_size=args.sample_size, random_seed=args.seed)
		report = run_pipeline(cfg, resize=False)
	except EdaError as e:
		raise SystemExit(f"error: {e}")
	write_summary(report, args.out)
	print("Wrote", args.out)


if __name__ == "__main__":
	main()
