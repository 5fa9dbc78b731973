import argparse
import os

from .color_summary import make_rng
from .config import OUTPUT_DIR, REPORTS_DIR, load_config
from .errors import EdaError
from .logging_utils import setup_logging
from .pipeline import run_pipeline
from .summarize_data import write_summary, write_tables
from .viz import plot_category_samples, plot_class_distribution, plot_color_signatures


def parse_args(argv=None):
	p = argparse.ArgumentParser(description="Resize a class-folder image dataset and report class counts and average colors")
	p.add_argument("--root", type=str, default=None, help="Dataset root with one subfolder per class")
	p.add_argument("--out", type=str, default=None, help=f"Resized image root (default: {OUTPUT_DIR})")
	p.add_argument("--config", type=str, default="", help="Optional JSON config file")
	p.add_argument("--width", type=int, default=None)
	p.add_argument("--height", type=int, default=None)
	p.add_argument("--sample-size", type=int, default=None)
	p.add_argument("--ext", nargs="+", default=None, help="Accepted image extensions")
	p.add_argument("--seed", type=int, default=None)
	p.add_argument("--reports", type=str, default=REPORTS_DIR, help="Directory for summary, tables and figures")
	p.add_argument("--no-resize", action="store_true")
	p.add_argument("--no-plots", action="store_true")
	p.add_argument("--log-level", type=str, default="INFO")
	p.add_argument("--log-file", type=str, default=None)
	return p.parse_args(argv)


def main(argv=None):
	args = parse_args(argv)
	if args.log_file:
		os.makedirs(os.path.dirname(args.log_file) or ".", exist_ok=True)
	setup_logging(args.log_level, args.log_file)
	try:
		cfg = load_config(
			args.config or None,
			dataset_root=args.root,
			output_root=args.out,
			target_width=args.width,
			target_height=args.height,
			sample_size=args.sample_size,
			image_extensions=args.ext,
			random_seed=args.seed,
		)
		report = run_pipeline(cfg, resize=not args.no_resize)
	except EdaError as e:
		raise SystemExit(f"error: {e}")

	summary_path = write_summary(report, os.path.join(args.reports, "data_summary.json"))
	write_tables(report, args.reports)
	if not args.no_plots:
		plot_class_distribution(report.distribution, os.path.join(args.reports, "class_distribution.png"))
		plot_color_signatures(report.signatures, os.path.join(args.reports, "color_signatures.png"))
		# separate seeded stream so the figure does not shift the color sample
		plot_category_samples(
			tuple(cfg.dataset_root / name for name in report.categories),
			os.path.join(args.reports, "category_samples.png"),
			rng=make_rng(cfg.random_seed),
			extensions=cfg.image_extensions,
		)
	print("Wrote", summary_path)
	return report


if __name__ == "__main__":
	main()
