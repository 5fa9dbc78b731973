import logging
import random
from typing import Optional

from .color_summary import make_rng, summarize_colors
from .config import LOGGER_NAME, PipelineConfig
from .data_utils import enumerate_categories
from .distribution import count_images
from .resize_images import resize_dataset
from .schemas import RunReport

logger = logging.getLogger(LOGGER_NAME)


def run_pipeline(cfg: PipelineConfig, rng: Optional[random.Random] = None, resize: bool = True) -> RunReport:
	"""Enumerate once, then resize, count and summarize colors over the same categories.

	A missing dataset root raises NotFoundError. Per-file and per-category
	problems end up in RunReport.failures.
	"""
	rng = rng if rng is not None else make_rng(cfg.random_seed)
	categories = enumerate_categories(cfg.dataset_root, exclude=(cfg.output_root,))
	exts = cfg.image_extensions

	written = 0
	failures = []
	if resize:
		resized = resize_dataset(categories, cfg.output_root, cfg.target_size, exts)
		written = len(resized.written)
		failures.extend(resized.failures)

	distribution = count_images(categories, exts)
	signatures, color_failures = summarize_colors(categories, cfg.sample_size, rng, exts)
	failures.extend(color_failures)

	report = RunReport(
		dataset_root=str(cfg.dataset_root),
		output_root=str(cfg.output_root) if resize else None,
		categories=[c.name for c in categories],
		distribution=distribution,
		signatures=signatures,
		resized=written,
		failures=failures,
	)
	if failures:
		logger.warning("%d files or categories were skipped:", len(failures))
		for f in failures:
			logger.warning("  [%s] %s: %s", f.error, f.path, f.message)
	logger.info("Pipeline finished: %d categories, %d images resized", len(categories), written)
	return report
