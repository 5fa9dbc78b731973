import logging
import os
import random
from pathlib import Path
from typing import Dict, Iterable, Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np

from .color_summary import make_rng
from .config import IMAGE_EXTS, LOGGER_NAME
from .data_utils import list_category_images, load_image_array, sample_images
from .errors import ImageReadError
from .schemas import ColorSignature

logger = logging.getLogger(LOGGER_NAME)

CHANNEL_COLORS = ("tab:red", "tab:green", "tab:blue")


def _save(fig, out: str) -> str:
	parent = os.path.dirname(out)
	if parent:
		os.makedirs(parent, exist_ok=True)
	fig.tight_layout()
	fig.savefig(out)
	plt.close(fig)
	logger.info("Saved figure %s", out)
	return out


def plot_class_distribution(distribution: Dict[str, int], out: str) -> str:
	labels = list(distribution.keys())
	counts = [distribution[k] for k in labels]
	fig, ax = plt.subplots(figsize=(max(6, len(labels) * 1.2), 4))
	bars = ax.bar(labels, counts, color="tab:olive")
	for bar, n in zip(bars, counts):
		ax.text(bar.get_x() + bar.get_width() / 2, bar.get_height(), str(n), ha="center", va="bottom")
	ax.set_xlabel("Category")
	ax.set_ylabel("Number of images")
	ax.set_title("Class distribution")
	ax.tick_params(axis="x", rotation=30)
	return _save(fig, out)


def plot_color_signatures(signatures: Dict[str, ColorSignature], out: str) -> str:
	"""Grouped bar chart of mean R, G, B per category."""
	labels = list(signatures.keys())
	x = np.arange(len(labels))
	width = 0.25
	fig, ax = plt.subplots(figsize=(max(6, len(labels) * 1.5), 4))
	for i, (name, color) in enumerate(zip(("red", "green", "blue"), CHANNEL_COLORS)):
		values = [getattr(signatures[k], name) for k in labels]
		ax.bar(x + (i - 1) * width, values, width, label=name.capitalize(), color=color)
	ax.set_xticks(x)
	ax.set_xticklabels(labels, rotation=30, ha="right")
	ax.set_ylim(0, 255)
	ax.set_ylabel("Mean intensity")
	ax.set_title("Average color per category")
	ax.legend()
	return _save(fig, out)


def plot_category_samples(
	categories: Sequence[Path],
	out: str,
	n: int = 5,
	rng: Optional[random.Random] = None,
	extensions: Iterable[str] = IMAGE_EXTS,
) -> str:
	"""Grid with one row per category and up to n random images per row."""
	rng = rng if rng is not None else make_rng()
	exts = frozenset(extensions)
	rows = max(len(categories), 1)
	fig, axes = plt.subplots(rows, n, figsize=(n * 2, rows * 2), squeeze=False)
	for r, category_dir in enumerate(categories):
		picks = sample_images(list_category_images(category_dir, exts), n, rng)
		for c in range(n):
			ax = axes[r, c]
			ax.axis("off")
			if c == 0:
				ax.set_title(category_dir.name, loc="left", fontsize=9)
			if c >= len(picks):
				continue
			try:
				arr = load_image_array(picks[c])
			except ImageReadError as e:
				logger.warning("Cannot show %s: %s", picks[c], e)
				continue
			if arr.ndim == 3 and arr.shape[2] not in (3, 4):
				arr = arr[:, :, 0]
			ax.imshow(arr, cmap="gray" if arr.ndim == 2 else None)
	return _save(fig, out)
