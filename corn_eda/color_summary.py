"""
Average color composition per category.

For each category a bounded random sample of images is drawn, every image is
collapsed to one mean intensity per channel, and those per-image means are
averaged into a single (red, green, blue) signature.

Channel order is taken as decoded by Pillow: for three or more channels the
first three are assumed to be R, G, B and anything after (alpha, extra bands)
is dropped. Modes whose first three bands are not RGB (CMYK, YCbCr, LAB) are
summarized on their raw bands.
"""

import logging
import random
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .config import IMAGE_EXTS, LOGGER_NAME, SAMPLE_SIZE
from .data_utils import PathLike, list_category_images, load_image_array, sample_images
from .errors import EmptyCategoryError, ImageReadError, UnsupportedChannelError
from .schemas import ColorSignature, FileFailure

logger = logging.getLogger(LOGGER_NAME)

RGB = Tuple[float, float, float]
MeanFn = Callable[[np.ndarray, PathLike], RGB]


def make_rng(seed: Optional[int] = None) -> random.Random:
	return random.Random(seed)


def to_rgb(arr: np.ndarray, path: PathLike = "<array>") -> np.ndarray:
	"""Return an (H, W, 3) view of arr, replicating grayscale and dropping extra bands."""
	if arr.ndim == 2:
		arr = arr[:, :, np.newaxis]
	if arr.ndim != 3:
		raise UnsupportedChannelError(path, 0 if arr.ndim < 2 else arr.shape[-1])
	channels = arr.shape[2]
	if channels == 1:
		return np.repeat(arr, 3, axis=2)
	if channels >= 3:
		return arr[:, :, :3]
	raise UnsupportedChannelError(path, channels)


def image_channel_means(arr: np.ndarray, path: PathLike = "<array>") -> RGB:
	rgb = to_rgb(arr, path)
	means = rgb.reshape(-1, 3).astype(np.float64).mean(axis=0)
	return (float(means[0]), float(means[1]), float(means[2]))


def summarize_category(
	category_dir: Path,
	k: int = SAMPLE_SIZE,
	rng: Optional[random.Random] = None,
	extensions: Iterable[str] = IMAGE_EXTS,
	mean_fn: MeanFn = image_channel_means,
) -> Tuple[ColorSignature, List[FileFailure]]:
	"""Color signature of one category plus the sampled files that had to be skipped.

	Raises EmptyCategoryError when the category has no qualifying files or
	when none of the sampled files could be used.
	"""
	rng = rng if rng is not None else make_rng()
	label = category_dir.name
	paths = list_category_images(category_dir, extensions)
	if not paths:
		raise EmptyCategoryError(label)

	failures: List[FileFailure] = []
	per_image: List[RGB] = []
	for p in sample_images(paths, k, rng):
		try:
			per_image.append(mean_fn(load_image_array(p), p))
		except (ImageReadError, UnsupportedChannelError) as e:
			logger.warning("Skipping %s from color sample: %s", p, e)
			failures.append(FileFailure.from_error(e, str(p), label))

	if not per_image:
		raise EmptyCategoryError(label, "no readable images in its sample", failures)
	r, g, b = np.asarray(per_image, dtype=np.float64).mean(axis=0)
	signature = ColorSignature(red=float(r), green=float(g), blue=float(b), sampled=len(per_image))
	logger.info("Color signature for '%s' over %d images: R=%.1f G=%.1f B=%.1f", label, len(per_image), r, g, b)
	return signature, failures


def summarize_colors(
	categories: Sequence[Path],
	k: int = SAMPLE_SIZE,
	rng: Optional[random.Random] = None,
	extensions: Iterable[str] = IMAGE_EXTS,
	mean_fn: MeanFn = image_channel_means,
) -> Tuple[Dict[str, ColorSignature], List[FileFailure]]:
	"""Signatures for every category that has at least one usable sample.

	Categories without one are left out of the mapping and reported in the
	failure list instead.
	"""
	rng = rng if rng is not None else make_rng()
	exts = frozenset(extensions)
	signatures: Dict[str, ColorSignature] = {}
	failures: List[FileFailure] = []
	for category_dir in categories:
		try:
			signature, skipped = summarize_category(category_dir, k, rng, exts, mean_fn)
		except EmptyCategoryError as e:
			logger.warning("No color signature for '%s': %s", category_dir.name, e)
			failures.extend(e.failures)
			failures.append(FileFailure.from_error(e, str(category_dir), category_dir.name))
			continue
		signatures[category_dir.name] = signature
		failures.extend(skipped)
	return signatures, failures
