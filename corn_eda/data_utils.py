from pathlib import Path
from typing import Iterable, List, Sequence, Tuple, Union
import logging
import random

import numpy as np
from PIL import Image

from .config import IMAGE_EXTS, LOGGER_NAME
from .errors import ImageReadError, NotFoundError

logger = logging.getLogger(LOGGER_NAME)

PathLike = Union[str, Path]

# Pillow errors raised while decoding a broken or hostile file
DECODE_ERRORS = (OSError, ValueError, SyntaxError, Image.DecompressionBombError)

# Modes that np.asarray would not turn into 8-bit intensity planes
_PALETTE_MODES = {"P": "RGB", "PA": "RGBA"}
_SIXTEEN_BIT_MODES = {"I;16", "I;16B", "I;16L", "I;16N"}
_WIDE_MODES = {"I", "F"}


def is_image(path: PathLike, extensions: Iterable[str] = IMAGE_EXTS) -> bool:
	return Path(path).suffix.lower() in extensions


def enumerate_categories(root: PathLike, exclude: Iterable[PathLike] = ()) -> Tuple[Path, ...]:
	"""Return the category directories directly under root, sorted by name.

	Directories listed in exclude (e.g. an output tree nested in the dataset)
	are never treated as categories.
	"""
	root = Path(root)
	if not root.is_dir():
		raise NotFoundError(root)
	skip = {Path(p).resolve() for p in exclude}
	categories = tuple(sorted(
		(p for p in root.iterdir() if p.is_dir() and p.resolve() not in skip),
		key=lambda p: p.name,
	))
	logger.info("Found %d categories under %s: %s", len(categories), root, [c.name for c in categories])
	return categories


def list_category_images(category_dir: PathLike, extensions: Iterable[str] = IMAGE_EXTS) -> List[Path]:
	category_dir = Path(category_dir)
	if not category_dir.is_dir():
		raise NotFoundError(category_dir)
	exts = frozenset(extensions)
	return sorted(
		(p for p in category_dir.iterdir() if p.is_file() and is_image(p, exts)),
		key=lambda p: p.name,
	)


def sample_images(paths: Sequence[Path], k: int, rng: random.Random) -> List[Path]:
	"""Draw k paths uniformly without replacement, or all of them if there are at most k."""
	if len(paths) <= k:
		return list(paths)
	return rng.sample(list(paths), k)


def load_image_array(path: PathLike) -> np.ndarray:
	"""Decode an image into an (H, W) or (H, W, C) array with values in 0..255.

	The file handle is closed before returning, whatever happens.
	"""
	try:
		with Image.open(path) as img:
			img.load()
			if img.mode in _PALETTE_MODES:
				img = img.convert(_PALETTE_MODES[img.mode])
			elif img.mode == "1":
				img = img.convert("L")
			elif img.mode in _SIXTEEN_BIT_MODES:
				return np.asarray(img, dtype=np.float64) / 257.0
			elif img.mode in _WIDE_MODES:
				return _scale_wide(np.asarray(img, dtype=np.float64), img.mode)
			return np.asarray(img)
	except DECODE_ERRORS as e:
		raise ImageReadError(path, str(e)) from e


def _scale_wide(arr: np.ndarray, mode: str) -> np.ndarray:
	"""Map 32-bit integer or float intensities onto 0..255.

	Float images with no value above 1.0 are read as 0..1 intensities. Any
	other image with a value above 255 is read as 16-bit data (older Pillow
	opens 16-bit PNGs as mode "I"). Whatever is left is clipped.
	"""
	peak = float(arr.max()) if arr.size else 0.0
	if mode == "F" and peak <= 1.0:
		arr = arr * 255.0
	elif peak > 255.0:
		arr = arr / 257.0
	return np.clip(arr, 0.0, 255.0)
