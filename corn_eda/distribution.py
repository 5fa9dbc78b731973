import logging
from pathlib import Path
from typing import Dict, Iterable, Sequence

import pandas as pd

from .config import IMAGE_EXTS, LOGGER_NAME
from .data_utils import list_category_images

logger = logging.getLogger(LOGGER_NAME)


def count_images(categories: Sequence[Path], extensions: Iterable[str] = IMAGE_EXTS) -> Dict[str, int]:
	"""Map every category name to its number of qualifying image files, zeros included."""
	exts = frozenset(extensions)
	counts = {c.name: len(list_category_images(c, exts)) for c in categories}
	logger.info("Class distribution (%d images): %s", sum(counts.values()), counts)
	return counts


def distribution_frame(distribution: Dict[str, int]) -> pd.DataFrame:
	df = pd.DataFrame(
		{"category": list(distribution.keys()), "count": list(distribution.values())},
		columns=["category", "count"],
	)
	df["count"] = df["count"].astype("int64")
	total = int(df["count"].sum())
	df["share"] = df["count"] / total if total else 0.0
	return df
