import argparse
import logging
import os
from pathlib import Path
from typing import Iterable, Sequence, Tuple

from PIL import Image

from .config import IMAGE_EXTS, IMAGE_SIZE, JPEG_QUALITY, LOGGER_NAME, OUTPUT_DIR
from .data_utils import DECODE_ERRORS, PathLike, enumerate_categories, list_category_images
from .errors import EdaError, ImageReadError, ImageWriteError
from .logging_utils import setup_logging
from .schemas import FileFailure, ResizeResult

logger = logging.getLogger(LOGGER_NAME)

RESAMPLE = Image.Resampling.BILINEAR


def _save_kwargs(dst: Path) -> dict:
	if dst.suffix.lower() in (".jpg", ".jpeg"):
		# no optimize/progressive passes so reruns produce identical bytes
		return {"quality": JPEG_QUALITY, "subsampling": 0}
	return {}


def resize_image(src: PathLike, dst: PathLike, size: Tuple[int, int] = (IMAGE_SIZE, IMAGE_SIZE)) -> Path:
	"""Resample src to size (width, height) and write it to dst, keeping the image mode."""
	dst = Path(dst)
	try:
		with Image.open(src) as img:
			img.load()
			resized = img.resize(size, RESAMPLE)
	except DECODE_ERRORS as e:
		raise ImageReadError(src, str(e)) from e
	dst.parent.mkdir(parents=True, exist_ok=True)
	try:
		resized.save(dst, **_save_kwargs(dst))
	except (OSError, ValueError, KeyError) as e:
		raise ImageWriteError(dst, str(e)) from e
	return dst


def resize_dataset(
	categories: Sequence[Path],
	output_root: PathLike,
	size: Tuple[int, int] = (IMAGE_SIZE, IMAGE_SIZE),
	extensions: Iterable[str] = IMAGE_EXTS,
) -> ResizeResult:
	"""Resize every image of every category into output_root/<category>/<file name>.

	A file that cannot be read or written is recorded and skipped.
	"""
	output_root = Path(output_root)
	exts = frozenset(extensions)
	result = ResizeResult()
	for category_dir in categories:
		label = category_dir.name
		dst_label_dir = output_root / label
		dst_label_dir.mkdir(parents=True, exist_ok=True)
		done = 0
		for src_path in list_category_images(category_dir, exts):
			try:
				out = resize_image(src_path, dst_label_dir / src_path.name, size)
			except (ImageReadError, ImageWriteError) as e:
				logger.warning("Skipping %s: %s", src_path, e)
				result.failures.append(FileFailure.from_error(e, str(src_path), label))
				continue
			result.written.append(str(out))
			done += 1
		logger.info("Resized %d images in '%s'", done, label)
	return result


def main():
	ap = argparse.ArgumentParser(description="Resize every class image to a fixed size into an output tree")
	ap.add_argument("--root", required=True, help="Dataset root with one subfolder per class")
	ap.add_argument("--out", default=OUTPUT_DIR, help="Destination root for resized images")
	ap.add_argument("--width", type=int, default=IMAGE_SIZE)
	ap.add_argument("--height", type=int, default=IMAGE_SIZE)
	ap.add_argument("--ext", nargs="+", default=sorted(IMAGE_EXTS), help="Accepted file extensions")
	ap.add_argument("--log-level", default="INFO")
	args = ap.parse_args()

	setup_logging(args.log_level)
	try:
		categories = enumerate_categories(args.root, exclude=(args.out,))
	except EdaError as e:
		raise SystemExit(f"error: {e}")
	exts = {e.lower() if e.startswith(".") else "." + e.lower() for e in args.ext}
	result = resize_dataset(categories, args.out, (args.width, args.height), exts)
	print(f"Resized {len(result.written)} images, skipped {len(result.failures)}. Output -> {os.path.abspath(args.out)}")


if __name__ == "__main__":
	main()
