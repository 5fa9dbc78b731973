"""
Shared fixtures: small synthetic class-folder datasets written with Pillow.
"""

import matplotlib

matplotlib.use("Agg")

import logging

import pytest
from PIL import Image

from corn_eda.config import LOGGER_NAME


def make_image(path, color=(120, 160, 40), size=(32, 24), mode="RGB"):
	path.parent.mkdir(parents=True, exist_ok=True)
	Image.new(mode, size, color).save(path)
	return path


@pytest.fixture
def image_factory():
	return make_image


@pytest.fixture
def corn_dataset(tmp_path):
	"""Healthy (5 jpgs), Rust (3 jpgs) and an empty Blight folder."""
	root = tmp_path / "data"
	for i in range(5):
		make_image(root / "Healthy" / f"healthy_{i}.jpg", color=(40, 150 + i, 30))
	for i in range(3):
		make_image(root / "Rust" / f"rust_{i}.jpg", color=(170, 90, 20 + i))
	(root / "Blight").mkdir(parents=True)
	(root / "Blight" / "README.txt").write_text("no images yet")
	return root


@pytest.fixture
def corrupt_file(tmp_path):
	def _make(path):
		path.parent.mkdir(parents=True, exist_ok=True)
		path.write_bytes(b"this is not a jpeg")
		return path

	return _make


@pytest.fixture(autouse=True)
def _reset_package_logger():
	yield
	logger = logging.getLogger(LOGGER_NAME)
	for handler in list(logger.handlers):
		logger.removeHandler(handler)
		handler.close()
