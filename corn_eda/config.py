from pathlib import Path
from typing import FrozenSet, Optional
import json
import os

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError

LOGGER_NAME = "corn_eda"

# Paths (may be overridden by CLI or a JSON config file)
DATA_DIR = "data"
OUTPUT_DIR = "processed_data"
REPORTS_DIR = "reports"

# Image settings
IMAGE_SIZE: int = 128
IMAGE_EXTS: FrozenSet[str] = frozenset({".jpg", ".jpeg"})
JPEG_QUALITY: int = 95

# Color summary defaults
SAMPLE_SIZE: int = 10


class PipelineConfig(BaseModel):
	# unknown keys (typos in a config file) are errors
	model_config = ConfigDict(extra="forbid")

	dataset_root: Path = Path(DATA_DIR)
	output_root: Path = Path(OUTPUT_DIR)
	target_width: int = Field(default=IMAGE_SIZE, gt=0)
	target_height: int = Field(default=IMAGE_SIZE, gt=0)
	sample_size: int = Field(default=SAMPLE_SIZE, gt=0)
	image_extensions: FrozenSet[str] = IMAGE_EXTS
	random_seed: Optional[int] = None

	@field_validator("image_extensions", mode="before")
	@classmethod
	def _normalize_extensions(cls, value):
		if isinstance(value, str):
			value = [value]
		exts = set()
		for ext in value:
			ext = str(ext).strip().lower()
			if not ext:
				continue
			exts.add(ext if ext.startswith(".") else "." + ext)
		if not exts:
			raise ValueError("at least one image extension is required")
		return frozenset(exts)

	@property
	def target_size(self):
		return (self.target_width, self.target_height)


def load_config(path: Optional[str] = None, **overrides) -> PipelineConfig:
	"""Build a PipelineConfig from an optional JSON file plus keyword overrides.

	Overrides whose value is None are ignored so argparse defaults can be
	passed straight through.
	"""
	data = {}
	if path:
		if not os.path.exists(path):
			raise ConfigError(f"Config file not found: {path}")
		try:
			with open(path, "r") as f:
				data = json.load(f)
		except json.JSONDecodeError as e:
			raise ConfigError(f"Invalid JSON in {path}: {e}") from e
		if not isinstance(data, dict):
			raise ConfigError(f"Config file {path} must contain a JSON object")
	data.update({k: v for k, v in overrides.items() if v is not None})
	try:
		return PipelineConfig(**data)
	except ValidationError as e:
		raise ConfigError(str(e)) from e
