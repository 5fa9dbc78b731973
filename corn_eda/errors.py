"""
Exception hierarchy for the corn-leaf EDA pipeline.

EdaError (base, Exception)
├── NotFoundError(EdaError, FileNotFoundError)   dataset root or category missing
├── ImageReadError(EdaError)                     one image could not be decoded
├── ImageWriteError(EdaError)                    one resized image could not be saved
├── UnsupportedChannelError(EdaError)            channel count other than 1 or >= 3
├── EmptyCategoryError(EdaError)                 nothing to sample in a category
└── ConfigError(EdaError, ValueError)            invalid configuration

Only NotFoundError and ConfigError abort a run. The others are recorded per
file or per category and the batch continues.
"""


class EdaError(Exception):
	"""Base exception for all pipeline errors."""


class NotFoundError(EdaError, FileNotFoundError):
	def __init__(self, path):
		self.path = str(path)
		super().__init__(f"Path not found: {self.path}")


class ImageReadError(EdaError):
	def __init__(self, path, reason: str = ""):
		self.path = str(path)
		self.reason = reason
		msg = f"Cannot read image {self.path}"
		super().__init__(f"{msg}: {reason}" if reason else msg)


class ImageWriteError(EdaError):
	def __init__(self, path, reason: str = ""):
		self.path = str(path)
		self.reason = reason
		msg = f"Cannot write image {self.path}"
		super().__init__(f"{msg}: {reason}" if reason else msg)


class UnsupportedChannelError(EdaError):
	def __init__(self, path, channels: int):
		self.path = str(path)
		self.channels = channels
		super().__init__(f"Unsupported channel count {channels} in {self.path}")


class EmptyCategoryError(EdaError):
	def __init__(self, category: str, reason: str = "no qualifying images", failures=None):
		self.category = category
		# per-file failures collected before the category was given up on
		self.failures = list(failures or [])
		super().__init__(f"Category '{category}' has {reason}")


class ConfigError(EdaError, ValueError):
	"""Configuration validation error."""
