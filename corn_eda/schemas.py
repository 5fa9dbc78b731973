from pydantic import BaseModel, Field
from typing import Dict, List, Optional, Tuple


class FileFailure(BaseModel):
	"""A skipped file or category and why it was skipped."""
	path: str
	category: str
	error: str
	message: str

	@classmethod
	def from_error(cls, err: Exception, path: str, category: str) -> "FileFailure":
		return cls(path=str(path), category=category, error=type(err).__name__, message=str(err))


class ColorSignature(BaseModel):
	red: float = Field(ge=0.0, le=255.0)
	green: float = Field(ge=0.0, le=255.0)
	blue: float = Field(ge=0.0, le=255.0)
	sampled: int = 0

	def as_tuple(self) -> Tuple[float, float, float]:
		return (self.red, self.green, self.blue)


class ResizeResult(BaseModel):
	written: List[str] = Field(default_factory=list)
	failures: List[FileFailure] = Field(default_factory=list)


class RunReport(BaseModel):
	dataset_root: str
	output_root: Optional[str] = None
	categories: List[str]
	distribution: Dict[str, int]
	signatures: Dict[str, ColorSignature]
	resized: int = 0
	failures: List[FileFailure] = Field(default_factory=list)
