"""
Batch result files.

`dire enrich --format json -o FILE` writes its run through `save`; `load`
reads such a file back into a BatchResult.
"""

from pathlib import Path
from typing import Union

from dire.ir.schema import BatchResult

PathLike = Union[str, Path]


def to_json(result: BatchResult, indent: int = 2) -> str:
    return result.model_dump_json(indent=indent)


def from_json(text: str) -> BatchResult:
    """Parse a batch result. Raises pydantic's ValidationError on bad input."""
    return BatchResult.model_validate_json(text)


def save(result: BatchResult, path: PathLike) -> Path:
    """Write `result` as UTF-8 JSON, creating missing parent directories."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(to_json(result) + "\n", encoding="utf-8")
    return target


def load(path: PathLike) -> BatchResult:
    return from_json(Path(path).read_text(encoding="utf-8"))
