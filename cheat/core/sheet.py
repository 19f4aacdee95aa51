"""Cheatsheet model and loading.

A sheet is a text file, optionally starting with a YAML front matter
block that declares its syntax and tags::

    ---
    syntax: bash
    tags: [ compression ]
    ---
    # create an archive
    tar -czf out.tar.gz dir/
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field
import yaml

FRONT_MATTER_DELIMITER = "---"


class SheetError(Exception):
    """Raised when a sheet cannot be loaded."""


class Sheet(BaseModel):
    """A single cheatsheet."""

    title: str
    path: str
    text: str = ""
    read_only: bool = False
    syntax: str = ""
    tags: list[str] = Field(default_factory=list)


def _split_front_matter(raw: str) -> tuple[dict, str]:
    lines = raw.splitlines(keepends=True)
    if not lines or lines[0].rstrip("\r\n") != FRONT_MATTER_DELIMITER:
        return {}, raw

    for i, line in enumerate(lines[1:], start=1):
        if line.rstrip("\r\n") == FRONT_MATTER_DELIMITER:
            header = "".join(lines[1:i])
            body = "".join(lines[i + 1 :])
            data = yaml.safe_load(header) or {}
            if not isinstance(data, dict):
                raise SheetError("front matter must be a mapping")
            return data, body

    raise SheetError("front matter is not terminated")


_SCALAR_TYPES = (str, int, float, bool)


def _front_matter_tags(value: object, path: Path) -> list[str]:
    """Accept a list of scalars or a single scalar such as ``tags: git``."""
    if value is None:
        return []
    if isinstance(value, _SCALAR_TYPES):
        return [str(value)]
    if isinstance(value, list) and all(isinstance(tag, _SCALAR_TYPES) for tag in value):
        return [str(tag) for tag in value]
    raise SheetError(f"invalid tags in front matter of {path}: {value!r}")


def _front_matter_syntax(value: object, path: Path) -> str:
    if value is None:
        return ""
    if not isinstance(value, _SCALAR_TYPES):
        raise SheetError(f"invalid syntax in front matter of {path}: {value!r}")
    return str(value)


def load_sheet(
    path: str | Path,
    *,
    title: str | None = None,
    cheatpath_tags: list[str] | None = None,
    read_only: bool = False,
) -> Sheet:
    """Read a sheet file.

    Tags from the front matter are merged with the tags of the cheatpath
    the sheet lives in, deduplicated and sorted.

    Raises:
        SheetError: If the file cannot be read or its front matter is invalid.
    """
    sheet_path = Path(path)
    try:
        raw = sheet_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SheetError(f"failed to read sheet {sheet_path}: {e}") from e

    try:
        front_matter, body = _split_front_matter(raw)
    except yaml.YAMLError as e:
        raise SheetError(f"failed to parse front matter of {sheet_path}: {e}") from e

    tags = set(cheatpath_tags or [])
    tags.update(_front_matter_tags(front_matter.get("tags"), sheet_path))

    return Sheet(
        title=title or sheet_path.name,
        path=str(sheet_path),
        text=body,
        read_only=read_only,
        syntax=_front_matter_syntax(front_matter.get("syntax"), sheet_path),
        tags=sorted(tags),
    )
