# Path: codelist_sync/output/versioned_path.py
"""
Versioned Output Paths

Input documents are never overwritten in place. Each save goes to the
next free versioned name next to the source (or in an output folder):

    toolmapschema.xml      -> toolmapschema_001.xml
    toolmapschema_007.xml  -> toolmapschema_008.xml (or the next free one)
"""

import re
from pathlib import Path
from typing import Optional

from ..config_loader import DEFAULT_VERSION_PATTERN


MAX_VERSION = 100000

_VERSIONED_STEM = re.compile(r'^(?P<core>.*?)_(?P<n>\d+)$')


def next_version_path(
    path: Path,
    pattern: str = DEFAULT_VERSION_PATTERN,
    output_dir: Optional[Path] = None
) -> Path:
    """
    Return the first free versioned path for a file.

    Args:
        path: Source file path
        pattern: str.format pattern for the version suffix (e.g., '_{:03d}')
        output_dir: Directory for the new file (defaults to the source directory)

    Returns:
        Path that does not exist yet

    Raises:
        OSError: If no free name is found below MAX_VERSION

    Example:
        next_version_path(Path('schema.xml'))  # Path('schema_001.xml')
    """
    path = Path(path)
    directory = Path(output_dir) if output_dir is not None else path.parent
    core = path.stem or 'file'
    start = 1

    match = _VERSIONED_STEM.match(core)
    if match:
        core = match.group('core')
        start = int(match.group('n')) + 1

    for version in range(start, MAX_VERSION):
        candidate = directory / f"{core}{pattern.format(version)}{path.suffix}"
        if not candidate.exists():
            return candidate

    raise OSError(f"Could not find an available versioned filename for {path}")


__all__ = ['next_version_path']
