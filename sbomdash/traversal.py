"""
File discovery: expand SBOM glob patterns into a sorted list of candidate files.

Patterns come from the CLI or the INPUT_SBOM_FILES environment variable as a
comma-separated string and are expanded relative to the repository root.
Build output and dependency folders are skipped, as is anything that is not
JSON, YAML or XML.

Typical usage:
    from pathlib import Path
    from sbomdash.traversal import discover_sbom_files

    files = discover_sbom_files("**/*.json, reports/**/*.yaml", root=Path("."))
"""

import glob
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Set, Union

from sbomdash.parser import SUPPORTED_EXTENSIONS

logger = logging.getLogger(__name__)

# Directory names never searched for SBOMs
DEFAULT_IGNORE_DIRS: Set[str] = {
    "node_modules",
    "dist",
    "build",
    ".git",
    "coverage",
    "test-results",
}


def split_patterns(patterns: Union[str, Iterable[str]]) -> List[str]:
    """
    Split a comma-separated pattern string into trimmed, non-empty patterns.

    Examples:
        >>> split_patterns("**/*.json, sboms/*.yml,")
        ['**/*.json', 'sboms/*.yml']
    """
    if isinstance(patterns, str):
        raw: Iterable[str] = patterns.split(",")
    else:
        raw = patterns
    return [p.strip() for p in raw if p and p.strip()]


def is_supported_file(path: Path) -> bool:
    """True for .json, .xml, .yaml and .yml files (case-insensitive)."""
    return path.suffix.lower() in SUPPORTED_EXTENSIONS


def should_ignore_path(path: Path, root: Path, ignore_dirs: Set[str]) -> bool:
    """
    Check whether any directory between root and the file is in ignore_dirs.

    Only directory segments are checked, not the file name itself.
    """
    try:
        parts = path.relative_to(root).parts
    except ValueError:
        parts = path.parts
    return any(part in ignore_dirs for part in parts[:-1])


def _is_within(path: Path, directory: Path) -> bool:
    try:
        path.relative_to(directory)
    except ValueError:
        return False
    return True


def discover_sbom_files(
    patterns: Union[str, Sequence[str]],
    root: Path,
    ignore_dirs: Optional[Set[str]] = None,
    exclude_dir: Optional[Path] = None,
) -> List[Path]:
    """
    Expand glob patterns into the SBOM files to process.

    Args:
        patterns: Comma-separated string or list of glob patterns ("**" recurses).
                  Relative patterns are resolved against `root`.
        root: Repository root.
        ignore_dirs: Directory names to skip. If None, uses DEFAULT_IGNORE_DIRS.
        exclude_dir: A directory whose contents are never returned (the
                     output directory, so generated JSON is not re-ingested).

    Returns:
        Unique absolute paths of supported files, sorted for deterministic
        processing order.
    """
    if ignore_dirs is None:
        ignore_dirs = DEFAULT_IGNORE_DIRS

    root = root.resolve()
    excluded = exclude_dir.resolve() if exclude_dir is not None else None
    pattern_list = split_patterns(patterns)
    logger.info("Searching for SBOM files with patterns: %s", ", ".join(pattern_list))

    found: Set[Path] = set()
    for pattern in pattern_list:
        try:
            matches = glob.glob(pattern, root_dir=str(root), recursive=True)
        except (OSError, ValueError) as e:
            logger.warning('Failed to search for pattern "%s": %s', pattern, e)
            continue

        count = 0
        for match in matches:
            path = (root / match).resolve()
            if not path.is_file():
                continue
            if should_ignore_path(path, root, ignore_dirs):
                logger.debug("Ignoring file in excluded directory: %s", path)
                continue
            if excluded is not None and _is_within(path, excluded):
                logger.debug("Ignoring file in output directory: %s", path)
                continue
            found.add(path)
            count += 1
        logger.info('Pattern "%s" found %d file(s)', pattern, count)

    supported = []
    for path in sorted(found):
        if is_supported_file(path):
            supported.append(path)
        else:
            logger.debug("Skipping unsupported file: %s (extension: %s)", path, path.suffix.lower())

    logger.info(
        "Found %d supported SBOM file(s) out of %d total file(s)",
        len(supported),
        len(found),
    )
    for path in supported:
        logger.info("  - %s", path.relative_to(root) if _is_within(path, root) else path)
    return supported
