# Dataset-id inference: derive a stable grouping key from an SBOM file's path.

from __future__ import annotations

import logging
import os
import re
from pathlib import Path, PurePath
from typing import Callable, Optional, Sequence, Tuple, Union

logger = logging.getLogger(__name__)

# A rule matches when every group has at least one needle in the name.
KeywordRule = Tuple[Tuple[Tuple[str, ...], ...], str]

# Applied to Trivy-style "sbom-<image>" file names.
FILENAME_RULES: Sequence[KeywordRule] = (
    ((("stable",),), "stable"),
    ((("arm64",),), "arm64"),
    ((("amd64",), ("backend",)), "backend-amd64"),
    ((("amd64",), ("frontend",)), "frontend-amd64"),
    ((("amd64",),), "amd64"),
    ((("backend",),), "backend"),
    ((("frontend",),), "frontend"),
)

# Applied to each directory segment of the path, left to right.
DIRECTORY_RULES: Sequence[KeywordRule] = (
    ((("stable", "prod", "production"),), "stable"),
    ((("arm64", "aarch64"),), "arm64"),
    ((("amd64", "x86_64"), ("backend",)), "backend-amd64"),
    ((("amd64", "x86_64"), ("frontend",)), "frontend-amd64"),
    ((("amd64", "x86_64"),), "amd64"),
    ((("backend", "api"),), "backend"),
    ((("frontend", "web", "ui"),), "frontend"),
    ((("main", "master"),), "main"),
    ((("develop", "dev"),), "develop"),
    ((("release", "rel"),), "release"),
    ((("test", "testing"),), "test"),
    ((("staging", "stage"),), "staging"),
)

GENERIC_DIRS = frozenset({"src", "lib", "bin", "etc", "var", "tmp", "temp", "all-artifacts"})

GENERIC_FILE_NAME = re.compile(r"sbom|bom|cyclonedx|spdx", re.IGNORECASE)

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9\-_]")
_DIGITS_ONLY = re.compile(r"\d+", re.ASCII)

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def sanitize(name: str) -> str:
    """Replace every character outside [a-zA-Z0-9-_] with '-'."""
    return _UNSAFE_CHARS.sub("-", name)


def match_keywords(name: str, rules: Sequence[KeywordRule]) -> Optional[str]:
    """Return the label of the first rule whose needle groups all occur in `name`."""
    for groups, label in rules:
        if all(any(needle in name for needle in group) for group in groups):
            return label
    return None


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def path_hash(text: str) -> str:
    """
    32-bit rolling hash (h = h * 31 + c over UTF-16 code units), base-36, 6 chars.

    Deterministic across runs and platforms.
    """
    h = 0
    data = text.encode("utf-16-le")
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = (h * 31 + unit) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return _to_base36(abs(h))[:6]


def _relative_parts(file_path: Union[str, Path], root: Optional[Union[str, Path]]) -> Tuple[str, Tuple[str, ...]]:
    text = str(file_path)
    if root is not None:
        try:
            text = os.path.relpath(text, str(root))
        except ValueError:
            # Different drives on Windows; keep the path as given.
            pass
    return text, PurePath(text).parts


def _from_sbom_file_name(stem: str, parts: Tuple[str, ...]) -> Optional[str]:
    lowered = stem.lower()
    if not lowered.startswith("sbom-"):
        return None
    image = lowered[len("sbom-"):]
    if image.endswith(".cyclonedx"):
        image = image[: -len(".cyclonedx")]
    if not image:
        return None
    return match_keywords(image, FILENAME_RULES) or sanitize(image)


def _from_directories(stem: str, parts: Tuple[str, ...]) -> Optional[str]:
    for segment in parts[:-1]:
        dir_name = segment.lower()
        if dir_name in GENERIC_DIRS:
            continue
        label = match_keywords(dir_name, DIRECTORY_RULES)
        if label:
            return label
        if len(dir_name) > 2 and not _DIGITS_ONLY.fullmatch(dir_name):
            return sanitize(dir_name)
    return None


def _from_file_name(stem: str, parts: Tuple[str, ...]) -> Optional[str]:
    if len(stem) > 2 and not GENERIC_FILE_NAME.fullmatch(stem):
        return sanitize(stem)
    return None


def _from_parent_directory(stem: str, parts: Tuple[str, ...]) -> Optional[str]:
    if len(parts) > 1 and len(parts[-2]) > 2:
        return sanitize(parts[-2])
    return None


# Strategy order matters: earlier strategies are more specific.
STRATEGIES: Sequence[Tuple[str, Callable[[str, Tuple[str, ...]], Optional[str]]]] = (
    ("sbom-file-name", _from_sbom_file_name),
    ("directory-keyword", _from_directories),
    ("file-name", _from_file_name),
    ("parent-directory", _from_parent_directory),
)


def resolve_dataset_id(
    file_path: Union[str, Path],
    root: Optional[Union[str, Path]] = None,
) -> str:
    """
    Derive the dataset id for an SBOM file.

    Args:
        file_path: Path of the SBOM file.
        root: If given, the path is made relative to it first (the repository
              root in CI), so ids do not depend on the checkout location.

    Returns:
        The first id produced by the strategies in STRATEGIES, or
        "dataset-<hash>" of the relative path when none applies.

    Examples:
        >>> resolve_dataset_id("reports/sbom-backend-amd64.cyclonedx.json")
        'backend-amd64'
    """
    relative, parts = _relative_parts(file_path, root)
    stem = PurePath(relative).stem

    for name, strategy in STRATEGIES:
        dataset_id = strategy(stem, parts)
        if dataset_id:
            logger.debug("Dataset id for %s from %s: %s", relative, name, dataset_id)
            return dataset_id

    dataset_id = f"dataset-{path_hash(relative)}"
    logger.debug("Dataset id for %s from path hash: %s", relative, dataset_id)
    return dataset_id
