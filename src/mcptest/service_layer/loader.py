"""Test file discovery and loading.

Test files register their suites as a side effect of being imported, so
loading a file is just importing it under a unique module name.
"""

import glob
import hashlib
import importlib.util
import logging
import sys
from collections.abc import Iterable
from pathlib import Path
from types import ModuleType

from mcptest.domain.errors import TestFileLoadError

logger = logging.getLogger(__name__)

MODULE_PREFIX = "mcptest_loaded_"


def discover_test_files(patterns: Iterable[str], root: Path | None = None) -> list[Path]:
    """Expand glob patterns (relative to ``root``) into test files.

    Plain paths to existing files are accepted as-is. The result is sorted
    and free of duplicates.

    Args:
        patterns: Glob patterns such as ``**/*.test.py``, or file paths.
        root: Directory relative patterns are resolved against (default: CWD).

    Returns:
        list[Path]: Resolved paths of the matching files.
    """
    root = root or Path.cwd()
    found: set[Path] = set()
    for pattern in patterns:
        candidate = Path(pattern)
        if not candidate.is_absolute():
            candidate = root / candidate
        if candidate.is_file():
            found.add(candidate.resolve())
            continue
        matches = [
            Path(m)
            for m in glob.glob(str(candidate), recursive=True)
            if Path(m).is_file()
        ]
        logger.debug("Pattern %s matched %d file(s)", pattern, len(matches))
        found.update(m.resolve() for m in matches)
    return sorted(found)


def _module_name(path: Path) -> str:
    digest = hashlib.sha256(str(path).encode("utf-8")).hexdigest()[:12]
    stem = "".join(c if c.isalnum() else "_" for c in path.stem)
    return f"{MODULE_PREFIX}{stem}_{digest}"


def load_test_file(path: Path) -> ModuleType:
    """Import a test file so its suites register.

    Raises:
        TestFileLoadError: If the file cannot be imported.
    """
    name = _module_name(path)
    spec = importlib.util.spec_from_file_location(name, path)
    if spec is None or spec.loader is None:
        raise TestFileLoadError(path, ImportError("not a loadable Python file"))
    module = importlib.util.module_from_spec(spec)
    sys.modules[name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        sys.modules.pop(name, None)
        raise TestFileLoadError(path, e) from e
    logger.debug("Loaded test file %s as %s", path, name)
    return module


def load_test_files(
    paths: Iterable[Path], bail: bool = False
) -> list[TestFileLoadError]:
    """Load each file in turn, collecting load errors.

    Args:
        paths: Files to import.
        bail: Stop at the first file that fails to load.

    Returns:
        list[TestFileLoadError]: The errors met (empty if all files loaded).
    """
    errors: list[TestFileLoadError] = []
    for path in paths:
        try:
            load_test_file(path)
        except TestFileLoadError as e:
            logger.error("%s", e)
            errors.append(e)
            if bail:
                break
    return errors
