"""Top-level package for the exam attempt engine.

Provides subpackages:
- exam_engine.core – immutable exam definition models, attempt state, schemas
- exam_engine.engine – status machine, timer, autosave, scoring, session
- exam_engine.storage – persistence stores for in-progress attempts
- exam_engine.providers – question set providers
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.3.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    from importlib.metadata import PackageNotFoundError, version as pkg_version
    try:
        return pkg_version("exam-attempt-engine")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__copyright__ = "Copyright 2026 Exam Attempt Engine contributors. Licensed under the MIT License"
__all__: list[str] = ["__version__", "__copyright__"]
