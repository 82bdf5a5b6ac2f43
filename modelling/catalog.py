# MIT License
"""Directory scanning used by the dashboard to offer choices."""

from __future__ import annotations
from pathlib import Path
from typing import List


def list_models(models_dir: str | Path) -> List[str]:
    """Model names (file stems) of the ``.py`` files in ``models_dir``.

    Private modules (leading underscore) are skipped.  Returns an empty
    list when the directory does not exist.
    """
    models_dir = Path(models_dir)
    if not models_dir.is_dir():
        return []
    return sorted(p.stem for p in models_dir.glob("*.py") if not p.stem.startswith("_"))


def list_data_files(data_dir: str | Path) -> List[str]:
    data_dir = Path(data_dir)
    if not data_dir.is_dir():
        return []
    return sorted(p.name for p in data_dir.glob("*.txt"))


def list_scripts(scripts_dir: str | Path) -> List[str]:
    """Every regular, non-hidden file; scripts need no particular extension."""
    scripts_dir = Path(scripts_dir)
    if not scripts_dir.is_dir():
        return []
    return sorted(p.name for p in scripts_dir.iterdir() if p.is_file() and not p.name.startswith("."))


def qualified_name(model: str, package: str = "models") -> str:
    """Prefix ``model`` with the model namespace."""
    return f"{package}.{model}" if package else model
