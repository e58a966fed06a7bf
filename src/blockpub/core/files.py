"""Source tree discovery and path helpers"""

import os
from pathlib import Path


def discover_content(content_dir: Path) -> list[Path]:
    """Return sorted files under content_dir (recursive, any extension)."""
    return sorted(p for p in Path(content_dir).rglob("*.*") if p.is_file())


def content_name(path: Path, base: Path) -> str:
    """Return path relative to base in POSIX form, e.g. 'posts/hello.post'."""
    return Path(path).relative_to(base).as_posix()


def relative_path(path: Path, base: Path) -> str:
    """Return the relative path from base to path; '.' when they are the same directory."""
    return Path(os.path.relpath(path, base)).as_posix()


def expect_file(path: Path) -> Path:
    if not Path(path).is_file():
        raise FileNotFoundError(f"Expected file '{path}' to exist")
    return Path(path)


def expect_directory(path: Path) -> Path:
    if not Path(path).is_dir():
        raise NotADirectoryError(f"Expected directory '{path}' to exist")
    return Path(path)


def ensure_directory(path: Path) -> Path:
    Path(path).mkdir(parents=True, exist_ok=True)
    return Path(path)
