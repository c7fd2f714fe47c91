"""Place rendered stubs on disk and check them for staleness."""

from __future__ import annotations

import difflib
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Dict, List, Mapping, Set

from .render import GENERATED_HEADER
from ..logging import get_logger


@dataclass
class WriteResult:
    """Files touched by a write pass."""

    written: List[Path] = field(default_factory=list)
    removed: List[Path] = field(default_factory=list)
    unchanged: List[Path] = field(default_factory=list)


@dataclass
class StubCheckResult:
    """Differences between rendered stubs and the files on disk."""

    stale: List[Path] = field(default_factory=list)
    missing: List[Path] = field(default_factory=list)
    obsolete: List[Path] = field(default_factory=list)
    diffs: Dict[Path, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not (self.stale or self.missing or self.obsolete)


class StubWriter:
    """Owns one output directory of generated ``.pyi`` files.

    Only files whose first line is the generated header are ever removed, so
    hand-written stubs living next to generated ones are left alone.
    """

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = output_dir
        self.logger = get_logger("stubs.writer")

    def write(self, files: Mapping[PurePosixPath, str]) -> WriteResult:
        result = WriteResult()
        expected: Set[Path] = set()
        for relative, content in sorted(files.items()):
            target = self.output_dir / Path(relative)
            expected.add(target)
            if target.exists() and target.read_text(encoding="utf-8") == content:
                result.unchanged.append(target)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
            self.logger.debug("Wrote %s", target)
            result.written.append(target)

        for path in self._generated_files():
            if path in expected:
                continue
            path.unlink()
            self.logger.debug("Removed obsolete stub %s", path)
            result.removed.append(path)
            self._prune_empty_dirs(path.parent)
        return result

    def verify(self, files: Mapping[PurePosixPath, str]) -> StubCheckResult:
        result = StubCheckResult()
        expected: Set[Path] = set()
        for relative, content in sorted(files.items()):
            target = self.output_dir / Path(relative)
            expected.add(target)
            if not target.exists():
                result.missing.append(target)
                continue
            current = target.read_text(encoding="utf-8")
            if current == content:
                continue
            result.stale.append(target)
            result.diffs[target] = "".join(
                difflib.unified_diff(
                    current.splitlines(keepends=True),
                    content.splitlines(keepends=True),
                    fromfile=f"{relative} (on disk)",
                    tofile=f"{relative} (generated)",
                )
            )
        result.obsolete = [path for path in self._generated_files() if path not in expected]
        return result

    def _generated_files(self) -> List[Path]:
        if not self.output_dir.is_dir():
            return []
        generated: List[Path] = []
        for path in sorted(self.output_dir.rglob("*.pyi")):
            try:
                with path.open(encoding="utf-8") as handle:
                    first_line = handle.readline().rstrip("\n")
            except (OSError, UnicodeDecodeError):
                continue
            if first_line == GENERATED_HEADER:
                generated.append(path)
        return generated

    def _prune_empty_dirs(self, directory: Path) -> None:
        root = self.output_dir.resolve()
        current = directory
        while current.resolve() != root and root in current.resolve().parents:
            if any(current.iterdir()):
                return
            current.rmdir()
            current = current.parent


__all__ = ["StubCheckResult", "StubWriter", "WriteResult"]
