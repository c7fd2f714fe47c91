"""Pipeline orchestration for stub generation runs."""

from __future__ import annotations

import importlib
import sys
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .compilers import Compiler, CompilerError, discover_compilers
from .config import GenStubsConfig, load_config
from .logging import get_logger, log_failure
from .registry import ClassRegistry, RuntimeClassRegistry
from .stubs import StubCheckResult, StubTree, StubWriter, WriteResult, render_tree


class GenerationError(RuntimeError):
    """Raised when a generation run cannot start (bad modules, bad config)."""


@dataclass
class CompilerFailure:
    """One candidate that a compiler could not process."""

    compiler: str
    class_name: str
    message: str


@dataclass
class GenerationResult:
    """Outcome of a generation run."""

    output_dir: Path
    files: Dict[PurePosixPath, str] = field(default_factory=dict)
    failures: List[CompilerFailure] = field(default_factory=list)
    written: Optional[WriteResult] = None
    check: Optional[StubCheckResult] = None

    @property
    def ok(self) -> bool:
        if self.failures:
            return False
        return self.check is None or self.check.ok


class Orchestrator:
    """Coordinates module loading, compilers, rendering and file placement."""

    def __init__(
        self,
        registry: ClassRegistry | None = None,
        compilers: Optional[Iterable[Compiler]] = None,
    ) -> None:
        self._registry = registry
        self._compiler_overrides = list(compilers) if compilers is not None else None
        self.logger = get_logger("orchestrator")

    def run(
        self,
        path: str = ".",
        *,
        modules: Sequence[str] = (),
        output_dir: str | Path | None = None,
        check: bool = False,
        enabled: Sequence[str] | None = None,
    ) -> GenerationResult:
        """Generate stubs for the project at ``path``; verify instead of writing when ``check``."""
        config = self._prepare(path, modules)
        target_dir = self._resolve_output_dir(config, output_dir)

        compilers = self._select_compilers(config, enabled)
        tree, failures = self.build_tree(compilers)
        files = render_tree(tree)
        self.logger.debug("Rendered %d stub file(s)", len(files))

        result = GenerationResult(output_dir=target_dir, files=files, failures=failures)
        writer = StubWriter(target_dir)
        if check:
            result.check = writer.verify(files)
            for stale in result.check.stale:
                self.logger.warning("Stub out of date: %s", stale)
                self.logger.debug("%s", result.check.diffs.get(stale, ""))
            for missing in result.check.missing:
                self.logger.warning("Stub missing: %s", missing)
            for obsolete in result.check.obsolete:
                self.logger.warning("Stub no longer generated: %s", obsolete)
        else:
            result.written = writer.write(files)
            self.logger.info(
                "Wrote %d stub file(s), removed %d, %d unchanged in %s",
                len(result.written.written),
                len(result.written.removed),
                len(result.written.unchanged),
                target_dir,
            )
        return result

    def list_candidates(
        self,
        path: str = ".",
        *,
        modules: Sequence[str] = (),
        enabled: Sequence[str] | None = None,
    ) -> List[Tuple[str, str]]:
        """Return ``(compiler, class name)`` pairs without generating anything."""
        config = self._prepare(path, modules)
        pairs: List[Tuple[str, str]] = []
        for compiler in self._select_compilers(config, enabled):
            for candidate in compiler.gather_candidates():
                name = compiler.qualified_name_of(candidate) or repr(candidate)
                pairs.append((_compiler_name(compiler), name))
        return pairs

    def build_tree(self, compilers: Sequence[Compiler]) -> Tuple[StubTree, List[CompilerFailure]]:
        """Run every compiler over its candidates, isolating per-candidate failures."""
        tree = StubTree()
        failures: List[CompilerFailure] = []
        for compiler in compilers:
            compiler_name = _compiler_name(compiler)
            processed = 0
            for candidate in compiler.gather_candidates():
                try:
                    compiler.process(tree, candidate)
                except CompilerError as exc:
                    class_name = exc.class_name or compiler.qualified_name_of(candidate) or repr(candidate)
                    log_failure(self.logger, f"{compiler_name} failed for {class_name}", exc)
                    failures.append(
                        CompilerFailure(compiler=compiler_name, class_name=class_name, message=str(exc))
                    )
                    continue
                processed += 1
            self.logger.debug("Compiler %s processed %d candidate(s)", compiler_name, processed)
        return tree, failures

    def _prepare(self, path: str, modules: Sequence[str]) -> GenStubsConfig:
        repo_path = Path(path).expanduser().resolve()
        if not repo_path.exists():
            raise FileNotFoundError(f"Project path does not exist: {repo_path}")
        config = load_config(repo_path)
        requested = list(dict.fromkeys([*config.modules, *modules]))
        self._import_modules(config.root, requested)
        return config

    def _import_modules(self, root: Path, modules: Sequence[str]) -> None:
        if not modules:
            self.logger.debug("No modules requested; inspecting already-loaded classes only")
            return
        root_entry = str(root)
        if root_entry not in sys.path:
            sys.path.insert(0, root_entry)
        for name in modules:
            self.logger.debug("Importing %s", name)
            try:
                importlib.import_module(name)
            except Exception as exc:
                raise GenerationError(f"Failed to import module '{name}': {exc}") from exc

    def _select_compilers(
        self, config: GenStubsConfig, enabled: Sequence[str] | None
    ) -> List[Compiler]:
        if self._compiler_overrides is not None:
            return list(self._compiler_overrides)
        names = enabled if enabled else (config.compilers.enabled or None)
        registry = self._registry or RuntimeClassRegistry()
        return discover_compilers(registry, names, config)

    @staticmethod
    def _resolve_output_dir(config: GenStubsConfig, output_dir: str | Path | None) -> Path:
        if output_dir is None:
            return config.resolved_output_dir
        candidate = Path(output_dir).expanduser()
        if not candidate.is_absolute():
            candidate = config.root / candidate
        return candidate


def _compiler_name(compiler: Compiler) -> str:
    return compiler.name or compiler.__class__.__name__


__all__ = ["CompilerFailure", "GenerationError", "GenerationResult", "Orchestrator"]
