"""Batch compilation of every source catalogue through an external compiler."""

from __future__ import annotations

import asyncio
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from intlcatalog.backend.config.schema import (
    DESTINATION_PLACEHOLDER,
    PYTHON_PLACEHOLDER,
    SOURCE_PLACEHOLDER,
    Settings,
)
from intlcatalog.backend.config.settings import load_settings
from intlcatalog.backend.errors import CatalogDirectoryError

logger = logging.getLogger(__name__)

# Shell convention for "command not found".
COMMAND_NOT_FOUND = 127


@dataclass(frozen=True)
class CompileResult:
    """Outcome of one external compiler invocation."""

    source: Path
    destination: Path
    returncode: int
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


@dataclass(frozen=True)
class BatchReport:
    """Joint outcome of a batch compilation."""

    results: tuple[CompileResult, ...] = ()
    orphans: tuple[Path, ...] = ()
    pruned: tuple[Path, ...] = ()

    @property
    def succeeded(self) -> tuple[CompileResult, ...]:
        return tuple(result for result in self.results if result.ok)

    @property
    def failed(self) -> tuple[CompileResult, ...]:
        return tuple(result for result in self.results if not result.ok)

    @property
    def ok(self) -> bool:
        return not self.failed


def list_source_catalogues(directory: Path) -> list[Path]:
    """List the files directly inside ``directory`` in a stable order."""

    try:
        entries = sorted(directory.iterdir())
    except OSError as exc:
        reason = exc.strerror or str(exc)
        logger.error("Unable to scan directory %s: %s", directory, reason)
        raise CatalogDirectoryError(directory, reason) from exc

    return [entry for entry in entries if entry.is_file()]


def build_command(template: Sequence[str], source: Path, destination: Path) -> list[str]:
    """Substitute the placeholders of a configured compiler command."""

    return [
        part.replace(PYTHON_PLACEHOLDER, sys.executable)
        .replace(SOURCE_PLACEHOLDER, str(source))
        .replace(DESTINATION_PLACEHOLDER, str(destination))
        for part in template
    ]


def find_orphans(destination_dir: Path, sources: Sequence[Path]) -> list[Path]:
    """Return compiled files whose source catalogue no longer exists."""

    if not destination_dir.is_dir():
        return []
    expected = {source.name for source in sources}
    return sorted(
        entry
        for entry in destination_dir.iterdir()
        if entry.is_file() and entry.name not in expected
    )


async def _run_compiler(
    command: list[str],
    source: Path,
    destination: Path,
    semaphore: asyncio.Semaphore,
) -> CompileResult:
    async with semaphore:
        logger.debug("Running %s", " ".join(command))
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            return CompileResult(source, destination, COMMAND_NOT_FOUND, str(exc))

        _, stderr = await process.communicate()

    returncode = process.returncode if process.returncode is not None else -1
    return CompileResult(
        source,
        destination,
        returncode,
        stderr.decode("utf-8", errors="replace").strip(),
    )


async def compile_catalogues(settings: Settings | None = None) -> BatchReport:
    """Compile every source catalogue and wait for all invocations to finish.

    All compiler processes are started before any of them is awaited, bounded
    only by ``max_concurrency`` when configured. A failing file never stops the
    others; failures are collected in the returned report instead.
    """

    settings = settings or load_settings()
    source_dir = settings.source_dir
    destination_dir = settings.destination_dir

    sources = list_source_catalogues(source_dir)
    destination_dir.mkdir(parents=True, exist_ok=True)

    limit = settings.compiler.max_concurrency or max(len(sources), 1)
    semaphore = asyncio.Semaphore(limit)

    tasks = []
    for source in sources:
        destination = destination_dir / source.name
        command = build_command(settings.compiler.command, source, destination)
        tasks.append(asyncio.create_task(_run_compiler(command, source, destination, semaphore)))

    results = tuple(await asyncio.gather(*tasks))
    for result in results:
        if result.ok:
            logger.info("Compiled %s -> %s", result.source.name, result.destination)
        else:
            logger.error(
                "Compiler failed for %s (exit %s): %s",
                result.source.name,
                result.returncode,
                result.stderr or "no output",
            )

    orphans = tuple(find_orphans(destination_dir, sources))
    pruned: list[Path] = []
    if orphans:
        if settings.compiler.prune_orphans and all(result.ok for result in results):
            for orphan in orphans:
                orphan.unlink()
                pruned.append(orphan)
            logger.info("Pruned %d orphaned compiled catalogues", len(pruned))
        else:
            logger.warning(
                "Compiled catalogues without a source: %s",
                ", ".join(orphan.name for orphan in orphans),
            )

    return BatchReport(results=results, orphans=orphans, pruned=tuple(pruned))


def run_compile_messages(settings: Settings | None = None) -> int:
    """Entry point for the ``compile-messages`` build task."""

    report = asyncio.run(compile_catalogues(settings))
    logger.info(
        "Compiled %d of %d catalogues",
        len(report.succeeded),
        len(report.results),
    )
    return 0 if report.ok else 1


__all__ = [
    "BatchReport",
    "COMMAND_NOT_FOUND",
    "CompileResult",
    "build_command",
    "compile_catalogues",
    "find_orphans",
    "list_source_catalogues",
    "run_compile_messages",
]
