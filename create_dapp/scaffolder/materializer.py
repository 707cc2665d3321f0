"""Copies a template's file tree into the target project directory.

The template's immediate entries are filtered through ``EXCLUDED_NAMES``,
renamed through ``RENAME_FILES`` and copied concurrently.  Every copy is
allowed to settle before the outcome is decided, so a failing sibling never
interrupts the others; the target is left with whatever the successful
copies produced.
"""

from __future__ import annotations

import asyncio
import os
import shutil
from pathlib import Path

from create_dapp.errors import (
    MaterializationError,
    TargetDirectoryError,
    TemplateNotFoundError,
)
from create_dapp.utils import remove_path


# ---------------------------------------------------------------------------
# Fixed filtering rules
# ---------------------------------------------------------------------------

EXCLUDED_NAMES: frozenset[str] = frozenset({
    ".DS_Store",
    "node_modules",
    "package-lock.json",
    ".aptos",
    "build",
    ".env",
})

# Package registries drop ``.gitignore`` files, so templates ship them under
# a different name.
RENAME_FILES: dict[str, str] = {
    "_gitignore": ".gitignore",
}


# ---------------------------------------------------------------------------
# Materializer
# ---------------------------------------------------------------------------


class FileMaterializer:
    """Materializes a template directory into a target directory."""

    def __init__(
        self,
        exclude: frozenset[str] | set[str] = EXCLUDED_NAMES,
        rename: dict[str, str] | None = None,
    ) -> None:
        self.exclude = frozenset(exclude)
        self.rename = dict(RENAME_FILES if rename is None else rename)

    def destination_name(self, name: str) -> str:
        """Name a template entry receives in the target."""
        return self.rename.get(name, name)

    def entries(self, template_dir: Path) -> list[Path]:
        """Immediate template entries that will be copied, in name order."""
        return sorted(
            (p for p in template_dir.iterdir() if p.name not in self.exclude),
            key=lambda p: p.name,
        )

    async def create_target(self, target_dir: str | Path) -> Path:
        """Create *target_dir* and its parents.  Existing directories are kept."""
        target = Path(target_dir)
        try:
            await asyncio.to_thread(target.mkdir, parents=True, exist_ok=True)
        except OSError as exc:
            raise TargetDirectoryError(
                f"Could not create {target}: {exc.strerror or exc}"
            ) from exc
        return target

    async def materialize(self, template_dir: str | Path, target_dir: str | Path) -> list[Path]:
        """Copy *template_dir* into *target_dir*.

        Args:
            template_dir: Directory of the selected template.
            target_dir: Project directory. Created if missing; may already
                hold files from an earlier run.

        Returns:
            The top-level paths written into *target_dir*.

        Raises:
            TemplateNotFoundError: If *template_dir* is not a directory.
            TargetDirectoryError: If *target_dir* cannot be created.
            MaterializationError: If one or more entries failed to copy.
        """
        source = Path(template_dir)
        target = Path(target_dir)

        if not await asyncio.to_thread(source.is_dir):
            raise TemplateNotFoundError(str(source))

        await self.create_target(target)
        await asyncio.to_thread(self._purge_stale_entries, target)

        entries = await asyncio.to_thread(self.entries, source)
        destinations = [target / self.destination_name(e.name) for e in entries]

        results = await asyncio.gather(
            *(
                asyncio.to_thread(self._copy_entry, entry, dest)
                for entry, dest in zip(entries, destinations)
            ),
            return_exceptions=True,
        )

        failures = {
            entry.name: str(result)
            for entry, result in zip(entries, results)
            if isinstance(result, BaseException)
        }
        if failures:
            raise MaterializationError(failures)

        return destinations

    # -- Internal helpers --------------------------------------------------

    def _purge_stale_entries(self, target: Path) -> None:
        """Remove target entries a fresh materialization never writes.

        Excluded names go at any depth; rename sources only at the top level.
        """
        for name in self.rename:
            remove_path(target / name)

        for root, dirs, files in os.walk(target):
            for name in [d for d in dirs if d in self.exclude]:
                remove_path(Path(root) / name)
                dirs.remove(name)
            for name in files:
                if name in self.exclude:
                    remove_path(Path(root) / name)

    def _copy_entry(self, source: Path, dest: Path) -> None:
        if source.is_dir():
            shutil.copytree(
                source,
                dest,
                dirs_exist_ok=True,
                ignore=shutil.ignore_patterns(*self.exclude),
            )
        else:
            shutil.copy2(source, dest)

