"""Zip extraction for the WordPress and starter-kit archives.

Both archives unpack into a single top-level folder (``wordpress/`` and
``csalmeida-hozokit-<sha>/``). The extractor discovers that folder from the
entry list, unpacks everything, merges the folder's contents into a target
directory and finally removes the extracted folder and the archive itself.
"""

from __future__ import annotations

import asyncio
import shutil
import zipfile
from pathlib import Path, PurePosixPath

from rich.console import Console

from hozokit_generator.errors import FilesystemError, MalformedArchiveError
from hozokit_generator.utils import print_error


def top_level_folder(zip_path: str | Path) -> str:
    """Return the name of the single folder an archive unpacks into.

    Raises:
        FilesystemError: If the archive does not exist.
        MalformedArchiveError: If the file is not a zip, is empty, has more
            than one top-level entry, has a file at the top level, or has
            entries that would land outside the extraction directory.
    """
    path = Path(zip_path)
    if not path.is_file():
        raise FilesystemError(f"Archive not found: {path}", path=path)

    try:
        with zipfile.ZipFile(path) as archive:
            names = archive.namelist()
    except zipfile.BadZipFile as exc:
        raise MalformedArchiveError(path, f"not a zip file ({exc})") from exc

    if not names:
        raise MalformedArchiveError(path, "archive is empty")

    tops: set[str] = set()
    nested = False
    for name in names:
        entry = PurePosixPath(name.replace("\\", "/"))
        if entry.is_absolute() or ".." in entry.parts:
            raise MalformedArchiveError(path, f"unsafe entry path '{name}'")
        parts = [part for part in entry.parts if part not in ("", ".")]
        if not parts:
            continue
        tops.add(parts[0])
        if len(parts) > 1 or name.endswith("/"):
            nested = True

    if len(tops) != 1:
        found = ", ".join(sorted(tops)) or "none"
        raise MalformedArchiveError(
            path, f"expected exactly one top-level folder, found: {found}"
        )
    if not nested:
        raise MalformedArchiveError(path, "the top-level entry is a file, not a folder")
    return tops.pop()


def _cleanup(extracted: Path, zip_path: Path) -> list[str]:
    """Remove the extracted folder and the archive; return failure messages."""
    failures: list[str] = []
    try:
        shutil.rmtree(extracted)
    except FileNotFoundError:
        pass
    except OSError as exc:
        failures.append(f"Could not remove extracted folder {extracted}: {exc}")
    try:
        zip_path.unlink(missing_ok=True)
    except OSError as exc:
        failures.append(f"Could not remove {zip_path}: {exc}")
    return failures


class ArchiveExtractor:
    """Extracts single-folder zip archives and moves their contents.

    Filesystem work runs in a worker thread via ``asyncio.to_thread`` so
    the event loop (and the progress spinners) keep running.
    """

    def __init__(self, out: Console | None = None) -> None:
        self.out = out

    async def extract(
        self,
        zip_path: str | Path,
        destination_dir: str | Path,
        target_path: str | Path | None = None,
    ) -> Path | None:
        """Extract *zip_path* under *destination_dir* and move it to *target_path*.

        Args:
            zip_path: Archive to extract. Removed afterwards.
            destination_dir: Where the archive's top-level folder is unpacked.
            target_path: Directory that receives the folder's contents
                (merged, existing files overwritten). When omitted, the
                extracted files are removed again and a configuration error
                is printed; the call still returns normally.

        Returns:
            *target_path* as a ``Path``, or ``None`` when no target was given.

        Raises:
            MalformedArchiveError: See :func:`top_level_folder`.
            FilesystemError: If extraction, copying or cleanup fails. Files
                copied before a failure are left in place.
        """
        zip_file = Path(zip_path)
        destination = Path(destination_dir)
        target = Path(target_path) if target_path is not None else None

        copied = await asyncio.to_thread(self._extract_sync, zip_file, destination, target)
        if not copied:
            print_error(
                "Could not copy files (copy path is not present). "
                "Zip file and extracted files were removed.",
                self.out,
            )
            return None
        return target

    @staticmethod
    def _extract_sync(zip_file: Path, destination: Path, target: Path | None) -> bool:
        folder = top_level_folder(zip_file)
        extracted = destination / folder

        try:
            destination.mkdir(parents=True, exist_ok=True)
            with zipfile.ZipFile(zip_file) as archive:
                archive.extractall(destination)
        except (OSError, zipfile.BadZipFile) as exc:
            raise FilesystemError(
                f"Could not extract {zip_file} into {destination}: {exc}", path=destination
            ) from exc

        if target is None:
            failures = _cleanup(extracted, zip_file)
            if failures:
                raise FilesystemError("\n".join(failures), path=extracted)
            return False

        try:
            shutil.copytree(extracted, target, dirs_exist_ok=True)
        except (OSError, shutil.Error) as exc:
            raise FilesystemError(
                f"Could not copy files to {target}. Files copied before the failure "
                f"were left in place and {extracted} was not removed.\n{exc}",
                path=target,
            ) from exc

        failures = _cleanup(extracted, zip_file)
        if failures:
            raise FilesystemError("\n".join(failures), path=extracted)
        return True
