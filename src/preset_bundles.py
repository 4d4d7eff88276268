#!/usr/bin/env python
# cspell:ignore Orca OrcaSlicer
"""Tools for packaging OrcaSlicer preset bundles with user level inheritance.

Summary: OrcaSlicer presets can inherit from system presets, but not from other user
presets. This module fakes user level inheritance at packaging time: a "base" preset
and each preset inheriting from it are merged into a single flattened json document,
the result is registered in the bundle manifest, and the bundle is archived for import
into the slicer. Generated presets are removed again after archiving unless the caller
asks to keep them.

Notes:
    - A bundle is a folder holding a bundle_structure.json manifest and one folder
    per vendor. A vendor folder holds preset json files, and may also hold
    inheritance groups: subfolders containing exactly one base.json and any number
    of presets that inherit from it.
    - If the target folder is not a bundle, every subfolder is processed as a
    separate unit (bundle, or folder of bundles). Failures are counted, not fatal.
    - Process presets are usually kept loose: with the process kind, a folder without
    a manifest but with top level json files is zipped as "Process presets.zip" in
    that folder instead.
    - Only one layer of inheritance is resolved. base.json may itself inherit from a
    system preset via its own "inherits" key, which is kept in the output. The
    "inherits" key of the inheriting preset is always dropped.

Cautions:
    - The manifest is rewritten with 2 space indentation whenever a generated preset
    is registered.
    - Manifest entries for generated presets are never removed, even after the
    generated files have been cleaned up.
"""
import argparse
import importlib.util
import json
import os
import sys
import tempfile
import zipfile
from contextlib import suppress
from copy import deepcopy
from enum import Enum, StrEnum
from pathlib import Path
from typing import Any, Iterator, NamedTuple, TypeAlias

from openpyxl import Workbook  # type: ignore[import-untyped]
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE  # type: ignore[import-untyped]

# Reserved file names and encoding.
MANIFEST_NAME = "bundle_structure.json"
BASE_NAME = "base.json"
JSON_EXT = ".json"
DEFAULT_ENCODING = "utf-8"
# Same layout as jq output, which is what most existing bundles were built with.
JSON_INDENT = 2

# Manifest and preset json keys.
PRINTER_VENDOR = "printer_vendor"
VENDOR = "vendor"
FILAMENT_PATH = "filament_path"
INHERITS = "inherits"

# Loose process presets (no manifest) are zipped under this name.
PROCESS_ARCHIVE_NAME = "Process presets.zip"

ZIP_COMPRESS_LEVEL = 2
EXCEL_CELL_LIMIT = 32767
MAX_EXIT_STATUS = 255

# create some type aliases
Document: TypeAlias = dict[str, Any]


class BundleError(Exception):
    """Base class for preset bundle errors."""


class ToolUnavailableError(BundleError):
    """A required collaborator (archiver etc.) is missing. Fatal."""


class MergeError(BundleError):
    """A base/child pair could not be read or merged."""


class ManifestError(BundleError):
    """The bundle manifest could not be read or updated."""


class ArchiveError(BundleError):
    """The bundle archive could not be created."""


class BundleKind(StrEnum):
    """Bundle kinds understood by OrcaSlicer import."""

    FILAMENT = "filament"
    PRINTER = "printer"
    PROCESS = "process"

    @property
    def extension(self) -> str:
        """Archive file extension for this kind of bundle."""
        return ARCHIVE_EXTENSIONS[self]


ARCHIVE_EXTENSIONS = {
    BundleKind.FILAMENT: ".orca_filament",
    BundleKind.PRINTER: ".orca_printer",
    # Orca imports loose process presets from a plain zip.
    BundleKind.PROCESS: ".zip",
}


class CellFormat(StrEnum):
    """Builtin Excel cell formats."""

    NORMAL = "Normal"
    GOOD = "Good"
    INPUT = "Input"
    NOTE = "Note"
    HEADING4 = "Headline 4"


class KeyOrigin(Enum):
    """Where a setting in a generated preset came from."""

    # Inherited unchanged from base.json.
    BASE = 0
    # Base value replaced by the inheriting preset (includes lists).
    OVERRIDE = 1
    # Only defined by the inheriting preset.
    ADDED = 2
    # Both sides are objects and were merged key by key.
    MERGED = 3


ORIGIN_FORMATS = {
    KeyOrigin.BASE: CellFormat.NORMAL,
    KeyOrigin.OVERRIDE: CellFormat.INPUT,
    KeyOrigin.ADDED: CellFormat.GOOD,
    KeyOrigin.MERGED: CellFormat.NOTE,
}


class CellInfo(NamedTuple):
    """Summary data for writing to an Excel cell."""

    row: int
    column: int
    value: str
    format: CellFormat


class BundleOptions(NamedTuple):
    """Run options shared by every bundle in a run."""

    kind: BundleKind = BundleKind.FILAMENT
    # Leave generated presets in the vendor folders after archiving.
    keep_generated: bool = False
    # Write a merge report workbook here at the end of the run.
    report_path: Path | None = None


class BundleResult(NamedTuple):
    """Outcome of processing a single bundle."""

    name: str
    generated: list[Path]
    # Child documents and manifest registrations that were skipped after an error.
    skipped: int
    archive_path: Path
    failed: bool


class InheritanceGroup(NamedTuple):
    """A vendor subfolder holding base.json and the presets that inherit from it."""

    vendor_dir: Path
    group_dir: Path
    base_path: Path
    children: list[Path]

    @property
    def vendor_name(self) -> str:
        """Vendor name, as used in the manifest."""
        return self.vendor_dir.name


class PresetColumn(NamedTuple):
    """Identify a generated preset (column) in the merge report."""

    bundle: str
    vendor: str
    filename: str


class ReportValue(NamedTuple):
    """Container for a report value and where it came from."""

    value: str
    origin: KeyOrigin


class ReportValuePath(NamedTuple):
    """Provide a unique key for report values without nested dicts."""

    row_name: str
    column: PresetColumn


def load_json(path: Path) -> Any:
    """Load a json file. Errors are left to the caller."""
    with open(path, encoding=DEFAULT_ENCODING) as fp:
        return json.load(fp)


def atomic_write_json(path: Path, data: Any) -> None:
    """Write data as json to path via a temporary file and a rename.

    The temporary file lives in the same folder as path so the rename can't cross
    file systems. Either the old file or the complete new file is left behind, never
    a truncated one.
    """
    text = json.dumps(data, indent=JSON_INDENT, ensure_ascii=False) + "\n"
    mode = path.stat().st_mode & 0o777 if path.exists() else 0o644
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
    )
    try:
        with os.fdopen(fd, "w", encoding=DEFAULT_ENCODING, newline="\n") as fp:
            fp.write(text)
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except Exception:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def load_document(path: Path) -> Document:
    """Load a preset document, raising MergeError on any read or parse problem."""
    try:
        document = load_json(path)
    except (OSError, ValueError) as err:
        raise MergeError(f"Cannot read '{path}': {err}") from err

    if not isinstance(document, dict):
        raise MergeError(
            f"Expected a json object in '{path}', got {type(document).__name__}."
        )
    return document


def strip_inherits(child: Document) -> Document:
    """Return a shallow copy of child without its top level "inherits" key."""
    return {key: value for key, value in child.items() if key != INHERITS}


def merge(base: Document, child: Document) -> Document:
    """Merge an inheriting preset over its base preset.

    - "inherits" is removed from child before anything else. (base keeps its own.)
    - Keys only in base or only in child are copied as-is.
    - Keys in both: objects merge recursively with the same rule, anything else
    (lists included) is replaced by the child value.

    Neither argument is modified.
    """
    if not isinstance(base, dict) or not isinstance(child, dict):
        raise MergeError(
            f"Can only merge json objects, got {type(base).__name__}"
            f" and {type(child).__name__}."
        )
    return _merge_objects(base, strip_inherits(child))


def _merge_objects(base: Document, overrides: Document) -> Document:
    merged = deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge_objects(merged[key], value)
        else:
            merged[key] = deepcopy(value)
    return merged


def key_origins(base: Document, child: Document) -> dict[str, KeyOrigin]:
    """Classify every top level key of merge(base, child) by where it came from."""
    overrides = strip_inherits(child)
    origins = {key: KeyOrigin.BASE for key in base}
    for key, value in overrides.items():
        if key not in base:
            origins[key] = KeyOrigin.ADDED
        elif isinstance(value, dict) and isinstance(base[key], dict):
            origins[key] = KeyOrigin.MERGED
        else:
            origins[key] = KeyOrigin.OVERRIDE
    return origins


def register(manifest_path: Path, vendor_name: str, relative_path: str) -> bool:
    """Make sure relative_path is listed under vendor_name in the manifest.

    Adds a vendor entry if there isn't one, and appends the path if the entry doesn't
    already list it. Calling this again with the same arguments is a no-op (and
    doesn't touch the file).

    Returns True if the manifest was rewritten. Raises ManifestError if the manifest
    can't be read, has an unexpected shape or can't be written.
    """
    try:
        manifest = load_json(manifest_path)
    except (OSError, ValueError) as err:
        raise ManifestError(f"Cannot read '{manifest_path}': {err}") from err

    if not isinstance(manifest, dict):
        raise ManifestError(f"Manifest '{manifest_path}' is not a json object.")

    vendors = manifest.setdefault(PRINTER_VENDOR, [])
    if not isinstance(vendors, list):
        raise ManifestError(
            f"Expected a list for '{PRINTER_VENDOR}' in '{manifest_path}'."
        )

    entry = next(
        (
            item
            for item in vendors
            if isinstance(item, dict) and item.get(VENDOR) == vendor_name
        ),
        None,
    )
    if entry is None:
        vendors.append({VENDOR: vendor_name, FILAMENT_PATH: [relative_path]})
    else:
        paths = entry.setdefault(FILAMENT_PATH, [])
        if not isinstance(paths, list):
            raise ManifestError(
                f"Expected a list for '{FILAMENT_PATH}' of vendor '{vendor_name}'"
                f" in '{manifest_path}'."
            )
        if relative_path in paths:
            return False
        paths.append(relative_path)

    try:
        atomic_write_json(manifest_path, manifest)
    except OSError as err:
        raise ManifestError(f"Cannot write '{manifest_path}': {err}") from err
    return True


def is_bundle(path: Path) -> bool:
    """A bundle is any folder with a manifest at its root."""
    return (path / MANIFEST_NAME).is_file()


def subdirectories(path: Path) -> list[Path]:
    """Immediate, non-hidden subfolders of path in name order."""
    return sorted(
        child
        for child in path.iterdir()
        if child.is_dir() and not child.name.startswith(".")
    )


def process_presets(directory: Path) -> list[Path]:
    """Top level json files of a folder without a manifest, in name order."""
    if is_bundle(directory):
        return []
    return sorted(path for path in directory.glob("*" + JSON_EXT) if path.is_file())


def find_inheritance_groups(vendor_dir: Path) -> Iterator[InheritanceGroup]:
    """Yield the inheritance groups in a vendor folder.

    Subfolders without base.json get a warning and are skipped. That's not an error,
    as vendor folders may hold other things.
    """
    for group_dir in subdirectories(vendor_dir):
        base_path = group_dir / BASE_NAME
        if not base_path.is_file():
            print(
                f"Warning: No {BASE_NAME} found in '{group_dir}', skipping.",
                file=sys.stderr,
            )
            continue

        children = sorted(
            path
            for path in group_dir.glob("*" + JSON_EXT)
            if path.is_file() and path.name != BASE_NAME
        )
        yield InheritanceGroup(
            vendor_dir=vendor_dir,
            group_dir=group_dir,
            base_path=base_path,
            children=children,
        )


class Archiver:
    """Interface for the archive creation collaborator."""

    name = "archiver"

    def available(self) -> bool:
        """Return True if the archiver can be used on this system."""
        raise NotImplementedError

    def create(
        self, source_dir: Path, archive_path: Path, files: list[Path] | None = None
    ) -> None:
        """Archive files (default: every file under source_dir) relative to source_dir.

        Raise ArchiveError on failure.
        """
        raise NotImplementedError


class ZipArchiver(Archiver):
    """Deflate compressed zip archives, which is what OrcaSlicer imports."""

    name = "zip"

    def available(self) -> bool:
        # ZIP_DEFLATED needs zlib, which some minimal interpreters don't ship.
        return importlib.util.find_spec("zlib") is not None

    def create(
        self, source_dir: Path, archive_path: Path, files: list[Path] | None = None
    ) -> None:
        if files is None:
            files = sorted(
                path
                for path in source_dir.rglob("*")
                if path.is_file() and path != archive_path
            )
        try:
            with zipfile.ZipFile(
                archive_path,
                mode="w",
                compression=zipfile.ZIP_DEFLATED,
                compresslevel=ZIP_COMPRESS_LEVEL,
            ) as archive:
                for path in files:
                    archive.write(path, arcname=path.relative_to(source_dir).as_posix())
        except (OSError, ValueError) as err:
            raise ArchiveError(f"Cannot create '{archive_path}': {err}") from err


class MergeReport:
    """Generated preset settings in a sparse matrix form, for an Excel summary.

    One column per generated preset, one row per top level setting. Cell styles
    show where each value came from (see ORIGIN_FORMATS).
    """

    _rows: dict[str, int]
    _cols: dict[PresetColumn, int]
    _values: dict[ReportValuePath, ReportValue]
    # Flag indicating indices need recalculating. Set every time a value is added.
    _reset_required: bool
    # Bundle, vendor, preset file.
    _header_count: int = 3

    def __init__(self) -> None:
        """Create instance variables."""
        self._rows = {}
        self._cols = {}
        self._values = {}
        self._reset_required = True

    def column_count(self) -> int:
        """Number of generated presets in the report."""
        return len(self._cols)

    def row_count(self) -> int:
        """Row count in the table including header lines."""
        return len(self._rows) + self._header_count

    def add_value(
        self, row_name: str, column: PresetColumn, value: str, origin: KeyOrigin
    ) -> None:
        """Add or overwrite a value. Invalidates any active table_cells generator."""
        self._reset_required = True
        self._rows[row_name] = -1
        self._cols.setdefault(column, -1)
        self._values[ReportValuePath(row_name, column)] = ReportValue(value, origin)

    def add_preset(
        self, column: PresetColumn, base: Document, child: Document, merged: Document
    ) -> None:
        """Add every top level setting of a generated preset."""
        for key, origin in key_origins(base, child).items():
            self.add_value(key, column, _cell_text(merged[key]), origin)

    def _reset_lookups(self) -> None:
        """Prepare 0 based row and column lookup indices."""
        for i, key in enumerate(sorted(self._rows)):
            self._rows[key] = i
        # Columns stay in the order the presets were generated.
        for i, column in enumerate(self._cols):
            self._cols[column] = i
        self._reset_required = False

    def table_cells(self) -> Iterator[CellInfo]:
        """Generate header cells, row names and values (all 0 based)."""
        if self._reset_required:
            self._reset_lookups()

        yield CellInfo(0, 0, "Bundle", CellFormat.HEADING4)
        yield CellInfo(1, 0, "Vendor", CellFormat.HEADING4)
        yield CellInfo(2, 0, "Preset", CellFormat.HEADING4)

        for row_name, row_offset in self._rows.items():
            yield CellInfo(
                row_offset + self._header_count, 0, row_name, CellFormat.NORMAL
            )

        for column, col_offset in self._cols.items():
            yield CellInfo(0, col_offset + 1, column.bundle, CellFormat.HEADING4)
            yield CellInfo(1, col_offset + 1, column.vendor, CellFormat.HEADING4)
            yield CellInfo(2, col_offset + 1, column.filename, CellFormat.HEADING4)

        for key, value in self._values.items():
            row = self._rows[key.row_name] + self._header_count
            col = self._cols[key.column] + 1
            yield CellInfo(row, col, value.value, ORIGIN_FORMATS[value.origin])

    def write(self, path: Path) -> None:
        """Save the report as an .xlsx workbook."""
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = "Generated presets"
        for cell in self.table_cells():
            # openpyxl is 1 based.
            target = sheet.cell(row=cell.row + 1, column=cell.column + 1)
            target.value = cell.value
            target.style = cell.format.value
        sheet.freeze_panes = sheet.cell(row=self._header_count + 1, column=2)
        workbook.save(path)


def _cell_text(value: Any) -> str:
    if not isinstance(value, str):
        value = json.dumps(value, ensure_ascii=False)
    # Control characters (escape codes in gcode etc.) can't go in a worksheet.
    return ILLEGAL_CHARACTERS_RE.sub("", value)[:EXCEL_CELL_LIMIT]


class BundleProcessor:
    """Process a bundle, or a folder of bundles, from merge through to cleanup.

    Everything runs sequentially. Errors are handled at the narrowest scope possible:
    a bad child document or manifest update skips that item, a failed archive fails
    that bundle only. The only fatal error is a missing collaborator, which is
    detected before any files are touched.

    json handling is always available (the standard library json module), so the
    archiver is the only collaborator that needs checking.
    """

    options: BundleOptions
    archiver: Archiver
    report: MergeReport | None

    def __init__(
        self, options: BundleOptions | None = None, archiver: Archiver | None = None
    ) -> None:
        """Create processor. archiver defaults to a ZipArchiver."""
        self.options = options if options is not None else BundleOptions()
        self.archiver = archiver if archiver is not None else ZipArchiver()
        self.report = MergeReport() if self.options.report_path is not None else None

    def check_tools(self) -> None:
        """Raise ToolUnavailableError if a collaborator can't be used."""
        if not self.archiver.available():
            raise ToolUnavailableError(
                f"Archiver '{self.archiver.name}' is not available on this system."
            )

    def run(self, directory: Path) -> int:
        """Process directory and return the total failure count (0 is success)."""
        self.check_tools()

        directory = Path(directory).resolve()
        if not directory.is_dir():
            print(f"Error: '{directory}' is not a directory.", file=sys.stderr)
            return 1

        failures = self.process_directory(directory)
        failures += self._write_report()
        return failures

    def process_directory(self, directory: Path) -> int:
        """Process a bundle, or recurse into every subfolder of a non-bundle folder.

        Returns the number of failed bundles. One failure never stops its siblings.
        """
        if is_bundle(directory):
            return int(self.process_bundle(directory).failed)

        if self.options.kind is BundleKind.PROCESS:
            presets = process_presets(directory)
            if presets:
                return int(not self.process_presets_folder(directory, presets))

        failures = 0
        for child in subdirectories(directory):
            failures += self.process_directory(child)
        return failures

    def process_presets_folder(self, directory: Path, presets: list[Path]) -> bool:
        """Zip loose process presets into PROCESS_ARCHIVE_NAME inside directory.

        Subfolders are not searched. Returns False if the archive failed.
        """
        archive_path = directory / PROCESS_ARCHIVE_NAME
        try:
            self._archive(directory, archive_path, presets)
        except ArchiveError as err:
            print(f"Error: {err}", file=sys.stderr)
            return False
        print(f"Archived {len(presets)} process preset(s) to '{archive_path}'.")
        return True

    def process_bundle(self, bundle_dir: Path) -> BundleResult:
        """Merge, register, archive and clean up a single bundle."""
        bundle_dir = Path(bundle_dir).resolve()
        manifest_path = bundle_dir / MANIFEST_NAME
        generated: list[Path] = []
        skipped = 0

        for vendor_dir in subdirectories(bundle_dir):
            for group in find_inheritance_groups(vendor_dir):
                for child_path in group.children:
                    output_path = self._combine(bundle_dir.name, group, child_path)
                    if output_path is None:
                        skipped += 1
                        continue
                    if output_path not in generated:
                        generated.append(output_path)

                    # The generated preset stays in the archive set even if this
                    # fails.
                    relative_path = f"{group.vendor_name}/{output_path.name}"
                    try:
                        if register(manifest_path, group.vendor_name, relative_path):
                            print(f"Registered '{relative_path}' in {MANIFEST_NAME}.")
                    except ManifestError as err:
                        print(
                            f"Error: Could not add '{relative_path}' to"
                            f" {MANIFEST_NAME}: {err}",
                            file=sys.stderr,
                        )
                        skipped += 1

        archive_path = bundle_dir.parent / (
            bundle_dir.name + self.options.kind.extension
        )
        failed = False
        try:
            self._archive(bundle_dir, archive_path)
        except ArchiveError as err:
            print(f"Error: {err}", file=sys.stderr)
            failed = True

        if not self.options.keep_generated:
            self.cleanup(generated)

        print(
            f"Bundle '{bundle_dir.name}': {len(generated)} preset(s) generated,"
            f" {skipped} item(s) skipped"
            + (", archive FAILED." if failed else f", archived to '{archive_path}'.")
        )
        return BundleResult(
            name=bundle_dir.name,
            generated=generated,
            skipped=skipped,
            archive_path=archive_path,
            failed=failed,
        )

    def _combine(
        self, bundle_name: str, group: InheritanceGroup, child_path: Path
    ) -> Path | None:
        """Write merge(base, child) into the vendor folder. None if it failed."""
        output_path = group.vendor_dir / child_path.name
        print(
            f"Combining base file '{group.base_path}' with preset file"
            f" '{child_path}' into '{output_path}'"
        )
        try:
            base = load_document(group.base_path)
            child = load_document(child_path)
            merged = merge(base, child)
            atomic_write_json(output_path, merged)
        except (MergeError, OSError) as err:
            print(
                f"Error: Could not combine '{group.base_path}' and '{child_path}':"
                f" {err}",
                file=sys.stderr,
            )
            return None

        if self.report is not None:
            self.report.add_preset(
                PresetColumn(bundle_name, group.vendor_name, output_path.name),
                base,
                child,
                merged,
            )
        return output_path

    def _archive(
        self, bundle_dir: Path, archive_path: Path, files: list[Path] | None = None
    ) -> None:
        print(f"Creating bundle archive '{archive_path}'...")
        try:
            archive_path.unlink(missing_ok=True)
        except OSError as err:
            raise ArchiveError(
                f"Cannot remove existing archive '{archive_path}': {err}"
            ) from err
        if files is None:
            self.archiver.create(bundle_dir, archive_path)
        else:
            self.archiver.create(bundle_dir, archive_path, files)

    def cleanup(self, generated: list[Path]) -> None:
        """Delete generated presets. Never fails, and never touches the manifest."""
        for path in generated:
            # May already be gone.
            with suppress(OSError):
                path.unlink()
        if generated:
            print(f"Removed {len(generated)} generated preset(s).")

    def _write_report(self) -> int:
        """Write the merge report if requested. Returns the failure count (0 or 1)."""
        if self.report is None or self.options.report_path is None:
            return 0

        if self.report.column_count() == 0:
            print("No presets generated, merge report not written.")
            return 0

        try:
            self.report.write(self.options.report_path)
        except (OSError, ValueError) as err:
            print(
                f"Error: Could not write merge report"
                f" '{self.options.report_path}': {err}",
                file=sys.stderr,
            )
            return 1
        print(f"Merge report written to '{self.options.report_path}'.")
        return 0


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments. The bundle folder defaults to the cwd."""
    parser = argparse.ArgumentParser(
        prog="preset-bundles",
        description=(
            "Resolve base.json inheritance in OrcaSlicer preset bundles, register"
            " the generated presets in bundle_structure.json and archive each bundle"
            " for import."
        ),
    )
    parser.add_argument(
        "directory",
        nargs="?",
        type=Path,
        help="Bundle folder, or a folder of bundles. Defaults to the current folder.",
    )
    parser.add_argument(
        "-d",
        "--dir",
        dest="dir_option",
        type=Path,
        metavar="DIRECTORY",
        help="Same as the positional directory argument.",
    )
    parser.add_argument(
        "-k",
        "--kind",
        type=BundleKind,
        choices=list(BundleKind),
        default=BundleKind.FILAMENT,
        help="Bundle kind, which sets the archive extension. (default: %(default)s)",
    )
    parser.add_argument(
        "--keep",
        action="store_true",
        help="Keep generated presets in the vendor folders after archiving.",
    )
    parser.add_argument(
        "--report",
        type=Path,
        metavar="FILE.xlsx",
        help="Write an Excel summary of the generated presets.",
    )
    args = parser.parse_args(argv)

    if args.directory is not None and args.dir_option is not None:
        parser.error("give the directory as an argument or with --dir, not both")
    if args.dir_option is not None:
        args.directory = args.dir_option
    elif args.directory is None:
        args.directory = Path.cwd()
    return args


def main(argv: list[str] | None = None) -> int:
    """Command line entry point. Returns the exit status."""
    args = parse_args(argv)
    processor = BundleProcessor(
        BundleOptions(
            kind=args.kind,
            keep_generated=args.keep,
            report_path=args.report,
        )
    )
    try:
        failures = processor.run(args.directory)
    except ToolUnavailableError as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1
    return min(failures, MAX_EXIT_STATUS)


if __name__ == "__main__":
    sys.exit(main())
