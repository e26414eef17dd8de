"""
Deal storage - file selection, reads and imports for the deals directory.

The deals directory holds one Parquet file per account, named
``<account_number>.parquet``. Reads go through DuckDB so filters are pushed
down into the Parquet scan; nothing here ever modifies an existing file
except an explicit import.
"""

import logging
import shutil
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

import duckdb
import pandas as pd

from deal_insights.core.duckdb_manager import get_duckdb
from deal_insights.core.exceptions import ExecutionError, NotFoundError, SchemaError
from deal_insights.deals.models import (
    DATASET_EXTENSION,
    DEAL_SCHEMA,
    REQUIRED_COLUMNS,
    Deal,
    DealImportResult,
    FileImportResult,
)
from deal_insights.deals.validator import DealSchemaValidator

logger = logging.getLogger(__name__)


def with_extension(name: str) -> str:
    """Append the dataset extension unless the name already has it."""
    return name if name.endswith(DATASET_EXTENSION) else f"{name}{DATASET_EXTENSION}"


def frame_to_deals(df: pd.DataFrame) -> List[Deal]:
    """Convert a columnar deals frame into row-major Deal records."""
    return [Deal.from_row(row) for row in df.to_dict("records")]


class DealStore:
    """
    Read-only access to the deals directory, plus validated imports.

    Usage:
        store = DealStore("/path/to/deals")
        files = store.select_files(account_number="12345")
        df = store.scan(files, where='"entry" = 1', order_by="time")
        deals = frame_to_deals(df)
    """

    def __init__(self, deals_dir: Union[str, Path]):
        self.deals_dir = Path(deals_dir)
        self.validator = DealSchemaValidator()

    @classmethod
    def from_settings(cls) -> "DealStore":
        """Create a store for the configured deals directory."""
        from deal_insights.core.config import get_settings
        return cls(get_settings().deals_dir)

    # ==================== File selection ====================

    def resolve_file(self, account_number: str) -> Path:
        """
        Resolve one account's deals file.

        Raises:
            NotFoundError: if the file does not exist
        """
        file_path = self.deals_dir / with_extension(account_number)
        if Path(account_number).name != account_number or not file_path.is_file():
            raise NotFoundError(
                "Deal file",
                str(file_path),
                message=f"Deal file not found: {file_path}",
            )
        return file_path

    def list_files(self) -> List[Path]:
        """
        List every deals file in the directory, in file-name order.

        A missing directory is treated as empty.
        """
        if not self.deals_dir.exists():
            return []
        try:
            return sorted(
                p for p in self.deals_dir.iterdir()
                if p.is_file() and p.suffix == DATASET_EXTENSION
            )
        except OSError as e:
            raise ExecutionError(f"Failed to read deals directory: {e}") from e

    def select_files(self, account_number: Optional[str] = None) -> List[Path]:
        """
        Pick the files a query runs over.

        An explicit account number that does not exist is an error; no
        account number over an empty directory is simply no files.
        """
        if account_number is not None:
            return [self.resolve_file(account_number)]
        return self.list_files()

    # ==================== Reads ====================

    def scan(
        self,
        files: Sequence[Path],
        where: Optional[str] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> pd.DataFrame:
        """
        Scan deals files into one DataFrame.

        Each file is scanned separately with the filter pushed into the
        Parquet read, then the per-file results are stacked in file order.
        Sorting is stable, so rows with equal keys keep that order.

        Args:
            files: Files to read, in the order they should be stacked
            where: Optional SQL predicate applied during the scan
            order_by: Optional column to sort the combined rows by
            descending: Sort direction for order_by

        Raises:
            ExecutionError: if a file cannot be read or filtered
        """
        manager = get_duckdb()
        frames = []

        with manager.cursor() as cur:
            for file_path in files:
                try:
                    relation = manager.read_parquet(cur, file_path)
                    if where:
                        relation = relation.filter(where)
                    frames.append(relation.df())
                except duckdb.Error as e:
                    raise ExecutionError(
                        f"Failed to scan parquet file {file_path}: {e}",
                        details={"file": str(file_path)},
                    ) from e

        if not frames:
            return pd.DataFrame(columns=REQUIRED_COLUMNS)

        combined = frames[0] if len(frames) == 1 else pd.concat(frames, ignore_index=True)

        if order_by:
            if order_by not in combined.columns:
                raise ExecutionError(f"Failed to sort data: unknown column '{order_by}'")
            combined = combined.sort_values(
                order_by, ascending=not descending, kind="stable"
            ).reset_index(drop=True)

        return combined

    def read_deals(
        self,
        files: Sequence[Path],
        where: Optional[str] = None,
        order_by: Optional[str] = "time",
    ) -> List[Deal]:
        """Scan files and convert the rows to Deal records."""
        return frame_to_deals(self.scan(files, where=where, order_by=order_by))

    def read_deals_from_file(self, filename: str) -> List[Deal]:
        """Read every deal from one account file, in stored order."""
        return self.read_deals([self.resolve_file(filename)], order_by=None)

    def read_all_deals(self) -> List[Deal]:
        """
        Read every deal from every file in the directory.

        Files that cannot be read are logged and skipped.
        """
        all_deals: List[Deal] = []
        for file_path in self.list_files():
            try:
                all_deals.extend(self.read_deals([file_path], order_by=None))
            except ExecutionError as e:
                logger.warning(f"Failed to read file {file_path.name}: {e.message}")
        return all_deals

    # ==================== Writes ====================

    @staticmethod
    def write_deals(path: Union[str, Path], deals: Iterable[Deal]) -> Path:
        """
        Write deals to a Parquet file with the canonical column types.

        Returns:
            The written path
        """
        df = pd.DataFrame([d.to_dict() for d in deals], columns=REQUIRED_COLUMNS)
        casts = ", ".join(
            f'CAST("{name}" AS {column_type}) AS "{name}"'
            for name, column_type in DEAL_SCHEMA
        )

        manager = get_duckdb()
        with manager.cursor() as cur:
            relation = cur.from_df(df).project(casts)
            manager.write_parquet(relation, path)

        logger.info(f"Wrote {len(df)} deal(s) to {path}")
        return Path(path)

    def validate_and_store_files(
        self,
        files: Sequence[Tuple[str, bytes]],
    ) -> DealImportResult:
        """
        Validate deals files and copy the valid ones into the deals directory.

        Args:
            files: (filename, file contents) pairs

        Returns:
            DealImportResult with an overall status and per-file messages
        """
        if not files:
            return DealImportResult(success=False, message="No files provided")

        self.deals_dir.mkdir(parents=True, exist_ok=True)

        file_results: List[FileImportResult] = []
        with tempfile.TemporaryDirectory(prefix="deal_import_") as temp_dir:
            for filename, file_data in files:
                result = self._process_file(Path(temp_dir), filename, file_data)
                file_results.append(result)

        success_count = sum(1 for r in file_results if r.success)
        error_count = len(file_results) - success_count

        if error_count == 0:
            message = f"Successfully imported {success_count} file(s) to {self.deals_dir}"
        elif success_count == 0:
            message = f"Failed to import all {len(file_results)} file(s)"
        else:
            message = f"Imported {success_count} file(s), {error_count} file(s) failed"

        logger.info(message)
        return DealImportResult(
            success=error_count == 0,
            message=message,
            file_results=file_results,
        )

    def _process_file(self, temp_dir: Path, filename: str, file_data: bytes) -> FileImportResult:
        """Validate and store a single file."""
        base_name = Path(filename).name if filename else ""
        if not base_name:
            return FileImportResult.failed(filename, "Filename cannot be empty")

        sanitized = with_extension(base_name)
        temp_path = temp_dir / sanitized

        try:
            temp_path.write_bytes(file_data)
        except OSError as e:
            return FileImportResult.failed(
                filename, f"Failed to write file to temp location: {e}"
            )

        try:
            self.validator.validate(temp_path)
        except SchemaError as e:
            return FileImportResult.failed(filename, e.message)

        target_path = self.deals_dir / sanitized
        try:
            shutil.copyfile(temp_path, target_path)
        except OSError as e:
            return FileImportResult.failed(
                filename, f"Failed to copy file to cache directory: {e}"
            )
        finally:
            temp_path.unlink(missing_ok=True)

        return FileImportResult.ok(filename, f"Successfully imported to {target_path}")
