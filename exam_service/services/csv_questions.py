import json
import logging
from typing import Any, BinaryIO, Dict, Iterator, List, Optional, Sequence

import pandas as pd
from pydantic import ValidationError

from exam_service.core.config import settings
from exam_service.core.constants import CSV_OPTION_FIELDS
from exam_service.core.exceptions import InvalidFileError
from exam_service.schemas.question import ParsedQuestion

logger = logging.getLogger(__name__)


class CsvQuestionParser:
    """Turns an exported question sheet into ``ParsedQuestion`` records.

    The upstream exporter does not quote the options array, so a value like
    ``["A","B","C"]`` is split by commas into the ``options`` column plus
    unnamed trailing columns. Unnamed columns are named ``_<index>`` (0-based)
    and the option pieces are glued back together in ``option_fields`` order,
    stripped of backslashes and re-bracketed before JSON decoding.

    Rows that still do not decode are logged and skipped. The file is read in
    chunks and records are yielded as they are produced.
    """

    def __init__(
        self,
        option_fields: Sequence[str] = CSV_OPTION_FIELDS,
        chunk_size: Optional[int] = None,
        max_columns: Optional[int] = None,
    ):
        self.option_fields = tuple(option_fields)
        self.chunk_size = chunk_size or settings.CSV_CHUNK_SIZE
        self.max_columns = max_columns or settings.CSV_MAX_COLUMNS

    def parse(self, stream: BinaryIO) -> Iterator[ParsedQuestion]:
        header: Optional[List[str]] = None
        row_number = 1
        try:
            for chunk in self._read_chunks(stream):
                for raw in chunk.itertuples(index=False, name=None):
                    values = [self._cell(value) for value in raw]
                    if header is None:
                        header = [value.strip() for value in values]
                        continue
                    row_number += 1
                    question = self.parse_row(self._as_row(header, values), row_number)
                    if question is not None:
                        yield question
        except pd.errors.EmptyDataError:
            return
        except (pd.errors.ParserError, UnicodeDecodeError) as e:
            raise InvalidFileError(f"Error reading CSV: {e}")

    def parse_row(self, row: Dict[str, str], row_number: int = 0) -> Optional[ParsedQuestion]:
        combined = self.repair_options(row)
        try:
            options = json.loads(combined)
            return ParsedQuestion(
                content=row.get("content") or "",
                answer=row.get("answer") or "",
                options=options,
            )
        except (ValueError, ValidationError) as e:
            logger.warning(f"Skipping CSV row {row_number}: {e}. Row data: {row}")
            return None

    def repair_options(self, row: Dict[str, str]) -> str:
        combined = "".join(row[field] for field in self.option_fields if row.get(field))
        combined = combined.replace("\\", "").strip()
        if not combined.startswith("["):
            combined = f"[{combined}"
        if not combined.endswith("]"):
            combined = f"{combined}]"
        return combined

    def _read_chunks(self, stream: BinaryIO):
        return pd.read_csv(
            stream,
            header=None,
            names=list(range(self.max_columns)),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            encoding="utf-8-sig",
            engine="python",
            on_bad_lines=self._on_bad_line,
            chunksize=self.chunk_size,
        )

    def _on_bad_line(self, fields: List[str]) -> None:
        logger.warning(f"Skipping CSV line with {len(fields)} fields (limit {self.max_columns})")
        return None

    @staticmethod
    def _cell(value: Any) -> str:
        if value is None or (isinstance(value, float) and pd.isna(value)):
            return ""
        return str(value)

    @staticmethod
    def _as_row(header: List[str], values: List[str]) -> Dict[str, str]:
        row = {}
        for index, value in enumerate(values):
            name = header[index] if index < len(header) and header[index] else f"_{index}"
            row[name] = value
        return row


csv_question_parser = CsvQuestionParser()
