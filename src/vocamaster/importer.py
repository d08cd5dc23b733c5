import io
import logging
import os
import re
from typing import Any, Dict, List, Optional

import pandas as pd

from .exceptions import WordListImportError
from .models import WordEntry

logger = logging.getLogger(__name__)

NO_COLUMNS = ("No", "番号")
WORD_COLUMNS = ("単語", "Word", "word")
MEANING_COLUMNS = ("意味", "Meaning", "meaning")

EXCEL_EXTENSIONS = {".xlsx", ".xlsm", ".xls"}

READ_KW = dict(dtype=str, keep_default_na=False)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _first_filled(row: Dict[str, Any], columns) -> str:
    for column in columns:
        value = row.get(column)
        if value is None or pd.isna(value):
            continue
        text = str(value).strip()
        if text:
            return text
    return ""


def parse_number(text: str) -> Optional[int]:
    """Parses the leading integer of ``text`` ("12", "12.0", " 7 abc")."""
    match = _LEADING_INT.match(text)
    if not match:
        return None
    return int(match.group(1))


def _row_number(row: Dict[str, Any]) -> Optional[int]:
    # A number of 0 counts as blank, like an empty cell.
    for column in NO_COLUMNS:
        value = row.get(column)
        if value is None or pd.isna(value):
            continue
        no = parse_number(str(value))
        if no:
            return no
    return None


def rows_to_words(rows: List[Dict[str, Any]]) -> List[WordEntry]:
    """
    Maps raw spreadsheet rows to word entries.

    The number falls back to the 1-based row position when missing, zero
    or not numeric. Rows without both a word and a meaning are dropped.
    """
    words = []
    for index, row in enumerate(rows):
        no = _row_number(row) or index + 1
        word = _first_filled(row, WORD_COLUMNS)
        meaning = _first_filled(row, MEANING_COLUMNS)
        if word and meaning:
            words.append(WordEntry(no=no, word=word, meaning=meaning))
    return words


def read_rows(content: bytes, filename: str) -> List[Dict[str, Any]]:
    """Reads the first sheet of an Excel or CSV file into row dicts."""
    extension = os.path.splitext(filename or "")[1].lower()
    buffer = io.BytesIO(content)
    if extension in EXCEL_EXTENSIONS:
        df = pd.read_excel(buffer, sheet_name=0, **READ_KW)
    else:
        df = pd.read_csv(buffer, encoding="utf-8-sig", **READ_KW)
    df.columns = [str(c).strip() for c in df.columns]
    return df.to_dict("records")


def import_word_list(content: bytes, filename: str) -> List[WordEntry]:
    """Parses an uploaded word list, raising WordListImportError on bad input."""
    try:
        rows = read_rows(content, filename)
    except pd.errors.EmptyDataError:
        rows = []
    except Exception as e:
        logger.error(f"Failed to read {filename}: {e}")
        raise WordListImportError(
            "An error occurred while reading the file. "
            "Please check that it is an Excel (.xlsx, .xls) or CSV file."
        ) from e

    if not rows:
        raise WordListImportError("No data was found in the file.")

    words = rows_to_words(rows)
    if not words:
        raise WordListImportError(
            "Could not find the word and meaning columns. "
            "Please check the header row (No / Word / Meaning)."
        )

    logger.info(f"Imported {len(words)} of {len(rows)} rows from {filename}")
    return words
