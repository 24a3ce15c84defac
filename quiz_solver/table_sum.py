# table_sum.py - sum a named column of a whitespace-aligned table in PDF page text

import re
import logging
from dataclasses import replace
from functools import reduce

import pandas as pd

from quiz_solver.models import SumResult, TableScan

FIELD_SPLIT_RE = re.compile(r"\s{2,}")
PROSE_RE = re.compile(r"^[A-Za-z\s\-]+$")
CURRENCY_RE = r"[,₹$€£]"
CELL_NUMBER_RE = r"(-?\d+(?:\.\d+)?)"
NUMBER_TOKEN_RE = re.compile(r"-?\d+(?:,\d{3})*(?:\.\d+)?")


def split_fields(line):
    """Columns of a text row: runs of two or more whitespace chars separate cells."""
    return [c.strip() for c in FIELD_SPLIT_RE.split(line) if c.strip()]


def is_prose_line(line):
    """A letters-only line without column structure ends the table."""
    return bool(PROSE_RE.match(line)) and len(split_fields(line)) <= 1


def page_lines(page_text):
    return [ln.strip() for ln in page_text.splitlines() if ln.strip()]


def _step(column):
    column = column.lower()

    def step(state, line):
        if state.done:
            return state
        position = state.position + 1
        if not state.header_found:
            fields = split_fields(line)
            if column in line.lower() and len(fields) >= 2:
                headers = [h.lower() for h in fields]
                index = next((i for i, h in enumerate(headers) if column in h), None)
                return replace(state, header_index=state.position, value_column_index=index, position=position)
            return replace(state, position=position)
        if is_prose_line(line):
            return replace(state, done=True, position=position)
        fields = split_fields(line)
        index = state.value_column_index
        if index is not None and index < len(fields):
            return replace(state, cells=state.cells + (fields[index],), position=position)
        return replace(state, position=position)

    return step


def scan_table(lines, column="value"):
    """Fold over ``lines`` collecting the value-column cells of the first table."""
    return reduce(_step(column), lines, TableScan())


def cell_values(cells):
    """Numeric value of each cell; NaN where nothing parses.

    Currency symbols and thousands separators are dropped, then the first
    signed decimal in the cell is taken.
    """
    series = pd.Series(list(cells), dtype="object")
    if series.empty:
        return pd.Series([], dtype="float64")
    numbers = series.str.replace(CURRENCY_RE, "", regex=True).str.extract(CELL_NUMBER_RE, expand=False)
    return pd.to_numeric(numbers, errors="coerce")


def number_tokens(text):
    tokens = pd.Series(NUMBER_TOKEN_RE.findall(text), dtype="object")
    if tokens.empty:
        return pd.Series([], dtype="float64")
    return pd.to_numeric(tokens.str.replace(",", "", regex=False), errors="coerce")


def sum_page(page_text, column="value"):
    lines = page_lines(page_text)
    scan = scan_table(lines, column)
    if scan.header_found:
        header = lines[scan.header_index]
        total = float(cell_values(scan.cells).sum(skipna=True))
        logging.info("Summed %d cells under header %r: %s", len(scan.cells), header, total)
        return SumResult(total=total, method="table", header=header)

    logging.warning('Header with "%s" not found. Falling back to summing all numbers on the page (may be wrong).',
                    column)
    total = float(number_tokens(page_text).sum(skipna=True))
    return SumResult(total=total, method="fallback")


def format_answer(total):
    """Round to 6 places; a sum that lands on a whole number becomes an int."""
    rounded = round(float(total), 6)
    if rounded.is_integer():
        return int(rounded)
    return rounded


def sum_column(page_text, column="value"):
    return format_answer(sum_page(page_text, column).total)
