"""Document reader sub-tools: PDF (PyMuPDF), plain text, DOCX and spreadsheets.

Readers return result dicts; an unreadable document yields ``{"error": ...}``
instead of raising.
"""

from __future__ import annotations

import logging
import os

import fitz  # PyMuPDF
import openpyxl
from docx import Document

DOC_MAX_ROWS = int(os.getenv("DOC_MAX_ROWS", "1000"))


def parse_page_numbers(page_numbers: str, max_page: int | None = None) -> list[int]:
    """Parse "5", "1, 3, 5", "1-10" or "1, 3-5, 10" into page numbers, in order.

    With ``max_page``, a range stops at that page; a range that starts past
    it keeps only its first page.

    Raises ValueError for anything that is not a positive integer or range.
    """
    pages: list[int] = []
    for part in str(page_numbers).split(","):
        part = part.strip()
        if not part:
            continue
        if "-" in part:
            start, _, end = part.partition("-")
            first, last = int(start), int(end)
            if first < 1 or last < first:
                raise ValueError(f"invalid page range: {part!r}")
            if max_page is not None:
                last = min(last, max(first, max_page))
            pages.extend(range(first, last + 1))
        else:
            page = int(part)
            if page < 1:
                raise ValueError(f"invalid page number: {part!r}")
            pages.append(page)
    if not pages:
        raise ValueError("no page numbers given")
    return pages


def _check_file(doc_path: str) -> str | None:
    path = os.path.abspath(os.path.expanduser(doc_path))
    if not os.path.exists(path):
        return f"File not found: {doc_path}"
    if not os.path.isfile(path):
        return f"Not a file: {doc_path}"
    return None


class DocReader:
    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger(__name__)

    def _fail(self, doc_path: str, error: str) -> dict:
        self.logger.error("Failed to read '%s': %s", doc_path, error)
        return {"error": error}


class PdfReaderTool(DocReader):
    def execute(self, doc_path: str, page_numbers: str) -> dict:
        self.logger.info("Reading PDF: %s pages=%s", doc_path, page_numbers)
        error = _check_file(doc_path)
        if error:
            return self._fail(doc_path, error)
        try:
            doc = fitz.open(os.path.expanduser(doc_path))
        except Exception as e:
            return self._fail(doc_path, f"Failed to open PDF: {e}")

        try:
            total = len(doc)
            try:
                requested = parse_page_numbers(page_numbers, max_page=total)
            except ValueError as e:
                return self._fail(doc_path, f"Invalid page_numbers {page_numbers!r}: {e}")
            invalid = [n for n in requested if n > total]
            pages = [
                {"page": n, "text": doc[n - 1].get_text("text")}
                for n in requested if n <= total
            ]
        finally:
            doc.close()

        if invalid:
            self.logger.warning("Invalid page numbers for %s: %s", doc_path, invalid)
        return {
            "total_pages": total,
            "requested_pages": requested,
            "invalid_pages": invalid,
            "pages": pages,
        }


class TextReaderTool(DocReader):
    def execute(self, doc_path: str) -> dict:
        self.logger.info("Reading text file: %s", doc_path)
        error = _check_file(doc_path)
        if error:
            return self._fail(doc_path, error)
        try:
            with open(os.path.expanduser(doc_path), "r", encoding="utf-8", errors="replace") as f:
                content = f.read()
        except OSError as e:
            return self._fail(doc_path, str(e))

        size = len(content.encode("utf-8"))
        self.logger.info("Read %d bytes from %s", size, doc_path)
        return {
            "path": doc_path,
            "extension": os.path.splitext(doc_path)[1],
            "size": size,
            "lines": content.count("\n") + 1,
            "content": content,
        }


class DocxReaderTool(DocReader):
    def execute(self, doc_path: str) -> dict:
        self.logger.info("Reading DOCX: %s", doc_path)
        error = _check_file(doc_path)
        if error:
            return self._fail(doc_path, error)
        try:
            document = Document(os.path.expanduser(doc_path))
        except Exception as e:
            return self._fail(doc_path, f"Failed to open DOCX: {e}")

        paragraphs = [p.text for p in document.paragraphs if p.text.strip()]
        tables = [
            [[cell.text for cell in row.cells] for row in table.rows]
            for table in document.tables
        ]
        return {
            "path": doc_path,
            "paragraphs": paragraphs,
            "tables": tables,
            "content": "\n".join(paragraphs),
        }


class SpreadsheetReaderTool(DocReader):
    def execute(self, doc_path: str, sheet: str | None = None, max_rows: int = DOC_MAX_ROWS) -> dict:
        self.logger.info("Reading spreadsheet: %s sheet=%s", doc_path, sheet)
        error = _check_file(doc_path)
        if error:
            return self._fail(doc_path, error)
        try:
            wb = openpyxl.load_workbook(os.path.expanduser(doc_path), read_only=True, data_only=True)
        except Exception as e:
            return self._fail(doc_path, f"Failed to open spreadsheet: {e}")

        try:
            if sheet is not None and sheet not in wb.sheetnames:
                return self._fail(doc_path, f"Sheet not found: {sheet}. Available: {', '.join(wb.sheetnames)}")
            ws = wb[sheet] if sheet is not None else wb.worksheets[0]
            rows = []
            truncated = False
            for row in ws.iter_rows(values_only=True):
                if len(rows) >= max_rows:
                    truncated = True
                    break
                rows.append([_cell(v) for v in row])
            return {
                "path": doc_path,
                "sheet": ws.title,
                "sheets": list(wb.sheetnames),
                "rows": rows,
                "row_count": len(rows),
                "truncated": truncated,
            }
        finally:
            wb.close()


def _cell(value):
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)
