"""Doc facade: read PDF, plain text, DOCX and spreadsheet documents."""

from __future__ import annotations

import logging
from enum import Enum

from .authorizer import Authorizer
from .base_tool import BaseTool
from .doc.readers import (
    DOC_MAX_ROWS,
    DocxReaderTool,
    PdfReaderTool,
    SpreadsheetReaderTool,
    TextReaderTool,
)


class DocTool(BaseTool):
    name = "doc_tool"
    description = "Read and process various document formats (PDF, text, DOCX, spreadsheets)."

    class Action(str, Enum):
        PDF_READ = "pdf_read"
        TEXT_READ = "text_read"
        DOCX_READ = "docx_read"
        SPREADSHEET_READ = "spreadsheet_read"

    HANDLERS = {
        Action.PDF_READ: "_pdf_read",
        Action.TEXT_READ: "_text_read",
        Action.DOCX_READ: "_docx_read",
        Action.SPREADSHEET_READ: "_spreadsheet_read",
    }

    REQUIRED = {
        Action.PDF_READ: ("doc_path", "page_numbers"),
        Action.TEXT_READ: ("doc_path",),
        Action.DOCX_READ: ("doc_path",),
        Action.SPREADSHEET_READ: ("doc_path",),
    }

    def __init__(self, logger: logging.Logger | None = None, authorizer: Authorizer | None = None):
        super().__init__(logger=logger, authorizer=authorizer)
        self._readers: dict[type, object] = {}

    def reader(self, cls):
        reader = self._readers.get(cls)
        if reader is None:
            reader = cls(logger=self.logger)
            self._readers[cls] = reader
        return reader

    def _pdf_read(self, doc_path, page_numbers):
        return self.reader(PdfReaderTool).execute(doc_path=doc_path, page_numbers=str(page_numbers))

    def _text_read(self, doc_path):
        return self.reader(TextReaderTool).execute(doc_path=doc_path)

    def _docx_read(self, doc_path):
        return self.reader(DocxReaderTool).execute(doc_path=doc_path)

    def _spreadsheet_read(self, doc_path, sheet=None, max_rows=DOC_MAX_ROWS):
        return self.reader(SpreadsheetReaderTool).execute(
            doc_path=doc_path, sheet=sheet, max_rows=int(max_rows),
        )
