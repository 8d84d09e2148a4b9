"""Tests for the doc facade: PDF, text, DOCX and spreadsheet readers.

Sample documents are generated on the fly with PyMuPDF, python-docx and
openpyxl.
"""

import fitz  # PyMuPDF, used to create sample PDFs
import openpyxl
import pytest
from docx import Document

from shared_tools.app.doc.readers import parse_page_numbers
from shared_tools.app.doc_tool import DocTool
from shared_tools.app.errors import ParameterError


@pytest.fixture()
def tool(auto):
    return DocTool(authorizer=auto)


@pytest.fixture()
def sample_pdf(tmp_path) -> str:
    """Three-page PDF whose pages say 'Page one', 'Page two', 'Page three'."""
    path = str(tmp_path / "report.pdf")
    doc = fitz.open()
    for word in ("one", "two", "three"):
        page = doc.new_page(width=612, height=792)
        page.insert_text((72, 72), f"Page {word}", fontsize=14)
    doc.save(path)
    doc.close()
    return path


class TestPageNumbers:
    @pytest.mark.parametrize("pages, expected", [
        ("5", [5]),
        ("1, 3, 5", [1, 3, 5]),
        ("1-10", list(range(1, 11))),
        ("1, 3-5, 10", [1, 3, 4, 5, 10]),
        (" 2 ,, 4 ", [2, 4]),
    ])
    def test_formats(self, pages, expected):
        assert parse_page_numbers(pages) == expected

    @pytest.mark.parametrize("pages, expected", [
        ("1-999999999", [1, 2, 3]),
        ("2-5, 9", [2, 3, 9]),
        ("7-20", [7]),
    ])
    def test_ranges_stop_at_max_page(self, pages, expected):
        assert parse_page_numbers(pages, max_page=3) == expected

    @pytest.mark.parametrize("pages", ["", "abc", "0", "5-3", "1-x"])
    def test_invalid(self, pages):
        with pytest.raises(ValueError):
            parse_page_numbers(pages)


class TestPdfRead:
    def test_reads_requested_pages(self, tool, sample_pdf):
        result = tool.execute("pdf_read", doc_path=sample_pdf, page_numbers="1, 3")
        assert result["total_pages"] == 3
        assert result["requested_pages"] == [1, 3]
        assert result["invalid_pages"] == []
        assert [p["page"] for p in result["pages"]] == [1, 3]
        assert "Page one" in result["pages"][0]["text"]
        assert "Page three" in result["pages"][1]["text"]

    def test_range(self, tool, sample_pdf):
        result = tool.execute("pdf_read", doc_path=sample_pdf, page_numbers="1-3")
        assert len(result["pages"]) == 3

    def test_out_of_range_pages_reported(self, tool, sample_pdf):
        result = tool.execute("pdf_read", doc_path=sample_pdf, page_numbers="2, 999")
        assert result["requested_pages"] == [2, 999]
        assert result["invalid_pages"] == [999]
        assert len(result["pages"]) == 1
        assert "Page two" in result["pages"][0]["text"]

    def test_huge_range_is_clamped(self, tool, sample_pdf):
        result = tool.execute("pdf_read", doc_path=sample_pdf, page_numbers="2-999999999")
        assert result["requested_pages"] == [2, 3]
        assert result["invalid_pages"] == []
        assert [p["page"] for p in result["pages"]] == [2, 3]

    def test_integer_page_number(self, tool, sample_pdf):
        result = tool.execute("pdf_read", doc_path=sample_pdf, page_numbers=2)
        assert result["requested_pages"] == [2]

    def test_bad_page_numbers(self, tool, sample_pdf):
        result = tool.execute("pdf_read", doc_path=sample_pdf, page_numbers="first")
        assert "Invalid page_numbers" in result["error"]

    def test_missing_file(self, tool, tmp_path):
        missing = str(tmp_path / "nope.pdf")
        assert tool.execute("pdf_read", doc_path=missing, page_numbers="1") == {
            "error": f"File not found: {missing}",
        }

    def test_requires_page_numbers(self, tool, sample_pdf):
        with pytest.raises(ParameterError, match="'page_numbers' param is required for action 'pdf_read'"):
            tool.execute("pdf_read", doc_path=sample_pdf)


class TestTextRead:
    def test_reads_file(self, tool, tmp_path):
        path = tmp_path / "README.md"
        path.write_text("# Title\nbody\n")
        result = tool.execute("text_read", doc_path=str(path))
        assert result == {
            "path": str(path),
            "extension": ".md",
            "size": 13,
            "lines": 3,
            "content": "# Title\nbody\n",
        }

    def test_directory_is_not_a_file(self, tool, tmp_path):
        assert tool.execute("text_read", doc_path=str(tmp_path)) == {"error": f"Not a file: {tmp_path}"}


class TestDocxRead:
    def test_paragraphs_and_tables(self, tool, tmp_path):
        path = str(tmp_path / "memo.docx")
        document = Document()
        document.add_paragraph("Quarterly memo")
        document.add_paragraph("")
        document.add_paragraph("Revenue is up.")
        table = document.add_table(rows=2, cols=2)
        table.cell(0, 0).text = "Region"
        table.cell(0, 1).text = "Total"
        table.cell(1, 0).text = "EMEA"
        table.cell(1, 1).text = "42"
        document.save(path)

        result = tool.execute("docx_read", doc_path=path)
        assert result["paragraphs"] == ["Quarterly memo", "Revenue is up."]
        assert result["tables"] == [[["Region", "Total"], ["EMEA", "42"]]]
        assert result["content"] == "Quarterly memo\nRevenue is up."


class TestSpreadsheetRead:
    @pytest.fixture()
    def workbook(self, tmp_path) -> str:
        path = str(tmp_path / "budget.xlsx")
        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = "Summary"
        ws.append(["Item", "Cost"])
        ws.append(["Cable", 12.5])
        ws.append(["Switch", 300])
        other = wb.create_sheet("Notes")
        other.append(["reviewed"])
        wb.save(path)
        return path

    def test_first_sheet_by_default(self, tool, workbook):
        result = tool.execute("spreadsheet_read", doc_path=workbook)
        assert result["sheet"] == "Summary"
        assert result["sheets"] == ["Summary", "Notes"]
        assert result["rows"] == [["Item", "Cost"], ["Cable", 12.5], ["Switch", 300]]
        assert result["truncated"] is False

    def test_named_sheet(self, tool, workbook):
        result = tool.execute("spreadsheet_read", doc_path=workbook, sheet="Notes")
        assert result["rows"] == [["reviewed"]]

    def test_max_rows(self, tool, workbook):
        result = tool.execute("spreadsheet_read", doc_path=workbook, max_rows=2)
        assert result["row_count"] == 2
        assert result["truncated"] is True

    def test_unknown_sheet(self, tool, workbook):
        result = tool.execute("spreadsheet_read", doc_path=workbook, sheet="Missing")
        assert result["error"].startswith("Sheet not found: Missing")


class TestNotGated:
    def test_reads_with_declining_authorizer(self, decline, tmp_path):
        path = tmp_path / "a.txt"
        path.write_text("x")
        assert DocTool(authorizer=decline).execute("text_read", doc_path=str(path))["content"] == "x"
