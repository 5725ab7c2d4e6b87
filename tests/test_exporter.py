"""Unit tests for report export."""
import re

import pytest
from openpyxl import load_workbook

from asistente.reports import default_export_path, export_pdf, export_report, export_spreadsheet
from asistente.reports.exporter import CLP_NUMBER_FORMAT, SHEET_TITLE, is_money_column
from asistente.responses import ReportPayload


@pytest.fixture
def report(sales_rows):
    """Return a report built from the sample rows."""
    return ReportPayload(question="Ventas de enero", rows=sales_rows)


class TestMoneyColumns:
    """Tests for monetary column detection."""

    @pytest.mark.parametrize("name", ["total", "Monto Neto", "saldo_pendiente", "IVA", "precio_unitario"])
    def test_money_names(self, name):
        """Test names that look monetary."""
        assert is_money_column(name)

    @pytest.mark.parametrize("name", ["cliente", "fecha", "id_cliente"])
    def test_other_names(self, name):
        """Test names that do not."""
        assert not is_money_column(name)


class TestExportSpreadsheet:
    """Tests for Excel export."""

    def test_workbook_contents(self, report, tmp_path):
        """Test the header and rows read back with openpyxl."""
        path = export_spreadsheet(report, tmp_path / "informe.xlsx")

        ws = load_workbook(path).active
        rows = list(ws.iter_rows(values_only=True))
        assert ws.title == SHEET_TITLE
        assert rows[0] == ("id_cliente", "cliente", "total", "fecha")
        assert rows[1] == (1, "Ferretería Sur", 1250000, "2025-01-03")
        assert len(rows) == 4

    def test_money_cells_are_numbers(self, report, tmp_path):
        """Test that grouped strings in money columns become numbers with CLP format."""
        path = export_spreadsheet(report, tmp_path / "informe.xlsx")

        ws = load_workbook(path).active
        assert ws["C4"].value == 420000
        assert ws["C2"].number_format == CLP_NUMBER_FORMAT
        assert ws["D2"].number_format != CLP_NUMBER_FORMAT

    def test_header_is_bold(self, report, tmp_path):
        """Test the styled header row."""
        path = export_spreadsheet(report, tmp_path / "informe.xlsx")
        ws = load_workbook(path).active
        assert ws["A1"].font.bold

    def test_money_column_with_text_stays_text(self, tmp_path):
        """Test that a money-named column with non-numeric cells is left alone."""
        report = ReportPayload(rows=[{"total": "n/a"}, {"total": 10}])
        path = export_spreadsheet(report, tmp_path / "informe.xlsx")

        ws = load_workbook(path).active
        assert ws["A2"].value == "n/a"
        assert ws["A3"].number_format != CLP_NUMBER_FORMAT

    def test_creates_parent_directories(self, report, tmp_path):
        """Test that missing directories are created."""
        path = export_spreadsheet(report, tmp_path / "a" / "b" / "informe.xlsx")
        assert path.exists()


class TestExportPdf:
    """Tests for PDF export."""

    def test_writes_pdf(self, report, tmp_path):
        """Test that a PDF file is produced."""
        path = export_pdf(report, tmp_path / "informe.pdf")
        assert path.read_bytes().startswith(b"%PDF")

    def test_markup_characters_are_escaped(self, tmp_path):
        """Test that '<' and '&' in cells do not break rendering."""
        report = ReportPayload(question="A & B <test>", rows=[{"cliente": "Pérez & Cía <Ltda>", "total": 1}])
        path = export_pdf(report, tmp_path / "informe.pdf")
        assert path.stat().st_size > 0


class TestExportReport:
    """Tests for export dispatch."""

    def test_dispatch_by_suffix(self, report, tmp_path):
        """Test that the suffix picks the format."""
        assert export_report(report, tmp_path / "x.XLSX").exists()
        assert export_report(report, tmp_path / "x.pdf").read_bytes().startswith(b"%PDF")

    def test_unsupported_suffix(self, report, tmp_path):
        """Test that other formats are rejected."""
        with pytest.raises(ValueError, match="Unsupported export format"):
            export_report(report, tmp_path / "x.csv")

    def test_empty_report(self, tmp_path):
        """Test that an empty report cannot be exported."""
        with pytest.raises(ValueError, match="no rows"):
            export_report(ReportPayload(rows=[]), tmp_path / "x.xlsx")
        with pytest.raises(ValueError, match="no rows"):
            export_report(ReportPayload(rows=[]), tmp_path / "x.pdf")


class TestDefaultExportPath:
    """Tests for default_export_path."""

    def test_timestamped_name(self, tmp_path):
        """Test the informe_ventas_<timestamp> naming."""
        path = default_export_path("xlsx", tmp_path)
        assert path.parent == tmp_path
        assert re.fullmatch(r"informe_ventas_\d{8}_\d{6}\.xlsx", path.name)

    def test_unknown_format(self):
        """Test that unknown formats are rejected."""
        with pytest.raises(ValueError):
            default_export_path("docx")
