"""Tests for the python-docx document editor."""

from pathlib import Path
from unittest.mock import Mock, patch

import pytest
from docx import Document
from docx.oxml import OxmlElement
from docx.oxml.ns import qn

from contractgen.core.document_processor import DocxDocumentEditor, OutputFormat
from contractgen.utils.error_handler import DocumentError


def add_hyperlink(paragraph, text, anchor="contacts"):
    """Append an internal hyperlink holding a single run of text."""
    hyperlink = OxmlElement("w:hyperlink")
    hyperlink.set(qn("w:anchor"), anchor)
    run = OxmlElement("w:r")
    text_element = OxmlElement("w:t")
    text_element.text = text
    run.append(text_element)
    hyperlink.append(run)
    paragraph._p.append(hyperlink)


def fake_soffice_run(cmd, **kwargs):
    """Stand-in for LibreOffice that writes a PDF next to the input."""
    out_dir = Path(cmd[cmd.index("--outdir") + 1])
    source = Path(cmd[-1])
    (out_dir / f"{source.stem}.pdf").write_bytes(b"%PDF-1.4 test")
    return Mock(returncode=0, stdout="convert ok")


class TestDocxDocumentEditor:
    """Test suite for DocxDocumentEditor."""

    def setup_method(self):
        """Set up test fixtures."""
        self.editor = DocxDocumentEditor()

    def teardown_method(self):
        self.editor.close()

    def test_open_missing_template(self, tmp_path):
        with pytest.raises(DocumentError):
            self.editor.open(tmp_path / "missing.docx")

    def test_open_non_docx_file(self, tmp_path):
        path = tmp_path / "legacy.docx"
        path.write_text("not a zip package")

        with pytest.raises(DocumentError):
            self.editor.open(path)

    def test_scan_text_covers_body_tables_and_footer(self, create_test_docx):
        path = create_test_docx(
            ["Contract [ContractNum]", "Client: [ClientName]"],
            table_rows=[["Area", "[Area]"]],
            footer="Page footer [MyPhone]",
        )

        self.editor.open(path)
        text = self.editor.get_scan_text()

        assert "Contract [ContractNum]" in text
        assert "[ClientName]" in text
        assert "[Area]" in text
        assert "[MyPhone]" in text

    def test_apply_replacement_everywhere(self, create_test_docx, tmp_path):
        path = create_test_docx(
            ["No. [ContractNum]", "Again [ContractNum] and [ContractNum]"],
            table_rows=[["[ContractNum]", "x"]],
            footer="[ContractNum]",
        )

        self.editor.open(path)
        count = self.editor.apply_replacement("[ContractNum]", "RC-1")

        assert count == 5
        text = self.editor.get_scan_text()
        assert "[ContractNum]" not in text
        assert text.count("RC-1") == 5

    def test_replacement_is_literal_and_case_sensitive(self, create_test_docx):
        path = create_test_docx(["[area] [Area] [Area]"])

        self.editor.open(path)
        self.editor.apply_replacement("[Area]", "$1 \\g<0>")

        assert self.editor.get_scan_text() == "[area] $1 \\g<0> $1 \\g<0>"

    def test_single_run_keeps_formatting(self, tmp_path):
        doc = Document()
        paragraph = doc.add_paragraph("Amount: ")
        bold_run = paragraph.add_run("[Amount]")
        bold_run.bold = True
        path = tmp_path / "formatted.docx"
        doc.save(str(path))

        self.editor.open(path)
        self.editor.apply_replacement("[Amount]", "500")

        runs = self.editor.document.paragraphs[0].runs
        assert runs[1].text == "500"
        assert runs[1].bold is True

    def test_token_split_across_runs(self, tmp_path):
        doc = Document()
        paragraph = doc.add_paragraph()
        paragraph.add_run("Client: [Cli")
        paragraph.add_run("entName]")
        paragraph.add_run(" signs.")
        path = tmp_path / "split.docx"
        doc.save(str(path))

        self.editor.open(path)
        count = self.editor.apply_replacement("[ClientName]", "Ivanov")

        assert count == 1
        assert self.editor.document.paragraphs[0].text == "Client: Ivanov signs."

    def test_token_inside_hyperlink(self, tmp_path):
        doc = Document()
        paragraph = doc.add_paragraph("Mail: ")
        add_hyperlink(paragraph, "[Email]")
        paragraph.add_run(", tel. [ClientPhone]")
        path = tmp_path / "hyperlink.docx"
        doc.save(str(path))

        self.editor.open(path)
        assert "[Email]" in self.editor.get_scan_text()

        assert self.editor.apply_replacement("[Email]", "a@b.c") == 1
        self.editor.apply_replacement("[ClientPhone]", "+998901112233")

        paragraph = self.editor.document.paragraphs[0]
        assert self.editor.get_scan_text() == "Mail: a@b.c, tel. +998901112233"
        assert paragraph.hyperlinks[0].text == "a@b.c"
        assert paragraph.runs[0].text == "Mail: "

    def test_token_split_between_run_and_hyperlink(self, tmp_path):
        doc = Document()
        paragraph = doc.add_paragraph("Site: [Web")
        add_hyperlink(paragraph, "Site]")
        paragraph.add_run(" and [Web")
        paragraph.add_run("Site]")
        path = tmp_path / "hyperlink_split.docx"
        doc.save(str(path))

        self.editor.open(path)
        count = self.editor.apply_replacement("[WebSite]", "example.org")

        assert count == 2
        assert self.editor.get_scan_text() == "Site: example.org and example.org"
        assert self.editor.document.paragraphs[0].hyperlinks[0].text == ""

    def test_save_docx(self, create_test_docx, tmp_path):
        path = create_test_docx(["Hello [Name]"])
        output_path = tmp_path / "out.docx"

        self.editor.open(path)
        self.editor.apply_replacement("[Name]", "World")
        saved = self.editor.save_as(output_path, OutputFormat.DOCX)

        assert saved == output_path
        assert Document(str(output_path)).paragraphs[0].text == "Hello World"
        # the template itself is not modified
        assert Document(str(path)).paragraphs[0].text == "Hello [Name]"

    def test_save_without_open_document(self, tmp_path):
        with pytest.raises(DocumentError):
            self.editor.save_as(tmp_path / "out.docx", OutputFormat.DOCX)

    @patch("contractgen.core.document_processor.subprocess.run", side_effect=fake_soffice_run)
    @patch("contractgen.core.document_processor.shutil.which", return_value="/usr/bin/soffice")
    def test_save_pdf_with_libreoffice(self, mock_which, mock_run, create_test_docx, tmp_path):
        path = create_test_docx(["Hello"])
        output_path = tmp_path / "RC-1, 45-kv, LLC, template.pdf"

        self.editor.open(path)
        self.editor.save_as(output_path, OutputFormat.PDF)

        assert output_path.read_bytes().startswith(b"%PDF")
        cmd = mock_run.call_args[0][0]
        assert cmd[:4] == ["/usr/bin/soffice", "--headless", "--convert-to", "pdf"]

    @patch("contractgen.core.document_processor.shutil.which", return_value=None)
    def test_save_pdf_without_libreoffice(self, mock_which, create_test_docx, tmp_path):
        self.editor.open(create_test_docx(["Hello"]))

        with pytest.raises(DocumentError) as exc_info:
            self.editor.save_as(tmp_path / "out.pdf", OutputFormat.PDF)
        assert "not found" in exc_info.value.message

    @patch("contractgen.core.document_processor.subprocess.run",
           return_value=Mock(returncode=1, stdout="Error: source file could not be loaded"))
    @patch("contractgen.core.document_processor.shutil.which", return_value="/usr/bin/soffice")
    def test_save_pdf_conversion_failure(self, mock_which, mock_run, create_test_docx, tmp_path):
        self.editor.open(create_test_docx(["Hello"]))

        with pytest.raises(DocumentError):
            self.editor.save_as(tmp_path / "out.pdf", OutputFormat.PDF)
        assert not (tmp_path / "out.pdf").exists()

    def test_context_manager_closes(self, create_test_docx):
        with DocxDocumentEditor() as editor:
            editor.open(create_test_docx(["Hello"]))
            assert editor.document is not None
        assert editor.document is None


def test_output_format_extensions():
    assert OutputFormat.DOCX.extension == ".docx"
    assert OutputFormat.PDF.extension == ".pdf"
