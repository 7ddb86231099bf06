"""Document editing collaborator for .docx contract templates."""

import logging
import shutil
import subprocess
import tempfile
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Iterator, List, Optional, Union

from docx import Document
from docx.opc.exceptions import PackageNotFoundError
from docx.table import Table
from docx.text.hyperlink import Hyperlink
from docx.text.paragraph import Paragraph
from docx.text.run import Run

from config.settings import Settings, settings as default_settings
from ..utils.error_handler import DocumentError

logger = logging.getLogger(__name__)


class OutputFormat(Enum):
    """Formats a generated contract is saved in."""
    DOCX = "docx"  # editable
    PDF = "pdf"    # fixed-layout

    @property
    def extension(self) -> str:
        return f".{self.value}"


class DocumentEditor(ABC):
    """One editing session over a template document.

    The session is sequential: open, scan, replace, save, close.
    """

    @abstractmethod
    def open(self, path: Union[str, Path]) -> None:
        """Open the template at path."""

    @abstractmethod
    def get_scan_text(self) -> str:
        """Full visible text of the open document, used for placeholder discovery."""

    @abstractmethod
    def apply_replacement(self, literal: str, replacement: str) -> int:
        """Replace every occurrence of literal with replacement; returns the count."""

    @abstractmethod
    def save_as(self, path: Union[str, Path], output_format: OutputFormat) -> Path:
        """Save the edited document to path in the given format."""

    @abstractmethod
    def close(self) -> None:
        """End the session, discarding unsaved changes."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
        return False


class DocxDocumentEditor(DocumentEditor):
    """DocumentEditor backed by python-docx, with LibreOffice for PDF export."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings
        self.document = None
        self.source_path: Optional[Path] = None

    def open(self, path: Union[str, Path]) -> None:
        source_path = Path(path)
        if not source_path.is_file():
            raise DocumentError(
                f"Template not found: {source_path}",
                details={"path": str(source_path)},
                suggestions=["Check the template path"]
            )

        try:
            self.document = Document(str(source_path))
        except (PackageNotFoundError, ValueError, KeyError) as e:
            raise DocumentError(
                f"Cannot open template {source_path}: {e}",
                details={"path": str(source_path)},
                suggestions=["Make sure the template is a .docx file, not a legacy .doc"]
            ) from e

        self.source_path = source_path
        logger.info(f"Opened template {source_path}")

    def get_scan_text(self) -> str:
        return "\n".join(paragraph.text for paragraph in self._iter_paragraphs())

    def apply_replacement(self, literal: str, replacement: str) -> int:
        if not literal:
            return 0

        replaced = 0
        for paragraph in self._iter_paragraphs():
            if literal in paragraph.text:
                replaced += self._replace_in_paragraph(paragraph, literal, replacement)

        logger.debug(f"Replaced {replaced} occurrence(s) of {literal}")
        return replaced

    def save_as(self, path: Union[str, Path], output_format: OutputFormat) -> Path:
        document = self._require_document()
        output_path = Path(path)

        if output_format is OutputFormat.DOCX:
            try:
                document.save(str(output_path))
            except OSError as e:
                raise DocumentError(f"Cannot save {output_path}: {e}", details={"path": str(output_path)}) from e
        elif output_format is OutputFormat.PDF:
            self._export_pdf(document, output_path)
        else:
            raise DocumentError(f"Unsupported output format: {output_format}")

        logger.info(f"Saved {output_format.value.upper()} to {output_path}")
        return output_path

    def close(self) -> None:
        self.document = None
        self.source_path = None

    def _require_document(self):
        if self.document is None:
            raise DocumentError("No template is open", suggestions=["Call open() before saving"])
        return self.document

    def _iter_paragraphs(self) -> Iterator[Paragraph]:
        """Paragraphs of the body, tables and every header and footer."""
        document = self._require_document()

        yield from self._iter_container(document)

        for section in document.sections:
            for part in (section.header, section.first_page_header, section.even_page_header,
                         section.footer, section.first_page_footer, section.even_page_footer):
                if part.is_linked_to_previous:
                    continue
                yield from self._iter_container(part)

    def _iter_container(self, container) -> Iterator[Paragraph]:
        for paragraph in container.paragraphs:
            yield paragraph
        for table in container.tables:
            yield from self._iter_table(table)

    def _iter_table(self, table: Table) -> Iterator[Paragraph]:
        seen_cells = set()
        for row in table.rows:
            for cell in row.cells:
                # merged cells are returned once per grid position
                if id(cell._tc) in seen_cells:
                    continue
                seen_cells.add(id(cell._tc))
                yield from self._iter_container(cell)

    @staticmethod
    def _paragraph_runs(paragraph: Paragraph) -> List[Run]:
        """Runs in document order, including those inside hyperlinks."""
        runs = []
        for item in paragraph.iter_inner_content():
            if isinstance(item, Hyperlink):
                runs.extend(item.runs)
            else:
                runs.append(item)
        return runs

    def _replace_in_paragraph(self, paragraph: Paragraph, literal: str, replacement: str) -> int:
        """Replace literal in a paragraph while preserving run formatting where possible."""
        runs = self._paragraph_runs(paragraph)
        count = 0

        # Tokens inside a single run keep that run's formatting
        for run in runs:
            if literal in run.text:
                count += run.text.count(literal)
                run.text = run.text.replace(literal, replacement)

        # Tokens split across runs go into the run holding their first character
        search_from = 0
        while True:
            texts = [run.text for run in runs]
            start = "".join(texts).find(literal, search_from)
            if start < 0:
                return count
            end = start + len(literal)

            first = last = None
            offset = 0
            for index, text in enumerate(texts):
                run_end = offset + len(text)
                if first is None and start < run_end:
                    first, head = index, texts[index][:start - offset]
                if first is not None and end <= run_end:
                    last, tail = index, texts[index][end - offset:]
                    break
                offset = run_end

            runs[first].text = head + replacement + tail
            for run in runs[first + 1:last + 1]:
                run.text = ""
            count += 1
            search_from = start + len(replacement)

    def _export_pdf(self, document, output_path: Path) -> None:
        soffice = shutil.which(self.settings.soffice_binary)
        if not soffice:
            raise DocumentError(
                f"LibreOffice '{self.settings.soffice_binary}' not found on PATH",
                suggestions=["Install LibreOffice", "Set CONTRACT_SOFFICE_BINARY", "Disable PDF export with CONTRACT_EXPORT_PDF=false"]
            )

        with tempfile.TemporaryDirectory() as work_dir:
            work_path = Path(work_dir)
            docx_path = work_path / output_path.with_suffix(OutputFormat.DOCX.extension).name
            document.save(str(docx_path))

            cmd = [soffice, "--headless", "--convert-to", "pdf", "--outdir", str(work_path), str(docx_path)]
            logger.debug(f"Running command: {' '.join(cmd)}")
            try:
                result = subprocess.run(
                    cmd,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.STDOUT,
                    text=True,
                    timeout=self.settings.conversion_timeout
                )
            except subprocess.TimeoutExpired as e:
                raise DocumentError(
                    f"PDF conversion timed out after {self.settings.conversion_timeout}s",
                    details={"path": str(output_path)}
                ) from e

            if result.returncode != 0:
                raise DocumentError(
                    f"PDF conversion failed: {' '.join(cmd)}\n{result.stdout}",
                    details={"return_code": result.returncode, "path": str(output_path)}
                )

            produced = docx_path.with_suffix(OutputFormat.PDF.extension)
            if not produced.exists():
                candidates = list(work_path.glob("*.pdf"))
                if not candidates:
                    raise DocumentError(
                        f"LibreOffice did not produce a PDF. Directory contents: {[f.name for f in work_path.glob('*')]}",
                        details={"path": str(output_path)}
                    )
                produced = candidates[0]

            shutil.move(str(produced), str(output_path))
