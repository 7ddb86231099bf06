"""End-to-end generation of one contract from a template and contract data."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Optional, Union

from config.settings import Settings, settings as default_settings
from ..utils.error_handler import DocumentError
from .contract_data import AREA, ContractData
from .contract_number import contract_number_for_path, party_type, resolve_contract_number
from .document_processor import DocumentEditor, DocxDocumentEditor, OutputFormat
from .placeholder_resolver import PlaceholderResolver, placeholder_literal

logger = logging.getLogger(__name__)


@dataclass
class OutputPaths:
    """Where one contract's files are written."""
    folder: Path
    files: Dict[OutputFormat, Path]


@dataclass
class GenerationResult:
    """Outcome of a generation run."""
    contract_number: str
    output_folder: Path
    files: Dict[OutputFormat, Path] = field(default_factory=dict)
    replacements: Dict[str, str] = field(default_factory=dict)


def build_output_paths(template_path: Union[str, Path],
                       contract_number: str,
                       area: str,
                       party: str,
                       output_root: Optional[Union[str, Path]] = None,
                       settings: Optional[Settings] = None) -> OutputPaths:
    """Compute <root>/Contract/<number>/<number>, <area>-kv, <party>, <template>.<ext>.

    The root defaults to the template's folder.
    """
    settings = settings or default_settings
    template = Path(template_path).resolve()
    root = Path(output_root).resolve() if output_root else template.parent

    number = contract_number_for_path(contract_number)
    folder = root / settings.output_folder_name / number
    stem = f"{number}, {area}{settings.area_suffix}, {party}, {template.stem}"

    files = {output_format: folder / f"{stem}{output_format.extension}" for output_format in OutputFormat}
    return OutputPaths(folder=folder, files=files)


class ContractGenerator:
    """Merges contract data into a template and saves the editable and fixed-layout copies."""

    def __init__(self,
                 editor_factory: Optional[Callable[[], DocumentEditor]] = None,
                 resolver: Optional[PlaceholderResolver] = None,
                 settings: Optional[Settings] = None):
        self.settings = settings or default_settings
        self.editor_factory = editor_factory or (lambda: DocxDocumentEditor(self.settings))
        self.resolver = resolver or PlaceholderResolver()

    def generate(self,
                 data: ContractData,
                 template_path: Union[str, Path],
                 output_root: Optional[Union[str, Path]] = None,
                 export_pdf: Optional[bool] = None) -> GenerationResult:
        """Run one generation: number, scan, replace, save.

        Args:
            data: Parsed contract fields
            template_path: .docx template with [Token] placeholders
            output_root: Folder that receives the Contract/ tree, defaults to
                the template's folder
            export_pdf: Overrides ``settings.export_pdf``

        Returns:
            GenerationResult with the written files and applied replacements

        Raises:
            DocumentError: If the template cannot be opened or an output
                cannot be written. When an earlier format was already
                saved, its paths are in ``details["written_files"]``.
        """
        template = Path(template_path)
        if not template.is_file():
            raise DocumentError(
                f"Template not found: {template}",
                details={"path": str(template)},
                suggestions=["Check the template path"]
            )

        data = ContractData.from_mapping(data)
        export_pdf = self.settings.export_pdf if export_pdf is None else export_pdf

        contract_number = resolve_contract_number(data, self.settings)
        paths = build_output_paths(
            template,
            contract_number,
            data.text(AREA),
            party_type(data, self.settings),
            output_root=output_root,
            settings=self.settings
        )
        result = GenerationResult(contract_number=contract_number, output_folder=paths.folder)

        with self.editor_factory() as editor:
            editor.open(template)
            result.replacements = self.resolver.resolve(editor.get_scan_text(), data, contract_number)

            for token, replacement in result.replacements.items():
                editor.apply_replacement(placeholder_literal(token), replacement)

            # Created only once the template has opened
            paths.folder.mkdir(parents=True, exist_ok=True)

            formats = [OutputFormat.DOCX, OutputFormat.PDF] if export_pdf else [OutputFormat.DOCX]
            try:
                for output_format in formats:
                    result.files[output_format] = editor.save_as(paths.files[output_format], output_format)
            except DocumentError as e:
                if result.files:
                    written = [str(path) for path in result.files.values()]
                    e.details["written_files"] = written
                    logger.warning(f"Contract {contract_number} is incomplete, already written: {', '.join(written)}")
                raise

        logger.info(f"Contract {contract_number} written to {paths.folder}")
        return result
