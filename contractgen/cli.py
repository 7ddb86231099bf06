"""Command-line entry point for contract numbering and generation.

Examples:
    contractgen number ./ALL.contract
    contractgen placeholders template.docx --config ./ALL.contract
    contractgen generate template.docx --config ./ALL.contract --no-pdf
"""

import argparse
import logging
import sys
from typing import List, Optional

from config.settings import settings
from .core.contract_generator import ContractGenerator
from .core.contract_number import contract_number_for_path, resolve_contract_number
from .core.document_processor import DocxDocumentEditor
from .core.placeholder_resolver import resolve_placeholders
from .processors.data_loader import load_contract_data
from .utils.error_handler import ProcessingError, error_handler

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Set up logging configuration."""
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def command_number(args: argparse.Namespace) -> int:
    data = load_contract_data(args.config)
    contract_number = contract_number_for_path(resolve_contract_number(data, settings))
    print(f"Contract Number: {contract_number}")
    return 0


def command_placeholders(args: argparse.Namespace) -> int:
    data = load_contract_data(args.config)
    contract_number = resolve_contract_number(data, settings)

    with DocxDocumentEditor(settings) as editor:
        editor.open(args.template)
        replacements = resolve_placeholders(editor.get_scan_text(), data, contract_number)

    print(f"Contract Number: {contract_number}")
    for token, replacement in replacements.items():
        print(f"[{token}] -> {replacement}")
    return 0


def command_generate(args: argparse.Namespace) -> int:
    data = load_contract_data(args.config)
    generator = ContractGenerator(settings=settings)
    result = generator.generate(
        data,
        args.template,
        output_root=args.output_root,
        export_pdf=False if args.no_pdf else None
    )

    print(f"Contract Number: {result.contract_number}")
    for output_format, path in result.files.items():
        print(f"{output_format.value.upper()}: {path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="contractgen",
        description="Generate contract documents from .docx templates and contract data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    number_parser = subparsers.add_parser("number", help="Print the contract number for a configuration")
    number_parser.add_argument("config", nargs="?", default=settings.default_config_file,
                               help=f"Contract configuration file (default: {settings.default_config_file})")
    number_parser.set_defaults(handler=command_number)

    placeholders_parser = subparsers.add_parser("placeholders", help="Show how each template placeholder resolves")
    placeholders_parser.add_argument("template", help="Template .docx file")
    placeholders_parser.add_argument("--config", default=settings.default_config_file,
                                     help="Contract configuration file")
    placeholders_parser.set_defaults(handler=command_placeholders)

    generate_parser = subparsers.add_parser("generate", help="Write the DOCX and PDF contract")
    generate_parser.add_argument("template", help="Template .docx file")
    generate_parser.add_argument("--config", default=settings.default_config_file,
                                 help="Contract configuration file")
    generate_parser.add_argument("--output-root", default=None,
                                 help="Folder receiving the Contract/ tree (default: template folder)")
    generate_parser.add_argument("--no-pdf", action="store_true", help="Skip the PDF copy")
    generate_parser.set_defaults(handler=command_generate)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        return args.handler(args)
    except ProcessingError as e:
        error_handler.handle_error(e, context={"command": args.command})
        print(f"Error: {e.message}", file=sys.stderr)
        for path in e.details.get("written_files", []):
            print(f"Already written: {path}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
