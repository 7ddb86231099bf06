"""Pytest configuration and fixtures."""

import os
import sys
import tempfile
from pathlib import Path

import pytest

# Make the project root importable when running pytest from a checkout
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from config.settings import Settings


@pytest.fixture
def sample_contract_data():
    """Fixture providing sample contract data as parsed from a configuration."""
    return {
        "ContractPrefix": "SP",
        "Day": 5,
        "Month": 3,
        "Year": 2024,
        "ComName": "«Smart Teams» LLC",
        "MyName": "SMART TEAMS LLC",
        "MyPhone": 998711234567,
        "ClientName": "Ivanov Ivan",
        "ClientPhone": "998901112233",
        "Area": "45",
        "Amount": 5,
    }


@pytest.fixture
def test_settings():
    """Settings with defaults, isolated from the developer's environment."""
    return Settings(
        _env_file=None,
        contract_prefix="RC",
        contract_format="RC-{Year}-{Month}-{Day}",
        export_pdf=False,
        words_language="ru",
    )


@pytest.fixture
def create_test_docx(tmp_path):
    """Factory fixture for creating test .docx files."""

    def _create_docx(content_lines, filename="template.docx", table_rows=None, footer=None):
        from docx import Document

        doc = Document()
        for line in content_lines:
            doc.add_paragraph(line)

        if table_rows:
            table = doc.add_table(rows=len(table_rows), cols=len(table_rows[0]))
            for row_index, row in enumerate(table_rows):
                for col_index, value in enumerate(row):
                    table.cell(row_index, col_index).text = value

        if footer:
            doc.sections[0].footer.paragraphs[0].text = footer

        path = tmp_path / filename
        doc.save(str(path))
        return path

    return _create_docx


@pytest.fixture
def create_config_file(tmp_path):
    """Factory fixture writing a contract configuration file."""

    def _create_config(content, filename="ALL.contract"):
        path = tmp_path / filename
        path.write_text(content, encoding="utf-8")
        return path

    return _create_config


@pytest.fixture
def sample_config_text():
    """Configuration text with values the sanitizer must quote."""
    return (
        "ContractPrefix: SP\n"
        "ContractFormat: {Prefix}-{CName}-{Year}{Month}{Day}\n"
        "Day: 5\n"
        "Month: 3\n"
        "Year: 2024\n"
        "ComName: «Smart Teams» LLC\n"
        "MyName: SMART TEAMS LLC\n"
        "ClientPhone: 998901112233\n"
        "Area: 45\n"
        "Amount: 5\n"
    )
