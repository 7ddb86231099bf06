#!/usr/bin/env python3
"""
Script to create a sample .docx contract template with [Token] placeholders.
Run it, then try:  contractgen generate examples/service_contract.docx --config examples/ALL.contract
"""

from docx import Document
from pathlib import Path
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

TEMPLATE_LINES = [
    "SERVICE CONTRACT No. [ContractNum]",
    "Tashkent, «[Day]» [MonthText] [Year]",
    "[MyName], hereinafter the Contractor, and [ClientName], hereinafter the Customer, agree as follows.",
    "1. SUBJECT",
    "The Contractor performs renovation works at apartment [Area].",
    "2. PRICE",
    "The contract price is [Amount] ([AmountText]) sum.",
    "3. CONTACTS",
    "Contractor: [MyPhone]",
    "Customer: [ClientPhone]",
]


def create_template(output_path: str):
    """Create a .docx template with headings and a signature table."""
    doc = Document()

    for i, line in enumerate(TEMPLATE_LINES):
        if i == 0:
            doc.add_heading(line, level=0)
        elif line.startswith(('1.', '2.', '3.')):
            doc.add_heading(line, level=1)
        else:
            doc.add_paragraph(line)

    table = doc.add_table(rows=2, cols=2)
    table.cell(0, 0).text = "Contractor"
    table.cell(0, 1).text = "Customer"
    table.cell(1, 0).text = "[MyName]"
    table.cell(1, 1).text = "[ClientName]"

    doc.sections[0].footer.paragraphs[0].text = "Contract [ContractNum]"

    doc.save(output_path)
    logger.info(f"Created {output_path}")


def main():
    output_path = Path(__file__).parent / "service_contract.docx"
    create_template(str(output_path))


if __name__ == "__main__":
    main()
