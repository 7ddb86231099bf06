"""Contract generation from .docx templates with bracketed placeholders."""

__version__ = "1.0.0"
