"""
DOCX text extraction using python-docx
"""
import io
from pathlib import Path
from typing import Union


def extract_text_from_docx(source: Union[str, Path, bytes]) -> str:
    """
    Extract text from a DOCX file or uploaded DOCX bytes using python-docx.

    Args:
        source: Path to the DOCX file, or its raw bytes

    Returns:
        Extracted text as a string, or an "[ERROR] ..." message
    """
    from docx import Document

    if isinstance(source, bytes):
        target = io.BytesIO(source)
    else:
        path = Path(source)
        if not path.exists():
            return f"[ERROR] File not found: {source}"
        if path.suffix.lower() != ".docx":
            return f"[ERROR] Not a Word document: {source}"
        target = str(path)

    try:
        doc = Document(target)
        text_parts = []

        for paragraph in doc.paragraphs:
            if paragraph.text.strip():
                text_parts.append(paragraph.text)

        # Also extract from tables
        for table in doc.tables:
            for row in table.rows:
                row_text = []
                for cell in row.cells:
                    if cell.text.strip():
                        row_text.append(cell.text.strip())
                if row_text:
                    text_parts.append(" | ".join(row_text))

        return "\n".join(text_parts)

    except Exception as e:
        return f"[ERROR] Failed to parse DOCX: {e}"
