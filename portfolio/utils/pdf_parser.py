"""
PDF text extraction using PyMuPDF (fitz)
"""
from pathlib import Path
from typing import Union


def extract_text_from_pdf(source: Union[str, Path, bytes]) -> str:
    """
    Extract text from a PDF file or uploaded PDF bytes using PyMuPDF.

    Args:
        source: Path to the PDF file, or its raw bytes

    Returns:
        Extracted text as a string, or an "[ERROR] ..." message
    """
    import fitz  # PyMuPDF

    if isinstance(source, bytes):
        open_args = {"stream": source, "filetype": "pdf"}
    else:
        path = Path(source)
        if not path.exists():
            return f"[ERROR] File not found: {source}"
        if path.suffix.lower() != ".pdf":
            return f"[ERROR] Not a PDF file: {source}"
        open_args = {"filename": str(path)}

    try:
        doc = fitz.open(**open_args)
        text_parts = []

        for page in doc:
            text = page.get_text()
            if text.strip():
                text_parts.append(text)

        doc.close()
        return "\n".join(text_parts)

    except Exception as e:
        return f"[ERROR] Failed to parse PDF: {e}"
