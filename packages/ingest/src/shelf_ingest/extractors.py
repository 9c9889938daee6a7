"""Plain-text extraction for PDF, EPUB, DOCX and TXT documents.

Each extractor is blocking; async callers run them via ``asyncio.to_thread``.
Parsing itself is delegated to PyMuPDF, ebooklib/BeautifulSoup and lxml.
"""

import zipfile
from pathlib import Path
from typing import Callable

import ebooklib
import fitz  # PyMuPDF
from bs4 import BeautifulSoup
from ebooklib import epub
from lxml import etree
from shelf_common import TextExtractionError, UnsupportedFileTypeError, get_logger

from shelf_ingest.filetypes import FileType, PathLike, detect_file_type, is_legacy_document

logger = get_logger(__name__)

_WORD_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"


def extract_pdf_text(path: PathLike) -> str:
    """Extract every page's text, pages separated by a blank line."""
    with fitz.open(str(path)) as doc:
        pages = [page.get_text("text") for page in doc]
    return "\n\n".join(page.strip() for page in pages)


def extract_docx_text(path: PathLike) -> str:
    """Extract paragraph text from ``word/document.xml``."""
    with zipfile.ZipFile(str(path)) as archive:
        xml = archive.read("word/document.xml")

    root = etree.fromstring(xml)
    paragraphs = []
    for paragraph in root.iter(f"{{{_WORD_NS}}}p"):
        runs = paragraph.iter(f"{{{_WORD_NS}}}t")
        paragraphs.append("".join(run.text or "" for run in runs))
    return "\n".join(paragraphs)


def extract_epub_text(path: PathLike) -> str:
    """Extract text from every document item, in spine order."""
    book = epub.read_epub(str(path), options={"ignore_ncx": True})

    sections = []
    for item in book.get_items_of_type(ebooklib.ITEM_DOCUMENT):
        soup = BeautifulSoup(item.get_content(), "html.parser")
        paragraphs = soup.find_all("p")
        if paragraphs:
            text = "\n".join(p.get_text() for p in paragraphs)
        else:
            text = " ".join(soup.get_text().split())
        if text:
            sections.append(text)
    return "\n\n".join(sections)


def extract_txt_text(path: PathLike) -> str:
    return Path(path).read_text(encoding="utf-8")


_EXTRACTORS: dict[FileType, Callable[[PathLike], str]] = {
    FileType.PDF: extract_pdf_text,
    FileType.EPUB: extract_epub_text,
    FileType.DOCX: extract_docx_text,
    FileType.TXT: extract_txt_text,
}


def extract_text(path: PathLike) -> str:
    """Extract plain text from a supported document.

    Args:
        path: Document path

    Returns:
        Document text

    Raises:
        UnsupportedFileTypeError: For legacy ``.doc`` files and unknown formats
        TextExtractionError: If the parser fails on a supported format

    Example:
        >>> text = extract_text("chapter.docx")
    """
    if is_legacy_document(path):
        raise UnsupportedFileTypeError(
            "Legacy .doc files are not supported. Please save the document as .docx and try again."
        )

    file_type = detect_file_type(path)
    extractor = _EXTRACTORS.get(file_type)
    if extractor is None:
        raise UnsupportedFileTypeError(f"Unsupported file type: {Path(path).name}")

    try:
        text = extractor(path)
    except Exception as e:
        logger.error("text_extraction_failed", path=str(path), file_type=file_type.value, error=str(e))
        raise TextExtractionError(f"Failed to read {file_type.value.upper()} file: {e}") from e

    logger.debug("text_extracted", path=str(path), file_type=file_type.value, chars=len(text))
    return text
