"""Cover and thumbnail derivation.

Renderers are blocking and return ``data:image/jpeg;base64,...`` references.
Every failure is raised as ``CoverRenderError``; callers substitute the
static placeholder for the media kind.
"""

import base64
import io
import re
from typing import Optional

import cv2
import fitz  # PyMuPDF
from PIL import Image, ImageDraw, ImageFont
from shelf_common import CoverRenderError, get_logger
from shelf_contracts import MediaKind

from shelf_ingest.filetypes import PathLike

logger = get_logger(__name__)

JPEG_QUALITY = 90

_BOOK_PLACEHOLDER = "https://placehold.co/400x600/334155/ffffff?text=Book"

PLACEHOLDER_IMAGES: dict[MediaKind, str] = {
    MediaKind.BOOK: _BOOK_PLACEHOLDER,
    MediaKind.RESEARCH: _BOOK_PLACEHOLDER,
    MediaKind.PERIODICAL: _BOOK_PLACEHOLDER,
    MediaKind.VIDEO: "https://placehold.co/400x600/334155/ffffff?text=Video",
    MediaKind.AUDIO: "https://placehold.co/400x150/166534/ffffff?text=Audio",
}

# Text cover layout
COVER_SIZE = (400, 600)
COVER_BACKGROUND = "#1e293b"
TITLE_COLOR = "#f1f5f9"
SNIPPET_COLOR = "#cbd5e1"

_YOUTUBE_PATTERN = re.compile(r"^.*(youtu.be/|v/|u/\w/|embed/|watch\?v=|&v=)([^#&?]*).*")
_YOUTUBE_ID_LENGTH = 11


def to_data_url(jpeg: bytes) -> str:
    return "data:image/jpeg;base64," + base64.b64encode(jpeg).decode("ascii")


# -----------------------------------------------------------------------------
# YouTube
# -----------------------------------------------------------------------------


def youtube_video_id(url: str) -> Optional[str]:
    """Extract the 11-character video id from a YouTube URL.

    Example:
        >>> youtube_video_id("https://www.youtube.com/watch?v=dQw4w9WgXcQ")
        'dQw4w9WgXcQ'
    """
    match = _YOUTUBE_PATTERN.match(url or "")
    if match and len(match.group(2)) == _YOUTUBE_ID_LENGTH:
        return match.group(2)
    return None


def youtube_thumbnail_url(url: str) -> Optional[str]:
    video_id = youtube_video_id(url)
    if video_id is None:
        return None
    return f"https://img.youtube.com/vi/{video_id}/hqdefault.jpg"


# -----------------------------------------------------------------------------
# Renderers
# -----------------------------------------------------------------------------


def render_pdf_first_page(path: PathLike, scale: float = 1.5) -> str:
    """Render the first page of a PDF to a JPEG data URL.

    Args:
        path: PDF file path
        scale: Zoom factor applied to the page (1.0 = 72 dpi)

    Raises:
        CoverRenderError: If the document cannot be opened or has no pages
    """
    try:
        with fitz.open(str(path)) as doc:
            if doc.page_count == 0:
                raise ValueError("document has no pages")
            pixmap = doc[0].get_pixmap(matrix=fitz.Matrix(scale, scale))
            jpeg = pixmap.tobytes("jpeg", jpg_quality=JPEG_QUALITY)
    except Exception as e:
        logger.warning("pdf_cover_failed", path=str(path), error=str(e))
        raise CoverRenderError(f"Failed to render first PDF page: {e}") from e

    return to_data_url(jpeg)


def render_video_thumbnail(path: PathLike, at_seconds: float = 1.0) -> str:
    """Grab a frame ``at_seconds`` into a video file as a JPEG data URL.

    Raises:
        CoverRenderError: If the video cannot be opened or decoded
    """
    cap = cv2.VideoCapture(str(path))
    try:
        if not cap.isOpened():
            raise CoverRenderError(f"Cannot open video: {path}")

        cap.set(cv2.CAP_PROP_POS_MSEC, max(at_seconds, 0.0) * 1000.0)
        ok, frame = cap.read()
        if not ok:
            raise CoverRenderError(f"No frame at {at_seconds}s in {path}")

        ok, buffer = cv2.imencode(".jpg", frame, [cv2.IMWRITE_JPEG_QUALITY, JPEG_QUALITY])
        if not ok:
            raise CoverRenderError("Failed to encode video frame")
    finally:
        cap.release()

    return to_data_url(buffer.tobytes())


def create_cover_from_text(text: str, title: str, snippet_chars: int = 300) -> str:
    """Draw a plain book cover: the title over the opening of the text.

    Args:
        text: Document text; only the first ``snippet_chars`` are used
        title: Book title
        snippet_chars: Length of the snippet shown under the title

    Raises:
        CoverRenderError: If drawing or encoding fails
    """
    width, height = COVER_SIZE
    try:
        image = Image.new("RGB", COVER_SIZE, COVER_BACKGROUND)
        draw = ImageDraw.Draw(image)

        _draw_wrapped(draw, title, _font(36, bold=True), TITLE_COLOR, 80, width - 60, 42)
        snippet = text[:snippet_chars] + "..."
        _draw_wrapped(draw, snippet, _font(18), SNIPPET_COLOR, 200, width - 80, 24)

        out = io.BytesIO()
        image.save(out, format="JPEG", quality=JPEG_QUALITY)
    except Exception as e:
        logger.warning("text_cover_failed", title=title, error=str(e))
        raise CoverRenderError(f"Failed to draw text cover: {e}") from e

    return to_data_url(out.getvalue())


def _font(size: int, bold: bool = False) -> ImageFont.FreeTypeFont:
    name = "DejaVuSans-Bold.ttf" if bold else "DejaVuSans.ttf"
    try:
        return ImageFont.truetype(name, size)
    except OSError:
        # Font not installed; Pillow's bundled default is scalable
        return ImageFont.load_default(size=size)


def wrap_words(text: str, fits) -> list[str]:
    """Greedy word wrap; ``fits(line)`` says whether a line fits the width.

    A single word wider than the line is kept on its own line.
    """
    lines: list[str] = []
    line = ""
    for word in text.split(" "):
        candidate = f"{line}{word} "
        if line and not fits(candidate):
            lines.append(line.rstrip())
            line = f"{word} "
        else:
            line = candidate
    lines.append(line.rstrip())
    return lines


def _draw_wrapped(draw, text, font, fill, top, max_width, line_height) -> None:
    x = COVER_SIZE[0] / 2
    lines = wrap_words(text, lambda line: draw.textlength(line, font=font) <= max_width)
    for index, line in enumerate(lines):
        # "ms": horizontally centred on x, y is the baseline
        draw.text((x, top + index * line_height), line, font=font, fill=fill, anchor="ms")
