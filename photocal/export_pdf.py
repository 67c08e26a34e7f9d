"""PDF export pipeline."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path

from PIL import Image
from reportlab.lib.pagesizes import A3, A4, LETTER, landscape
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from photocal.domain import CalendarDocument, CoverPage, ExportSettings, GridPage

logger = logging.getLogger(__name__)

PAGE_SIZES = {"A4": A4, "A3": A3, "LETTER": LETTER}

RenderPage = Callable[[CoverPage | GridPage], Image.Image]
ProgressCallback = Callable[[int, int], None]


@dataclass(frozen=True)
class ExportResult:
    data: bytes
    page_count: int


class ExportError(Exception):
    def __init__(self, message: str, page_index: int | None = None) -> None:
        super().__init__(message)
        self.page_index = page_index


def export_filename(year: int) -> str:
    return f"calendar-{year}.pdf"


def encode_surface(surface: Image.Image, quality: float) -> bytes:
    """Encode a rendered page as JPEG; ``quality`` is on a 0-1 scale."""
    if surface.mode != "RGB":
        surface = surface.convert("RGB")
    buffer = BytesIO()
    surface.save(buffer, format="JPEG", quality=round(quality * 100))
    return buffer.getvalue()


def scaled_size(page_width: float, image_width: int, image_height: int) -> tuple[float, float]:
    """Fill the page width and keep the image's aspect ratio."""
    if image_width <= 0 or image_height <= 0:
        raise ValueError(f"Empty page surface ({image_width}x{image_height})")
    return page_width, page_width * image_height / image_width


def export_document(
    document: CalendarDocument,
    render_page: RenderPage,
    on_progress: ProgressCallback | None = None,
    settings: ExportSettings | None = None,
) -> ExportResult:
    """Render every page in order and assemble them into one PDF.

    Pages are processed one at a time; a failure on any page aborts the
    whole export with ``ExportError`` and the partial document is dropped.
    ``on_progress(done, total)`` is called after each finished page.
    """
    if settings is None:
        settings = ExportSettings()

    total = len(document.pages)
    if total == 0:
        logger.warning("Calendar %d has no pages to export", document.year)
        return ExportResult(data=b"", page_count=0)

    page_size = landscape(PAGE_SIZES[settings.page_format])
    page_width, page_height = page_size
    buffer = BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=page_size)
    pdf.setTitle(f"Calendar {document.year}")

    for index, page in enumerate(document.pages):
        try:
            surface = render_page(page)
            blob = encode_surface(surface, settings.jpeg_quality)
            width, height = scaled_size(page_width, *surface.size)
            pdf.drawImage(
                ImageReader(BytesIO(blob)), 0, page_height - height, width=width, height=height
            )
        except Exception as exc:
            logger.error("Page %d/%d (%s) failed: %s", index + 1, total, page.kind, exc)
            raise ExportError(
                f"Failed to render page {index + 1} of {total}", page_index=index
            ) from exc

        if index < total - 1:
            pdf.showPage()
        logger.debug("Page %d/%d done", index + 1, total)
        if on_progress is not None:
            on_progress(index + 1, total)

    pdf.save()
    logger.info("Exported calendar %d: %d pages", document.year, total)
    return ExportResult(data=buffer.getvalue(), page_count=total)


def write_export(result: ExportResult, directory: str | Path, year: int) -> Path:
    output_dir = Path(directory)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / export_filename(year)
    path.write_bytes(result.data)
    return path
