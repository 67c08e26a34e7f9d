"""Pillow rasterizer for cover and grid pages."""

from __future__ import annotations

import base64
import logging
from io import BytesIO
from pathlib import Path

import requests
from PIL import Image, ImageColor, ImageDraw, ImageFont, ImageOps

from photocal.constants import MONTH_NAMES, WEEKDAY_LABELS
from photocal.domain import (
    CoverPage,
    DayCell,
    ExportSettings,
    FontStyle,
    GridPage,
    HolidayKind,
    TextPosition,
)
from photocal.grid import GRID_COLUMNS, GRID_ROWS

logger = logging.getLogger(__name__)

# Logical (96 dpi) measurements, multiplied by ExportSettings.render_scale.
COVER_BORDER = 24
COVER_TITLE_MARGIN = 64
COVER_TITLE_SIZE = 96
GRID_PADDING = 48
GRID_TITLE_SIZE = 60
GRID_YEAR_SIZE = 30
GRID_WEEKDAY_SIZE = 16
GRID_DAY_SIZE = 20
GRID_CHIP_SIZE = 11
GRID_LEGEND_SIZE = 14

WHITE = "#ffffff"
PLACEHOLDER_FILL = "#e5e7eb"
PLACEHOLDER_TEXT = "#9ca3af"
CELL_BORDER = "#e5e7eb"
OUTSIDE_FILL = "#f9fafb"
OUTSIDE_TEXT = "#d1d5db"
DAY_TEXT = "#1f2937"
MUTED_TEXT = "#9ca3af"
WEEKDAY_TEXT = "#6b7280"
PUBLIC_CHIP_FILL = "#fee2e2"
PUBLIC_CHIP_TEXT = "#991b1b"
RELIGIOUS_CHIP_TEXT = "#333333"

FONT_FILES = {
    FontStyle.HANDWRITING: ("DejaVuSerif-Italic.ttf", "DejaVuSans-Oblique.ttf"),
    FontStyle.SERIF: ("DejaVuSerif-Bold.ttf", "DejaVuSerif.ttf"),
    FontStyle.DISPLAY: ("DejaVuSans-Bold.ttf", "DejaVuSans.ttf"),
}
BODY_FONT_FILES = ("DejaVuSans.ttf",)


class RenderError(Exception):
    """Raised when a page cannot be rasterized."""


def tint(color: str, alpha: float = 0.2) -> tuple[int, int, int]:
    """Blend ``color`` over white, like a translucent fill on a white page."""
    red, green, blue = ImageColor.getrgb(color)[:3]
    return tuple(round(255 + (channel - 255) * alpha) for channel in (red, green, blue))


class PageRenderer:
    """Draws page models at ``render_scale`` times the logical page size."""

    def __init__(
        self,
        settings: ExportSettings | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.settings = settings or ExportSettings()
        self.session = session or requests.Session()
        self._fonts: dict[tuple[FontStyle | None, int], ImageFont.FreeTypeFont] = {}

    def __call__(self, page: CoverPage | GridPage) -> Image.Image:
        return self.render(page)

    @property
    def size(self) -> tuple[int, int]:
        return self._px(self.settings.page_width_px), self._px(self.settings.page_height_px)

    def _px(self, value: float) -> int:
        return round(value * self.settings.render_scale)

    def render(self, page: CoverPage | GridPage) -> Image.Image:
        logger.debug("Rasterizing %s page at %dx%d", page.kind, *self.size)
        if isinstance(page, CoverPage):
            return self.render_cover(page)
        return self.render_grid(page)

    # --- resources -------------------------------------------------------

    def font(self, style: FontStyle | None, size: int) -> ImageFont.FreeTypeFont:
        key = (style, size)
        if key in self._fonts:
            return self._fonts[key]
        override = self.settings.font_paths.get(style) if style else None
        if override:
            try:
                font = ImageFont.truetype(override, size)
            except OSError as exc:
                raise RenderError(f"Cannot load font {override!r}") from exc
        else:
            font = self._system_font(FONT_FILES.get(style, BODY_FONT_FILES), size)
        self._fonts[key] = font
        return font

    @staticmethod
    def _system_font(candidates: tuple[str, ...], size: int) -> ImageFont.FreeTypeFont:
        for candidate in candidates:
            try:
                return ImageFont.truetype(candidate, size)
            except OSError:
                continue
        return ImageFont.load_default(size=size)

    def load_image(self, reference: str) -> Image.Image:
        """Load an image from a URL, a ``data:`` URL, a file path or raw base64."""
        try:
            if reference.startswith(("http://", "https://")):
                response = self.session.get(reference, timeout=self.settings.request_timeout)
                response.raise_for_status()
                raw = response.content
            elif reference.startswith("data:"):
                raw = base64.b64decode(reference.split(",", 1)[1])
            elif _is_file(reference):
                raw = Path(reference).read_bytes()
            else:
                raw = base64.b64decode(reference, validate=True)
            image = Image.open(BytesIO(raw))
            image.load()
        except (requests.RequestException, OSError, ValueError, IndexError) as exc:
            raise RenderError(f"Cannot load image {reference[:80]!r}") from exc
        return ImageOps.exif_transpose(image).convert("RGB")

    # --- cover page ------------------------------------------------------

    def render_cover(self, page: CoverPage) -> Image.Image:
        content = page.content
        surface = Image.new("RGB", self.size, page.accent_color)
        border = self._px(COVER_BORDER)
        inner = (surface.width - 2 * border, surface.height - 2 * border)

        if content.image:
            photo = ImageOps.fit(self.load_image(content.image), inner, Image.Resampling.LANCZOS)
        else:
            photo = Image.new("RGB", inner, PLACEHOLDER_FILL)
            ImageDraw.Draw(photo).text(
                (inner[0] / 2, inner[1] / 2),
                "No Image",
                font=self.font(None, self._px(36)),
                fill=PLACEHOLDER_TEXT,
                anchor="mm",
            )
        self._draw_title(photo, page)
        surface.paste(photo, (border, border))
        return surface

    def _draw_title(self, photo: Image.Image, page: CoverPage) -> None:
        content = page.content
        draw = ImageDraw.Draw(photo)
        font = self.font(content.font_style, self._px(COVER_TITLE_SIZE))
        title = MONTH_NAMES[content.month_index]
        stroke = max(1, self._px(2))
        left, top, right, bottom = draw.textbbox((0, 0), title, font=font, anchor="la")
        text_w, text_h = right - left, bottom - top

        if content.text_coords is not None:
            x = photo.width * content.text_coords.x / 100
            y = photo.height * content.text_coords.y / 100
            x = min(max(x, 0), max(photo.width - text_w, 0))
            y = min(max(y, 0), max(photo.height - text_h, 0))
            position, anchor = (x, y), "la"
        else:
            margin = self._px(COVER_TITLE_MARGIN)
            preset = content.text_position
            right_side = preset in (TextPosition.TOP_RIGHT, TextPosition.BOTTOM_RIGHT)
            bottom_side = preset in (TextPosition.BOTTOM_LEFT, TextPosition.BOTTOM_RIGHT)
            x = photo.width - margin if right_side else margin
            y = photo.height - margin if bottom_side else margin
            anchor = ("r" if right_side else "l") + ("d" if bottom_side else "a")
            position = (x, y)

        draw.text(
            position,
            title,
            font=font,
            fill=page.accent_color,
            anchor=anchor,
            stroke_width=stroke,
            stroke_fill=WHITE,
        )

    # --- grid page -------------------------------------------------------

    def render_grid(self, page: GridPage) -> Image.Image:
        surface = Image.new("RGB", self.size, WHITE)
        draw = ImageDraw.Draw(surface)
        pad = self._px(GRID_PADDING)
        width = surface.width - 2 * pad

        title_font = self.font(page.font_style, self._px(GRID_TITLE_SIZE))
        year_font = self.font(None, self._px(GRID_YEAR_SIZE))
        header_bottom = pad + self._px(GRID_TITLE_SIZE + 12)
        draw.text(
            (pad, header_bottom),
            MONTH_NAMES[page.month_index],
            font=title_font,
            fill=page.accent_color,
            anchor="ld",
        )
        draw.text(
            (pad + width, header_bottom), str(page.year), font=year_font, fill=MUTED_TEXT, anchor="rd"
        )
        rule_top = header_bottom + self._px(16)
        draw.rectangle(
            (pad, rule_top, pad + width, rule_top + self._px(4) - 1), fill=page.accent_color
        )

        column_w = width / GRID_COLUMNS
        weekday_font = self.font(None, self._px(GRID_WEEKDAY_SIZE))
        weekday_y = rule_top + self._px(36)
        for column, label in enumerate(WEEKDAY_LABELS):
            draw.text(
                (pad + column_w * (column + 0.5), weekday_y),
                label.upper(),
                font=weekday_font,
                fill=WEEKDAY_TEXT,
                anchor="mm",
            )

        legend_y = surface.height - pad
        grid_top = weekday_y + self._px(24)
        grid_bottom = legend_y - self._px(36)
        row_h = (grid_bottom - grid_top) / GRID_ROWS
        for index, cell in enumerate(page.grid):
            row, column = divmod(index, GRID_COLUMNS)
            box = (
                round(pad + column * column_w),
                round(grid_top + row * row_h),
                round(pad + (column + 1) * column_w),
                round(grid_top + (row + 1) * row_h),
            )
            self._draw_cell(draw, box, cell, page.accent_color)

        self._draw_legend(draw, (pad, legend_y), page.accent_color)
        return surface

    def _draw_cell(
        self, draw: ImageDraw.ImageDraw, box: tuple[int, int, int, int], cell: DayCell, accent: str
    ) -> None:
        left, top, right, bottom = box
        fill = WHITE if cell.is_current_month else OUTSIDE_FILL
        draw.rectangle(box, fill=fill, outline=CELL_BORDER, width=max(1, self._px(1)))
        inset = self._px(8)
        draw.text(
            (left + inset, top + inset),
            str(cell.date.day),
            font=self.font(None, self._px(GRID_DAY_SIZE)),
            fill=DAY_TEXT if cell.is_current_month else OUTSIDE_TEXT,
            anchor="la",
        )

        chip_font = self.font(None, self._px(GRID_CHIP_SIZE))
        chip_h = self._px(GRID_CHIP_SIZE + 6)
        chip_w = right - left - 2 * inset
        y = top + inset + self._px(GRID_DAY_SIZE + 6)
        for holiday in cell.holidays:
            if y + chip_h > bottom - inset:
                break
            if holiday.kind == HolidayKind.PUBLIC:
                chip_fill, text_fill = PUBLIC_CHIP_FILL, PUBLIC_CHIP_TEXT
            else:
                chip_fill, text_fill = tint(accent), RELIGIOUS_CHIP_TEXT
            draw.rounded_rectangle(
                (left + inset, y, left + inset + chip_w, y + chip_h),
                radius=self._px(3),
                fill=chip_fill,
            )
            draw.text(
                (left + inset + self._px(4), y + chip_h / 2),
                _fit_text(holiday.name, chip_font, chip_w - self._px(8)),
                font=chip_font,
                fill=text_fill,
                anchor="lm",
            )
            y += chip_h + self._px(3)

    def _draw_legend(self, draw: ImageDraw.ImageDraw, origin: tuple[int, int], accent: str) -> None:
        font = self.font(None, self._px(GRID_LEGEND_SIZE))
        dot = self._px(8)
        x, y = origin
        for label, color in (("Public Holiday", "#fecaca"), ("Christian Holiday", tint(accent))):
            draw.ellipse((x, y - dot, x + dot, y), fill=color)
            x += dot + self._px(6)
            draw.text((x, y), label, font=font, fill=MUTED_TEXT, anchor="ld")
            x += round(draw.textlength(label, font=font)) + self._px(24)


def _is_file(reference: str) -> bool:
    try:
        return Path(reference).is_file()
    except (OSError, ValueError):
        return False


def _fit_text(text: str, font: ImageFont.FreeTypeFont, max_width: float) -> str:
    if font.getlength(text) <= max_width:
        return text
    while text and font.getlength(text + "…") > max_width:
        text = text[:-1]
    return text + "…"
