"""Domain models for calendar pages and exports."""

from __future__ import annotations

import math
import re
from datetime import date
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, field_validator, model_validator

_HEX_COLOR = re.compile(r"^#?([0-9a-f]{3}|[0-9a-f]{6})$")


class HolidayKind(str, Enum):
    PUBLIC = "public"
    RELIGIOUS = "religious"


class FontStyle(str, Enum):
    HANDWRITING = "handwriting"
    SERIF = "serif"
    DISPLAY = "display"


class TextPosition(str, Enum):
    TOP_LEFT = "top_left"
    TOP_RIGHT = "top_right"
    BOTTOM_LEFT = "bottom_left"
    BOTTOM_RIGHT = "bottom_right"


def _normalize_token(value: Any) -> str:
    return re.sub(r"[\s\-]+", "_", str(value).strip().casefold())


def normalize_color(value: Any) -> str:
    if value is None:
        raise ValueError("Colour is required")
    text = str(value).strip().casefold()
    match = _HEX_COLOR.match(text)
    if not match:
        raise ValueError(f"Invalid colour (expected #rrggbb): {value!r}")
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(char * 2 for char in digits)
    return f"#{digits}"


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


class Holiday(BaseModel):
    date: date
    name: str
    kind: HolidayKind

    model_config = {"frozen": True}


class DayCell(BaseModel):
    date: date
    is_current_month: bool
    holidays: list[Holiday] = Field(default_factory=list)

    model_config = {"frozen": True}


class TextCoords(BaseModel):
    """Title anchor in percent of the photo area."""

    x: float = Field(ge=0, le=100)
    y: float = Field(ge=0, le=100)

    model_config = {"frozen": True}


class MonthContent(BaseModel):
    month_index: int = Field(ge=0, le=11)
    image: str | None = None
    accent_color: str = "#1e40af"
    text_position: TextPosition = TextPosition.BOTTOM_RIGHT
    text_coords: TextCoords | None = None
    font_style: FontStyle = FontStyle.SERIF

    model_config = {
        "frozen": True,
        "extra": "ignore",
    }

    @model_validator(mode="before")
    @classmethod
    def _collect_coords(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        values = {key: value for key, value in values.items() if not _is_missing(value)}
        x = values.pop("x", None)
        y = values.pop("y", None)
        if x is not None or y is not None:
            if x is None or y is None:
                raise ValueError("Both x and y are required for custom text placement")
            values.setdefault("text_coords", {"x": x, "y": y})
        return values

    @field_validator("image", mode="before")
    @classmethod
    def _blank_image(cls, value: Any) -> str | None:
        if _is_missing(value):
            return None
        text = str(value).strip()
        return text or None

    @field_validator("accent_color", mode="before")
    @classmethod
    def _validate_color(cls, value: Any) -> str:
        return normalize_color(value)

    @field_validator("text_position", mode="before")
    @classmethod
    def _parse_position(cls, value: Any) -> TextPosition:
        if isinstance(value, TextPosition):
            return value
        text = _normalize_token(value)
        for position in TextPosition:
            if text == position.value:
                return position
        raise ValueError(f"Invalid text position: {value!r}")

    @field_validator("font_style", mode="before")
    @classmethod
    def _parse_font(cls, value: Any) -> FontStyle:
        if isinstance(value, FontStyle):
            return value
        text = _normalize_token(value)
        for style in FontStyle:
            if text == style.value:
                return style
        raise ValueError(f"Invalid font style: {value!r}")


class CoverPage(BaseModel):
    kind: Literal["cover"] = "cover"
    content: MonthContent
    accent_color: str

    model_config = {"frozen": True}


class GridPage(BaseModel):
    kind: Literal["grid"] = "grid"
    month_index: int = Field(ge=0, le=11)
    year: int
    grid: list[DayCell]
    accent_color: str
    font_style: FontStyle = FontStyle.SERIF

    model_config = {"frozen": True}

    @field_validator("grid")
    @classmethod
    def _validate_grid(cls, value: list[DayCell]) -> list[DayCell]:
        if len(value) != 42:
            raise ValueError(f"Month grid must have 42 cells, got {len(value)}")
        return value


PageModel = Annotated[Union[CoverPage, GridPage], Field(discriminator="kind")]


class CalendarDocument(BaseModel):
    year: int
    pages: list[PageModel]


class ExportSettings(BaseModel):
    page_format: Literal["A4", "A3", "LETTER"] = "A4"
    jpeg_quality: float = Field(default=0.9, gt=0, le=1)
    render_scale: float = Field(default=2.0, gt=0)
    page_width_px: int = 1123
    page_height_px: int = 794
    font_paths: dict[FontStyle, str] = Field(default_factory=dict)
    request_timeout: float = 10.0
