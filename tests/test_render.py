import base64
import io
import tempfile
import unittest
from pathlib import Path
from unittest import mock

import requests
from PIL import Image

from photocal.domain import CoverPage, ExportSettings, GridPage, MonthContent, TextCoords
from photocal.grid import build_month_grid
from photocal.render import PageRenderer, RenderError, tint


def _png_bytes(size=(40, 30), color="#336699") -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


def _cover(**overrides) -> CoverPage:
    content = MonthContent(month_index=2, accent_color="#15803d", **overrides)
    return CoverPage(content=content, accent_color=content.accent_color)


class PageRendererTests(unittest.TestCase):
    def setUp(self) -> None:
        self.renderer = PageRenderer(ExportSettings(render_scale=0.5))

    def test_size_follows_render_scale(self) -> None:
        self.assertEqual(self.renderer.size, (round(1123 * 0.5), 397))
        self.assertEqual(PageRenderer().size, (2246, 1588))

    def test_cover_without_image_uses_placeholder(self) -> None:
        surface = self.renderer(_cover())
        self.assertEqual(surface.size, self.renderer.size)
        self.assertEqual(surface.mode, "RGB")
        # Border is drawn in the accent colour.
        self.assertEqual(surface.getpixel((2, 2)), (0x15, 0x80, 0x3D))
        # Centre-left of the photo area is the grey placeholder.
        self.assertEqual(surface.getpixel((30, surface.height // 2)), (0xE5, 0xE7, 0xEB))

    def test_cover_with_file_image(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "photo.png"
            path.write_bytes(_png_bytes(color="#ff0000"))
            surface = self.renderer(_cover(image=str(path), text_coords=TextCoords(x=5, y=5)))
        self.assertEqual(surface.size, self.renderer.size)
        self.assertEqual(surface.getpixel((surface.width - 40, surface.height // 2)), (255, 0, 0))

    def test_cover_with_data_url_and_raw_base64(self) -> None:
        encoded = base64.b64encode(_png_bytes()).decode("ascii")
        for reference in (f"data:image/png;base64,{encoded}", encoded):
            with self.subTest(reference=reference[:20]):
                surface = self.renderer(_cover(image=reference))
                self.assertEqual(surface.size, self.renderer.size)

    def test_remote_image_is_fetched(self) -> None:
        response = mock.Mock(content=_png_bytes())
        session = mock.Mock()
        session.get.return_value = response
        renderer = PageRenderer(ExportSettings(render_scale=0.5), session=session)
        renderer(_cover(image="https://example.com/march.jpg"))
        session.get.assert_called_once_with("https://example.com/march.jpg", timeout=10.0)
        response.raise_for_status.assert_called_once_with()

    def test_blocked_remote_image_raises(self) -> None:
        session = mock.Mock()
        session.get.side_effect = requests.ConnectionError("blocked")
        renderer = PageRenderer(ExportSettings(render_scale=0.5), session=session)
        with self.assertRaises(RenderError):
            renderer(_cover(image="https://example.com/march.jpg"))

    def test_unreadable_image_raises(self) -> None:
        with self.assertRaises(RenderError):
            self.renderer(_cover(image="/no/such/photo.jpg"))
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "broken.jpg"
            path.write_bytes(b"not an image")
            with self.assertRaises(RenderError):
                self.renderer(_cover(image=str(path)))

    def test_missing_font_override_raises(self) -> None:
        renderer = PageRenderer(
            ExportSettings(render_scale=0.5, font_paths={"serif": "/no/such/font.ttf"})
        )
        with self.assertRaises(RenderError):
            renderer(_cover(font_style="serif"))

    def test_grid_page(self) -> None:
        page = GridPage(
            month_index=11,
            year=2024,
            grid=build_month_grid(2024, 11),
            accent_color="#1d4ed8",
        )
        surface = self.renderer(page)
        self.assertEqual(surface.size, self.renderer.size)
        self.assertEqual(surface.getpixel((1, 1)), (255, 255, 255))


class TintTests(unittest.TestCase):
    def test_tint(self) -> None:
        self.assertEqual(tint("#ffffff"), (255, 255, 255))
        self.assertEqual(tint("#000000", 0.2), (204, 204, 204))
        self.assertEqual(tint("#000000", 1.0), (0, 0, 0))


if __name__ == "__main__":
    unittest.main()
