from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from PIL import Image

from .protocol.commands import initialize_cmd
from .protocol.job import DEFAULT_FEED_LINES, append_trailer
from .protocol.types import DEFAULT_THRESHOLD, DEFAULT_WIDTH, RasterOptions, TrimSettings
from .rendering.pixels import PixelBuffer, load_pixels
from .rendering.renderer import RasterResult, rasterize


@dataclass
class PrintSettings:
    width: int = DEFAULT_WIDTH
    threshold: int = DEFAULT_THRESHOLD
    auto_trim: bool = False
    trim: TrimSettings = field(default_factory=TrimSettings)
    feed_lines: Optional[int] = DEFAULT_FEED_LINES
    cut: bool = False
    initialize: bool = False

    def raster_options(self) -> RasterOptions:
        return RasterOptions(
            target_width=self.width,
            threshold=self.threshold,
            auto_trim=self.auto_trim,
            trim=self.trim,
        )


class PrintJobBuilder:
    def __init__(self, settings: Optional[PrintSettings] = None) -> None:
        self.settings = settings or PrintSettings()

    def rasterize_file(self, path: str) -> RasterResult:
        return rasterize(load_pixels(path), self.settings.raster_options())

    def rasterize_image(self, img: Image.Image) -> RasterResult:
        return rasterize(PixelBuffer.from_image(img), self.settings.raster_options())

    def build_from_file(self, path: str) -> bytes:
        return self.build_from_result(self.rasterize_file(path))

    def build_from_image(self, img: Image.Image) -> bytes:
        return self.build_from_result(self.rasterize_image(img))

    def build_from_result(self, result: RasterResult) -> bytes:
        """Wrap a raster record into a complete job."""
        job = bytearray()
        if self.settings.initialize:
            job += initialize_cmd()
        job += result.commands
        return append_trailer(bytes(job), self.settings.feed_lines, self.settings.cut)

    def preview_from_file(self, path: str) -> Image.Image:
        return self.rasterize_file(path).bitmap.to_image()
