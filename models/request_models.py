"""
API Request Models

Pydantic models for API request validation.
"""
from pydantic import BaseModel, Field

from splitflap import CanvasSize, DisplayContent, HorizontalAlignment, VerticalAlignment


class BoardContentRequest(BaseModel):
    text: str = ""
    horizontal_alignment: HorizontalAlignment = HorizontalAlignment.LEFT
    vertical_alignment: VerticalAlignment = VerticalAlignment.TOP
    scale: float = Field(default=1.0, ge=0.1)  # multiplies the base flap size

    def to_content(self) -> DisplayContent:
        return DisplayContent(
            text=self.text,
            horizontal_alignment=self.horizontal_alignment,
            vertical_alignment=self.vertical_alignment,
            scale=self.scale,
        )


class CanvasSizeRequest(BaseModel):
    width: float = Field(ge=0)  # pixels
    height: float = Field(ge=0)

    def to_canvas_size(self) -> CanvasSize:
        return CanvasSize(width=self.width, height=self.height)
