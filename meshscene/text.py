"""Billboard text built from a glyph atlas, and the id label drawn over objects."""

from __future__ import annotations

from dataclasses import dataclass

from meshscene.components import PrimitiveComponent
from meshscene.console import Console, LogLevel
from meshscene.core import ObjectRegistry, Vector

QUAD_SIZE = 2
QUAD_WIDTH = 2.0
QUAD_HEIGHT = 2.0


@dataclass
class VertexTexture:
    """A textured vertex: position and texture coordinate."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    u: float = 0.0
    v: float = 0.0


def _c_divmod(numerator: int, divisor: int) -> tuple[int, int]:
    """Integer division and remainder truncating toward zero."""
    quotient = abs(numerator) // abs(divisor)
    if (numerator < 0) != (divisor < 0):
        quotient = -quotient
    return quotient, numerator - quotient * divisor


class TextComponent(PrimitiveComponent):
    """Text laid out as one textured quad per character from a glyph atlas."""

    def __init__(
        self,
        object_registry: ObjectRegistry | None = None,
        *,
        texture_size: tuple[int, int] | None = None,
        console: Console | None = None,
    ) -> None:
        super().__init__(object_registry)
        self.type_name = type(self).__name__
        self.texture_size = texture_size
        self.console = console
        self.text = ""
        self.vertices: list[VertexTexture] = []
        self.quad: list[Vector] = []
        self.row_count: int | None = None
        self.column_count: int | None = None

    @property
    def num_text_vertices(self) -> int:
        return len(self.vertices)

    def _warn(self, message: str) -> None:
        if self.console is not None:
            self.console.add_log(LogLevel.WARNING, message)

    def _grid(self) -> tuple[int, int]:
        if not self.row_count or not self.column_count:
            raise ValueError("glyph grid is not set; call set_row_column_count() first")
        return self.row_count, self.column_count

    def clear_text(self) -> None:
        self.vertices.clear()

    def set_row_column_count(self, rows: int, columns: int) -> None:
        self.row_count = rows
        self.column_count = columns

    def start_uv(self, char: str) -> tuple[float, float]:
        """Return the atlas cell (column, row) holding the glyph for a character."""
        if char == " ":
            return 0.0, 0.0
        _, columns = self._grid()

        start_u = 0
        offset = -1
        if "A" <= char <= "Z":
            start_u, offset = 11, ord(char) - ord("A")
        elif "a" <= char <= "z":
            start_u, offset = 37, ord(char) - ord("a")
        elif "0" <= char <= "9":
            start_u, offset = 1, ord(char) - ord("0")
        elif "\uac00" <= char <= "\ud7a3":
            start_u, offset = 63, ord(char) - 0xAC00

        if offset == -1:
            self._warn("Text Error")

        offset_v, offset_u = _c_divmod(offset + start_u, columns)
        return float(offset_u), float(offset_v)

    def set_text(self, text: str) -> None:
        """Lay out quads for the text; empty text clears the vertices and outline."""
        self.text = text
        if not text:
            self._warn("Text is empty")
            self.vertices.clear()
            self.quad.clear()
            return

        if self.texture_size is None:
            raise RuntimeError("no glyph texture is set")
        rows, columns = self._grid()
        bitmap_width, bitmap_height = self.texture_size
        cell_width = float(bitmap_width) / columns
        cell_height = float(bitmap_height) / rows
        u_step = cell_width / bitmap_width
        v_step = cell_height / bitmap_height

        for position, char in enumerate(text):
            shift = QUAD_WIDTH * position
            start_u, start_v = self.start_uv(char)
            du = u_step * start_u
            dv = v_step * start_v
            left_up = VertexTexture(-1.0 + shift, 1.0, 0.0, du, dv)
            right_up = VertexTexture(1.0 + shift, 1.0, 0.0, u_step + du, dv)
            left_down = VertexTexture(-1.0 + shift, -1.0, 0.0, du, v_step + dv)
            right_down = VertexTexture(1.0 + shift, -1.0, 0.0, u_step + du, v_step + dv)
            self.vertices.extend(
                (left_up, right_up, left_down, right_up, right_down, left_down)
            )

        last_x = -1.0 + QUAD_SIZE * len(text)
        self.quad.extend(
            (
                Vector(-1.0, 1.0, 0.0),
                Vector(-1.0, -1.0, 0.0),
                Vector(last_x, 1.0, 0.0),
                Vector(last_x, -1.0, 0.0),
            )
        )


class TextUUID(TextComponent):
    """A small label showing an object's id; it is never picked."""

    def __init__(
        self,
        object_registry: ObjectRegistry | None = None,
        *,
        texture_size: tuple[int, int] | None = None,
        console: Console | None = None,
    ) -> None:
        super().__init__(object_registry, texture_size=texture_size, console=console)
        self.relative_scale = Vector(0.1, 0.25, 0.25)
        self.relative_location = Vector(0.0, 0.0, -0.5)

    def check_ray_intersection(
        self, ray_origin: Vector, ray_direction: Vector
    ) -> tuple[int, float | None]:
        return 0, None

    def set_uuid(self, uuid: int) -> None:
        self.set_text(str(uuid))