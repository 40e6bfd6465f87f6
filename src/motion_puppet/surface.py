"""
Drawing surface interface and an in-memory recorder.

Part renderers only talk to a Surface, so the same drawing code targets a
QPainter (see qt_surface) or a RecordingSurface that keeps the ops as data.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

Point = Tuple[float, float]


@dataclass(frozen=True)
class Glow:
    """그림자(글로우) 색상과 블러 반경"""
    color: str
    blur: float


@dataclass(frozen=True)
class LinearGradient:
    """선형 그라디언트. stops는 (offset, color) 목록이며 같은 offset이 반복될 수 있음"""
    x0: float
    y0: float
    x1: float
    y1: float
    stops: Tuple[Tuple[float, str], ...]


Fill = Union[str, LinearGradient]


class Surface:
    """2D 래스터 그리기 연산 집합"""

    def clear(self, color: str) -> None:
        raise NotImplementedError

    def draw_text(self, text: str, x: float, y: float, size: float,
                  color: str, family: str) -> None:
        raise NotImplementedError

    def stroke_line(self, start: Point, end: Point, color: str, width: float,
                    glow: Optional[Glow] = None) -> None:
        raise NotImplementedError

    def fill_circle(self, center: Point, radius: float, color: str,
                    glow: Optional[Glow] = None) -> None:
        raise NotImplementedError

    def stroke_circle(self, center: Point, radius: float, color: str, width: float) -> None:
        raise NotImplementedError

    def fill_ellipse(self, center: Point, rx: float, ry: float, color: str) -> None:
        raise NotImplementedError

    def stroke_arc(self, center: Point, radius: float, start_angle: float,
                   end_angle: float, color: str, width: float) -> None:
        """각도는 라디안, 3시 방향에서 화면 기준 시계 방향"""
        raise NotImplementedError

    def fill_polygon(self, points: Sequence[Point], fill: Fill,
                     glow: Optional[Glow] = None) -> None:
        raise NotImplementedError

    def stroke_polygon(self, points: Sequence[Point], color: str, width: float,
                       glow: Optional[Glow] = None) -> None:
        raise NotImplementedError

    def fill_rounded_rect(self, x: float, y: float, w: float, h: float, radius: float,
                          color: str, glow: Optional[Glow] = None) -> None:
        raise NotImplementedError

    def stroke_rounded_rect(self, x: float, y: float, w: float, h: float, radius: float,
                            color: str, width: float) -> None:
        raise NotImplementedError

    def fill_rect(self, x: float, y: float, w: float, h: float, color: str) -> None:
        raise NotImplementedError


@dataclass(frozen=True)
class DrawOp:
    """기록된 그리기 연산 하나"""
    kind: str
    params: Dict[str, Any]

    @property
    def glow(self) -> Optional[Glow]:
        return self.params.get("glow")


class RecordingSurface(Surface):
    """그리기 연산을 순서대로 기록하는 Surface (테스트, 헤드리스 진단용)"""

    def __init__(self):
        self.ops: List[DrawOp] = []

    def _record(self, kind: str, **params) -> None:
        self.ops.append(DrawOp(kind, params))

    def kinds(self) -> List[str]:
        return [op.kind for op in self.ops]

    def of_kind(self, kind: str) -> List[DrawOp]:
        return [op for op in self.ops if op.kind == kind]

    def glow_ops(self) -> List[DrawOp]:
        return [op for op in self.ops if op.glow is not None]

    def reset(self) -> None:
        self.ops = []

    def clear(self, color):
        self._record("clear", color=color)

    def draw_text(self, text, x, y, size, color, family):
        self._record("text", text=text, x=x, y=y, size=size, color=color, family=family)

    def stroke_line(self, start, end, color, width, glow=None):
        self._record("line", start=tuple(start), end=tuple(end), color=color,
                     width=width, glow=glow)

    def fill_circle(self, center, radius, color, glow=None):
        self._record("circle", center=tuple(center), radius=radius, color=color, glow=glow)

    def stroke_circle(self, center, radius, color, width):
        self._record("circle_outline", center=tuple(center), radius=radius,
                     color=color, width=width)

    def fill_ellipse(self, center, rx, ry, color):
        self._record("ellipse", center=tuple(center), rx=rx, ry=ry, color=color)

    def stroke_arc(self, center, radius, start_angle, end_angle, color, width):
        self._record("arc", center=tuple(center), radius=radius, start_angle=start_angle,
                     end_angle=end_angle, color=color, width=width)

    def fill_polygon(self, points, fill, glow=None):
        self._record("polygon", points=tuple(tuple(p) for p in points), fill=fill, glow=glow)

    def stroke_polygon(self, points, color, width, glow=None):
        self._record("polygon_outline", points=tuple(tuple(p) for p in points),
                     color=color, width=width, glow=glow)

    def fill_rounded_rect(self, x, y, w, h, radius, color, glow=None):
        self._record("rounded_rect", x=x, y=y, w=w, h=h, radius=radius, color=color, glow=glow)

    def stroke_rounded_rect(self, x, y, w, h, radius, color, width):
        self._record("rounded_rect_outline", x=x, y=y, w=w, h=h, radius=radius,
                     color=color, width=width)

    def fill_rect(self, x, y, w, h, color):
        self._record("rect", x=x, y=y, w=w, h=h, color=color)
