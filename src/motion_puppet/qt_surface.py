"""
QtSurface - Surface implementation on top of QPainter.
"""

import logging
import math
import re
from typing import Optional

import numpy as np
from scipy.ndimage import gaussian_filter

from PySide6.QtCore import Qt, QPointF, QRectF
from PySide6.QtGui import (
    QPainter, QColor, QPen, QBrush, QFont, QImage,
    QLinearGradient, QPainterPath, QPainterPathStroker, QPolygonF,
)

from .surface import Surface, Glow, LinearGradient

logger = logging.getLogger(__name__)

_CSS_RGB = re.compile(r"rgba?\((.*)\)")

# 경고를 한 번만 남기기 위한 기록 (가득 차면 비움)
MAX_WARNED_COLORS = 64
_warned_colors = set()


def _warn_invalid_color(key: str) -> None:
    if key in _warned_colors:
        return
    if len(_warned_colors) >= MAX_WARNED_COLORS:
        _warned_colors.clear()
    _warned_colors.add(key)
    logger.warning("Ignoring invalid color %s", key)


def parse_color(value) -> QColor:
    """
    CSS 스타일 색상 문자열을 QColor로 변환
    #rgb, #rrggbb, #aarrggbb, SVG 이름, rgb(...), rgba(..., a∈[0,1]) 지원
    """
    if isinstance(value, QColor):
        return QColor(value)
    if not isinstance(value, str):
        return QColor()

    text = value.strip()
    match = _CSS_RGB.fullmatch(text)
    if match:
        parts = [p.strip() for p in match.group(1).split(",")]
        if len(parts) not in (3, 4):
            return QColor()
        try:
            r, g, b = (int(round(float(p))) for p in parts[:3])
            alpha = float(parts[3]) if len(parts) == 4 else 1.0
        except ValueError:
            return QColor()
        color = QColor(max(0, min(255, r)), max(0, min(255, g)), max(0, min(255, b)))
        color.setAlphaF(max(0.0, min(1.0, alpha)))
        return color
    return QColor(text)


class QtSurface(Surface):
    """QPainter에 그리는 Surface. 논리 좌표 크기(width, height) 기준"""

    def __init__(self, painter: QPainter, width: float, height: float):
        self.painter = painter
        self.width = width
        self.height = height
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setRenderHint(QPainter.RenderHint.TextAntialiasing)

    def _color(self, value) -> Optional[QColor]:
        color = parse_color(value)
        if not color.isValid():
            _warn_invalid_color(repr(value))
            return None
        return color

    # === 내부 헬퍼 ===

    def _pen(self, color: QColor, width: float) -> QPen:
        pen = QPen(color, max(0.0, width))
        pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
        return pen

    def _paint_glow(self, silhouette: QPainterPath, glow: Optional[Glow]) -> None:
        """실루엣을 가우시안 블러해서 도형 아래에 깔아줌 (sigma = blur / 2)"""
        if glow is None or glow.blur <= 0:
            return
        color = self._color(glow.color)
        if color is None:
            return

        sigma = glow.blur / 2
        pad = int(math.ceil(sigma * 3)) + 1
        bounds = silhouette.boundingRect()
        left = math.floor(bounds.left()) - pad
        top = math.floor(bounds.top()) - pad
        w = int(math.ceil(bounds.width())) + 2 * pad
        h = int(math.ceil(bounds.height())) + 2 * pad
        if w <= 0 or h <= 0:
            return

        mask = QImage(w, h, QImage.Format.Format_Alpha8)
        mask.fill(0)
        mask_painter = QPainter(mask)
        try:
            mask_painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            mask_painter.translate(-left, -top)
            mask_painter.fillPath(silhouette, QColor(0, 0, 0, 255))
        finally:
            mask_painter.end()

        stride = mask.bytesPerLine()
        alpha = np.frombuffer(mask.constBits(), dtype=np.uint8, count=stride * h)
        alpha = alpha.reshape(h, stride)[:, :w].astype(np.float32)
        alpha = gaussian_filter(alpha, sigma=sigma) * color.alphaF()
        alpha = np.clip(alpha, 0, 255)

        rgba = np.empty((h, w, 4), dtype=np.uint8)
        rgba[..., 0] = (alpha * color.red() / 255).astype(np.uint8)
        rgba[..., 1] = (alpha * color.green() / 255).astype(np.uint8)
        rgba[..., 2] = (alpha * color.blue() / 255).astype(np.uint8)
        rgba[..., 3] = alpha.astype(np.uint8)

        data = rgba.tobytes()
        image = QImage(data, w, h, 4 * w, QImage.Format.Format_RGBA8888_Premultiplied).copy()
        self.painter.drawImage(QPointF(left, top), image)

    def _fill_path(self, path: QPainterPath, fill, glow: Optional[Glow] = None) -> None:
        if isinstance(fill, LinearGradient):
            brush = self._gradient_brush(fill)
        else:
            color = self._color(fill)
            if color is None:
                return
            brush = QBrush(color)
        if brush is None:
            return
        self._paint_glow(path, glow)
        self.painter.fillPath(path, brush)

    def _stroke_path(self, path: QPainterPath, color, width: float,
                     glow: Optional[Glow] = None) -> None:
        qcolor = self._color(color)
        if qcolor is None or width <= 0:
            return
        pen = self._pen(qcolor, width)
        if glow is not None:
            stroker = QPainterPathStroker(pen)
            self._paint_glow(stroker.createStroke(path), glow)
        self.painter.strokePath(path, pen)

    def _gradient_brush(self, gradient: LinearGradient) -> Optional[QBrush]:
        qgradient = QLinearGradient(gradient.x0, gradient.y0, gradient.x1, gradient.y1)
        stops = []
        previous = -1.0
        for offset, color in gradient.stops:
            qcolor = self._color(color)
            if qcolor is None:
                return None
            # Qt는 같은 위치의 stop을 덮어쓰므로 아주 조금 밀어서 경계를 유지
            offset = max(0.0, min(1.0, offset))
            if offset <= previous:
                offset = min(1.0, previous + 1e-6)
            stops.append((offset, qcolor))
            previous = offset
        qgradient.setStops(stops)
        return QBrush(qgradient)

    @staticmethod
    def _circle_path(center, radius) -> QPainterPath:
        path = QPainterPath()
        path.addEllipse(QPointF(center[0], center[1]), radius, radius)
        return path

    @staticmethod
    def _polygon_path(points) -> QPainterPath:
        path = QPainterPath()
        path.addPolygon(QPolygonF([QPointF(x, y) for x, y in points]))
        path.closeSubpath()
        return path

    @staticmethod
    def _rounded_rect_path(x, y, w, h, radius) -> QPainterPath:
        path = QPainterPath()
        path.addRoundedRect(QRectF(x, y, w, h), radius, radius)
        return path

    # === Surface 연산 ===

    def clear(self, color):
        qcolor = self._color(color)
        if qcolor is None:
            return
        self.painter.fillRect(QRectF(0, 0, self.width, self.height), qcolor)

    def draw_text(self, text, x, y, size, color, family):
        qcolor = self._color(color)
        if qcolor is None or not text:
            return
        font = QFont(family)
        font.setPixelSize(max(1, int(round(size))))
        self.painter.setFont(font)
        self.painter.setPen(qcolor)
        span = size * (len(text) + 4)
        self.painter.drawText(QRectF(x - span, y - span, 2 * span, 2 * span),
                              Qt.AlignmentFlag.AlignCenter, text)

    def stroke_line(self, start, end, color, width, glow=None):
        path = QPainterPath(QPointF(start[0], start[1]))
        path.lineTo(QPointF(end[0], end[1]))
        self._stroke_path(path, color, width, glow)

    def fill_circle(self, center, radius, color, glow=None):
        self._fill_path(self._circle_path(center, radius), color, glow)

    def stroke_circle(self, center, radius, color, width):
        self._stroke_path(self._circle_path(center, radius), color, width)

    def fill_ellipse(self, center, rx, ry, color):
        path = QPainterPath()
        path.addEllipse(QPointF(center[0], center[1]), rx, ry)
        self._fill_path(path, color)

    def stroke_arc(self, center, radius, start_angle, end_angle, color, width):
        # Qt 각도는 반시계 방향(도 단위)이므로 부호를 뒤집음
        rect = QRectF(center[0] - radius, center[1] - radius, 2 * radius, 2 * radius)
        start = -math.degrees(start_angle)
        sweep = -math.degrees(end_angle - start_angle)
        path = QPainterPath()
        path.arcMoveTo(rect, start)
        path.arcTo(rect, start, sweep)
        self._stroke_path(path, color, width)

    def fill_polygon(self, points, fill, glow=None):
        self._fill_path(self._polygon_path(points), fill, glow)

    def stroke_polygon(self, points, color, width, glow=None):
        self._stroke_path(self._polygon_path(points), color, width, glow)

    def fill_rounded_rect(self, x, y, w, h, radius, color, glow=None):
        self._fill_path(self._rounded_rect_path(x, y, w, h, radius), color, glow)

    def stroke_rounded_rect(self, x, y, w, h, radius, color, width):
        self._stroke_path(self._rounded_rect_path(x, y, w, h, radius), color, width)

    def fill_rect(self, x, y, w, h, color):
        qcolor = self._color(color)
        if qcolor is None:
            return
        self.painter.fillRect(QRectF(x, y, w, h), qcolor)
