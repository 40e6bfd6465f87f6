"""
PuppetCanvas - live puppet canvas widget and its frame loop.
"""

import logging
from typing import Callable, Optional

from PySide6.QtWidgets import QWidget
from PySide6.QtCore import QObject, QRectF, QTimer
from PySide6.QtGui import QPainter, QColor, QImage

from .compositor import Compositor, PoseCell
from .constants import DEFAULT_WIDTH, DEFAULT_HEIGHT
from .models import StyleConfig
from .presets import DEFAULT_STYLE
from .qt_surface import QtSurface

logger = logging.getLogger(__name__)

# requestAnimationFrame 주기에 맞춘 틱 간격
FRAME_INTERVAL_MS = 16


class FrameLoop(QObject):
    """
    취소 가능한 프레임 콜백 루프
    stop() 이후에 도착한 틱은 무시됨
    """

    def __init__(self, tick: Callable[[], None], interval_ms: int = FRAME_INTERVAL_MS,
                 parent=None):
        super().__init__(parent)
        self._tick = tick
        self._active = False
        self.timer = QTimer(self)
        self.timer.setInterval(interval_ms)
        self.timer.timeout.connect(self._on_timeout)

    @property
    def is_active(self) -> bool:
        return self._active

    def start(self):
        if self._active:
            return
        self._active = True
        self.timer.start()
        logger.debug("Frame loop started")

    def stop(self):
        if not self._active:
            return
        self._active = False
        self.timer.stop()
        logger.debug("Frame loop stopped")

    def _on_timeout(self):
        if not self._active:
            return
        self._tick()


def paint_scene(painter: QPainter, compositor: Compositor, target: QRectF,
                now_ms: Optional[float] = None) -> bool:
    """논리 크기 장면을 target 영역에 비율 유지하여 그림 (남는 부분은 검정)"""
    painter.fillRect(target, QColor("#000000"))

    scale = min(target.width() / compositor.width, target.height() / compositor.height)
    if scale <= 0:
        return False
    offset_x = target.x() + (target.width() - compositor.width * scale) / 2
    offset_y = target.y() + (target.height() - compositor.height * scale) / 2

    painter.save()
    try:
        painter.translate(offset_x, offset_y)
        painter.scale(scale, scale)
        painter.setClipRect(QRectF(0, 0, compositor.width, compositor.height))
        surface = QtSurface(painter, compositor.width, compositor.height)
        return compositor.render(surface, now_ms)
    finally:
        painter.restore()


def render_image(compositor: Compositor, now_ms: Optional[float] = None) -> QImage:
    """한 프레임을 QImage로 렌더 (스냅샷용)"""
    image = QImage(compositor.width, compositor.height, QImage.Format.Format_ARGB32_Premultiplied)
    image.fill(QColor("#000000"))
    painter = QPainter(image)
    try:
        paint_scene(painter, compositor, QRectF(0, 0, compositor.width, compositor.height), now_ms)
    finally:
        painter.end()
    return image


class PuppetCanvas(QWidget):
    """포즈를 만화 캐릭터로 그리는 캔버스 위젯"""

    def __init__(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT,
                 style: StyleConfig = DEFAULT_STYLE, parent=None):
        super().__init__(parent)
        self.compositor = Compositor(width, height, style)
        self.frame_loop = FrameLoop(self.update, parent=self)
        self.is_tracking = False

        self.setMinimumSize(640, 360)
        self.setStyleSheet("background-color: #000000;")

    @property
    def pose_cell(self) -> PoseCell:
        return self.compositor.pose_cell

    def set_style(self, style: StyleConfig):
        """스타일 변경 (다음 프레임부터 적용)"""
        self.compositor.set_style(style)
        self.update()

    def start(self):
        self.frame_loop.start()

    def stop(self):
        self.frame_loop.stop()

    def paintEvent(self, event):
        """캔버스 렌더링"""
        painter = QPainter(self)
        try:
            self.is_tracking = paint_scene(painter, self.compositor, QRectF(self.rect()))
        finally:
            painter.end()
