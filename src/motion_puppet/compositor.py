"""
Compositor - per-frame orchestration of the part renderers.
"""

import logging
import time
from functools import partial
from typing import Callable, List, Optional, Tuple

from .constants import (
    DEFAULT_WIDTH, DEFAULT_HEIGHT,
    IDLE_MESSAGE, IDLE_TEXT_COLOR, IDLE_FONT_FAMILY, IDLE_FONT_SIZE,
    THIGH_SCALE, SHIN_SCALE, FOOT_SCALE, UPPER_ARM_SCALE, FOREARM_SCALE, HAND_SCALE,
    PoseLandmark as L,
)
from .geometry import body_unit, project_landmark
from .models import PoseFrame, StyleConfig
from .parts import (
    RenderContext, glow_radius,
    draw_limb, draw_extremity, draw_torso, draw_head, draw_face,
)
from .presets import DEFAULT_STYLE
from .style import resolve_style
from .surface import Surface

logger = logging.getLogger(__name__)

# 배경색이 없는 스타일에 쓰는 지우기 색
FALLBACK_BACKGROUND = "#000000"

LEGS = (
    (L.LEFT_HIP, L.LEFT_KNEE, L.LEFT_ANKLE),
    (L.RIGHT_HIP, L.RIGHT_KNEE, L.RIGHT_ANKLE),
)
ARMS = (
    (L.LEFT_SHOULDER, L.LEFT_ELBOW, L.LEFT_WRIST),
    (L.RIGHT_SHOULDER, L.RIGHT_ELBOW, L.RIGHT_WRIST),
)


def wall_clock_ms() -> float:
    return time.time() * 1000.0


class PoseCell:
    """
    최신 포즈 한 개만 보관하는 셀 (단일 writer / 단일 reader)
    새 프레임은 이전 값을 덮어쓰며, 큐나 락은 없음
    """

    def __init__(self):
        self._frame: Optional[PoseFrame] = None
        self._version = 0

    def put(self, frame: Optional[PoseFrame]) -> None:
        self._frame = frame
        self._version += 1

    def get(self) -> Optional[PoseFrame]:
        return self._frame

    @property
    def version(self) -> int:
        """쓰기 횟수. 같은 값이면 이전 프레임을 다시 그리는 중"""
        return self._version


def build_draw_order(ctx: RenderContext) -> List[Tuple[str, Callable[[Surface], None]]]:
    """뒤에서 앞으로: 다리 -> 몸통 -> 팔 -> 머리 -> 얼굴"""
    style = ctx.style
    steps = []

    for side, (hip, knee, ankle) in zip(("left", "right"), LEGS):
        steps.append((f"{side} thigh", partial(draw_limb, ctx=ctx, index_a=hip, index_b=knee,
                                               color=style.limb, thickness_scale=THIGH_SCALE)))
        steps.append((f"{side} shin", partial(draw_limb, ctx=ctx, index_a=knee, index_b=ankle,
                                              color=style.limb, thickness_scale=SHIN_SCALE)))
        steps.append((f"{side} foot", partial(draw_extremity, ctx=ctx, index=ankle,
                                              color=style.shoe, scale=FOOT_SCALE)))

    steps.append(("torso", partial(draw_torso, ctx=ctx)))

    for side, (shoulder, elbow, wrist) in zip(("left", "right"), ARMS):
        steps.append((f"{side} upper arm", partial(draw_limb, ctx=ctx, index_a=shoulder,
                                                   index_b=elbow, color=style.sleeve,
                                                   thickness_scale=UPPER_ARM_SCALE)))
        steps.append((f"{side} forearm", partial(draw_limb, ctx=ctx, index_a=elbow,
                                                 index_b=wrist, color=style.limb,
                                                 thickness_scale=FOREARM_SCALE)))
        steps.append((f"{side} hand", partial(draw_extremity, ctx=ctx, index=wrist,
                                              color=style.hand, scale=HAND_SCALE)))

    steps.append(("head", partial(draw_head, ctx=ctx)))
    steps.append(("face", partial(draw_face, ctx=ctx)))
    return steps


class Compositor:
    """현재 포즈와 스타일을 소유하고 한 프레임씩 그린다"""

    def __init__(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT,
                 style: StyleConfig = DEFAULT_STYLE,
                 clock: Callable[[], float] = wall_clock_ms):
        self.width = width
        self.height = height
        self.pose_cell = PoseCell()
        self._style = style
        self._clock = clock

    @property
    def style(self) -> StyleConfig:
        return self._style

    def set_style(self, style: StyleConfig) -> None:
        """스타일 교체. 다음 render 호출부터 적용"""
        self._style = style
        logger.debug("Style switched to %r", style.name)

    def render(self, surface: Surface, now_ms: Optional[float] = None) -> bool:
        """
        한 프레임 렌더링
        Returns: 포즈를 그렸으면 True, 대기 화면이면 False
        """
        # 사이클 시작 시 한 번만 읽음
        style = self._style
        frame = self.pose_cell.get()
        resolved = resolve_style(style)

        surface.clear(resolved.background or FALLBACK_BACKGROUND)

        if frame is None:
            surface.draw_text(IDLE_MESSAGE, self.width / 2, self.height / 2,
                              IDLE_FONT_SIZE, IDLE_TEXT_COLOR, IDLE_FONT_FAMILY)
            return False

        left_shoulder = project_landmark(frame, L.LEFT_SHOULDER, self.width, self.height)
        right_shoulder = project_landmark(frame, L.RIGHT_SHOULDER, self.width, self.height)
        unit = body_unit(left_shoulder, right_shoulder, self.width)

        glow_blur = 0.0
        if resolved.glow:
            glow_blur = glow_radius(self._clock() if now_ms is None else now_ms)

        ctx = RenderContext(frame=frame, width=self.width, height=self.height,
                            unit=unit, style=resolved, glow_blur=glow_blur)

        for name, step in build_draw_order(ctx):
            try:
                step(surface)
            except Exception:
                # 한 부위 실패가 프레임 전체를 막지 않음
                logger.warning("Failed to draw %s", name, exc_info=True)
        return True
