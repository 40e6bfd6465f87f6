"""
Part renderers for the puppet - limbs, extremities, torso, head and face.

Every renderer is a plain function of (surface, context, ...) and keeps no
state. A part whose landmarks fall below the visibility threshold is skipped
entirely for the frame.
"""

import math
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .constants import (
    OUTLINE_COLOR, GLOW_BASE, GLOW_AMPLITUDE, GLOW_RATE,
    HEAD_EAR_RATIO, HEAD_MIN_UNIT_RATIO, HEAD_CORNER_RADIUS, FACE_LINE_WIDTH,
    PoseLandmark,
)
from .geometry import distance, project_landmark
from .models import FaceStyle, HeadType, PoseFrame, ScreenPoint
from .style import ResolvedStyle
from .surface import Glow, LinearGradient, Surface

# 셔츠/바지 경계 위치 (상체 높이 대비)
WAIST_OFFSET = 0.55


def glow_radius(now_ms: float) -> float:
    """벽시계 기반 글로우 펄스 반경 (항상 [10, 30])"""
    return GLOW_BASE + GLOW_AMPLITUDE * math.sin(now_ms * GLOW_RATE)


@dataclass(frozen=True)
class RenderContext:
    """한 프레임 렌더 동안 공유되는 입력값"""
    frame: PoseFrame
    width: float
    height: float
    unit: float
    style: ResolvedStyle
    glow_blur: float

    def point(self, index: int) -> ScreenPoint:
        return project_landmark(self.frame, index, self.width, self.height)

    def glow_for(self, color: Optional[str]) -> Optional[Glow]:
        if not self.style.glow or not color:
            return None
        return Glow(color, self.glow_blur)


def draw_limb(surface: Surface, ctx: RenderContext, index_a: int, index_b: int,
              color: Optional[str], thickness_scale: float = 1.0) -> None:
    """둥근 캡의 "소시지" 팔다리: 외곽선 후 채움"""
    if not color:
        return
    start = ctx.point(index_a)
    end = ctx.point(index_b)
    if not (start.is_visible and end.is_visible):
        return

    thickness = ctx.unit * thickness_scale
    p0 = (start.x, start.y)
    p1 = (end.x, end.y)

    surface.stroke_line(p0, p1, OUTLINE_COLOR, thickness + ctx.style.outline_width,
                        glow=ctx.glow_for(color))
    # 채움은 블러 없이
    surface.stroke_line(p0, p1, color, thickness)


def draw_extremity(surface: Surface, ctx: RenderContext, index: int,
                   color: Optional[str], scale: float = 0.5) -> None:
    """손/발 원"""
    if not color:
        return
    p = ctx.point(index)
    if not p.is_visible:
        return

    radius = (ctx.unit * scale) / 2
    center = (p.x, p.y)
    surface.fill_circle(center, radius + ctx.style.outline_width / 2, OUTLINE_COLOR,
                        glow=ctx.glow_for(color))
    surface.fill_circle(center, radius, color)


def draw_torso(surface: Surface, ctx: RenderContext) -> None:
    """어깨-엉덩이 사각형. 네 꼭짓점 모두 보여야 그림"""
    style = ctx.style
    if not style.torso:
        return

    left_shoulder = ctx.point(PoseLandmark.LEFT_SHOULDER)
    right_shoulder = ctx.point(PoseLandmark.RIGHT_SHOULDER)
    right_hip = ctx.point(PoseLandmark.RIGHT_HIP)
    left_hip = ctx.point(PoseLandmark.LEFT_HIP)
    corners = (left_shoulder, right_shoulder, right_hip, left_hip)
    if not all(c.is_visible for c in corners):
        return

    points = [(c.x, c.y) for c in corners]
    surface.stroke_polygon(points, OUTLINE_COLOR, style.outline_width,
                           glow=ctx.glow_for(style.torso))

    if style.split_torso:
        top = min(left_shoulder.y, right_shoulder.y)
        bottom = max(left_hip.y, right_hip.y)
        fill = LinearGradient(0, top, 0, bottom, (
            (0.0, style.torso),
            (WAIST_OFFSET, style.torso),
            (WAIST_OFFSET, style.torso_secondary),
            (1.0, style.torso_secondary),
        ))
    else:
        fill = style.torso
    surface.fill_polygon(points, fill)


def head_size(ctx: RenderContext) -> float:
    """귀 사이 거리에 비례, body unit 기준 하한"""
    ear_dist = distance(ctx.point(PoseLandmark.LEFT_EAR), ctx.point(PoseLandmark.RIGHT_EAR))
    return max(ear_dist * HEAD_EAR_RATIO, ctx.unit * HEAD_MIN_UNIT_RATIO)


# === 머리 모양 ===

def _draw_emoji_head(surface, ctx, nose, size):
    style = ctx.style
    if not style.head_emoji:
        return
    # 이모지는 블러에 약하므로 글로우 없음
    surface.draw_text(style.head_emoji, nose.x, nose.y, size * 2,
                      style.head or "#000000", "serif")


def _draw_box_head(surface, ctx, nose, size):
    style = ctx.style
    if not style.head:
        return
    half = size / 1.5
    side = size * 1.33
    x, y = nose.x - half, nose.y - half
    surface.fill_rounded_rect(x, y, side, side, HEAD_CORNER_RADIUS, style.head,
                              glow=ctx.glow_for(style.head))
    surface.stroke_rounded_rect(x, y, side, side, HEAD_CORNER_RADIUS,
                                OUTLINE_COLOR, style.outline_width)


def _draw_robot_head(surface, ctx, nose, size):
    _draw_box_head(surface, ctx, nose, size)
    if not ctx.style.head:
        return
    half = size / 1.5
    eye_w, eye_h = size * 0.2, size * 0.1
    eye_y = nose.y - size * 0.1
    surface.fill_rect(nose.x - half + size * 0.3, eye_y, eye_w, eye_h, "#000000")
    surface.fill_rect(nose.x + half - size * 0.5, eye_y, eye_w, eye_h, "#000000")


def _draw_circle_head(surface, ctx, nose, size):
    style = ctx.style
    if not style.head:
        return
    center = (nose.x, nose.y)
    radius = size * 0.7
    surface.fill_circle(center, radius, style.head, glow=ctx.glow_for(style.head))
    surface.stroke_circle(center, radius, OUTLINE_COLOR, style.outline_width)


def _lookup(table, key, default):
    # JSON에서 온 값은 리스트나 객체일 수도 있음
    if not isinstance(key, str):
        return default
    return table.get(key, default)


HeadRenderer = Callable[[Surface, RenderContext, ScreenPoint, float], None]

HEAD_RENDERERS: Dict[str, HeadRenderer] = {
    HeadType.EMOJI.value: _draw_emoji_head,
    HeadType.SQUARE.value: _draw_box_head,
    HeadType.ROBOT.value: _draw_robot_head,
    HeadType.CIRCLE.value: _draw_circle_head,
}


def draw_head(surface: Surface, ctx: RenderContext) -> None:
    """코 위치 기준 머리. 코 visibility로만 판단 (귀는 크기 계산용)"""
    nose = ctx.point(PoseLandmark.NOSE)
    if not nose.is_visible:
        return
    renderer = _lookup(HEAD_RENDERERS, ctx.style.head_type, _draw_circle_head)
    renderer(surface, ctx, nose, head_size(ctx))


# === 얼굴 표정 ===

def _eye_centers(nose, size):
    offset_x = size * 0.25
    offset_y = size * 0.15
    return (nose.x - offset_x, nose.y - offset_y), (nose.x + offset_x, nose.y - offset_y)


def _draw_round_eyes(surface, nose, size):
    eye_radius = size * 0.15
    eyes = _eye_centers(nose, size)
    for eye in eyes:
        surface.fill_circle(eye, eye_radius, "#ffffff")
        surface.stroke_circle(eye, eye_radius, "#000000", FACE_LINE_WIDTH)
    for eye in eyes:
        surface.fill_circle(eye, eye_radius * 0.3, "#000000")


def _draw_smile_mouth(surface, nose, size):
    surface.stroke_arc((nose.x, nose.y + size * 0.1), size * 0.35,
                       0.2 * math.pi, 0.8 * math.pi, "#000000", FACE_LINE_WIDTH)


def _draw_smile_face(surface, nose, size):
    _draw_round_eyes(surface, nose, size)
    _draw_smile_mouth(surface, nose, size)


def _draw_cool_face(surface, nose, size):
    # 선글라스: 검은 원 두 개 + 브릿지
    left, right = _eye_centers(nose, size)
    lens_radius = size * 0.15 * 1.2
    surface.fill_circle(left, lens_radius, "#000000")
    surface.fill_circle(right, lens_radius, "#000000")
    surface.stroke_line(left, right, "#000000", FACE_LINE_WIDTH)
    _draw_smile_mouth(surface, nose, size)


def _draw_surprised_face(surface, nose, size):
    _draw_round_eyes(surface, nose, size)
    surface.fill_ellipse((nose.x, nose.y + size * 0.3), size * 0.1, size * 0.15, "#000000")


FaceRenderer = Callable[[Surface, ScreenPoint, float], None]

FACE_RENDERERS: Dict[str, FaceRenderer] = {
    FaceStyle.SMILE.value: _draw_smile_face,
    FaceStyle.COOL.value: _draw_cool_face,
    FaceStyle.SURPRISED.value: _draw_surprised_face,
}


def draw_face(surface: Surface, ctx: RenderContext) -> None:
    """눈/입. 이모지나 로봇 머리, faceStyle=none 이면 그리지 않음"""
    style = ctx.style
    if style.head_type in (HeadType.EMOJI, HeadType.ROBOT) or style.face_style == FaceStyle.NONE:
        return
    nose = ctx.point(PoseLandmark.NOSE)
    if not nose.is_visible:
        return
    renderer = _lookup(FACE_RENDERERS, style.face_style, _draw_smile_face)
    renderer(surface, nose, head_size(ctx))
