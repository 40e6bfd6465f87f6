"""
Landmark projection and body scale estimation.
"""

import math

from .constants import SCALE_FLOOR_RATIO
from .models import PoseFrame, ScreenPoint


def project_landmark(frame: PoseFrame, index: int, width: float, height: float) -> ScreenPoint:
    """정규화 좌표를 화면 좌표로 변환 (좌우 반전, visibility 없으면 0)"""
    lm = frame[index]
    visibility = lm.visibility if lm.visibility is not None else 0.0
    return ScreenPoint(x=(1.0 - lm.x) * width, y=lm.y * height, v=visibility)


def distance(a: ScreenPoint, b: ScreenPoint) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


def body_unit(left_shoulder: ScreenPoint, right_shoulder: ScreenPoint, width: float) -> float:
    """
    어깨 너비 기반 스케일 단위 계산
    카메라에 가까울수록 커지며, 프레임 너비의 10%를 하한으로 둠
    """
    return max(distance(left_shoulder, right_shoulder), width * SCALE_FLOOR_RATIO)
