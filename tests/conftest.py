import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from motion_puppet.constants import PoseLandmark as L
from motion_puppet.models import Landmark, PoseFrame, StyleConfig


# 정면으로 선 자세 (정규화 좌표)
STANDING = {
    L.NOSE: (0.5, 0.2),
    L.LEFT_EAR: (0.53, 0.2),
    L.RIGHT_EAR: (0.47, 0.2),
    L.LEFT_SHOULDER: (0.6, 0.35),
    L.RIGHT_SHOULDER: (0.4, 0.35),
    L.LEFT_ELBOW: (0.65, 0.5),
    L.RIGHT_ELBOW: (0.35, 0.5),
    L.LEFT_WRIST: (0.67, 0.62),
    L.RIGHT_WRIST: (0.33, 0.62),
    L.LEFT_HIP: (0.57, 0.65),
    L.RIGHT_HIP: (0.43, 0.65),
    L.LEFT_KNEE: (0.58, 0.8),
    L.RIGHT_KNEE: (0.42, 0.8),
    L.LEFT_ANKLE: (0.58, 0.95),
    L.RIGHT_ANKLE: (0.42, 0.95),
}


def build_pose(visibility=1.0, visibility_overrides=None, position_overrides=None):
    """서 있는 자세의 PoseFrame 생성"""
    visibility_overrides = visibility_overrides or {}
    positions = dict(STANDING)
    positions.update(position_overrides or {})
    landmarks = []
    for index in L:
        x, y = positions.get(index, (0.5, 0.5))
        landmarks.append(Landmark(x, y, 0.0, visibility_overrides.get(index, visibility)))
    return PoseFrame(tuple(landmarks))


def build_style(**overrides):
    base = dict(
        name="Test",
        background_color="#101010",
        head_type="circle",
        head_color="#ffcc00",
        face_style="smile",
        torso_color="#0284c7",
        torso_type="solid",
        limb_color="#0ea5e9",
        joint_color="#e0f2fe",
        stroke_width=4.0,
        glow_effect=False,
        description="test style",
    )
    base.update(overrides)
    return StyleConfig(**base)


@pytest.fixture
def make_pose():
    return build_pose


@pytest.fixture
def make_style():
    return build_style


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app
