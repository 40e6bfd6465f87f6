import logging

import numpy as np
import pytest

from motion_puppet.constants import NUM_LANDMARKS
from motion_puppet.models import Landmark, PoseFrame, StyleConfig
from motion_puppet.presets import DEFAULT_STYLE, PRESET_STYLES


def test_pose_frame_requires_33_landmarks():
    with pytest.raises(ValueError):
        PoseFrame(tuple(Landmark(0.5, 0.5) for _ in range(10)))


def test_from_array_without_visibility_column():
    frame = PoseFrame.from_array(np.full((NUM_LANDMARKS, 3), 0.5))
    assert len(frame) == NUM_LANDMARKS
    assert frame[0].visibility is None


def test_from_array_with_visibility_column():
    data = np.zeros((NUM_LANDMARKS, 4))
    data[:, 3] = 0.8
    frame = PoseFrame.from_array(data)
    assert frame[32].visibility == pytest.approx(0.8)


@pytest.mark.parametrize("shape", [(33,), (32, 4), (33, 5)])
def test_from_array_rejects_bad_shapes(shape):
    with pytest.raises(ValueError):
        PoseFrame.from_array(np.zeros(shape))


def test_from_landmarks_mediapipe_format():
    items = [{"x": 0.1, "y": 0.2, "z": -0.3} for _ in range(NUM_LANDMARKS)]
    items[0] = {"x": 0.4, "y": 0.5, "z": 0.0, "visibility": 0.9}
    frame = PoseFrame.from_landmarks(items)
    assert frame[0] == Landmark(0.4, 0.5, 0.0, 0.9)
    assert frame[1].visibility is None


def test_style_from_dict_reads_camel_case():
    style = StyleConfig.from_dict({
        "name": "Rusty Mech",
        "backgroundColor": "#292524",
        "headType": "robot",
        "headColor": "#a8a29e",
        "torsoColor": "#ea580c",
        "torsoType": "shirt_pants",
        "torsoSecondaryColor": "#44403c",
        "limbColor": "#78716c",
        "jointColor": "#fcd34d",
        "shoeColor": "#1c1917",
        "strokeWidth": 6,
        "glowEffect": False,
        "description": "Heavy industrial loader bot.",
    })
    assert style == PRESET_STYLES[1]
    assert isinstance(style.stroke_width, float)


def test_style_from_dict_tolerates_missing_required_fields(caplog):
    with caplog.at_level(logging.WARNING):
        style = StyleConfig.from_dict({"name": "Partial", "headType": "circle"})
    assert style.torso_color is None
    assert "torsoColor" in caplog.text


def test_style_keeps_unknown_keys_and_enum_values():
    style = StyleConfig.from_dict({"name": "X", "headType": "triangle", "mood": "happy"})
    assert style.head_type == "triangle"
    assert style.extra == {"mood": "happy"}
    assert style.to_dict()["mood"] == "happy"


def test_to_dict_omits_missing_optionals():
    data = DEFAULT_STYLE.to_dict()
    assert data["backgroundColor"] == "#0f172a"
    assert data["faceStyle"] == "cool"
    assert "shoeColor" not in data
    assert StyleConfig.from_dict(data) == DEFAULT_STYLE


def test_presets():
    assert [s.name for s in PRESET_STYLES] == ["Neon Striker", "Rusty Mech", "Pumpkin King"]
    assert DEFAULT_STYLE is PRESET_STYLES[0]
    assert PRESET_STYLES[2].head_emoji


@pytest.mark.parametrize("value", ["false", 1, "yes"])
def test_style_from_dict_drops_non_boolean_glow(caplog, value):
    with caplog.at_level(logging.WARNING):
        style = StyleConfig.from_dict({"name": "X", "glowEffect": value})
    assert style.glow_effect is None
    assert "glowEffect" in caplog.text


def test_style_from_dict_drops_non_string_shapes():
    style = StyleConfig.from_dict({
        "name": "X",
        "headType": ["circle"],
        "faceStyle": {"x": 1},
        "torsoType": 2,
    })
    assert style.head_type is None
    assert style.face_style is None
    assert style.torso_type is None


def test_from_landmarks_rejects_non_object_items():
    items = [{"x": 0.5, "y": 0.5}] + [[0.5, 0.5, 0.0]] * (NUM_LANDMARKS - 1)
    with pytest.raises(ValueError):
        PoseFrame.from_landmarks(items)
