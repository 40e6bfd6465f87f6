import json

import pytest

from motion_puppet.style import StyleError, load_style, resolve_style


def test_shoe_falls_back_to_joint_color(make_style):
    resolved = resolve_style(make_style(joint_color="#111111"))
    assert resolved.shoe == "#111111"
    assert resolved.hand == "#111111"

    resolved = resolve_style(make_style(joint_color="#111111", shoe_color="#222222"))
    assert resolved.shoe == "#222222"


def test_sleeve_falls_back_to_limb_color(make_style):
    assert resolve_style(make_style(limb_color="#333333")).sleeve == "#333333"
    assert resolve_style(make_style(sleeve_color="#444444")).sleeve == "#444444"


def test_split_torso_needs_secondary_color(make_style):
    assert not resolve_style(make_style(torso_type="shirt_pants")).split_torso
    assert resolve_style(make_style(torso_type="shirt_pants",
                                    torso_secondary_color="#555555")).split_torso
    assert not resolve_style(make_style(torso_type="solid",
                                        torso_secondary_color="#555555")).split_torso


def test_missing_stroke_width_and_glow(make_style):
    resolved = resolve_style(make_style(stroke_width=None, glow_effect=None))
    assert resolved.outline_width == 0.0
    assert resolved.glow is False


def test_load_style(tmp_path):
    path = tmp_path / "style.json"
    path.write_text(json.dumps({"name": "Loaded", "headType": "square", "glowEffect": True}))
    style = load_style(path)
    assert style.name == "Loaded"
    assert style.glow_effect is True


@pytest.mark.parametrize("content", [
    "not json",
    "[1, 2, 3]",
    '{"name": "X", "strokeWidth": "thick"}',
    '{"name": "X", "strokeWidth": [4]}',
])
def test_load_style_rejects_bad_content(tmp_path, content):
    path = tmp_path / "style.json"
    path.write_text(content)
    with pytest.raises(StyleError):
        load_style(path)


def test_load_style_missing_file(tmp_path):
    with pytest.raises(StyleError):
        load_style(tmp_path / "nope.json")
