import json

import pytest

from PySide6.QtCore import QRectF
from PySide6.QtGui import QColor, QImage, QPainter
from PySide6.QtTest import QTest

from motion_puppet.canvas import FrameLoop, PuppetCanvas, render_image
from motion_puppet.compositor import Compositor, PoseCell
from motion_puppet import qt_surface
from motion_puppet.qt_surface import QtSurface, parse_color
from motion_puppet.replay import PoseReplayer, load_pose_sequence, parse_pose_frame
from motion_puppet.surface import Glow, LinearGradient


@pytest.mark.parametrize("text, rgba", [
    ("#ff0000", (255, 0, 0, 255)),
    ("white", (255, 255, 255, 255)),
    ("rgb(10, 20, 30)", (10, 20, 30, 255)),
    ("rgba(0, 0, 0, 0.6)", (0, 0, 0, 153)),
])
def test_parse_color(text, rgba):
    color = parse_color(text)
    assert color.isValid()
    assert color.getRgb() == rgba


@pytest.mark.parametrize("text", ["rgba(1, 2)", "not-a-color", None])
def test_parse_color_invalid(text):
    assert not parse_color(text).isValid()


def paint(qapp, draw, size=(200, 200)):
    image = QImage(size[0], size[1], QImage.Format.Format_ARGB32_Premultiplied)
    image.fill(QColor("#000000"))
    painter = QPainter(image)
    try:
        draw(QtSurface(painter, size[0], size[1]))
    finally:
        painter.end()
    return image


def test_qt_surface_fills(qapp):
    def draw(surface):
        surface.clear("#202020")
        surface.fill_circle((50, 50), 20, "#ff0000")
        surface.fill_rect(120, 120, 40, 40, "#00ff00")

    image = paint(qapp, draw)
    assert image.pixelColor(50, 50).name() == "#ff0000"
    assert image.pixelColor(140, 140).name() == "#00ff00"
    assert image.pixelColor(5, 5).name() == "#202020"


def test_qt_surface_sharp_gradient(qapp):
    gradient = LinearGradient(0, 0, 0, 200, (
        (0.0, "#ff0000"), (0.55, "#ff0000"), (0.55, "#0000ff"), (1.0, "#0000ff"),
    ))

    def draw(surface):
        surface.fill_polygon([(0, 0), (200, 0), (200, 200), (0, 200)], gradient)

    image = paint(qapp, draw)
    assert image.pixelColor(100, 100).name() == "#ff0000"
    assert image.pixelColor(100, 115).name() == "#0000ff"


def test_qt_surface_glow_spreads_outside_shape(qapp):
    def draw(surface):
        surface.stroke_line((100, 40), (100, 160), "#ffffff", 10, glow=Glow("#00ff00", 20))

    image = paint(qapp, draw)
    assert image.pixelColor(100, 100).name() == "#ffffff"
    halo = image.pixelColor(115, 100)
    assert halo.green() > 0
    assert halo.red() == 0


def test_qt_surface_ignores_invalid_color(qapp):
    def draw(surface):
        surface.fill_circle((50, 50), 20, "nonsense")
        surface.stroke_arc((100, 100), 30, 0.2, 2.5, "#ffffff", 2)
        surface.fill_ellipse((150, 150), 10, 15, "#ffffff")

    image = paint(qapp, draw)
    assert image.pixelColor(50, 50).name() == "#000000"


def test_invalid_color_warnings_stay_bounded(qapp):
    def draw(surface):
        for i in range(qt_surface.MAX_WARNED_COLORS * 3):
            surface.fill_circle((50, 50), 20, f"nonsense-{i}")

    paint(qapp, draw)
    assert len(qt_surface._warned_colors) <= qt_surface.MAX_WARNED_COLORS


def test_render_image_draws_torso(qapp, make_pose, make_style):
    compositor = Compositor(1280, 720, make_style(torso_color="#0284c7", glow_effect=False))
    compositor.pose_cell.put(make_pose())
    image = render_image(compositor)
    assert image.width() == 1280
    assert image.pixelColor(640, 360).name() == "#0284c7"


def test_render_image_split_torso(qapp, make_pose, make_style):
    style = make_style(torso_type="shirt_pants", torso_color="#ea580c",
                       torso_secondary_color="#44403c")
    compositor = Compositor(1280, 720, style)
    compositor.pose_cell.put(make_pose())
    image = render_image(compositor)
    assert image.pixelColor(640, 300).name() == "#ea580c"
    assert image.pixelColor(640, 440).name() == "#44403c"


def test_render_image_with_glow(qapp, make_pose, make_style):
    compositor = Compositor(640, 360, make_style(glow_effect=True))
    compositor.pose_cell.put(make_pose())
    image = render_image(compositor, now_ms=0.0)
    assert not image.isNull()


def test_render_image_idle(qapp, make_style):
    compositor = Compositor(320, 180, make_style(background_color="#112233"))
    image = render_image(compositor)
    assert image.pixelColor(2, 2).name() == "#112233"


def test_frame_loop_start_stop(qapp):
    ticks = []
    loop = FrameLoop(lambda: ticks.append(1), interval_ms=1)
    loop.start()
    assert loop.is_active and loop.timer.isActive()
    QTest.qWait(50)
    assert ticks

    loop.stop()
    assert not loop.is_active and not loop.timer.isActive()
    count = len(ticks)
    QTest.qWait(30)
    loop._on_timeout()
    assert len(ticks) == count


def test_canvas_paints_letterboxed(qapp, make_pose, make_style):
    canvas = PuppetCanvas(1280, 720, make_style())
    canvas.resize(640, 480)
    canvas.pose_cell.put(make_pose())
    pixmap = canvas.grab()
    assert canvas.is_tracking
    image = pixmap.toImage()
    # 위아래 여백은 검정
    assert image.pixelColor(320, 5).name() == "#000000"
    canvas.start()
    assert canvas.frame_loop.is_active
    canvas.stop()
    assert not canvas.frame_loop.is_active


def write_frames(folder, frames):
    for i, data in enumerate(frames):
        (folder / f"{i:04d}.json").write_text(data if isinstance(data, str) else json.dumps(data))


def test_load_pose_sequence(tmp_path):
    landmarks = [{"x": 0.5, "y": 0.5, "z": 0.0, "visibility": 1.0}] * 33
    write_frames(tmp_path, [
        {"poseLandmarks": landmarks},
        {"poseLandmarks": None},
        "{broken",
        [[0.5, 0.5, 0.0]] * 33,
        {"poseLandmarks": [{"x": 0.5, "y": 0.5}] + [[0.5, 0.5, 0.0]] * 32},
    ])
    frames = load_pose_sequence(str(tmp_path))
    assert len(frames) == 5
    assert frames[4] is None
    assert frames[0] is not None and frames[0][0].visibility == 1.0
    assert frames[1] is None
    assert frames[2] is None
    assert frames[3][0].visibility is None


def test_parse_pose_frame_rejects_short_list():
    with pytest.raises(ValueError):
        parse_pose_frame({"poseLandmarks": [{"x": 0, "y": 0}]})


def test_replayer_writes_latest_frame(qapp, make_pose):
    cell = PoseCell()
    frames = [make_pose(), None, make_pose(visibility=0.7)]
    replayer = PoseReplayer(cell, fps=30)
    replayer.set_frames(frames)
    assert cell.get() is frames[0]

    replayer.step()
    assert cell.get() is None
    replayer.step()
    replayer.step()
    assert replayer.current_frame == 0
    assert cell.version == 4

    replayer.start()
    assert replayer.is_playing
    replayer.stop()
    assert not replayer.is_playing


def test_cli_snapshot(qapp, tmp_path):
    from motion_puppet.app import main

    poses = tmp_path / "poses"
    poses.mkdir()
    write_frames(poses, [{"poseLandmarks": [{"x": 0.5, "y": 0.5, "z": 0.0, "visibility": 1.0}] * 33}])
    out = tmp_path / "frame.png"
    assert main(["--snapshot", str(out), "--poses", str(poses), "--width", "320", "--height", "180"]) == 0
    assert QImage(str(out)).width() == 320


def test_window_style_handling(qapp, tmp_path):
    from motion_puppet.app import PuppetWindow

    window = PuppetWindow()
    style_file = tmp_path / "style.json"
    style_file.write_text(json.dumps({"name": "Custom", "headType": "square", "glowEffect": False}))
    assert window.load_style_file(str(style_file))
    assert window.canvas.compositor.style.name == "Custom"
    assert window.style_panel.preset_combo.currentText() == "Custom"

    window._on_preset_selected("Rusty Mech")
    assert window.canvas.compositor.style.head_type == "robot"

    window._on_glow_toggled(True)
    assert window.canvas.compositor.style.glow_effect is True

    bad = tmp_path / "bad.json"
    bad.write_text("[]")
    assert not window.load_style_file(str(bad))
    window.close()
