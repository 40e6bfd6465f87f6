"""
Motion Puppet - Main Application Window
"""

import argparse
import dataclasses
import logging
import sys
from typing import Dict, List, Optional

from PySide6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QHBoxLayout,
    QFileDialog, QStatusBar, QSplitter,
)
from PySide6.QtCore import Qt
from PySide6.QtGui import QKeyEvent

from .canvas import PuppetCanvas, render_image
from .compositor import Compositor
from .constants import DEFAULT_WIDTH, DEFAULT_HEIGHT, DEFAULT_REPLAY_FPS
from .controls import StylePanel
from .models import StyleConfig
from .presets import PRESETS_BY_NAME, DEFAULT_STYLE
from .replay import PoseReplayer, load_pose_sequence
from .style import StyleError, load_style

logger = logging.getLogger(__name__)


class PuppetWindow(QMainWindow):
    """메인 윈도우"""

    def __init__(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT,
                 style: StyleConfig = DEFAULT_STYLE, fps: int = DEFAULT_REPLAY_FPS):
        super().__init__()
        self.styles: Dict[str, StyleConfig] = dict(PRESETS_BY_NAME)
        self.canvas = PuppetCanvas(width, height, style)
        self.replayer = PoseReplayer(self.canvas.pose_cell, fps=fps, parent=self)

        self._setup_ui()
        self._connect_signals()
        self.style_panel.fps_spin.setValue(fps)
        self._apply_style(style)

    def _setup_ui(self):
        self.setWindowTitle("Motion Puppet")
        self.setMinimumSize(1200, 720)
        self.setStyleSheet("""
            QMainWindow {
                background-color: #1a1a2e;
            }
            QStatusBar {
                background-color: #16213e;
                color: #e0e0e0;
            }
        """)

        central = QWidget()
        self.setCentralWidget(central)

        layout = QHBoxLayout(central)
        layout.setContentsMargins(10, 10, 10, 10)
        layout.setSpacing(10)

        self.style_panel = StylePanel()
        self.style_panel.setFixedWidth(300)

        splitter = QSplitter(Qt.Orientation.Horizontal)
        splitter.addWidget(self.canvas)
        splitter.addWidget(self.style_panel)
        splitter.setStretchFactor(0, 1)
        splitter.setStretchFactor(1, 0)
        layout.addWidget(splitter)

        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)
        self.status_bar.showMessage("포즈 폴더를 불러오려면 Ctrl+O를 누르세요")

        self._setup_menubar()

    def _setup_menubar(self):
        menubar = self.menuBar()
        menubar.setStyleSheet("""
            QMenuBar {
                background-color: #16213e;
                color: #e0e0e0;
                padding: 5px;
            }
            QMenuBar::item:selected {
                background-color: #4ECDC4;
                color: #1a1a2e;
            }
            QMenu {
                background-color: #2d2d44;
                color: #e0e0e0;
                border: 1px solid #3d3d5c;
            }
            QMenu::item:selected {
                background-color: #4ECDC4;
                color: #1a1a2e;
            }
        """)

        file_menu = menubar.addMenu("파일")

        open_action = file_menu.addAction("포즈 폴더 열기")
        open_action.setShortcut("Ctrl+O")
        open_action.triggered.connect(self._open_pose_folder)

        style_action = file_menu.addAction("스타일 불러오기")
        style_action.setShortcut("Ctrl+L")
        style_action.triggered.connect(self._open_style_file)

        file_menu.addSeparator()

        exit_action = file_menu.addAction("종료")
        exit_action.setShortcut("Ctrl+Q")
        exit_action.triggered.connect(self.close)

    def _connect_signals(self):
        self.style_panel.preset_selected.connect(self._on_preset_selected)
        self.style_panel.load_style_requested.connect(self._open_style_file)
        self.style_panel.glow_toggled.connect(self._on_glow_toggled)
        self.style_panel.open_poses_requested.connect(self._open_pose_folder)
        self.style_panel.playback_toggled.connect(self._toggle_playback)
        self.style_panel.fps_changed.connect(self.replayer.set_fps)

        self.replayer.frame_changed.connect(self.style_panel.set_current_frame)

    def keyPressEvent(self, event: QKeyEvent):
        if event.key() == Qt.Key.Key_Space:
            if self.replayer.frames:
                self._toggle_playback(not self.replayer.is_playing)
        elif event.key() == Qt.Key.Key_Right:
            self.replayer.step()
        else:
            super().keyPressEvent(event)

    def showEvent(self, event):
        self.canvas.start()
        super().showEvent(event)

    def closeEvent(self, event):
        # 종료 후에 예약된 콜백이 남지 않도록
        self.replayer.stop()
        self.canvas.stop()
        super().closeEvent(event)

    def _apply_style(self, style: StyleConfig):
        if style.name:
            self.styles[style.name] = style
        self.canvas.set_style(style)
        self.style_panel.show_style(style)

    def _on_preset_selected(self, name: str):
        style = self.styles.get(name)
        if style is None:
            return
        self._apply_style(style)
        self.status_bar.showMessage(f"✓ 스타일 변경: {name}")

    def _on_glow_toggled(self, enabled: bool):
        style = dataclasses.replace(self.canvas.compositor.style, glow_effect=enabled)
        self._apply_style(style)

    def _open_style_file(self):
        path, _ = QFileDialog.getOpenFileName(
            self, "스타일 JSON 선택", "", "JSON (*.json)"
        )
        if path:
            self.load_style_file(path)

    def load_style_file(self, path: str) -> bool:
        try:
            style = load_style(path)
        except StyleError as e:
            logger.error("%s", e)
            self.status_bar.showMessage(f"⚠ {e}")
            return False
        self._apply_style(style)
        self.status_bar.showMessage(f"✓ 스타일 로드됨: {style.name}")
        return True

    def _open_pose_folder(self):
        folder = QFileDialog.getExistingDirectory(
            self, "포즈 JSON 파일이 있는 폴더 선택", "",
            QFileDialog.Option.ShowDirsOnly
        )
        if folder:
            self.load_pose_folder(folder)

    def load_pose_folder(self, folder: str) -> bool:
        frames = load_pose_sequence(folder)
        if not frames:
            self.status_bar.showMessage(f"⚠ JSON 파일을 찾을 수 없습니다: {folder}")
            return False

        self.replayer.set_frames(frames)
        self.style_panel.set_replay_ready(len(frames))
        self.status_bar.showMessage(f"✓ {len(frames)}개 프레임 로드됨: {folder}")
        return True

    def _toggle_playback(self, playing: bool):
        if playing:
            self.replayer.start()
        else:
            self.replayer.stop()
        self.style_panel.set_playing(self.replayer.is_playing)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="motion-puppet",
        description="Draw a styled cartoon puppet from 2D pose landmarks.",
    )
    parser.add_argument("--width", type=int, default=DEFAULT_WIDTH, help="Scene width in pixels.")
    parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT, help="Scene height in pixels.")
    parser.add_argument("--style", help="Style JSON file to start with.")
    parser.add_argument("--poses", help="Folder of pose JSON files to replay.")
    parser.add_argument("--fps", type=int, default=DEFAULT_REPLAY_FPS, help="Pose replay rate.")
    parser.add_argument("--snapshot", help="Render the first pose frame to this PNG and exit.")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(levelname)s:%(name)s:%(message)s")

    style = DEFAULT_STYLE
    if args.style:
        try:
            style = load_style(args.style)
        except StyleError as e:
            logger.error("%s", e)
            return 2

    app = QApplication.instance() or QApplication(sys.argv[:1])
    app.setStyle("Fusion")

    if args.snapshot:
        return _write_snapshot(args, style)

    window = PuppetWindow(args.width, args.height, style, args.fps)
    if args.poses and window.load_pose_folder(args.poses):
        window._toggle_playback(True)
    window.show()
    return app.exec()


def _write_snapshot(args, style: StyleConfig) -> int:
    compositor = Compositor(args.width, args.height, style)
    if args.poses:
        frames = load_pose_sequence(args.poses)
        if frames:
            compositor.pose_cell.put(frames[0])
    image = render_image(compositor)
    if not image.save(args.snapshot):
        logger.error("Could not write snapshot to %s", args.snapshot)
        return 1
    logger.info("Snapshot written to %s", args.snapshot)
    return 0


def run_app(argv: Optional[List[str]] = None):
    """Entry point for the application."""
    sys.exit(main(argv))


if __name__ == "__main__":
    run_app()
