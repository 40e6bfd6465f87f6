"""
Control widgets for the puppet viewer - StylePanel.
"""

from typing import Optional

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QPushButton, QSpinBox,
    QGroupBox, QComboBox, QCheckBox,
)
from PySide6.QtCore import Signal

from .constants import DEFAULT_REPLAY_FPS
from .models import StyleConfig
from .presets import PRESET_STYLES


class StylePanel(QWidget):
    """스타일 선택 및 포즈 재생 컨트롤 패널"""

    # 시그널 정의
    preset_selected = Signal(str)
    load_style_requested = Signal()
    glow_toggled = Signal(bool)
    open_poses_requested = Signal()
    playback_toggled = Signal(bool)
    fps_changed = Signal(int)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.is_playing = False
        self._total_frames = 0
        self._setup_ui()

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setSpacing(12)
        layout.setContentsMargins(5, 5, 5, 5)

        # === 캐릭터 스타일 ===
        style_group = QGroupBox("캐릭터 스타일")
        style_group.setStyleSheet(self._get_group_style())
        style_layout = QVBoxLayout(style_group)

        self.preset_combo = QComboBox()
        self.preset_combo.addItems([style.name for style in PRESET_STYLES])
        self.preset_combo.textActivated.connect(lambda t: self.preset_selected.emit(t))
        self.preset_combo.setStyleSheet(self._get_combo_style())
        style_layout.addWidget(self.preset_combo)

        self.load_style_btn = QPushButton("스타일 JSON 불러오기")
        self.load_style_btn.setStyleSheet(self._get_button_style())
        self.load_style_btn.clicked.connect(self.load_style_requested.emit)
        style_layout.addWidget(self.load_style_btn)

        self.glow_cb = QCheckBox("글로우 효과")
        self.glow_cb.setStyleSheet(self._get_checkbox_style())
        self.glow_cb.toggled.connect(lambda checked: self.glow_toggled.emit(checked))
        style_layout.addWidget(self.glow_cb)

        self.description_label = QLabel("")
        self.description_label.setWordWrap(True)
        self.description_label.setStyleSheet("color: #a0a0a0; font-size: 11px;")
        style_layout.addWidget(self.description_label)

        layout.addWidget(style_group)

        # === 포즈 재생 ===
        replay_group = QGroupBox("포즈 재생")
        replay_group.setStyleSheet(self._get_group_style())
        replay_layout = QVBoxLayout(replay_group)

        self.open_poses_btn = QPushButton("포즈 폴더 열기")
        self.open_poses_btn.setStyleSheet(self._get_button_style())
        self.open_poses_btn.clicked.connect(self.open_poses_requested.emit)
        replay_layout.addWidget(self.open_poses_btn)

        play_layout = QHBoxLayout()
        self.play_btn = QPushButton("▶")
        self.play_btn.setFixedSize(40, 40)
        self.play_btn.setEnabled(False)
        self.play_btn.clicked.connect(self._toggle_playback)
        self.play_btn.setStyleSheet(self._get_button_style())
        play_layout.addWidget(self.play_btn)

        fps_label = QLabel("FPS:")
        fps_label.setStyleSheet("color: #a0a0a0;")
        play_layout.addWidget(fps_label)

        self.fps_spin = QSpinBox()
        self.fps_spin.setRange(1, 120)
        self.fps_spin.setValue(DEFAULT_REPLAY_FPS)
        self.fps_spin.valueChanged.connect(lambda v: self.fps_changed.emit(v))
        self.fps_spin.setStyleSheet(self._get_spinbox_style())
        play_layout.addWidget(self.fps_spin)
        play_layout.addStretch()
        replay_layout.addLayout(play_layout)

        self.frame_label = QLabel("포즈 없음")
        self.frame_label.setStyleSheet("color: #e0e0e0; font-size: 13px;")
        replay_layout.addWidget(self.frame_label)

        layout.addWidget(replay_group)
        layout.addStretch()

    def show_style(self, style: StyleConfig):
        """현재 스타일을 패널에 반영 (시그널 발생 없음)"""
        self.preset_combo.blockSignals(True)
        index = self.preset_combo.findText(style.name or "")
        if index < 0:
            self.preset_combo.addItem(style.name or "(이름 없음)")
            index = self.preset_combo.count() - 1
        self.preset_combo.setCurrentIndex(index)
        self.preset_combo.blockSignals(False)

        self.glow_cb.blockSignals(True)
        self.glow_cb.setChecked(bool(style.glow_effect))
        self.glow_cb.blockSignals(False)

        self.description_label.setText(style.description or "")

    def set_replay_ready(self, total_frames: int):
        self.play_btn.setEnabled(total_frames > 0)
        self.set_current_frame(0, total_frames)

    def set_current_frame(self, frame: int, total: Optional[int] = None):
        if total is not None:
            self._total_frames = total
        total = self._total_frames
        if total <= 0:
            self.frame_label.setText("포즈 없음")
        else:
            self.frame_label.setText(f"{frame} / {total - 1}")

    def set_playing(self, playing: bool):
        self.is_playing = playing
        self.play_btn.setText("■" if playing else "▶")

    def _toggle_playback(self):
        self.set_playing(not self.is_playing)
        self.playback_toggled.emit(self.is_playing)

    def _get_group_style(self):
        return """
            QGroupBox {
                color: #e0e0e0;
                font-size: 13px;
                font-weight: bold;
                border: 1px solid #3d3d5c;
                border-radius: 8px;
                margin-top: 10px;
                padding-top: 10px;
            }
            QGroupBox::title {
                subcontrol-origin: margin;
                left: 10px;
                padding: 0 5px;
            }
        """

    def _get_button_style(self):
        return """
            QPushButton {
                background-color: #4ECDC4;
                color: #1a1a2e;
                border: none;
                padding: 8px 20px;
                font-size: 12px;
                font-weight: bold;
                border-radius: 6px;
            }
            QPushButton:hover {
                background-color: #5FE6DD;
            }
            QPushButton:disabled {
                background-color: #3d3d5c;
                color: #a0a0a0;
            }
        """

    def _get_spinbox_style(self):
        return """
            QSpinBox {
                background-color: #2d2d44;
                color: #e0e0e0;
                border: 1px solid #3d3d5c;
                border-radius: 4px;
                padding: 4px 8px;
            }
        """

    def _get_checkbox_style(self):
        return """
            QCheckBox {
                color: #e0e0e0;
                spacing: 8px;
            }
            QCheckBox::indicator {
                width: 18px;
                height: 18px;
                border-radius: 4px;
                border: 2px solid #3d3d5c;
                background-color: #2d2d44;
            }
            QCheckBox::indicator:checked {
                background-color: #4ECDC4;
                border-color: #4ECDC4;
            }
        """

    def _get_combo_style(self):
        return """
            QComboBox {
                background-color: #2d2d44;
                color: #e0e0e0;
                border: 1px solid #3d3d5c;
                border-radius: 6px;
                padding: 8px 12px;
                font-size: 12px;
            }
            QComboBox:hover {
                border-color: #4ECDC4;
            }
            QComboBox QAbstractItemView {
                background-color: #2d2d44;
                color: #e0e0e0;
                border: 1px solid #3d3d5c;
                selection-background-color: #4ECDC4;
                selection-color: #1a1a2e;
            }
        """
