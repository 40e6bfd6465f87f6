"""
Pose replay - feeds recorded pose frames into a PoseCell.
"""

import glob
import json
import logging
import os
from typing import List, Optional

from PySide6.QtCore import QObject, QTimer, Signal

from .compositor import PoseCell
from .constants import DEFAULT_REPLAY_FPS
from .models import PoseFrame

logger = logging.getLogger(__name__)


def parse_pose_frame(data) -> Optional[PoseFrame]:
    """
    JSON 한 프레임 파싱
    {"poseLandmarks": [...]} 또는 리스트. 키포인트가 없으면 None (대기 상태)
    """
    if isinstance(data, dict):
        data = data.get("poseLandmarks")
    if not data:
        return None

    first = data[0]
    if isinstance(first, dict):
        return PoseFrame.from_landmarks(data)
    return PoseFrame.from_array(data)


def load_pose_sequence(folder: str) -> List[Optional[PoseFrame]]:
    """폴더의 *.json 파일을 이름 순으로 읽음. 읽지 못한 파일은 None으로 대체"""
    files = sorted(glob.glob(os.path.join(folder, "*.json")))
    frames: List[Optional[PoseFrame]] = []

    for file_path in files:
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            frames.append(parse_pose_frame(data))
        except (OSError, ValueError, KeyError, TypeError, IndexError) as e:
            logger.warning("Skipping pose file %s: %s", file_path, e)
            frames.append(None)

    logger.info("Loaded %d pose frames from %s", len(frames), folder)
    return frames


class PoseReplayer(QObject):
    """
    녹화된 포즈를 자체 타이머로 PoseCell에 기록 (렌더 주기와 독립)
    마지막 프레임 다음에는 처음으로 돌아감
    """

    frame_changed = Signal(int)

    def __init__(self, cell: PoseCell, frames: Optional[List[Optional[PoseFrame]]] = None,
                 fps: int = DEFAULT_REPLAY_FPS, parent=None):
        super().__init__(parent)
        self.cell = cell
        self.frames: List[Optional[PoseFrame]] = list(frames or [])
        self.current_frame = 0
        self.fps = fps
        self.timer = QTimer(self)
        self.timer.timeout.connect(self._on_timer_tick)

    @property
    def is_playing(self) -> bool:
        return self.timer.isActive()

    def set_frames(self, frames: List[Optional[PoseFrame]]):
        self.stop()
        self.frames = list(frames)
        self.current_frame = 0
        if self.frames:
            self._publish()

    def set_fps(self, fps: int):
        self.fps = max(1, int(fps))
        if self.timer.isActive():
            self.timer.start(int(1000 / self.fps))

    def start(self):
        if not self.frames:
            return
        self.timer.start(int(1000 / self.fps))

    def stop(self):
        self.timer.stop()

    def toggle(self) -> bool:
        if self.is_playing:
            self.stop()
        else:
            self.start()
        return self.is_playing

    def step(self):
        """한 프레임 진행"""
        if not self.frames:
            return
        self.current_frame = (self.current_frame + 1) % len(self.frames)
        self._publish()

    def _on_timer_tick(self):
        self.step()

    def _publish(self):
        self.cell.put(self.frames[self.current_frame])
        self.frame_changed.emit(self.current_frame)
