"""
Constants for puppet rendering.
"""

from enum import IntEnum


class PoseLandmark(IntEnum):
    """MediaPipe Pose 33 키포인트 인덱스"""
    NOSE = 0
    LEFT_EYE_INNER = 1
    LEFT_EYE = 2
    LEFT_EYE_OUTER = 3
    RIGHT_EYE_INNER = 4
    RIGHT_EYE = 5
    RIGHT_EYE_OUTER = 6
    LEFT_EAR = 7
    RIGHT_EAR = 8
    MOUTH_LEFT = 9
    MOUTH_RIGHT = 10
    LEFT_SHOULDER = 11
    RIGHT_SHOULDER = 12
    LEFT_ELBOW = 13
    RIGHT_ELBOW = 14
    LEFT_WRIST = 15
    RIGHT_WRIST = 16
    LEFT_PINKY = 17
    RIGHT_PINKY = 18
    LEFT_INDEX = 19
    RIGHT_INDEX = 20
    LEFT_THUMB = 21
    RIGHT_THUMB = 22
    LEFT_HIP = 23
    RIGHT_HIP = 24
    LEFT_KNEE = 25
    RIGHT_KNEE = 26
    LEFT_ANKLE = 27
    RIGHT_ANKLE = 28
    LEFT_HEEL = 29
    RIGHT_HEEL = 30
    LEFT_FOOT_INDEX = 31
    RIGHT_FOOT_INDEX = 32


NUM_LANDMARKS = len(PoseLandmark)

# 렌더링 대상 크기
DEFAULT_WIDTH = 1280
DEFAULT_HEIGHT = 720

# 이 값 미만의 visibility는 그리지 않음
VISIBILITY_THRESHOLD = 0.5

# body unit 하한 (프레임 너비 대비)
SCALE_FLOOR_RATIO = 0.1

# 만화풍 외곽선
OUTLINE_COLOR = "rgba(0, 0, 0, 0.6)"

# 글로우 펄스: base + amplitude * sin(now_ms * rate)
GLOW_BASE = 20.0
GLOW_AMPLITUDE = 10.0
GLOW_RATE = 0.005

# 대기 화면
IDLE_MESSAGE = "Stand back to activate Motion Capture"
IDLE_TEXT_COLOR = "rgba(255, 255, 255, 0.5)"
IDLE_FONT_FAMILY = "Space Grotesk"
IDLE_FONT_SIZE = 20

# 부위별 두께 / 크기 (body unit 대비)
THIGH_SCALE = 0.35
SHIN_SCALE = 0.3
FOOT_SCALE = 0.4
UPPER_ARM_SCALE = 0.3
FOREARM_SCALE = 0.25
HAND_SCALE = 0.35

# 머리
HEAD_EAR_RATIO = 1.8
HEAD_MIN_UNIT_RATIO = 0.6
HEAD_CORNER_RADIUS = 10

# 얼굴 선
FACE_LINE_WIDTH = 2

# 포즈 재생
DEFAULT_REPLAY_FPS = 30
