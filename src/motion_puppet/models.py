"""
Data models for puppet rendering.
"""

import logging
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

import numpy as np

from .constants import NUM_LANDMARKS, VISIBILITY_THRESHOLD

logger = logging.getLogger(__name__)


class HeadType(str, Enum):
    CIRCLE = "circle"
    SQUARE = "square"
    ROBOT = "robot"
    EMOJI = "emoji"


class FaceStyle(str, Enum):
    NONE = "none"
    SMILE = "smile"
    COOL = "cool"
    SURPRISED = "surprised"


class TorsoType(str, Enum):
    SOLID = "solid"
    SHIRT_PANTS = "shirt_pants"


@dataclass(frozen=True)
class Landmark:
    """정규화된 단일 키포인트 (x, y는 [0, 1])"""
    x: float
    y: float
    z: float = 0.0
    visibility: Optional[float] = None


@dataclass(frozen=True)
class ScreenPoint:
    """화면 좌표로 투영된 키포인트. 한 번의 렌더 동안만 유효"""
    x: float
    y: float
    v: float

    @property
    def is_visible(self) -> bool:
        return self.v >= VISIBILITY_THRESHOLD


@dataclass(frozen=True)
class PoseFrame:
    """한 프레임의 33개 키포인트"""
    landmarks: Tuple[Landmark, ...]

    def __post_init__(self):
        if len(self.landmarks) != NUM_LANDMARKS:
            raise ValueError(
                f"PoseFrame needs {NUM_LANDMARKS} landmarks, got {len(self.landmarks)}"
            )

    def __getitem__(self, index: int) -> Landmark:
        return self.landmarks[index]

    def __len__(self) -> int:
        return len(self.landmarks)

    @classmethod
    def from_array(cls, array) -> "PoseFrame":
        """(33, 3) 또는 (33, 4) 배열에서 생성. 3열이면 visibility 없음"""
        arr = np.asarray(array, dtype=float)
        if arr.ndim != 2 or arr.shape[0] != NUM_LANDMARKS or arr.shape[1] not in (3, 4):
            raise ValueError(
                f"Expected landmark array of shape ({NUM_LANDMARKS}, 3|4), got {arr.shape}"
            )

        landmarks = []
        for row in arr:
            visibility = float(row[3]) if arr.shape[1] == 4 else None
            landmarks.append(Landmark(float(row[0]), float(row[1]), float(row[2]), visibility))
        return cls(tuple(landmarks))

    @classmethod
    def from_landmarks(cls, items: Iterable[Mapping[str, Any]]) -> "PoseFrame":
        """MediaPipe poseLandmarks 형식 ({x, y, z, visibility?}) 에서 생성"""
        landmarks = []
        for item in items:
            if not isinstance(item, dict):
                raise ValueError(f"Expected a landmark object, got {type(item).__name__}")
            visibility = item.get("visibility")
            landmarks.append(Landmark(
                x=float(item["x"]),
                y=float(item["y"]),
                z=float(item.get("z", 0.0)),
                visibility=None if visibility is None else float(visibility),
            ))
        return cls(tuple(landmarks))


# 필수 필드 (스타일 생성기가 보장해야 하는 필드)
REQUIRED_STYLE_FIELDS = (
    "name", "backgroundColor", "headType", "headColor", "torsoColor",
    "limbColor", "jointColor", "strokeWidth", "glowEffect", "description",
)

# 문자열이 아니면 기본 모양으로 대체되는 필드
ENUM_STYLE_FIELDS = ("head_type", "face_style", "torso_type")


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


@dataclass(frozen=True)
class StyleConfig:
    """캐릭터 스타일 설정. 렌더 한 번 동안 불변"""
    name: Optional[str] = None
    background_color: Optional[str] = None
    head_type: Optional[str] = None
    head_color: Optional[str] = None
    torso_color: Optional[str] = None
    limb_color: Optional[str] = None
    joint_color: Optional[str] = None
    stroke_width: Optional[float] = None
    glow_effect: Optional[bool] = None
    description: Optional[str] = None

    # 선택 필드
    head_emoji: Optional[str] = None
    face_style: Optional[str] = None
    torso_type: Optional[str] = None
    torso_secondary_color: Optional[str] = None
    sleeve_color: Optional[str] = None
    shoe_color: Optional[str] = None
    image_overlay: Optional[str] = None
    image_mode: Optional[str] = None

    extra: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StyleConfig":
        """스타일 생성기 JSON (camelCase) 파싱. 누락된 필수 필드는 None으로 둠"""
        known = {_camel(f.name): f.name for f in fields(cls) if f.name != "extra"}
        kwargs = {}
        extra = {}
        for key, value in data.items():
            if key in known:
                kwargs[known[key]] = value
            else:
                extra[key] = value

        missing = [key for key in REQUIRED_STYLE_FIELDS if data.get(key) is None]
        if missing:
            logger.warning("Style %r is missing required fields: %s",
                           data.get("name"), ", ".join(missing))

        # 숫자로 읽을 수 없으면 ValueError/TypeError (load_style에서 StyleError로 감쌈)
        if kwargs.get("stroke_width") is not None:
            kwargs["stroke_width"] = float(kwargs["stroke_width"])

        glow = kwargs.get("glow_effect")
        if glow is not None and not isinstance(glow, bool):
            logger.warning("Ignoring non-boolean glowEffect %r", glow)
            kwargs["glow_effect"] = None

        for name in ENUM_STYLE_FIELDS:
            value = kwargs.get(name)
            if value is not None and not isinstance(value, str):
                logger.warning("Ignoring malformed %s %r", _camel(name), value)
                kwargs[name] = None

        return cls(extra=extra, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """camelCase 매핑으로 변환 (None 필드는 생략)"""
        result = {}
        for f in fields(self):
            if f.name == "extra":
                continue
            value = getattr(self, f.name)
            if value is not None:
                result[_camel(f.name)] = value
        result.update(self.extra)
        return result

