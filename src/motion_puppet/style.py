"""
Style resolution and style file loading.
"""

import json
import logging
from dataclasses import dataclass
from typing import Optional

from .models import StyleConfig, TorsoType

logger = logging.getLogger(__name__)


class StyleError(Exception):
    """스타일 파일을 읽을 수 없을 때"""


@dataclass(frozen=True)
class ResolvedStyle:
    """부위별로 확정된 그리기 파라미터"""
    background: Optional[str]
    head: Optional[str]
    torso: Optional[str]
    torso_secondary: Optional[str]
    limb: Optional[str]
    sleeve: Optional[str]
    hand: Optional[str]
    shoe: Optional[str]
    outline_width: float
    glow: bool
    head_type: Optional[str]
    head_emoji: Optional[str]
    face_style: Optional[str]
    torso_type: Optional[str]

    @property
    def split_torso(self) -> bool:
        """shirt_pants 이면서 보조 색상이 있을 때만 상하 분할"""
        return self.torso_type == TorsoType.SHIRT_PANTS and bool(self.torso_secondary)


def resolve_style(style: StyleConfig) -> ResolvedStyle:
    """
    StyleConfig를 부위별 색상으로 변환
    신발: shoeColor -> jointColor, 소매: sleeveColor -> limbColor
    """
    return ResolvedStyle(
        background=style.background_color,
        head=style.head_color,
        torso=style.torso_color,
        torso_secondary=style.torso_secondary_color,
        limb=style.limb_color,
        sleeve=style.sleeve_color or style.limb_color,
        hand=style.joint_color,
        shoe=style.shoe_color or style.joint_color,
        outline_width=float(style.stroke_width or 0.0),
        glow=bool(style.glow_effect),
        head_type=style.head_type,
        head_emoji=style.head_emoji,
        face_style=style.face_style,
        torso_type=style.torso_type,
    )


def load_style(path) -> StyleConfig:
    """스타일 JSON 파일 로드"""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise StyleError(f"Cannot read style file {path}: {e}") from e

    if not isinstance(data, dict):
        raise StyleError(f"Style file {path} must contain a JSON object")

    try:
        style = StyleConfig.from_dict(data)
    except (TypeError, ValueError) as e:
        raise StyleError(f"Invalid style in {path}: {e}") from e
    logger.info("Loaded style %r from %s", style.name, path)
    return style
