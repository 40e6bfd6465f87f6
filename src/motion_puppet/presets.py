"""
Built-in character styles.
"""

from .models import StyleConfig


PRESET_STYLES = [
    StyleConfig(
        name="Neon Striker",
        background_color="#0f172a",
        head_type="circle",
        head_color="#38bdf8",
        face_style="cool",
        torso_color="#0284c7",
        torso_type="solid",
        limb_color="#0ea5e9",
        joint_color="#e0f2fe",
        stroke_width=4.0,
        glow_effect=True,
        description="A futuristic glowing agent.",
    ),
    StyleConfig(
        name="Rusty Mech",
        background_color="#292524",
        head_type="robot",
        head_color="#a8a29e",
        torso_color="#ea580c",
        torso_type="shirt_pants",
        torso_secondary_color="#44403c",
        limb_color="#78716c",
        joint_color="#fcd34d",
        shoe_color="#1c1917",
        stroke_width=6.0,
        glow_effect=False,
        description="Heavy industrial loader bot.",
    ),
    StyleConfig(
        name="Pumpkin King",
        background_color="#2a0a18",
        head_type="emoji",
        head_color="#fb923c",
        head_emoji="\U0001F383",
        torso_color="#65a30d",
        torso_type="shirt_pants",
        torso_secondary_color="#3f2c22",  # 갈색 바지
        limb_color="#84cc16",
        joint_color="#ea580c",
        stroke_width=5.0,
        glow_effect=True,
        description="Spooky seasonal vibes.",
    ),
]

PRESETS_BY_NAME = {style.name: style for style in PRESET_STYLES}

DEFAULT_STYLE = PRESET_STYLES[0]
