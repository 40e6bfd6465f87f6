"""
motion_puppet - Real-time Cartoon Puppet
A PySide6-based tool that draws a styled cartoon figure from 2D pose landmarks.
"""

__version__ = "0.1.0"

# Lazy imports to avoid pulling in the Qt widgets for headless use
def __getattr__(name):
    if name == "Landmark":
        from .models import Landmark
        return Landmark
    elif name == "PoseFrame":
        from .models import PoseFrame
        return PoseFrame
    elif name == "StyleConfig":
        from .models import StyleConfig
        return StyleConfig
    elif name == "PRESET_STYLES":
        from .presets import PRESET_STYLES
        return PRESET_STYLES
    elif name == "Compositor":
        from .compositor import Compositor
        return Compositor
    elif name == "PoseCell":
        from .compositor import PoseCell
        return PoseCell
    elif name == "RecordingSurface":
        from .surface import RecordingSurface
        return RecordingSurface
    elif name == "PuppetWindow":
        from .app import PuppetWindow
        return PuppetWindow
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "Landmark",
    "PoseFrame",
    "StyleConfig",
    "PRESET_STYLES",
    "Compositor",
    "PoseCell",
    "RecordingSurface",
    "PuppetWindow",
    "__version__",
]


def main(argv=None):
    """Entry point for the application."""
    from .app import run_app
    return run_app(argv)
