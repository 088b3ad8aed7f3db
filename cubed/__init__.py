"""Ray-casting first-person maze explorer driven by .cub scene files."""

__version__ = "0.1.0"
__all__ = [
    "errors",
    "model",
    "mapfile",
    "checks",
    "parser",
    "textures",
    "raycaster",
    "render",
    "game",
]