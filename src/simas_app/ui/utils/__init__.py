from .icons import render_badge

__all__ = ["render_badge"]
