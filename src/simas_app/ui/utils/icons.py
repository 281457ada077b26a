from __future__ import annotations

from functools import lru_cache

from PIL import Image, ImageDraw, ImageFont

# Drawn at twice the display size so CTkImage stays sharp on scaled screens
RENDER_SCALE = 2


@lru_cache(maxsize=32)
def render_badge(text: str, size: tuple[int, int], fill: str, text_fill: str = "#ffffff") -> Image.Image:
    """Rounded square with up to two centred characters, used for sidebar icons."""
    width, height = size[0] * RENDER_SCALE, size[1] * RENDER_SCALE
    image = Image.new("RGBA", (width, height), (0, 0, 0, 0))
    draw = ImageDraw.Draw(image)
    draw.rounded_rectangle((0, 0, width - 1, height - 1), radius=width // 4, fill=fill)

    label = text.strip()[:2].upper()
    if label:
        font = ImageFont.load_default(size=height // 2)
        left, top, right, bottom = draw.textbbox((0, 0), label, font=font)
        position = ((width - (right - left)) / 2 - left, (height - (bottom - top)) / 2 - top)
        draw.text(position, label, font=font, fill=text_fill)

    return image
