"""Pillow compositing of a result image onto a product template"""
from io import BytesIO
from PIL import Image
from catalog import Placement
from errors import DecodeError, GeometryError


def _open(data: bytes, label: str) -> Image.Image:
    try:
        img = Image.open(BytesIO(data))
        return img.convert("RGBA")
    except (OSError, ValueError) as e:
        # UnidentifiedImageError and truncated files are both OSErrors
        raise DecodeError(f"{label} image could not be decoded.") from e


def composite(base_bytes: bytes, overlay_bytes: bytes, placement: Placement) -> bytes:
    """Stretch overlay to the placement box and alpha-composite it onto base.

    Aspect ratio is not preserved. Anything outside the base is clipped.
    Returns PNG bytes; identical inputs give identical output.
    """
    if placement.width <= 0 or placement.height <= 0:
        raise GeometryError(f"Placement size must be positive, got {placement.width}x{placement.height}.")
    if placement.left < 0 or placement.top < 0:
        raise GeometryError(f"Placement offset must be non-negative, got ({placement.left}, {placement.top}).")

    base = _open(base_bytes, "Base")
    overlay = _open(overlay_bytes, "Overlay")

    overlay = overlay.resize((placement.width, placement.height), Image.LANCZOS)
    base.alpha_composite(overlay, dest=(placement.left, placement.top))

    buffer = BytesIO()
    base.convert("RGB").save(buffer, format="PNG")
    return buffer.getvalue()
