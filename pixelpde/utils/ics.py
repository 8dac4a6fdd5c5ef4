from typing import Optional, Sequence
import numpy as np


def _to_rgba(levels: np.ndarray) -> np.ndarray:
    """Pack (H, W) gray levels into an opaque (H, W, 4) uint8 image."""
    levels = np.clip(np.rint(levels), 0, 255).astype(np.uint8)
    image = np.empty(levels.shape + (4,), dtype=np.uint8)
    image[:, :, :3] = levels[:, :, None]
    image[:, :, 3] = 255
    return image


def _pixel_centers(width: int, height: int):
    y, x = np.mgrid[0:height, 0:width]
    return x + 0.5, y + 0.5


def _segment_distance(X, Y, start, end) -> np.ndarray:
    """Distance from every pixel center to the segment start-end."""
    (x0, y0), (x1, y1) = start, end
    dx, dy = x1 - x0, y1 - y0
    if dx == 0 and dy == 0:
        return np.hypot(X - x0, Y - y0)
    t = np.clip(((X - x0) * dx + (Y - y0) * dy) / (dx * dx + dy * dy), 0.0, 1.0)
    return np.hypot(X - (x0 + t * dx), Y - (y0 + t * dy))


def uniform_image(width: int, height: int, level: int = 128) -> np.ndarray:
    """Flat grayscale image."""
    return _to_rgba(np.full((height, width), float(level)))


def gaussian_image(
    width: int,
    height: int,
    center: Optional[Sequence[float]] = None,
    sigma: Optional[float] = None,
    peak: int = 255,
    background: int = 0
) -> np.ndarray:
    """
    Grayscale Gaussian pulse.

    Parameters
    ----------
    width, height : int
        Image size in pixels.
    center : sequence of float, optional
        Pulse center (x, y) in pixels. Defaults to the image center.
    sigma : float, optional
        Pulse width in pixels. Defaults to a tenth of the smaller side.
    peak, background : int
        Gray levels at the center and far away.

    Returns
    -------
    np.ndarray
        (H, W, 4) uint8 image.
    """
    if center is None:
        center = (width / 2.0, height / 2.0)
    if sigma is None:
        sigma = min(width, height) / 10.0

    X, Y = _pixel_centers(width, height)
    dist_sq = (X - center[0])**2 + (Y - center[1])**2
    pulse = np.exp(-dist_sq / (2 * sigma**2))
    return _to_rgba(background + (peak - background) * pulse)


def sample_image(width: int = 512, height: int = 512) -> np.ndarray:
    """
    Demo texture: dark radial gradient with a bright ring and two diagonals.

    The gradient runs from gray 0x44 at the center to 0x11 at half the width;
    the ring (radius width/3) and the diagonals (inset 10 px) are 2 px wide
    strokes of gray 0xaa.

    Returns
    -------
    np.ndarray
        (H, W, 4) uint8 image.
    """
    X, Y = _pixel_centers(width, height)
    cx, cy = width / 2.0, height / 2.0

    r = np.hypot(X - cx, Y - cy)
    levels = 0x44 + (0x11 - 0x44) * np.clip(r / (width / 2.0), 0.0, 1.0)

    half_stroke = 1.0
    ring = np.abs(r - width / 3.0) <= half_stroke
    inset = 10
    diag_a = _segment_distance(X, Y, (inset, inset), (width - inset, height - inset)) <= half_stroke
    diag_b = _segment_distance(X, Y, (width - inset, inset), (inset, height - inset)) <= half_stroke

    levels[ring | diag_a | diag_b] = 0xaa
    return _to_rgba(levels)
