import numpy as np

# Rec. 601 luma weights
LUMA_WEIGHTS = (0.299, 0.587, 0.114)


def normalize(image: np.ndarray) -> np.ndarray:
    """
    Convert an 8-bit luminance image into a float field in [0, 1].

    Parameters
    ----------
    image : np.ndarray
        Either an (H, W) array of samples or an (H, W, C) RGB/RGBA image.
        Grayscale images carry R=G=B, so only the first channel is read.

    Returns
    -------
    np.ndarray
        Float64 field of shape (H, W).
    """
    data = np.asarray(image)
    if data.ndim == 3:
        data = data[:, :, 0]
    elif data.ndim != 2:
        raise ValueError(f"Expected an (H, W) or (H, W, C) image, got shape {data.shape}")

    return data.astype(np.float64) / 255.0


def denormalize(field: np.ndarray) -> np.ndarray:
    """
    Quantize a [0, 1] field into an opaque, achromatic RGBA image.

    Values are rounded half-up and clamped to [0, 255]; alpha is always 255.

    Parameters
    ----------
    field : np.ndarray
        Float field of shape (H, W).

    Returns
    -------
    np.ndarray
        Array of shape (H, W, 4), dtype uint8.
    """
    field = np.asarray(field)
    height, width = field.shape
    out = np.empty((height, width, 4), dtype=np.uint8)

    levels = np.clip(np.floor(field * 255.0 + 0.5), 0, 255).astype(np.uint8)
    out[:, :, 0] = levels
    out[:, :, 1] = levels
    out[:, :, 2] = levels
    out[:, :, 3] = 255
    return out


def to_grayscale(image: np.ndarray) -> np.ndarray:
    """
    Collapse an RGB(A) image to luminance, replicated over R, G and B.

    Parameters
    ----------
    image : np.ndarray
        (H, W, 3) or (H, W, 4) uint8 image.

    Returns
    -------
    np.ndarray
        (H, W, 4) uint8 image with R=G=B=luma and alpha 255.
    """
    data = np.asarray(image)
    if data.ndim != 3 or data.shape[2] < 3:
        raise ValueError(f"Expected an (H, W, 3) or (H, W, 4) image, got shape {data.shape}")

    rgb = data[:, :, :3].astype(np.float64)
    luma = rgb[:, :, 0] * LUMA_WEIGHTS[0] + rgb[:, :, 1] * LUMA_WEIGHTS[1] + rgb[:, :, 2] * LUMA_WEIGHTS[2]
    levels = np.clip(np.rint(luma), 0, 255).astype(np.uint8)

    gray = np.empty(data.shape[:2] + (4,), dtype=np.uint8)
    gray[:, :, :3] = levels[:, :, None]
    gray[:, :, 3] = 255
    return gray
