from typing import List, Optional
import numpy as np
import matplotlib.pyplot as plt


class FieldGrid:
    """
    Triple-buffered storage for a 2D scalar field.

    Holds three same-shaped buffers (previous, current, next) and a scratch
    buffer for relaxation sweeps. Buffers are allocated once; rotation only
    permutes the indices that name them.

    Parameters
    ----------
    seed : np.ndarray
        Normalized initial field of shape (H, W). Copied.

    Attributes
    ----------
    seed : np.ndarray
        Field restored by ``reset``.
    height, width : int
        Grid dimensions.
    """

    def __init__(self, seed: np.ndarray) -> None:
        seed = np.asarray(seed, dtype=np.float64)
        if seed.ndim != 2:
            raise ValueError(f"Seed field must be 2D, got shape {seed.shape}")
        if seed.shape[0] < 3 or seed.shape[1] < 3:
            raise ValueError(f"Grid must be at least 3x3, got {seed.shape[1]}x{seed.shape[0]}")

        self.seed = seed.copy()
        self.height, self.width = seed.shape

        self._buffers: List[np.ndarray] = [np.zeros_like(self.seed) for _ in range(3)]
        self._scratch = np.zeros_like(self.seed)
        self.reset()

    @property
    def previous(self) -> np.ndarray:
        return self._buffers[self._prev]

    @property
    def current(self) -> np.ndarray:
        return self._buffers[self._curr]

    @property
    def next(self) -> np.ndarray:
        return self._buffers[self._next]

    @property
    def scratch(self) -> np.ndarray:
        """Work buffer for the previous relaxation pass. Never rotated."""
        return self._scratch

    def reset(self) -> None:
        """Reseed previous and current from the seed field and zero next."""
        self._prev, self._curr, self._next = 0, 1, 2
        np.copyto(self.current, self.seed)
        np.copyto(self.previous, self.seed)
        self.next.fill(0.0)

    def swap(self) -> None:
        """Two-level rotation: the written buffer becomes the read buffer."""
        self._curr, self._next = self._next, self._curr

    def cycle(self) -> None:
        """Three-level rotation: previous <- current <- next, old previous becomes next."""
        self._prev, self._curr, self._next = self._curr, self._next, self._prev

    def rotate(self, levels: int) -> None:
        if levels == 2:
            self.swap()
        elif levels == 3:
            self.cycle()
        else:
            raise ValueError(f"Unsupported number of time levels: {levels}")

    def snapshot(self) -> np.ndarray:
        """Independent copy of the current buffer."""
        return self.current.copy()

    def preview(self, title: Optional[str] = None) -> None:
        """
        Plot the current buffer as a grayscale image.

        Useful for checking the seed or a boundary policy before running.
        """
        plt.figure(figsize=(6, 6))
        plt.imshow(self.current, cmap='gray', vmin=0.0, vmax=1.0, origin='upper')
        plt.colorbar(label="u")
        plt.title(title or f"Field {self.width}x{self.height}")
        plt.xlabel("x [px]")
        plt.ylabel("y [px]")
        plt.show()
