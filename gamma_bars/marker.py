import numpy as np
import numpy.typing as npt


def marker_rows(values: npt.NDArray[np.uint8], marked_height: int) -> npt.NDArray[np.intp]:
    """Row where each corrected value lands when 0..255 is laid bottom to top over the bands"""
    inverse = (255.0 - values.astype(np.float64)) / 255.0
    return np.rint(inverse * marked_height).astype(np.intp)


def apply_marker(
    frame: npt.NDArray[np.uint8],
    values: npt.NDArray[np.uint8],
    written: npt.NDArray[np.bool_],
    marked_height: int,
) -> npt.NDArray[np.bool_]:
    """Invert the pixels sitting on the gamma curve and return where they are"""
    own_rows = np.arange(frame.shape[0])[:, np.newaxis]
    hits = written & (marker_rows(values, marked_height) == own_rows)
    frame[hits] = 255 - frame[hits]
    return hits
