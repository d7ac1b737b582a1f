import numbers
import numpy as np

MAX_LUMINANCE = 255


def extract(cond, x):
    if isinstance(x, numbers.Number):
        return x
    else:
        return np.extract(cond, x)


def clamp_luminance(values):
    '''
    Saturating cast of real luminance values to 8 bits: NaN becomes 0, the rest is clipped into [0, 255]
    and truncated toward zero.
    '''
    values = np.nan_to_num(np.asarray(values, dtype=np.float64), nan=0.0)
    return np.clip(values, 0, MAX_LUMINANCE).astype(np.uint8)
