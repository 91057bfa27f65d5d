import math
import numpy as np
from numba import jit

# --- CONFIGURATION ---
WIDTH, HEIGHT = 256, 256
FRACTAL_DEPTH = 32
GENERATION_INFINITY = 4.0

# Viewport is a square of +/- RANGE around the origin
RANGE = 2.0
X_MIN, X_MAX = 0.0 - RANGE, 0.0 + RANGE
Y_MIN, Y_MAX = 0.0 - RANGE, 0.0 + RANGE


# --- HELPERS ---
@jit(nopython=True)
def map_range(val, start1, stop1, start2, stop2):
    return start2 + (stop2 - start2) * ((val - start1) / (stop1 - start1))


@jit(nopython=True)
def fill(n, depth):
    """
    Turns an iteration count into a grayscale pixel value.
    Points that never escaped are black.
    """
    if n == depth:
        return 0
    return (n * 32) % 255


# --- KERNEL ---
# The constant c = (cos(angle), sin(angle)) walks the unit circle as the
# animation advances. Escape is tested on |re + im|, not on the modulus.
# n counts the escaping step too, so escaping on the last step reads as never escaped.
@jit(nopython=True)
def julia_kernel(real, imag, c_real, c_imag, depth, threshold):
    n = 0
    while n < depth:
        re = real * real - imag * imag
        im = 2.0 * real * imag

        real = re + c_real
        imag = im + c_imag
        n += 1

        if abs(real + imag) > threshold:
            break
    return n


# --- FRAME ---
@jit(nopython=True)
def render_frame(buffer, width, height, angle,
                 x_min, x_max, y_min, y_max, depth, threshold):
    """
    Fills a flat buffer of width * height packed pixels for one angle.

    The row index is i // height, which is only correct for square buffers.
    Non-square sizes get a stretched row mapping.
    """
    c_real = math.cos(angle)
    c_imag = math.sin(angle)

    for i in range(width * height):
        real = map_range(float(i % width), 0.0, float(width), x_min, x_max)
        imag = map_range(float(i // height), 0.0, float(height), y_min, y_max)

        n = julia_kernel(real, imag, c_real, c_imag, depth, threshold)
        buffer[i] = fill(n, depth)


def render(buffer, width, height, angle):
    render_frame(buffer, width, height, angle,
                 X_MIN, X_MAX, Y_MIN, Y_MAX,
                 FRACTAL_DEPTH, GENERATION_INFINITY)
    return buffer


def new_buffer(width=WIDTH, height=HEIGHT):
    return np.zeros(width * height, dtype=np.uint32)
