import numpy as np

from frame_timer import FrameTimer, format_timing
from fractal_window import FractalWindow
from julia_renderer import HEIGHT, WIDTH, new_buffer, render

# --- CONFIGURATION ---
ANGLE_STEP = 0.01
TITLE = "Fractal - ESC to exit"
SCALE = 2
BACKGROUND = (0, 0, 20)
UPDATE_INTERVAL = 0.0166  # ~60 fps cap
EXIT_KEY = 'escape'


class JuliaAnimation:
    """Everything the main loop mutates from one frame to the next."""

    def __init__(self, width=WIDTH, height=HEIGHT, angle_step=ANGLE_STEP, timer=None):
        self.width = width
        self.height = height
        self.angle_step = angle_step
        self.buffer = new_buffer(width, height)
        # Never wrapped, only its cos/sin are used
        self.angle = 0.0
        self.timer = timer if timer is not None else FrameTimer()

    def step(self):
        self.timer.start_frame()
        render(self.buffer, self.width, self.height, self.angle)
        self.angle += self.angle_step
        self.timer.end_frame()

        # Report once per full lap of the timer
        if self.timer.index == 0:
            print(format_timing(self.timer.average()))

        return self.buffer


def warmup():
    # Numba compiles on the first call, keep that out of the frame timings
    print("Compiling JIT functions (Warmup)...")
    render(np.zeros(16, dtype=np.uint32), 4, 4, 0.0)


def main():
    warmup()

    window = FractalWindow(TITLE, WIDTH, HEIGHT, scale=SCALE, background=BACKGROUND)
    window.limit_update_rate(UPDATE_INTERVAL)

    animation = JuliaAnimation()

    while window.is_open() and not window.is_key_down(EXIT_KEY):
        buffer = animation.step()
        # WindowError is left to propagate, there is nothing to draw on without it
        window.update_with_buffer(buffer, animation.width, animation.height)

    window.close()


if __name__ == "__main__":
    main()
