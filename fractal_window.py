import time
import numpy as np
import matplotlib.pyplot as plt

# Figures are sized in inches, so pick a fixed dpi to get exact pixel sizes
DPI = 100
MIN_EVENT_WAIT = 0.001


class WindowError(RuntimeError):
    pass


def unpack_rgb(buffer, width, height):
    """
    Splits packed 0x00RRGGBB pixels into an (height, width, 3) uint8 image.
    """
    pixels = np.asarray(buffer, dtype=np.uint32).reshape((height, width))
    rgb = np.empty((height, width, 3), dtype=np.uint8)
    rgb[..., 0] = (pixels >> 16) & 0xFF
    rgb[..., 1] = (pixels >> 8) & 0xFF
    rgb[..., 2] = pixels & 0xFF
    return rgb


def base_key(key):
    # matplotlib reports held modifiers as a prefix, e.g. 'shift+escape'
    if key == '+' or key.endswith('++'):
        return '+'
    return key.rsplit('+', 1)[-1]


class FractalWindow:
    """
    A small framebuffer window on top of matplotlib.

    The image keeps its aspect ratio when the window is resized. Input is
    only processed while update_with_buffer() is pumping GUI events.
    """

    def __init__(self, title, width, height, scale=2, background=(0, 0, 20)):
        self.width = width
        self.height = height
        self._keys = set()
        self._closed = False
        self._min_interval = None
        self._last_update = None

        face = tuple(channel / 255.0 for channel in background)
        try:
            self.fig = plt.figure(figsize=(width * scale / DPI, height * scale / DPI),
                                  dpi=DPI, facecolor=face)
        except Exception as exc:
            raise WindowError("Unable to Open Window") from exc
        self._number = self.fig.number

        self.ax = self.fig.add_axes([0, 0, 1, 1])
        self.ax.axis('off')
        self.ax.set_facecolor(face)

        # 'nearest' interpolation keeps the upscaled pixels sharp
        self.image = self.ax.imshow(np.zeros((height, width, 3), dtype=np.uint8),
                                    origin='upper', interpolation='nearest', aspect='equal')

        manager = self.fig.canvas.manager
        if manager is not None:
            manager.set_window_title(title)

        self.fig.canvas.mpl_connect('key_press_event', self._on_key_press)
        self.fig.canvas.mpl_connect('key_release_event', self._on_key_release)
        self.fig.canvas.mpl_connect('close_event', self._on_close)
        # Releases are not delivered while the window is unfocused
        self.fig.canvas.mpl_connect('figure_leave_event', self._on_leave)

        plt.show(block=False)

    def _on_key_press(self, event):
        if event.key is not None:
            self._keys.add(base_key(event.key))

    def _on_key_release(self, event):
        if event.key is not None:
            self._keys.discard(base_key(event.key))

    def _on_leave(self, event):
        self._keys.clear()

    def _on_close(self, event):
        self._closed = True

    def limit_update_rate(self, seconds):
        self._min_interval = seconds

    def is_open(self):
        return not self._closed and plt.fignum_exists(self._number)

    def is_key_down(self, key):
        return key in self._keys

    def update_with_buffer(self, buffer, width, height):
        if not self.is_open():
            raise WindowError("Window was destroyed")
        if len(buffer) != width * height:
            raise WindowError(
                f"Buffer holds {len(buffer)} pixels, expected {width}x{height}")

        self.image.set_data(unpack_rgb(buffer, width, height))
        self.fig.canvas.draw_idle()

        wait = MIN_EVENT_WAIT
        now = time.perf_counter()
        if self._min_interval is not None and self._last_update is not None:
            wait = max(wait, self._min_interval - (now - self._last_update))

        # Same as plt.pause(), without raising the window every frame
        self.fig.canvas.start_event_loop(wait)
        self._last_update = time.perf_counter()

    def close(self):
        if not self._closed:
            plt.close(self.fig)
            self._closed = True
