"""
Interactive window for a FractalSession, built on matplotlib.

Controls:
    left drag      -> zoom onto the dragged rectangle
    left click     -> recenter on the clicked pixel
    right click, q -> quit
    r              -> back to the default view
"""

from __future__ import annotations

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import Rectangle

from xfractals.session import FractalSession
from xfractals.utils import clamp_pixel

_NON_INTERACTIVE = {"agg", "cairo", "pdf", "pgf", "ps", "svg", "template"}


class DisplayError(RuntimeError):
    """The window or its drawing surface could not be created."""


def require_interactive_backend():
    backend = plt.get_backend().lower()
    if backend in _NON_INTERACTIVE or backend.startswith("module://matplotlib_inline"):
        raise DisplayError(f"No interactive display available (matplotlib backend '{backend}')")


class FractalViewer:
    def __init__(self, session: FractalSession, *, dpi: int = 100, require_interactive: bool = True):
        if require_interactive:
            require_interactive_backend()

        self.session = session
        if session.frame is None:
            session.start()

        try:
            self.fig = plt.figure(figsize=(session.width / dpi, session.height / dpi), dpi=dpi)
        except Exception as e:
            raise DisplayError(f"Could not create fractal window: {e}") from e

        self.ax = self.fig.add_axes([0.0, 0.0, 1.0, 1.0])
        self.ax.set_axis_off()
        self.image = self.ax.imshow(session.frame.to_rgb(), interpolation="nearest")

        self.overlay = Rectangle((0, 0), 0, 0, fill=False, edgecolor="white", linewidth=1)
        self.overlay.set_visible(False)
        self.ax.add_patch(self.overlay)

        manager = self.fig.canvas.manager
        if manager is not None:
            manager.set_window_title(session.kind.title)

        self._press = None
        self.running = True

        self.fig.canvas.mpl_connect("button_press_event", self.on_mouse_press)
        self.fig.canvas.mpl_connect("button_release_event", self.on_mouse_release)
        self.fig.canvas.mpl_connect("motion_notify_event", self.on_mouse_motion)
        self.fig.canvas.mpl_connect("key_press_event", self.on_key_press)
        self.fig.canvas.mpl_connect("close_event", self.on_close)

    def _event_pixel(self, event, outside: bool = False):
        """
        Grid pixel under the pointer. With outside=True a pointer past the
        image edge maps through the data transform and clamps to the edge.
        """
        if event.inaxes is self.ax and event.xdata is not None and event.ydata is not None:
            x, y = event.xdata, event.ydata
        elif outside and getattr(event, "x", None) is not None and getattr(event, "y", None) is not None:
            x, y = self.ax.transData.inverted().transform((event.x, event.y))
        else:
            return None
        # imshow centers pixel i on coordinate i
        return clamp_pixel(
            (int(np.floor(x + 0.5)), int(np.floor(y + 0.5))),
            self.session.width,
            self.session.height,
        )

    def redraw(self):
        self.image.set_data(self.session.frame.to_rgb())
        self.fig.canvas.draw_idle()

    def on_mouse_press(self, event):
        if event.button == 3:
            self.close()
            return
        if event.button == 1:
            self._press = self._event_pixel(event)

    def on_mouse_motion(self, event):
        if self._press is None:
            return
        current = self._event_pixel(event, outside=True)
        if current is None:
            return
        (x1, y1), (x2, y2) = self._press, current
        self.overlay.set_bounds(min(x1, x2) - 0.5, min(y1, y2) - 0.5, abs(x2 - x1), abs(y2 - y1))
        self.overlay.set_visible(True)
        self.fig.canvas.draw_idle()

    def on_mouse_release(self, event):
        if event.button != 1 or self._press is None:
            return
        p1 = self._press
        # no pointer position at all: treat as a click on the press point
        p2 = self._event_pixel(event, outside=True) or p1
        self._press = None
        self.overlay.set_visible(False)

        self.session.select(p1, p2)
        self.redraw()

    def on_key_press(self, event):
        if event.key == "q":
            self.close()
        elif event.key == "r":
            self.session.reset()
            self.redraw()

    def on_close(self, event):
        self.running = False

    def close(self):
        self.running = False
        plt.close(self.fig)

    def show(self) -> int:
        """Block in the toolkit's event loop until the window goes away."""
        plt.show()
        self.running = False
        return 0
