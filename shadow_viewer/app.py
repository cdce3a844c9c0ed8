"""Tkinter viewer for Shadowcaster.

Shows a scene top-down with the shadows of every light recomputed after each
change: pale where at least one light is blocked, dark where every light is.
The pieces:

  * ``renderer.py`` draws the scene and shadow regions with Pillow; the
    image is shown on a Tk canvas.
  * ``interaction.py`` holds the camera (zoom/pan) and the drag-and-drop
    helpers, so this file is only event wiring.
  * ``snapshot_io.py`` saves the view as PNG with the scene embedded and
    loads scenes back from PNG or JSON.

Controls: drag lights and obstacles with the left mouse button (q/e rotate
the obstacle being dragged), scroll to zoom, arrow keys to pan, 0 to reset
the camera, Escape to quit.
"""

import math
import time
import tkinter as tk
from tkinter import filedialog, messagebox, ttk

from PIL import ImageTk

from shadow_engine.aggregate import aggregate_scene
from shadow_engine.errors import BooleanOperationError
from shadow_engine.scenes import BUILTIN_SCENES, get_scene

from .interaction import (
    PAN_STEP,
    ViewState,
    hit_test,
    move_item,
    rotate_obstacle,
)
from .renderer import ShadowRenderer, render_image
from .snapshot_io import load_snapshot, save_snapshot_png

WINDOW_SIZE = (1024, 768)
CANVAS_BG = "#1e1e1e"
SUPERSAMPLE = 2
ROTATE_STEP_DEG = 5.0


class App:
    def __init__(self, scene_name="museum"):
        self.root = tk.Tk()
        self.root.title("Shadowcaster")
        self.root.geometry(f"{WINDOW_SIZE[0]}x{WINDOW_SIZE[1] + 60}")
        self.root.configure(bg=CANVAS_BG)

        style = ttk.Style()
        style.theme_use("clam")

        toolbar = ttk.Frame(self.root, padding=(5, 2))
        toolbar.pack(side=tk.TOP, fill=tk.X)

        self.scene_var = tk.StringVar(value=scene_name)
        ttk.Label(toolbar, text="Scene:").pack(side=tk.LEFT)
        combo = ttk.Combobox(
            toolbar,
            textvariable=self.scene_var,
            values=list(BUILTIN_SCENES),
            state="readonly",
            width=16,
        )
        combo.pack(side=tk.LEFT, padx=(2, 10))
        combo.bind("<<ComboboxSelected>>", self._on_scene_selected)

        ttk.Button(toolbar, text="Save", command=self._on_save).pack(
            side=tk.LEFT
        )
        ttk.Button(toolbar, text="Load", command=self._on_load).pack(
            side=tk.LEFT, padx=2
        )
        ttk.Button(toolbar, text="Reset View", command=self._on_reset).pack(
            side=tk.LEFT
        )

        self.canvas = tk.Canvas(self.root, bg=CANVAS_BG, highlightthickness=0)
        self.canvas.pack(side=tk.TOP, fill=tk.BOTH, expand=True)

        self.status_label = ttk.Label(self.root, text="", padding=(5, 2))
        self.status_label.pack(side=tk.BOTTOM, fill=tk.X)

        self.scene = get_scene(scene_name)
        self.view = ViewState()
        self.result = None
        self._photo = None  # prevent GC
        self._drag_target = None

        self.canvas.bind("<Configure>", lambda _e: self._render())
        self.canvas.bind("<Button-1>", self._on_press)
        self.canvas.bind("<B1-Motion>", self._on_drag)
        self.canvas.bind("<ButtonRelease-1>", self._on_release)
        self.canvas.bind("<MouseWheel>", self._on_scroll)
        self.canvas.bind("<Button-4>", lambda _e: self._zoom(1))
        self.canvas.bind("<Button-5>", lambda _e: self._zoom(-1))
        self.root.bind("<Left>", lambda _e: self._pan(-PAN_STEP, 0.0))
        self.root.bind("<Right>", lambda _e: self._pan(PAN_STEP, 0.0))
        self.root.bind("<Up>", lambda _e: self._pan(0.0, PAN_STEP))
        self.root.bind("<Down>", lambda _e: self._pan(0.0, -PAN_STEP))
        self.root.bind("<Key-0>", lambda _e: self._on_reset())
        self.root.bind("<q>", lambda _e: self._rotate_dragged(1))
        self.root.bind("<e>", lambda _e: self._rotate_dragged(-1))
        self.root.bind("<Escape>", lambda _e: self.root.destroy())

        print(
            f"Loaded scene '{scene_name}': {len(self.scene.lights)} lights, "
            f"{len(self.scene.obstacles)} obstacles"
        )
        self._recompute()

    # -- shadows --

    def _recompute(self):
        start = time.perf_counter()
        try:
            self.result = aggregate_scene(self.scene)
        except (BooleanOperationError, ValueError) as e:
            self.result = None
            print(f"Shadow computation failed: {e}")
            self.status_label.config(text=f"Shadows unavailable: {e}")
            return
        elapsed_ms = (time.perf_counter() - start) * 1000

        text = (
            f"Any-light shadow: {self.result.union_area:,.0f}   "
            f"All-light shadow: {self.result.intersection_area:,.0f}   "
            f"({elapsed_ms:.1f} ms)"
        )
        if self.result.skipped:
            text += f"   Skipped pairs: {len(self.result.skipped)}"
            for pair in self.result.skipped:
                print(
                    f"Skipped light {pair.light_index} / obstacle "
                    f"{pair.obstacle_index}: {pair.reason}"
                )
        self.status_label.config(text=text)

    def _render(self):
        cw = self.canvas.winfo_width()
        ch = self.canvas.winfo_height()
        if cw < 20 or ch < 20:
            return
        img = render_image(
            self.scene,
            self.result,
            cw,
            ch,
            ppu=self.view.ppu,
            center=self.view.center,
            supersample=SUPERSAMPLE,
        )
        self._photo = ImageTk.PhotoImage(img)
        self.canvas.delete("all")
        self.canvas.create_image(0, 0, image=self._photo, anchor="nw")

    def _refresh(self):
        self._recompute()
        self._render()

    # -- coordinate conversion --

    def _canvas_to_world(self, canvas_x, canvas_y):
        renderer = ShadowRenderer(
            self.canvas.winfo_width(),
            self.canvas.winfo_height(),
            self.view.ppu,
            self.view.center,
        )
        return renderer.to_world(canvas_x, canvas_y)

    # -- mouse --

    def _on_press(self, event):
        point = self._canvas_to_world(event.x, event.y)
        self._drag_target = hit_test(self.scene, point)

    def _on_drag(self, event):
        if self._drag_target is None:
            return
        point = self._canvas_to_world(event.x, event.y)
        move_item(self.scene, self._drag_target, point)
        self._refresh()

    def _on_release(self, _event):
        self._drag_target = None

    def _on_scroll(self, event):
        self._zoom(1 if event.delta > 0 else -1)

    def _zoom(self, direction):
        self.view.scroll(direction)
        self._render()

    # -- keyboard --

    def _pan(self, dx, dy):
        zoom = self.view.zoom
        self.view.pan(dx * zoom, dy * zoom, self.scene.boundary)
        self._render()

    def _rotate_dragged(self, direction):
        target = self._drag_target
        if target is None or target[0] != "obstacle":
            return
        rotate_obstacle(
            self.scene, target[1], direction * math.radians(ROTATE_STEP_DEG)
        )
        self._refresh()

    def _on_reset(self):
        self.view.reset()
        self._render()

    # -- toolbar --

    def _on_scene_selected(self, _event=None):
        name = self.scene_var.get()
        self.scene = get_scene(name)
        self.view.reset()
        print(f"Switched to scene '{name}'")
        self._refresh()

    def _on_save(self):
        path = filedialog.asksaveasfilename(
            defaultextension=".png",
            filetypes=[("PNG snapshot", "*.png")],
        )
        if not path:
            return
        img = render_image(
            self.scene,
            self.result,
            self.canvas.winfo_width(),
            self.canvas.winfo_height(),
            ppu=self.view.ppu,
            center=self.view.center,
        )
        save_snapshot_png(img, self.scene, path)
        print(f"Saved snapshot to {path}")

    def _on_load(self):
        path = filedialog.askopenfilename(
            filetypes=[
                ("Scene files", "*.png *.json"),
                ("PNG snapshot", "*.png"),
                ("JSON scene", "*.json"),
            ]
        )
        if not path:
            return
        try:
            self.scene = load_snapshot(path)
        except (ValueError, KeyError, OSError) as e:
            messagebox.showerror("Load failed", str(e))
            return
        self.view.reset()
        print(f"Loaded scene from {path}")
        self._refresh()

    def run(self):
        self.root.mainloop()


def main():
    import argparse

    parser = argparse.ArgumentParser(description="Shadowcaster viewer")
    parser.add_argument(
        "--scene",
        default="museum",
        choices=list(BUILTIN_SCENES),
        help="Built-in scene to open (default: museum)",
    )
    args = parser.parse_args()
    App(args.scene).run()


if __name__ == "__main__":
    main()
