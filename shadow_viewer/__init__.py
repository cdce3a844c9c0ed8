"""Tkinter viewer and Pillow renderer for shadowcaster scenes."""
