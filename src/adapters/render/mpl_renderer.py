import hashlib
import json
import threading
from io import BytesIO

import matplotlib.figure
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.patches import Rectangle

from src.domain.entities import ColorStep, ScaleValue


class MatplotlibSwatchRenderer:
    """Renders palettes and type scales to PNG previews."""

    def __init__(self, cache: dict[str, bytes] | None = None, max_entries: int = 128):
        self.cache = cache if cache is not None else {}
        self.max_entries = max_entries
        # Shared across request threads; guards lookup, eviction and insert
        self._lock = threading.Lock()

    def _cached(
        self, kind: str, payload: object, width: int, height: int, dpi: int
    ) -> tuple[str, bytes | None]:
        # Canonical JSON repr, dimensions included
        spec_str = json.dumps(payload, sort_keys=True)
        hash_input = f"{kind}|{spec_str}|{width}|{height}|{dpi}"
        digest = hashlib.md5(hash_input.encode("utf-8")).hexdigest()
        cache_key = f"{kind}/{digest}.png"
        with self._lock:
            return cache_key, self.cache.get(cache_key)

    def _to_png(self, fig: matplotlib.figure.Figure, cache_key: str) -> bytes:
        buf = BytesIO()
        fig.savefig(buf, format="png")
        png_data = buf.getvalue()
        buf.close()
        with self._lock:
            # Evict oldest first; dicts keep insertion order
            while self.cache and len(self.cache) >= self.max_entries:
                self.cache.pop(next(iter(self.cache)), None)
            self.cache[cache_key] = png_data
        return png_data

    def render_palette(
        self, steps: list[ColorStep], width: int = 900, height: int = 200, dpi: int = 100
    ) -> bytes:
        """
        Renders one swatch per step, left to right.
        Each swatch is labelled with its name, hex and best contrast ratio,
        in white or black text depending on which reads better.
        """
        payload = [[s.name, s.values.hex, s.is_base_color] for s in steps]
        cache_key, hit = self._cached("palettes", payload, width, height, dpi)
        if hit is not None:
            return hit

        fig = matplotlib.figure.Figure(figsize=(width / dpi, height / dpi), dpi=dpi)
        FigureCanvasAgg(fig)  # Attach canvas backend
        ax = fig.add_axes((0, 0, 1, 1))
        ax.set_xlim(0, max(len(steps), 1))
        ax.set_ylim(0, 1)
        ax.axis("off")

        for i, step in enumerate(steps):
            ax.add_patch(Rectangle((i, 0), 1, 1, facecolor=step.values.hex, edgecolor="none"))
            acc = step.accessibility
            # readable_on names the background the color reads on, so text is the opposite
            text_color = "#ffffff" if acc.readable_on == "white" else "#000000"
            best = max(acc.contrast_with_white, acc.contrast_with_black)
            label = f"{step.name}\n{step.values.hex}\n{best:.2f}:1"
            if step.is_base_color:
                label += "\nbase"
            ax.text(i + 0.5, 0.5, label, ha="center", va="center", color=text_color, fontsize=8)

        return self._to_png(fig, cache_key)

    def render_scale(
        self,
        values: list[ScaleValue],
        sample: str = "Aa",
        width: int = 900,
        height: int = 600,
        dpi: int = 100,
    ) -> bytes:
        """
        Renders a type specimen: one row per scale step, largest on top.
        Font sizes are converted from px to points at the figure's dpi.
        """
        payload = {"sample": sample, "values": [[v.label, v.size] for v in values]}
        cache_key, hit = self._cached("scales", payload, width, height, dpi)
        if hit is not None:
            return hit

        fig = matplotlib.figure.Figure(figsize=(width / dpi, height / dpi), dpi=dpi)
        FigureCanvasAgg(fig)
        ax = fig.add_axes((0, 0, 1, 1))
        ax.axis("off")

        rows = sorted(values, key=lambda v: v.step, reverse=True)
        total_px = sum(v.size * 1.3 for v in rows) or 1.0
        y = 1.0
        for v in rows:
            row_height = (v.size * 1.3) / total_px
            y -= row_height
            ax.text(0.02, y + row_height / 2, f"{v.label}  {v.size}px", va="center", fontsize=8)
            ax.text(
                0.2,
                y + row_height / 2,
                sample,
                va="center",
                fontsize=max(v.size, 1) * 72 / dpi,
            )

        return self._to_png(fig, cache_key)
