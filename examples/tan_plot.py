from __future__ import annotations

from pathlib import Path

import numpy as np

from funcplot import InterpolationMode, chart


def _render_tan(out: Path) -> Path:
    c = chart(width=960, height=640)
    c.set_interpolation_mode(InterpolationMode.SMOOTHED)

    x = np.linspace(-2.0 * np.pi, 2.0 * np.pi, 801)
    y = np.tan(x)
    c.plot(np.column_stack([x, y]), float(x[0]), float(x[-1]))

    # tan'(0) = 1
    c.add_tangent(0.0, 0.0, 1.0, float(x[0]), float(x[-1]))
    c.add_integral_area(np.column_stack([x, y]), 0.0, 1.0, -np.log(np.cos(1.0)), "tan(x)")
    return c.surface.save_png(out)


def _render_parabola(out: Path) -> Path:
    c = chart(width=800, height=400)
    c.set_aspect_locked(True)
    x = np.linspace(-3.0, 3.0, 121)
    c.plot(np.column_stack([x, x * x]), -3.0, 3.0)
    c.add_integral_area(np.column_stack([x, x * x]), 0.0, 2.0, 8.0 / 3.0, "x^2")
    return c.surface.save_png(out)


def main() -> None:
    out_dir = Path(__file__).resolve().parent / "out"
    out_dir.mkdir(exist_ok=True)
    print(_render_tan(out_dir / "tan.png"))
    print(_render_parabola(out_dir / "parabola.png"))


if __name__ == "__main__":
    main()
