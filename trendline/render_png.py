from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple, Union

from PIL import Image, ImageDraw, ImageFont

from .data_model import color_for
from .search import plotted_px
from .settings import ChartSettings
from .ui_state import ChartModel, ChartSession

log = logging.getLogger(__name__)

X_LABEL = "Date (Month/Day/Year)"
Y_LABEL = "Price ($)"
POINT_COLOR = "red"
ACTIVE_POINT_COLOR = "orange"


def _text_size(draw: ImageDraw.ImageDraw, text: str, font) -> Tuple[int, int]:
    x0, y0, x1, y1 = draw.textbbox((0, 0), text, font=font)
    return x1 - x0, y1 - y0


def render_chart(
    model: ChartModel,
    settings: ChartSettings,
    session: Optional[ChartSession] = None,
) -> Image.Image:
    """
    Draw the chart (axes, month/price ticks, trend lines, query points) onto an
    RGB image of settings.width x settings.height.
    """
    img = Image.new("RGB", (settings.width, settings.height), "white")
    draw = ImageDraw.Draw(img)
    font = ImageFont.load_default()
    ox, oy = settings.margin_left, settings.margin_top
    w, h = settings.plot_width, settings.plot_height

    def to_img(x: float, y: float) -> Tuple[float, float]:
        return ox + x, oy + y

    cal = model.calibration
    if cal is None:
        msg = "No data to display"
        tw, th = _text_size(draw, msg, font)
        draw.text((ox + (w - tw) / 2, oy + (h - th) / 2), msg, fill="black", font=font)
        return img

    # axes
    draw.line([to_img(0, h), to_img(w, h)], fill="black", width=1)
    draw.line([to_img(0, 0), to_img(0, h)], fill="black", width=1)
    for xpx, label in cal.x_ticks():
        x, y = to_img(xpx, h)
        draw.line([(x, y), (x, y + 6)], fill="black")
        tw, _ = _text_size(draw, label, font)
        draw.text((x - tw / 2, y + 9), label, fill="black", font=font)
    for ypx, label in cal.y_ticks():
        x, y = to_img(0, ypx)
        draw.line([(x - 6, y), (x, y)], fill="black")
        tw, th = _text_size(draw, label, font)
        draw.text((x - 9 - tw, y - th / 2), label, fill="black", font=font)

    # axis titles
    tw, _ = _text_size(draw, X_LABEL, font)
    draw.text((ox + w / 2 - tw / 2, oy + h + 40), X_LABEL, fill="black", font=font)
    tw, th = _text_size(draw, Y_LABEL, font)
    label_img = Image.new("RGBA", (tw + 2, th + 4), (255, 255, 255, 0))
    ImageDraw.Draw(label_img).text((1, 0), Y_LABEL, fill="black", font=font)
    label_img = label_img.rotate(90, expand=True)
    img.paste(label_img, (ox - 70, int(oy + h / 2 - label_img.height / 2)), label_img)

    # trend lines
    for s in model.series:
        pts = [to_img(*plotted_px(cal, r)) for r in s.records]
        color = color_for(s.category, settings.fallback_color)
        if len(pts) >= 2:
            draw.line(pts, fill=color, width=2, joint="curve")
        else:
            x, y = pts[0]
            draw.ellipse([x - 1, y - 1, x + 1, y + 1], fill=color)

    # query points
    if session is not None:
        r = settings.point_radius
        # active point last so it stays on top
        order = [i for i in range(len(session.points)) if i != session.cursor] + [session.cursor]
        for i in order:
            x, y = to_img(session.points[i].x, session.points[i].y)
            fill = ACTIVE_POINT_COLOR if i == session.cursor else POINT_COLOR
            draw.ellipse([x - r, y - r, x + r, y + r], fill=fill)
    return img


def save_png(
    path: Union[str, Path],
    model: ChartModel,
    settings: ChartSettings,
    session: Optional[ChartSession] = None,
) -> Path:
    path = Path(path)
    render_chart(model, settings, session).save(path, format="PNG")
    log.info("Wrote %s", path)
    return path
