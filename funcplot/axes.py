from __future__ import annotations

from funcplot.config import PlotConfig
from funcplot.context import DrawingContext, saved_state
from funcplot.transform import PlotTransform


AXIS_COLOR = "#888"
ARROW_COLOR = "black"
LABEL_COLOR = "black"
LABEL_FONT = "13px helvetica"
ARROW_LENGTH_PX = 10.0
ARROW_HALF_WIDTH_PX = 6.0


def draw_axes(ctx: DrawingContext, config: PlotConfig) -> None:
    """Draw both axes through the origin, arrowheads at their positive ends, and the labels.

    An origin outside the window puts the matching axis off the surface, which is fine.
    """
    transform = PlotTransform(config)
    with saved_state(ctx):
        ctx.stroke_style = AXIS_COLOR
        ctx.begin_path()
        ctx.move_to(config.x_min, 0.0)
        ctx.line_to(config.x_max, 0.0)
        ctx.move_to(0.0, config.y_min)
        ctx.line_to(0.0, config.y_max)
        ctx.stroke()

        # Arrowheads keep a fixed pixel size whatever the window scale.
        ax = ARROW_LENGTH_PX / config.x_scale
        aw_x = ARROW_HALF_WIDTH_PX / config.x_scale
        ay = ARROW_LENGTH_PX / config.y_scale
        aw_y = ARROW_HALF_WIDTH_PX / config.y_scale
        ctx.fill_style = ARROW_COLOR
        ctx.begin_path()
        ctx.move_to(config.x_max, 0.0)
        ctx.line_to(config.x_max - ax, aw_y)
        ctx.line_to(config.x_max - ax, -aw_y)
        ctx.close_path()
        ctx.move_to(0.0, config.y_max)
        ctx.line_to(-aw_x, config.y_max - ay)
        ctx.line_to(aw_x, config.y_max - ay)
        ctx.close_path()
        ctx.fill()

        ctx.fill_style = LABEL_COLOR
        ctx.font = LABEL_FONT
        with saved_state(ctx):
            transform.upright_text(ctx, config.x_max, 0.0)
            ctx.text_align = "end"
            ctx.text_baseline = "bottom"
            ctx.fill_text(config.x_label, -13.0, -2.0)
        with saved_state(ctx):
            transform.upright_text(ctx, 0.0, config.y_max)
            ctx.text_align = "start"
            ctx.text_baseline = "top"
            ctx.fill_text(config.y_label, 8.0, 2.0)
