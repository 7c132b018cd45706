import plotly.graph_objects as go

from loops.engine import PuzzleState, Shape
from loops.engine.glyphs import glyph_name, normalize
from loops.engine.topology import SQRT3

# offset from a tile centre to the middle of each edge, keyed by direction
EDGE_OFFSETS = {
    Shape.SQUARE: {
        1: (0.5, 0.0),
        2: (0.0, 0.5),
        4: (-0.5, 0.0),
        8: (0.0, -0.5),
    },
    Shape.HEXAGON: {
        1: (0.75, SQRT3 / 4),
        2: (0.0, SQRT3 / 2),
        4: (-0.75, SQRT3 / 4),
        8: (-0.75, -SQRT3 / 4),
        16: (0.0, -SQRT3 / 2),
        32: (0.75, -SQRT3 / 4),
    },
}

COLORS = ["black", "#d62728"]

# background of touched cement tiles by age, newest first
CEMENT_SHADES = ["#bbb", "#d4d4d4", "#eee"]


def describe_tile(level: PuzzleState, tile_index: int) -> str:
    """Hover text: the canonical glyph of each color and how far it is turned"""
    parts = []
    for color_index, value in enumerate(level.tiles[tile_index]):
        name = glyph_name(value, level.shape)
        if name is None:
            continue
        _, times = normalize(value, level.shape)
        parts.append(f"color {color_index + 1}: {name} +{times}")
    return f"tile {tile_index}<br>" + ("<br>".join(parts) or "empty")


def generate_level_visualization(level: PuzzleState):
    """Generate a Plotly figure of a level: one spoke per ribbon endpoint, frozen tiles greyed out, wet cement shaded by age."""
    topology = level.topology
    offsets = EDGE_OFFSETS[level.shape]
    fig = go.Figure()

    centers = {
        tile_index: topology.tile_center(*topology.index_to_coord(tile_index))
        for tile_index in topology.all_tile_indexes()
    }

    frozen = sorted(level.frozen_tiles)
    fig.add_trace(go.Scatter(
        x=[centers[i][0] for i in frozen], y=[centers[i][1] for i in frozen],
        mode="markers", marker=dict(size=18, color="#ddd", symbol="square"), name="Frozen"
    ))

    wet = [i for i in level.touch_queue if not level.is_frozen(i)]
    fig.add_trace(go.Scatter(
        x=[centers[i][0] for i in wet], y=[centers[i][1] for i in wet],
        mode="markers", name="Wet cement",
        marker=dict(size=18, symbol="square",
                    color=[CEMENT_SHADES[level.touch_queue.age_of(i)] for i in wet])
    ))

    for color_index in range(level.color_count):
        edge_x, edge_y = [], []
        for tile_index, (center_x, center_y) in centers.items():
            for direction, (dx, dy) in offsets.items():
                if level.edge_value(tile_index, color_index, direction):
                    edge_x += [center_x, center_x + dx, None]
                    edge_y += [center_y, center_y + dy, None]
        fig.add_trace(go.Scatter(
            x=edge_x, y=edge_y, mode="lines",
            line=dict(width=6, color=COLORS[color_index % len(COLORS)]),
            name=f"Color {color_index + 1}"
        ))

    fig.add_trace(go.Scatter(
        x=[center[0] for center in centers.values()], y=[center[1] for center in centers.values()],
        mode="markers", marker=dict(size=18, opacity=0), name="Glyphs", showlegend=False,
        hovertext=[describe_tile(level, i) for i in centers], hoverinfo="text"
    ))

    unsolved = level.unsolved_count()
    fig.update_layout(
        title=f"{level.shape.value} {level.size[0]}x{level.size[1]}: "
              + ("solved" if unsolved == 0 else f"{unsolved} unsolved"),
        showlegend=True,
        plot_bgcolor="white",
        xaxis=dict(visible=False, scaleanchor="y"),
        yaxis=dict(visible=False, autorange="reversed"),
        height=600
    )

    return fig
