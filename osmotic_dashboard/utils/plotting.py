"""
Plotting utilities for consistent visualization
"""

from typing import Optional, List


def create_hour_axis(show_ticks: bool = True, title: Optional[str] = None) -> dict:
    """
    Create a categorical hour axis configuration

    Args:
        show_ticks: Whether to show hour tick labels
        title: Optional axis title

    Returns:
        Dictionary of x-axis configuration for Plotly
    """
    axis = dict(
        type="category",
        showgrid=True,
        showticklabels=show_ticks,
        linecolor="#ffffff",
        tickfont=dict(color="#ffffff"),
    )
    if title:
        axis["title"] = dict(text=title, font=dict(color="#ffffff"))
    return axis


def apply_color_palette(index: int, palette: Optional[List[str]] = None) -> str:
    """
    Get color from palette by index

    Args:
        index: Index into color palette
        palette: Optional custom color palette

    Returns:
        Color hex string
    """
    if palette is None:
        palette = [
            "#e74c3c",  # red
            "#9b59b6",  # purple
            "#1976d2",  # blue
            "#00796b",  # teal
            "#4db6ac",  # light teal
            "#0d47a1",  # dark blue
            "#004d40",  # dark teal
            "#64b5f6",  # light blue
        ]

    return palette[index % len(palette)]


def get_plot_config(responsive: bool = True, mode_bar: bool = True) -> dict:
    """
    Get standard Plotly plot configuration

    Args:
        responsive: Whether plot should be responsive
        mode_bar: Whether to show the mode bar

    Returns:
        Configuration dictionary for Plotly
    """
    return {
        "responsive": responsive,
        "displayModeBar": mode_bar,
        "displaylogo": False,
        "toImageButtonOptions": {
            "format": "png",
            "height": 600,
            "width": 1200,
            "scale": 2,
        },
    }


def create_standard_layout(
    theme: dict,
    height: int = 320,
    show_legend: bool = True,
    title: Optional[str] = None,
) -> dict:
    """
    Create standard dark plot layout

    Args:
        theme: Theme colors (panel, grid, tooltip, border, text)
        height: Plot height in pixels
        show_legend: Whether to show legend
        title: Optional plot title

    Returns:
        Layout dictionary for Plotly
    """
    layout = dict(
        plot_bgcolor=theme["panel"],
        paper_bgcolor=theme["panel"],
        height=height,
        autosize=True,
        margin=dict(l=60, r=20, t=30 if title else 10, b=50 if show_legend else 10),
        font=dict(family="'Segoe UI', Tahoma, Geneva, Verdana, sans-serif", color=theme["text"]),
        hovermode="x unified",
        hoverlabel=dict(
            bgcolor=theme["tooltip"],
            bordercolor=theme["grid"],
            font=dict(color=theme["text"]),
        ),
        showlegend=show_legend,
    )
    if title:
        layout["title"] = dict(text=f"<b>{title}</b>", x=0.5)
    if show_legend:
        layout["legend"] = dict(orientation="h", x=0.5, xanchor="center", y=-0.25)
    return layout
