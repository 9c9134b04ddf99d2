"""
[3] DASHBOARD APP MODULE
Generate the energy output analytics page from a fresh sample batch
"""

import pandas as pd
import plotly.graph_objects as go
import numpy as np
import os
import html
import logging
import yaml
from datetime import datetime
from typing import List, Optional

from .sample_series import generate_sample_series, samples_to_frame
from .kpi_engine import calculate_output_kpis
from .utils.models import HourlySample, KPI
from .utils.plotting import (
    create_hour_axis,
    apply_color_palette,
    get_plot_config,
    create_standard_layout,
)

logger = logging.getLogger(__name__)

# (column header, fresh series, saline series, overview series)
PARAMETER_GRID = [
    ("Temperature", "freshTemp", "salineTemp", "salineTemp"),
    ("Pressure", "freshPressure", "salinePressure", "salinePressure"),
    ("Salinity", "freshSalinity", "salineSalinity", "freshSalinity"),
]

OUTPUT_SERIES = [
    ("regularOutput", "Regular Output"),
    ("qmlOutput", "QML Optimized"),
]

DISPLAY_NAMES = {
    "freshTemp": "Fresh temperature (°C)",
    "salineTemp": "Saline temperature (°C)",
    "freshPressure": "Fresh pressure (bar)",
    "salinePressure": "Saline pressure (bar)",
    "freshSalinity": "Fresh salinity (g/kg)",
    "salineSalinity": "Saline salinity (g/kg)",
}

NAV_ITEMS = ["Sensor Data", "Energy Output", "Live Feed"]
ACTIVE_NAV_ITEM = "Energy Output"


def load_config(config_path: str = "config.yaml") -> dict:
    """Load configuration from YAML file"""
    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def series_color(column: str, config: dict, index: int = 0) -> str:
    """Configured color for a series, falling back to the default palette"""
    return config.get("series_colors", {}).get(column) or apply_color_palette(index)


def _value_axis(theme: dict, title: Optional[str] = None) -> dict:
    axis = dict(
        gridcolor=theme["grid"],
        griddash="dash",
        linecolor=theme["text"],
        tickfont=dict(color=theme["text"]),
        zeroline=False,
    )
    if title:
        axis["title"] = dict(text=title, font=dict(color=theme["text"]))
    return axis


def create_energy_output_figure(df: pd.DataFrame, config: dict) -> go.Figure:
    """
    Create the regular vs QML energy output comparison chart

    Args:
        df: Chart-ready sample frame
        config: Visualization configuration

    Returns:
        Plotly figure
    """
    theme = config["theme"]
    fig = go.Figure()

    for i, (column, label) in enumerate(OUTPUT_SERIES):
        fig.add_trace(
            go.Scatter(
                x=df["name"],
                y=df[column],
                mode="lines+markers",
                name=label,
                line=dict(color=series_color(column, config, i), width=3, shape="spline"),
                marker=dict(size=6),
                hovertemplate="%{y:.2f} MW",
            )
        )

    xaxis = create_hour_axis(show_ticks=True, title="Time (Hours)")
    xaxis.update(gridcolor=theme["grid"], griddash="dash")

    layout = create_standard_layout(
        theme, height=config["plot_sizes"]["energy_height"], show_legend=True
    )
    layout.update(
        xaxis=xaxis,
        yaxis=_value_axis(theme, "Energy Output (MW)"),
    )
    fig.update_layout(layout)
    return fig


def create_parameter_figure(
    df: pd.DataFrame,
    columns: List[str],
    config: dict,
    colors: Optional[List[str]] = None,
) -> go.Figure:
    """
    Create a compact sensor chart for one or more series

    Args:
        df: Chart-ready sample frame
        columns: Series identifiers to plot
        config: Visualization configuration
        colors: Optional line colors, one per series

    Returns:
        Plotly figure
    """
    theme = config["theme"]
    fig = go.Figure()

    for i, column in enumerate(columns):
        color = colors[i] if colors else series_color(column, config, i)
        fig.add_trace(
            go.Scatter(
                x=df["name"],
                y=df[column],
                mode="lines",
                name=DISPLAY_NAMES.get(column, column),
                line=dict(color=color, width=2, shape="spline"),
                hovertemplate="%{y:.2f}",
            )
        )

    xaxis = create_hour_axis(show_ticks=False)
    xaxis.update(gridcolor=theme["grid"], griddash="dash")

    layout = create_standard_layout(
        theme, height=config["plot_sizes"]["parameter_height"], show_legend=False
    )
    layout.update(xaxis=xaxis, yaxis=_value_axis(theme), margin=dict(l=40, r=10, t=10, b=10))
    fig.update_layout(layout)
    return fig


def render_figure(fig: go.Figure, div_id: str, include_plotlyjs=False, mode_bar=False) -> str:
    """Embed a figure as an HTML fragment"""
    return fig.to_html(
        full_html=False,
        include_plotlyjs=include_plotlyjs,
        div_id=div_id,
        config=get_plot_config(mode_bar=mode_bar),
    )


def render_kpi_cards(kpis: List[KPI]) -> str:
    """Render KPI cards as an HTML grid"""
    cards = ""
    for kpi in kpis:
        status = kpi.status or "neutral"
        target = ""
        if kpi.target is not None:
            target = f'<div class="kpi-target">Target: {kpi.target:g} {html.escape(kpi.unit)}</div>'
        cards += f"""                <div class="kpi-card {status}">
                    <div class="kpi-name">{html.escape(kpi.name)}</div>
                    <div class="kpi-value">{kpi.value:.2f}<span class="kpi-unit">{html.escape(kpi.unit)}</span></div>
                    {target}
                </div>
"""
    return f"""            <div class="kpi-grid">
{cards}            </div>
"""


def _vertical_label(text: str) -> str:
    letters = "".join(f"<div>{letter}</div>" for letter in text)
    return f'<div class="row-label">{letters}</div>'


def current_month_label(config: dict) -> str:
    """Configured month label, or the current month"""
    return config.get("current_month") or datetime.now().strftime("%B %Y")


def create_unified_dashboard(
    samples: List[HourlySample], kpis: List[KPI], plots_dir: str, config: dict
) -> str:
    """
    Create the single-page energy output analytics dashboard

    Args:
        samples: Sample batch to display
        kpis: KPIs computed from the same batch
        plots_dir: Output directory
        config: Visualization configuration

    Returns:
        Path to dashboard HTML file
    """
    logger.info("Creating energy output dashboard...")

    os.makedirs(plots_dir, exist_ok=True)

    df = samples_to_frame(samples)
    theme = config["theme"]
    brand = html.escape(config.get("brand", "QBLUE"))
    title = html.escape(config.get("title", "Energy Output Analytics"))
    user_name = html.escape(config.get("user_name", ""))
    user_initial = user_name[:1].upper() or "?"
    month = html.escape(current_month_label(config))

    # First figure pulls in plotly.js, the rest reuse it
    energy_html = render_figure(
        create_energy_output_figure(df, config),
        "plot-energy-output",
        include_plotlyjs="cdn",
        mode_bar=True,
    )

    overview_cells = ""
    fresh_cells = ""
    saline_cells = ""
    overview_colors = config.get("overview_colors") or {}
    for header, fresh_col, saline_col, overview_col in PARAMETER_GRID:
        overview_color = overview_colors.get(overview_col) or series_color(overview_col, config)
        overview = render_figure(
            create_parameter_figure(df, [overview_col], config, colors=[overview_color]),
            f"plot-{header.lower()}-overview",
        )
        fresh = render_figure(
            create_parameter_figure(df, [fresh_col], config), f"plot-{fresh_col}"
        )
        saline = render_figure(
            create_parameter_figure(df, [saline_col], config), f"plot-{saline_col}"
        )
        overview_cells += f'                    <div class="chart-cell">{overview}</div>\n'
        fresh_cells += f'                    <div class="chart-cell">{fresh}</div>\n'
        saline_cells += f'                    <div class="chart-cell">{saline}</div>\n'

    grid_headers = "".join(
        f'<h3 class="grid-header">{header}</h3>' for header, _, _, _ in PARAMETER_GRID
    )

    nav_html = ""
    for item in NAV_ITEMS:
        css = "nav-item active" if item == ACTIVE_NAV_ITEM else "nav-item"
        nav_html += f'            <div class="{css}">{item}</div>\n'

    html_page = f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{brand} - {title}</title>
    <style>
        * {{ margin: 0; padding: 0; box-sizing: border-box; }}

        body {{
            font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif;
            background: {theme["background"]};
            color: {theme["text"]};
            display: flex;
            flex-direction: column;
            height: 100vh;
        }}

        /* Navbar */
        .navbar {{
            display: flex;
            align-items: center;
            justify-content: space-between;
            padding: 16px;
            border-bottom: 1px solid {theme["border"]};
        }}

        .brand {{ display: flex; align-items: center; gap: 8px; }}

        .brand-logo {{
            width: 48px;
            height: 48px;
            border-radius: 50%;
            background: {theme["brand"]};
            display: flex;
            align-items: center;
            justify-content: center;
            font-size: 1.5em;
            font-weight: bold;
        }}

        .brand-name {{ font-size: 1.1em; font-weight: 600; color: #93c5fd; }}

        .navbar h1 {{ font-size: 1.25em; font-weight: bold; }}

        .month-badge {{
            background: {theme["accent"]};
            padding: 8px 16px;
            border-radius: 4px;
        }}

        /* Sidebar */
        .layout {{ display: flex; flex: 1; overflow: hidden; }}

        .sidebar {{
            width: 192px;
            border-right: 1px solid {theme["border"]};
            display: flex;
            flex-direction: column;
        }}

        .search {{ padding: 16px; }}

        .search input {{
            width: 100%;
            background: {theme["panel"]};
            color: {theme["text"]};
            border: none;
            border-radius: 4px;
            padding: 8px 12px;
        }}

        .nav-item {{ padding: 8px 16px; color: #9ca3af; }}

        .nav-item.active {{
            background: {theme["panel"]};
            color: {theme["text"]};
            font-weight: 500;
        }}

        .sidebar-footer {{ margin-top: auto; padding: 16px; color: #9ca3af; }}

        .user {{ display: flex; align-items: center; gap: 8px; margin-top: 16px; color: {theme["text"]}; }}

        .avatar {{
            width: 32px;
            height: 32px;
            border-radius: 50%;
            background: #9333ea;
            display: flex;
            align-items: center;
            justify-content: center;
            font-weight: bold;
        }}

        .user-sub {{ font-size: 0.75em; color: #9ca3af; }}

        /* Main Content Area */
        .main-content {{ flex: 1; overflow-y: auto; padding: 24px; }}

        .panel {{
            background: {theme["panel"]};
            border-radius: 8px;
            padding: 16px;
            margin-bottom: 24px;
        }}

        .panel h2 {{ font-size: 1.1em; margin-bottom: 16px; }}

        .kpi-grid {{
            display: grid;
            grid-template-columns: repeat(3, 1fr);
            gap: 16px;
            margin-top: 16px;
        }}

        .kpi-card {{
            background: {theme["background"]};
            border-radius: 8px;
            padding: 12px 16px;
            border-left: 5px solid #6c757d;
        }}

        .kpi-card.good {{ border-left-color: #28a745; }}
        .kpi-card.warning {{ border-left-color: #ffc107; }}

        .kpi-name {{ font-size: 0.8em; color: #9ca3af; text-transform: uppercase; font-weight: 600; }}
        .kpi-value {{ font-size: 1.6em; font-weight: bold; }}
        .kpi-unit {{ font-size: 0.5em; color: #9ca3af; margin-left: 5px; }}
        .kpi-target {{ font-size: 0.8em; color: #9ca3af; margin-top: 4px; }}

        .parameter-panel {{
            background: rgba(30, 58, 138, 0.3);
            border-radius: 8px;
            padding: 16px;
            margin-bottom: 24px;
        }}

        .grid-headers {{ display: flex; justify-content: space-between; margin-bottom: 16px; }}
        .grid-header {{ flex: 1; text-align: center; font-weight: bold; text-transform: uppercase; }}

        .chart-row {{ display: flex; align-items: center; margin-bottom: 16px; }}

        .chart-grid {{
            display: grid;
            grid-template-columns: repeat(3, 1fr);
            gap: 16px;
            flex-grow: 1;
        }}

        .chart-cell {{ background: {theme["panel"]}; border-radius: 4px; padding: 8px; }}

        .row-label {{
            width: 32px;
            margin-right: 8px;
            text-align: center;
            font-weight: 500;
            color: #93c5fd;
        }}
    </style>
</head>
<body>
    <nav class="navbar">
        <div class="brand">
            <div class="brand-logo">{brand[:1]}</div>
            <span class="brand-name">{brand}</span>
        </div>
        <h1>{title}</h1>
        <div class="month-badge">{month} &#9662;</div>
    </nav>

    <div class="layout">
        <aside class="sidebar">
            <div class="search"><input type="text" placeholder="Search for..."></div>
{nav_html}            <div class="sidebar-footer">
                <div>&#9881; Settings</div>
                <div class="user">
                    <div class="avatar">{user_initial}</div>
                    <div>
                        <div>{user_name}</div>
                        <div class="user-sub">Account settings</div>
                    </div>
                </div>
            </div>
        </aside>

        <main class="main-content">
            <!-- Energy Output Section -->
            <div class="panel">
                <h2>Energy Output Comparison</h2>
                {energy_html}
{render_kpi_cards(kpis)}            </div>

            <!-- Parameter Overview Section -->
            <div class="parameter-panel">
                <div class="grid-headers">{grid_headers}</div>
                <div class="chart-grid">
{overview_cells}                </div>
            </div>

            <!-- Reservoir Sections -->
            <div class="parameter-panel">
                <div class="chart-row">
                    {_vertical_label("FRESH")}
                    <div class="chart-grid">
{fresh_cells}                    </div>
                </div>
                <div class="chart-row">
                    {_vertical_label("SALINE")}
                    <div class="chart-grid">
{saline_cells}                    </div>
                </div>
            </div>
        </main>
    </div>
</body>
</html>
"""

    filepath = os.path.join(plots_dir, "index.html")
    with open(filepath, "w", encoding="utf-8") as f:
        f.write(html_page)

    logger.info("  ✓ Created: Energy Output Dashboard")
    return filepath


def create_energy_output_plot(
    samples: List[HourlySample], plots_dir: str, config: dict
) -> str:
    """
    Save the energy output comparison as a standalone chart

    Args:
        samples: Sample batch to display
        plots_dir: Output directory
        config: Visualization configuration

    Returns:
        Path to the chart HTML file
    """
    os.makedirs(plots_dir, exist_ok=True)

    df = samples_to_frame(samples)
    fig = create_energy_output_figure(df, config)
    fig.update_layout(title=dict(text="<b>Energy Output Comparison</b>", x=0.5))

    filepath = os.path.join(plots_dir, "energy_output.html")
    fig.write_html(filepath, config=get_plot_config(), include_plotlyjs="cdn")

    logger.info("  ✓ Created: Energy Output Comparison")
    return filepath


def run_dashboard_app(config_path: str = "config.yaml", seed: Optional[int] = None) -> list:
    """
    Main dashboard generation pipeline

    Args:
        config_path: Path to configuration file
        seed: Optional seed overriding the configured one

    Returns:
        List of generated file paths
    """
    logger.info("=" * 60)
    logger.info("📊 DASHBOARD APP STAGE")
    logger.info("=" * 60)

    config = load_config(config_path)
    plots_dir = config["paths"]["plots_folder"]
    generator_config = config.get("generator") or {}

    if seed is None:
        seed = generator_config.get("seed")
    rng = np.random.default_rng(seed)
    if seed is not None:
        logger.info(f"Using random seed: {seed}")

    samples = generate_sample_series(
        rng, noise_scale=generator_config.get("noise_scale", 1.0)
    )
    logger.info(f"✓ Generated {len(samples)} hourly samples")

    targets = (config.get("kpis") or {}).get("targets", {})
    kpis = calculate_output_kpis(samples, targets)

    generated_files = [
        create_unified_dashboard(samples, kpis, plots_dir, config["visualization"]),
        create_energy_output_plot(samples, plots_dir, config["visualization"]),
    ]

    logger.info(f"\n✓ Generated {len(generated_files)} visualizations")
    logger.info(f"  Output directory: {plots_dir}")

    logger.info("=" * 60)
    logger.info("✓ DASHBOARD APP COMPLETE")
    logger.info("=" * 60)

    return generated_files


if __name__ == "__main__":
    # Setup logging
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    files = run_dashboard_app()
    print(f"\n✓ Generated {len(files)} visualizations")
    print(f"✓ Open HTML files in your browser")
