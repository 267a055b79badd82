"""Streamlit UI for the marketing performance dashboard."""

import json
import logging

import plotly.graph_objects as go
import streamlit as st

from campaign_dashboard.exceptions import DashboardError
from campaign_dashboard.ingestion import load_marketing_data
from campaign_dashboard.services import (
    BubbleMap,
    DashboardService,
    LineChart,
)

logging.basicConfig(level=logging.INFO)

# Page config
st.set_page_config(
    page_title="Marketing Performance",
    page_icon="📊",
    layout="wide",
)

PRIMARY_COLOR = "#3B82F6"


def format_number(n: int | float, decimals: int = 0) -> str:
    """Format number with commas."""
    if decimals == 0:
        return f"{int(round(n)):,}"
    return f"{n:,.{decimals}f}"


def format_currency(n: float) -> str:
    return f"${format_number(n, 2)}"


def format_pct(n: float | None, decimals: int = 2) -> str:
    """Format percentage."""
    if n is None:
        return "N/A"
    return f"{n:.{decimals}f}%"


def create_bar_chart(title: str, series, color: str = PRIMARY_COLOR) -> go.Figure:
    """Create a bar chart from (label, value) series points."""
    fig = go.Figure(data=[go.Bar(
        x=[p.label for p in series],
        y=[p.value for p in series],
        marker_color=color,
    )])

    fig.update_layout(title=title, height=350, plot_bgcolor="white")
    return fig


def create_line_chart(chart: LineChart, color: str = PRIMARY_COLOR) -> go.Figure:
    """Draw precomputed line geometry in plot units (y grows downward)."""
    path = chart.path
    fig = go.Figure()

    for level in chart.gridlines:
        fig.add_shape(
            type="line", x0=0, x1=path.width, y0=level, y1=level,
            line=dict(color="#374151", width=1, dash="dot"),
        )

    fig.add_shape(type="path", path=path.area_path_d, fillcolor=color, opacity=0.1,
                  line=dict(width=0))
    fig.add_shape(type="path", path=path.path_d, line=dict(color=color, width=3))

    fig.add_trace(go.Scatter(
        x=[p.x for p in path.points],
        y=[p.y for p in path.points],
        mode="markers",
        marker=dict(size=8, color=color),
        text=[f"{p.label}: {format_number(p.value)}" for p in path.points],
        hoverinfo="text",
    ))

    fig.update_layout(
        title=chart.title,
        height=300,
        showlegend=False,
        plot_bgcolor="white",
        xaxis=dict(
            range=[0, path.width],
            tickvals=[p.x for p in path.points],
            ticktext=[p.label for p in path.points],
        ),
        yaxis=dict(range=[path.chart_height, 0], showticklabels=False),
    )
    return fig


def create_bubble_map(bubble_map: BubbleMap, width: float, height: float) -> go.Figure:
    """Draw projected bubbles on the map view box."""
    bubbles = bubble_map.layout.bubbles
    fig = go.Figure(data=[go.Scatter(
        x=[b.svg_x for b in bubbles],
        y=[b.svg_y for b in bubbles],
        mode="markers",
        marker=dict(
            size=[b.radius * 2 for b in bubbles],
            sizemode="diameter",
            color=PRIMARY_COLOR,
            opacity=0.6,
        ),
        text=[
            f"{b.point.city}, {b.point.country}<br>"
            f"{bubble_map.metric.title()}: {format_currency(b.point.value)}"
            for b in bubbles
        ],
        hoverinfo="text",
    )])

    fig.update_layout(
        title=bubble_map.title,
        height=500,
        plot_bgcolor="#111827",
        xaxis=dict(range=[0, width], visible=False),
        yaxis=dict(range=[height, 0], visible=False),
    )
    return fig


def render_device_tab(view) -> None:
    cols = st.columns(max(len(view.kpis), 1))
    for col, kpi in zip(cols, view.kpis):
        with col:
            st.subheader(kpi.device)
            st.metric("CTR", format_pct(kpi.ctr_pct))
            st.metric("Conversion Rate", format_pct(kpi.conversion_rate_pct))
            st.metric("ROAS", f"{kpi.roas:.2f}x")

    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(create_bar_chart("Revenue by Device", view.revenue_by_device),
                        use_container_width=True)
        st.plotly_chart(create_bar_chart("Clicks by Device", view.clicks_by_device),
                        use_container_width=True)
    with col2:
        st.plotly_chart(create_bar_chart("Spend by Device", view.spend_by_device),
                        use_container_width=True)
        st.plotly_chart(
            create_bar_chart("Conversions by Device", view.conversions_by_device),
            use_container_width=True,
        )

    for device, table in view.campaign_tables.items():
        st.markdown(f"#### {device or 'Unknown device'} Campaigns")
        st.dataframe(
            [
                {
                    "Campaign": r.campaign,
                    "Impressions": format_number(r.impressions),
                    "Clicks": format_number(r.clicks),
                    "Conversions": format_number(r.conversions),
                    "Spend": format_currency(r.spend),
                    "Revenue": format_currency(r.revenue),
                    "CTR": format_pct(r.ctr),
                    "ROAS": f"{r.roas:.2f}",
                }
                for r in table
            ],
            use_container_width=True,
            hide_index=True,
        )


def render_weekly_tab(view) -> None:
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Total Revenue", format_currency(view.total_revenue))
    with col2:
        st.metric("Total Spend", format_currency(view.total_spend))
    with col3:
        st.metric("Avg Weekly Revenue", format_currency(view.avg_weekly_revenue))
    with col4:
        st.metric("Avg Weekly Spend", format_currency(view.avg_weekly_spend))

    for chart in (view.revenue_chart, view.spend_chart, view.clicks_chart,
                  view.conversions_chart):
        if chart.path is None:
            st.info(f"{chart.title}: no data available")
            continue
        st.plotly_chart(create_line_chart(chart), use_container_width=True)


def render_region_tab(view, charts) -> None:
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Total Revenue", format_currency(view.total_revenue))
    with col2:
        st.metric("Total Spend", format_currency(view.total_spend))
    with col3:
        st.metric("Avg ROAS", f"{view.roas:.2f}x")
    with col4:
        st.metric("Regions", view.total_regions)

    for bubble_map in (view.revenue_map, view.spend_map):
        st.plotly_chart(
            create_bubble_map(bubble_map, charts.map_width, charts.map_height),
            use_container_width=True,
        )
        layout = bubble_map.layout
        if layout.min_value is not None:
            st.caption(
                f"Bubble size represents {bubble_map.metric}. "
                f"Min: {format_currency(layout.min_value)} "
                f"Max: {format_currency(layout.max_value)}"
            )

    st.dataframe(
        [
            {
                "Region": r.label,
                "Country": r.country,
                "Revenue": format_currency(r.revenue),
                "Spend": format_currency(r.spend),
                "Clicks": format_number(r.clicks),
                "Conversions": format_number(r.conversions),
                "ROAS": f"{r.roas:.2f}",
            }
            for r in view.table
        ],
        use_container_width=True,
        hide_index=True,
    )


def render_demographic_tab(view) -> None:
    cols = st.columns(max(len(view.genders), 1))
    for col, row in zip(cols, view.genders):
        with col:
            st.subheader(row.label)
            st.metric("Clicks", format_number(row.clicks))
            st.metric("Spend", format_currency(row.spend))
            st.metric("Revenue", format_currency(row.revenue))

    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(create_bar_chart("Spend by Age Group", view.spend_by_age_group),
                        use_container_width=True)
    with col2:
        st.plotly_chart(
            create_bar_chart("Revenue by Age Group", view.revenue_by_age_group),
            use_container_width=True,
        )

    for gender, table in view.segment_tables.items():
        st.markdown(f"#### {gender or 'Unknown gender'} Audience")
        st.dataframe(
            [
                {
                    "Campaign": r.campaign,
                    "Age Group": r.age_group,
                    "Impressions": format_number(r.impressions),
                    "Clicks": format_number(r.clicks),
                    "Conversions": format_number(r.conversions),
                    "CTR": format_pct(r.ctr),
                    "Conversion Rate": format_pct(r.conversion_rate),
                }
                for r in table
            ],
            use_container_width=True,
            hide_index=True,
        )


def main():
    st.title("📊 Marketing Performance Dashboard")

    # Sidebar - File Upload
    with st.sidebar:
        st.header("📁 Upload Data")
        data_file = st.file_uploader(
            "Marketing data (JSON)",
            type=["json"],
            help='A document shaped as {"campaigns": [...]}',
        )

    if not data_file:
        st.info("👈 Upload a marketing data JSON file to get started")
        return

    try:
        service = DashboardService()
        data = load_marketing_data(data_file.getvalue().decode("utf-8"))
    except (DashboardError, UnicodeDecodeError) as e:
        st.error(f"Error loading dashboard: {e}")
        return

    dashboard = service.build_dashboard(data)

    with st.sidebar:
        st.download_button(
            "⬇️ Download summary (JSON)",
            data=json.dumps(service.summary_dict(dashboard), indent=2),
            file_name="dashboard_summary.json",
            mime="application/json",
        )

    tab1, tab2, tab3, tab4 = st.tabs([
        "📱 Devices",
        "📅 Weekly",
        "🌍 Regions",
        "👥 Demographics",
    ])
    with tab1:
        render_device_tab(dashboard.device)
    with tab2:
        render_weekly_tab(dashboard.weekly)
    with tab3:
        render_region_tab(dashboard.region, service.settings.charts)
    with tab4:
        render_demographic_tab(dashboard.demographic)


if __name__ == "__main__":
    main()
