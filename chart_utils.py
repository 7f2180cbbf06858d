import plotly.express as px

# Theme colors
THEME_PRIMARY_COLOR = "#1E88E5"  # Blue
THEME_TEXT_COLOR = "#31333F"  # Dark grey
THEME_AXIS_COLOR = "#718096"  # Slate

CHART_HEIGHT = 300


def hex_to_rgba(color, alpha):
    """Convert a #RRGGBB color into an rgba() string with the given opacity"""
    color = color.lstrip("#")
    r, g, b = (int(color[i:i + 2], 16) for i in (0, 2, 4))
    return f"rgba({r},{g},{b},{alpha})"


def apply_theme(fig, xaxis_title=None, yaxis_title=None):
    """Apply the dashboard theming to a Plotly figure"""
    fig.update_layout(
        font=dict(
            family="sans serif",  # Match Streamlit font
            color=THEME_TEXT_COLOR,
        ),
        paper_bgcolor='rgba(0,0,0,0)',  # Transparent background
        plot_bgcolor='rgba(0,0,0,0)',   # Transparent plot area
        margin=dict(l=40, r=40, t=50, b=40),
        title_font=dict(size=16),
        height=CHART_HEIGHT,
        showlegend=True,
        hovermode="x unified",
    )

    fig.update_xaxes(
        title=xaxis_title,
        color=THEME_AXIS_COLOR,
        gridcolor='rgba(0,0,0,0.1)',
        title_font=dict(size=14),
    )

    fig.update_yaxes(
        title=yaxis_title,
        color=THEME_AXIS_COLOR,
        gridcolor='rgba(0,0,0,0.1)',
        title_font=dict(size=14),
    )

    return fig


def create_themed_line(df, x, y, title=None, xaxis_title=None, yaxis_title=None, color=THEME_PRIMARY_COLOR):
    """Create a themed line chart using Plotly Express"""
    fig = px.line(
        df,
        x=x,
        y=y,
        title=title,
        color_discrete_sequence=[color],
        labels={
            x: xaxis_title if xaxis_title else x,
            y: yaxis_title if yaxis_title else y,
        },
    )
    apply_theme(fig, xaxis_title if xaxis_title else x, yaxis_title if yaxis_title else y)

    # Smooth line without markers
    fig.update_traces(line=dict(width=2, shape="spline"), mode="lines", name=yaxis_title or y, showlegend=True)

    return fig


def create_themed_bar(df, x, y, title=None, xaxis_title=None, yaxis_title=None, color=THEME_PRIMARY_COLOR):
    """Create a themed bar chart using Plotly Express"""
    fig = px.bar(
        df,
        x=x,
        y=y,
        title=title,
        color_discrete_sequence=[color],
        labels={
            x: xaxis_title if xaxis_title else x,
            y: yaxis_title if yaxis_title else y,
        },
    )
    apply_theme(fig, xaxis_title if xaxis_title else x, yaxis_title if yaxis_title else y)
    fig.update_traces(name=yaxis_title or y, showlegend=True)

    return fig


def create_themed_area(df, x, y, title=None, xaxis_title=None, yaxis_title=None, color=THEME_PRIMARY_COLOR):
    """Create a themed area chart using Plotly Express, filled with a translucent accent"""
    fig = px.area(
        df,
        x=x,
        y=y,
        title=title,
        color_discrete_sequence=[color],
        labels={
            x: xaxis_title if xaxis_title else x,
            y: yaxis_title if yaxis_title else y,
        },
    )
    apply_theme(fig, xaxis_title if xaxis_title else x, yaxis_title if yaxis_title else y)
    fig.update_traces(
        line=dict(color=color, shape="spline"),
        fillcolor=hex_to_rgba(color, 0.2),
        name=yaxis_title or y,
        showlegend=True,
    )

    return fig
