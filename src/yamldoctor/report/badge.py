"""Shields-style SVG badge showing the scan score."""

BADGE_LABEL = "yaml-doctor"
LABEL_WIDTH = 88
VALUE_WIDTH = 62


def badge_color(score: int) -> str:
    if score >= 90:
        return "#2ebc4f"
    if score >= 75:
        return "#dfb317"
    return "#e05d44"


def render_badge(score: int) -> str:
    color = badge_color(score)
    value = f"{score}/100"
    w1, w2 = LABEL_WIDTH, VALUE_WIDTH
    total = w1 + w2

    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{total}" height="20" role="img" '
        f'aria-label="{BADGE_LABEL}: {value}">\n'
        '  <linearGradient id="s" x2="0" y2="100%"><stop offset="0" stop-color="#bbb" stop-opacity=".1"/>'
        '<stop offset="1" stop-opacity=".1"/></linearGradient>\n'
        f'  <rect rx="3" width="{total}" height="20" fill="#555"/>\n'
        f'  <rect rx="3" x="{w1}" width="{w2}" height="20" fill="{color}"/>\n'
        f'  <path fill="{color}" d="M{w1} 0h4v20h-4z"/>\n'
        f'  <rect rx="3" width="{total}" height="20" fill="url(#s)"/>\n'
        '  <g fill="#fff" text-anchor="middle" font-family="Verdana,Geneva,DejaVu Sans,sans-serif" font-size="11">\n'
        f'    <text x="{w1 // 2}" y="14">{BADGE_LABEL}</text>\n'
        f'    <text x="{w1 + w2 // 2}" y="14">{value}</text>\n'
        '  </g>\n'
        '</svg>'
    )
