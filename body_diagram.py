"""
Body Diagram SVG Generator

Generates front and back body diagrams with each muscle coloured by its
weekly volume zone (below MV through above MRV).
"""

from typing import Dict, List, Optional

from constants import VOLUME_ZONES, ZONE_CONFIG
from volume_calculator import get_volume_zone

SKIN_COLOR = "#e0c8b0"
UNTRAINED_COLOR = "#9E9E9E"
OUTLINE = 'stroke="#333" stroke-width="1"'

# Shapes per muscle; each entry is an SVG element with a {fill} placeholder
FRONT_SHAPES = {
    "Front Delts": [
        '<ellipse cx="58" cy="88" rx="14" ry="13" fill="{fill}" {outline}/>',
        '<ellipse cx="142" cy="88" rx="14" ry="13" fill="{fill}" {outline}/>',
    ],
    "Side Delts": [
        '<ellipse cx="44" cy="84" rx="9" ry="14" fill="{fill}" {outline}/>',
        '<ellipse cx="156" cy="84" rx="9" ry="14" fill="{fill}" {outline}/>',
    ],
    "Chest": [
        '<path d="M 65 80 Q 80 85 100 90 Q 120 85 135 80 L 135 115 Q 120 125 100 130 '
        'Q 80 125 65 115 Z" fill="{fill}" {outline}/>',
    ],
    "Biceps": [
        '<ellipse cx="45" cy="120" rx="12" ry="30" fill="{fill}" {outline}/>',
        '<ellipse cx="155" cy="120" rx="12" ry="30" fill="{fill}" {outline}/>',
    ],
    "Forearms": [
        '<ellipse cx="40" cy="175" rx="10" ry="28" fill="{fill}" {outline}/>',
        '<ellipse cx="160" cy="175" rx="10" ry="28" fill="{fill}" {outline}/>',
    ],
    "Abs": [
        '<rect x="80" y="135" width="40" height="80" rx="5" fill="{fill}" {outline}/>',
    ],
    "Quads": [
        '<ellipse cx="75" cy="290" rx="22" ry="55" fill="{fill}" {outline}/>',
        '<ellipse cx="125" cy="290" rx="22" ry="55" fill="{fill}" {outline}/>',
    ],
}

BACK_SHAPES = {
    "Traps": [
        '<path d="M 75 55 Q 100 50 125 55 L 135 80 Q 100 75 65 80 Z" fill="{fill}" {outline}/>',
    ],
    "Rear Delts": [
        '<ellipse cx="55" cy="85" rx="18" ry="12" fill="{fill}" {outline}/>',
        '<ellipse cx="145" cy="85" rx="18" ry="12" fill="{fill}" {outline}/>',
    ],
    "Triceps": [
        '<ellipse cx="45" cy="120" rx="12" ry="30" fill="{fill}" {outline}/>',
        '<ellipse cx="155" cy="120" rx="12" ry="30" fill="{fill}" {outline}/>',
    ],
    "Lats": [
        '<path d="M 65 85 Q 55 120 60 160 L 80 150 Q 100 145 120 150 L 140 160 '
        'Q 145 120 135 85 Q 120 80 100 82 Q 80 80 65 85 Z" fill="{fill}" {outline}/>',
    ],
    "Middle Back": [
        '<rect x="85" y="90" width="30" height="40" rx="5" fill="{fill}" {outline}/>',
    ],
    "Lower Back": [
        '<path d="M 80 155 Q 100 150 120 155 L 120 200 Q 100 210 80 200 Z" '
        'fill="{fill}" {outline}/>',
    ],
    "Glutes": [
        '<ellipse cx="80" cy="230" rx="22" ry="20" fill="{fill}" {outline}/>',
        '<ellipse cx="120" cy="230" rx="22" ry="20" fill="{fill}" {outline}/>',
    ],
    "Hamstrings": [
        '<ellipse cx="75" cy="295" rx="18" ry="45" fill="{fill}" {outline}/>',
        '<ellipse cx="125" cy="295" rx="18" ry="45" fill="{fill}" {outline}/>',
    ],
    "Calves": [
        '<ellipse cx="72" cy="365" rx="12" ry="30" fill="{fill}" {outline}/>',
        '<ellipse cx="128" cy="365" rx="12" ry="30" fill="{fill}" {outline}/>',
    ],
}

# Untrained body parts drawn underneath the muscles
BASE_SHAPES = [
    '<ellipse cx="100" cy="30" rx="25" ry="28" fill="{skin}" {outline}/>',
    '<rect x="88" y="55" width="24" height="20" fill="{skin}" {outline}/>',
    '<path d="M 65 115 L 55 170 L 60 220 L 75 220 L 75 170 L 100 175 L 125 170 '
    'L 125 220 L 140 220 L 145 170 L 135 115" fill="{skin}" {outline}/>',
    '<ellipse cx="72" cy="365" rx="12" ry="30" fill="{skin}" {outline}/>',
    '<ellipse cx="128" cy="365" rx="12" ry="30" fill="{skin}" {outline}/>',
    '<ellipse cx="35" cy="215" rx="8" ry="12" fill="{skin}" {outline}/>',
    '<ellipse cx="165" cy="215" rx="8" ry="12" fill="{skin}" {outline}/>',
]


def get_zone_color(sets: float, landmarks: Dict, muscle: str) -> str:
    """
    Get color for a muscle from its volume zone.

    Untrained muscles and muscles without landmarks are drawn gray.
    """
    if sets == 0 or muscle not in landmarks:
        return UNTRAINED_COLOR
    return ZONE_CONFIG[get_volume_zone(sets, landmarks, muscle)]["color"]


def _render_svg(shapes: Dict[str, List[str]], colors: Dict[str, str], width: int, height: int) -> str:
    elements = [s.format(skin=SKIN_COLOR, outline=OUTLINE) for s in BASE_SHAPES]
    for muscle, muscle_shapes in shapes.items():
        fill = colors.get(muscle, UNTRAINED_COLOR)
        elements.append(f"<!-- {muscle} -->")
        elements.extend(s.format(fill=fill, outline=OUTLINE) for s in muscle_shapes)

    body = "\n    ".join(elements)
    return (
        f'<svg width="{width}" height="{height}" viewBox="0 0 200 400" '
        f'xmlns="http://www.w3.org/2000/svg">\n    {body}\n</svg>'
    )


def muscle_colors(muscle_volumes: Dict[str, float], landmarks: Dict) -> Dict[str, str]:
    """Map every drawn muscle to its zone color."""
    return {
        muscle: get_zone_color(muscle_volumes.get(muscle, 0), landmarks, muscle)
        for muscle in list(FRONT_SHAPES) + list(BACK_SHAPES)
    }


def generate_body_svg_front(
    muscle_volumes: Dict[str, float], landmarks: Dict, width: int = 200, height: int = 400
) -> str:
    """
    Generate front view body diagram SVG.

    Args:
        muscle_volumes: Dict mapping muscle names to weekly sets
        landmarks: Dict mapping muscle names to VolumeLandmark
        width: SVG width
        height: SVG height
    """
    return _render_svg(FRONT_SHAPES, muscle_colors(muscle_volumes, landmarks), width, height)


def generate_body_svg_back(
    muscle_volumes: Dict[str, float], landmarks: Dict, width: int = 200, height: int = 400
) -> str:
    """Generate back view body diagram SVG."""
    return _render_svg(BACK_SHAPES, muscle_colors(muscle_volumes, landmarks), width, height)


def generate_combined_body_diagram(muscle_volumes: Dict[str, float], landmarks: Dict) -> str:
    """
    Generate HTML with front and back views side by side.

    Args:
        muscle_volumes: Dict mapping muscle names to weekly sets
        landmarks: Dict mapping muscle names to VolumeLandmark

    Returns:
        HTML string with both SVGs
    """
    front_svg = generate_body_svg_front(muscle_volumes, landmarks, width=140, height=280)
    back_svg = generate_body_svg_back(muscle_volumes, landmarks, width=140, height=280)

    views = []
    for title, svg in (("Front", front_svg), ("Back", back_svg)):
        views.append(
            '<div style="text-align: center;">\n'
            f'<div style="font-size: 12px; font-weight: bold; margin-bottom: 5px; color: #333;">{title}</div>\n'
            f"{svg}\n</div>"
        )

    return (
        '<div style="display: flex; justify-content: space-around; '
        'align-items: flex-start; gap: 10px;">\n' + "\n".join(views) + "\n</div>"
    )


def get_zone_legend_html(zones: Optional[List[str]] = None) -> str:
    """HTML legend of zone colors (plus gray for untrained)."""
    swatch = (
        '<span style="display: inline-flex; align-items: center; gap: 3px;">'
        '<span style="display: inline-block; width: 12px; height: 12px; '
        'background: {color}; border-radius: 2px;"></span>{label}</span>'
    )
    items = [swatch.format(color=UNTRAINED_COLOR, label="None")]
    for zone in zones or VOLUME_ZONES:
        items.append(swatch.format(color=ZONE_CONFIG[zone]["color"], label=ZONE_CONFIG[zone]["label"]))

    return (
        '<div style="font-size: 10px; margin-top: 10px;">'
        '<div style="display: flex; align-items: center; gap: 8px; flex-wrap: wrap;">'
        + "".join(items)
        + "</div></div>"
    )
