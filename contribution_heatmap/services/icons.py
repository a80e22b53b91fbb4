"""Small 32x32 SVG fragments placed on the custom banner icon grid."""

ICON_OPEN = (
    '<svg width="32" height="32" viewBox="0 0 32 32" '
    'xmlns="http://www.w3.org/2000/svg">'
)

TERMINAL = (
    ICON_OPEN
    + '<rect x="2" y="5" width="28" height="22" rx="3" fill="#1f2328"/>'
    '<path d="M8 12 L13 16 L8 20" stroke="#ffffff" stroke-width="2" fill="none"/>'
    '<line x1="15" y1="21" x2="23" y2="21" stroke="#ffffff" stroke-width="2"/>'
    "</svg>"
)

BRANCH = (
    ICON_OPEN
    + '<circle cx="10" cy="7" r="3" fill="#f05032"/>'
    '<circle cx="10" cy="25" r="3" fill="#f05032"/>'
    '<circle cx="22" cy="12" r="3" fill="#f05032"/>'
    '<path d="M10 10 V22 M22 15 C22 20 10 18 10 22" stroke="#f05032" '
    'stroke-width="2" fill="none"/>'
    "</svg>"
)

BRACES = (
    ICON_OPEN
    + '<path d="M12 6 C8 6 9 14 5 16 C9 18 8 26 12 26" stroke="#3178c6" '
    'stroke-width="2.5" fill="none"/>'
    '<path d="M20 6 C24 6 23 14 27 16 C23 18 24 26 20 26" stroke="#3178c6" '
    'stroke-width="2.5" fill="none"/>'
    "</svg>"
)

DATABASE = (
    ICON_OPEN
    + '<ellipse cx="16" cy="8" rx="10" ry="4" fill="#336791"/>'
    '<path d="M6 8 V24 C6 26 10 28 16 28 C22 28 26 26 26 24 V8 C26 10 22 12 16 12 '
    'C10 12 6 10 6 8 Z" fill="#336791" opacity="0.8"/>'
    "</svg>"
)

CLOUD = (
    ICON_OPEN
    + '<path d="M9 24 C4 24 3 17 8 16 C8 10 16 8 18 13 C21 10 27 12 26 17 '
    'C30 18 29 24 25 24 Z" fill="#2496ed"/>'
    "</svg>"
)

CUBE = (
    ICON_OPEN
    + '<path d="M16 3 L28 10 L16 17 L4 10 Z" fill="#61dafb"/>'
    '<path d="M4 10 L16 17 V29 L4 22 Z" fill="#3aa6c4"/>'
    '<path d="M28 10 L16 17 V29 L28 22 Z" fill="#2b7f96"/>'
    "</svg>"
)

DEFAULT_ICONS: tuple[str, ...] = (TERMINAL, BRANCH, BRACES, DATABASE, CLOUD, CUBE)
