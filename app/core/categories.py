# ============================================================================
# FILE: app/core/categories.py
# ============================================================================
from typing import Dict, List

# Categories offered to clients when tagging posts
CATEGORIES: List[Dict[str, str]] = [
    {"key": "sports", "label": "Sports"},
    {"key": "video-games", "label": "video-games"},
]
