# utils/view.py
"""
Pure projection of a PhotoState into the view model the page template renders.

render_view() reads the state and nothing else; the template holds no logic
beyond formatting what it is given.
"""
from typing import Any, Dict

from utils.catalog import COSTUMES, REGION_LABELS, locations_by_region
from utils.photo_session import PhotoState

DOWNLOAD_FILENAME = "viet-photo-ai.png"

HOW_IT_WORKS = (
    "Upload a portrait photo with clear facial features.",
    "Select a stunning Vietnamese destination from our curated list.",
    "Choose an ethnic costume to transform your look.",
    "Our AI generates a high-quality cinematic composite in seconds.",
)

POPULAR_COMBOS = (
    {"location": "Sa Pa", "attire": "H'Mông", "image": "https://picsum.photos/seed/sapa/400/300"},
    {"location": "Phú Quốc", "attire": "Khmer", "image": "https://picsum.photos/seed/pq/400/300"},
    {"location": "Sơn Đoòng", "attire": "Mường", "image": "https://picsum.photos/seed/sd/400/300"},
)

PHOTO_TIP = (
    "This AI-generated image works best when you share it on social media! "
    "Tag us at #VietPhotoAI to show off your ethnic transformation."
)


def _compose_view(state: PhotoState) -> Dict[str, Any]:
    submit_disabled = state.is_generating or not state.images
    return {
        "screen": "compose",
        "images": [{"index": i, "src": img} for i, img in enumerate(state.images)],
        "location_groups": [
            {
                "label": REGION_LABELS[region],
                "options": [
                    {"value": loc.name, "label": loc.name, "selected": loc.name == state.selected_location}
                    for loc in locations
                ],
            }
            for region, locations in locations_by_region()
        ],
        "custom_location": state.custom_location,
        "costumes": [
            {
                "value": c.name,
                "group": c.ethnic_group,
                "label": c.short_name,
                "selected": c.name == state.selected_costume,
            }
            for c in COSTUMES
        ],
        "submit": {
            "disabled": submit_disabled,
            "busy": state.is_generating,
            "label": "Generating Masterpiece..." if state.is_generating else "Create My AI Photo",
        },
        "error": state.error,
        "how_it_works": list(HOW_IT_WORKS),
        "popular_combos": [dict(c) for c in POPULAR_COMBOS],
    }


def _result_view(state: PhotoState) -> Dict[str, Any]:
    return {
        "screen": "result",
        "result_image": state.result_image,
        "location_label": state.effective_location,
        "costume_label": state.selected_costume,
        "download": {"url": "/download", "filename": DOWNLOAD_FILENAME},
        "photo_tip": PHOTO_TIP,
    }


def render_view(state: PhotoState) -> Dict[str, Any]:
    view = _result_view(state) if state.result_image else _compose_view(state)
    view["show_start_over"] = bool(state.result_image)
    return view
