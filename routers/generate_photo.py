from fastapi import APIRouter, Form, HTTPException
from typing import List
import json
import uuid
import logging

from utils.catalog import (
    COSTUMES,
    DEFAULT_COSTUME,
    DEFAULT_LOCATION,
    REGION_LABELS,
    is_known_costume,
    is_known_location,
    locations_by_region,
)
from utils.gemini_client import generate_photo

router = APIRouter()
logger = logging.getLogger(__name__)


# =========================
# Helper: parse data URL list
# =========================
def parse_images(images_b64: str) -> List[str]:
    try:
        images = json.loads(images_b64)
        if not isinstance(images, list) or not all(isinstance(i, str) for i in images):
            raise ValueError()
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid images_b64")

    if not images:
        raise HTTPException(status_code=400, detail="Please upload at least one photo.")
    return images


# =========================
# ENDPOINT WEB
# =========================
@router.post("/ai/generate-photo-web")
async def generate_photo_web(
    images_b64: str = Form(...),
    location: str = Form(DEFAULT_LOCATION),
    custom_location: str = Form(""),
    costume: str = Form(DEFAULT_COSTUME),
):
    request_id = str(uuid.uuid4())
    logger.info(f"[GENERATE-PHOTO-WEB] Request {request_id} started")

    images = parse_images(images_b64)
    if not is_known_location(location):
        raise HTTPException(status_code=400, detail=f"Unknown location: {location}")
    if not is_known_costume(costume):
        raise HTTPException(status_code=400, detail=f"Unknown costume: {costume}")
    final_location = custom_location or location

    try:
        image = await generate_photo(images, final_location, costume)
    except Exception:
        logger.exception(f"[GENERATE-PHOTO-WEB] Request {request_id} FAILED")
        raise HTTPException(status_code=500, detail="Failed to generate photo. Please try again.")

    logger.info(f"[GENERATE-PHOTO-WEB] Request {request_id} SUCCESS")
    return {
        "status": "ok",
        "request_id": request_id,
        "image": image,
        "location": final_location,
        "costume": costume,
    }


# =========================
# Catalog
# =========================
@router.get("/catalog")
async def catalog():
    return {
        "status": "ok",
        "regions": [
            {
                "region": region,
                "label": REGION_LABELS[region],
                "locations": [{"id": loc.id, "name": loc.name} for loc in locations],
            }
            for region, locations in locations_by_region()
        ],
        "costumes": [
            {"id": c.id, "name": c.name, "ethnic_group": c.ethnic_group}
            for c in COSTUMES
        ],
    }
