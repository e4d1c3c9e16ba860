from fastapi import APIRouter, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates
from pathlib import Path
from typing import List, Optional
import base64
import logging

from config import SESSION_COOKIE, SESSION_IDLE_SECONDS, SESSION_MAX
from utils.image_ingestion import read_uploads_as_data_urls
from utils.photo_session import PhotoSession, SessionStore
from utils.view import DOWNLOAD_FILENAME, render_view

router = APIRouter()
logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))
store = SessionStore(max_sessions=SESSION_MAX, idle_timeout=SESSION_IDLE_SECONDS)


# =========================
# Helpers
# =========================
def get_session(request: Request) -> PhotoSession:
    return store.get_or_create(request.cookies.get(SESSION_COOKIE))


def with_cookie(response: Response, session: PhotoSession) -> Response:
    response.set_cookie(SESSION_COOKIE, session.session_id, httponly=True, samesite="lax")
    return response


def back_to_form(session: PhotoSession) -> Response:
    return with_cookie(RedirectResponse(url="/", status_code=303), session)


def apply_selection(
    session: PhotoSession,
    location: Optional[str],
    custom_location: Optional[str],
    costume: Optional[str],
):
    if location is not None:
        session.select_location(location)
    if custom_location is not None:
        session.set_custom_location(custom_location)
    if costume is not None:
        session.select_costume(costume)


# =========================
# Page
# =========================
@router.get("/", response_class=HTMLResponse)
async def index(request: Request):
    session = get_session(request)
    response = templates.TemplateResponse(
        request=request,
        name="index.html",
        context={"view": render_view(session.state)},
    )
    return with_cookie(response, session)


# =========================
# Form actions
# =========================
@router.post("/upload")
async def upload_images(
    request: Request,
    images: List[UploadFile] = File(default=[]),
    location: Optional[str] = Form(None),
    custom_location: Optional[str] = Form(None),
    costume: Optional[str] = Form(None),
):
    session = get_session(request)
    # Unsubmitted picker values ride along with the upload
    apply_selection(session, location, custom_location, costume)
    # An empty file input still posts one nameless part
    selected = [f for f in images if f.filename]
    session.set_images(await read_uploads_as_data_urls(selected))
    return back_to_form(session)


@router.post("/images/{index}/remove")
async def remove_image(
    request: Request,
    index: int,
    location: Optional[str] = Form(None),
    custom_location: Optional[str] = Form(None),
    costume: Optional[str] = Form(None),
):
    session = get_session(request)
    apply_selection(session, location, custom_location, costume)
    session.remove_image(index)
    return back_to_form(session)


@router.post("/selection")
async def update_selection(
    request: Request,
    location: Optional[str] = Form(None),
    custom_location: Optional[str] = Form(None),
    costume: Optional[str] = Form(None),
):
    session = get_session(request)
    apply_selection(session, location, custom_location, costume)
    return back_to_form(session)


@router.post("/generate")
async def generate(
    request: Request,
    location: Optional[str] = Form(None),
    custom_location: Optional[str] = Form(None),
    costume: Optional[str] = Form(None),
):
    session = get_session(request)
    apply_selection(session, location, custom_location, costume)
    result = await session.generate()
    if result.success:
        logger.info(f"[PHOTO-WEB] {session.session_id} generate -> result screen")
    else:
        logger.info(f"[PHOTO-WEB] {session.session_id} generate -> compose screen, error={result.error!r}")
    return back_to_form(session)


@router.post("/reset")
async def reset(request: Request):
    session = get_session(request)
    session.reset()
    store.discard(session.session_id)
    response = RedirectResponse(url="/", status_code=303)
    response.delete_cookie(SESSION_COOKIE)
    return response


# =========================
# Download
# =========================
@router.get("/download")
async def download(request: Request):
    session = get_session(request)
    result = session.state.result_image
    if not result:
        raise HTTPException(status_code=404, detail="No generated photo to download")

    image_bytes = base64.b64decode(result.split(",", 1)[-1])
    return Response(
        content=image_bytes,
        media_type="image/png",
        headers={"Content-Disposition": f'attachment; filename="{DOWNLOAD_FILENAME}"'},
    )
