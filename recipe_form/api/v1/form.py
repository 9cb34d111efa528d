from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from recipe_form.config import Settings
from recipe_form.core.form import (
    begin_generation,
    begin_pantry_analysis,
    finish_generation,
    finish_pantry_analysis,
    is_stale,
    set_description,
    take_alert,
    toggle_restriction,
)
from recipe_form.core.models import FormState, GeneratedMeal
from recipe_form.services.exceptions import RecipeAPIError
from recipe_form.services.recipe_api import (
    RecipeAPIClient,
    generation_alert,
    log_pantry_failure,
    pantry_alert,
)
from recipe_form.services.sessions import FormSessionStore
from recipe_form.ui.page import render_page

router = APIRouter(tags=["form"])
logger = logging.getLogger(__name__)

# ---- DI helpers --------------------------------------------------------------

def get_settings(request: Request) -> Settings:
    return request.app.state.settings

def get_store(request: Request) -> FormSessionStore:
    return request.app.state.sessions

def get_recipe_client(request: Request) -> RecipeAPIClient:
    return request.app.state.recipe_client

def get_session_id(request: Request, settings: Settings = Depends(get_settings)) -> str:
    return request.cookies.get(settings.session_cookie_name) or FormSessionStore.new_id()


def _bind_session(resp: Response, session_id: str, settings: Settings) -> Response:
    resp.set_cookie(settings.session_cookie_name, session_id, httponly=True, samesite="lax")
    return resp

def _back_to_form(session_id: str, settings: Settings) -> Response:
    # 303 so the browser follows with a GET; reloading the page never resubmits
    return _bind_session(RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER), session_id, settings)

# ---- Page --------------------------------------------------------------------

@router.get("/", response_class=HTMLResponse)
def form_page(
    session_id: str = Depends(get_session_id),
    store: FormSessionStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    state, alert = take_alert(store.get(session_id))
    if alert is not None:
        # an untouched default state is not stored, so cookieless GETs cost nothing
        store.save(session_id, state)
    html = render_page(state, alert=alert, sanitize=settings.sanitize_recipe_html)
    return _bind_session(HTMLResponse(html), session_id, settings)


@router.post("/restrictions/toggle")
def toggle(
    label: str = Form(...),
    description: Optional[str] = Form(None),
    session_id: str = Depends(get_session_id),
    store: FormSessionStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    state = store.get(session_id)
    if description is not None:
        state = set_description(state, description)
    try:
        state = toggle_restriction(state, label)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    store.save(session_id, state)
    return _back_to_form(session_id, settings)

# ---- Backend round trips -----------------------------------------------------

@router.post("/generate")
async def generate(
    description: str = Form(""),
    session_id: str = Depends(get_session_id),
    store: FormSessionStore = Depends(get_store),
    client: RecipeAPIClient = Depends(get_recipe_client),
    settings: Settings = Depends(get_settings),
):
    state, seq = begin_generation(set_description(store.get(session_id), description))
    store.save(session_id, state)
    logger.info("Recipe generation #%d started (restrictions=%s)", seq, state.restrictions)

    result: Optional[GeneratedMeal] = None
    alert: Optional[str] = None
    try:
        result = await client.generate_recipe(state.description, state.restrictions)
    except RecipeAPIError as e:
        alert = generation_alert(e)
        logger.error("Recipe generation #%d failed: %s", seq, e)
    finally:
        current = store.get(session_id)
        if is_stale(current, "generation", seq):
            logger.warning("Discarding recipe generation #%d; #%d is newer", seq, current.generation_seq)
        store.save(session_id, finish_generation(current, seq, result=result, alert=alert))

    return _back_to_form(session_id, settings)


@router.post("/pantry")
async def upload_pantry(
    file: Optional[UploadFile] = File(None, description="Photo of pantry contents"),
    description: Optional[str] = Form(None),
    session_id: str = Depends(get_session_id),
    store: FormSessionStore = Depends(get_store),
    client: RecipeAPIClient = Depends(get_recipe_client),
    settings: Settings = Depends(get_settings),
):
    state = store.get(session_id)
    if description is not None:
        state = set_description(state, description)
    if file is None or not file.filename:
        # picker dismissed
        store.save(session_id, state)
        return _back_to_form(session_id, settings)

    content = await file.read()
    state, seq = begin_pantry_analysis(state)
    store.save(session_id, state)
    logger.info("Pantry analysis #%d started (%s, %d bytes)", seq, file.filename, len(content))

    ingredients: Optional[str] = None
    alert: Optional[str] = None
    try:
        analysis = await client.analyze_pantry(file.filename, content, file.content_type)
        ingredients = analysis.ingredients
    except RecipeAPIError as e:
        alert = pantry_alert(e)
        log_pantry_failure(e)
    finally:
        current = store.get(session_id)
        if is_stale(current, "pantry", seq):
            logger.warning("Discarding pantry analysis #%d; #%d is newer", seq, current.pantry_seq)
        store.save(session_id, finish_pantry_analysis(current, seq, ingredients=ingredients, alert=alert))

    return _back_to_form(session_id, settings)

# ---- JSON view ---------------------------------------------------------------

@router.get("/api/v1/form/state", response_model=FormState)
def form_state(
    session_id: str = Depends(get_session_id),
    store: FormSessionStore = Depends(get_store),
):
    return store.get(session_id)
