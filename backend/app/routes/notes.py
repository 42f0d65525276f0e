"""
Notas Backend - Note Route Handlers
====================================

What:  The four pages of the application.
How:   Every handler reads the PolicyContext that AccessPolicyMiddleware put
       on `request.state.policy`; only the two mutations open a session.

Route Inventory:
    GET  /                list page with count and add/read/delete links
    GET  /adicionar_nota  add form (403 when the note cap is reached)
    POST /adicionar_nota  create a note, redirect to /
    GET  /apagar_notas    delete every note, redirect to /
    GET  /ler             read page listing every note
"""

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.exceptions import PolicyRejection
from app.schemas.note import PolicyContext
from app.services.access_policy import NOTE_LIMIT_MESSAGE, OUTSIDE_HOURS_MESSAGE
from app.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notas"])

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


def get_policy(request: Request) -> PolicyContext:
    """Dependency returning the context computed by the access policy middleware."""
    return request.state.policy


@router.get("/", response_class=HTMLResponse, summary="List page")
async def index(request: Request, policy: PolicyContext = Depends(get_policy)):
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "quant_notas": policy.quant_notas,
            "cannot_add_notes": policy.cannot_add_notes,
            "is_allowed_time": policy.is_allowed_time,
        },
    )


@router.get("/adicionar_nota", response_class=HTMLResponse, summary="Add-note form")
async def show_add_form(request: Request, policy: PolicyContext = Depends(get_policy)):
    """
    Render the add form, unless the policy forbids adding.

    The time check repeats the middleware's; the cap check only happens here,
    not on submission.
    """
    if not policy.is_allowed_time:
        raise PolicyRejection(OUTSIDE_HOURS_MESSAGE, reason="outside_hours")

    if policy.cannot_add_notes:
        raise PolicyRejection(
            NOTE_LIMIT_MESSAGE,
            reason="note_limit",
            context={"quant_notas": policy.quant_notas},
        )

    return templates.TemplateResponse(request, "adicionar_nota.html", {})


@router.post("/adicionar_nota", summary="Submit a note")
async def submit_note(
    titulo: Optional[str] = Form(default=None),
    conteudo: Optional[str] = Form(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> RedirectResponse:
    """
    Store the submitted note and go back to the list page.

    Missing fields are not rejected here: the NOT NULL columns reject them,
    which ends as a 500 "Erro ao adicionar nota".
    """
    logger.debug(
        "Received note: titulo=%d chars, conteudo=%d chars",
        len(titulo or ""),
        len(conteudo or ""),
    )
    await note_service.create(db, titulo=titulo, conteudo=conteudo)
    return RedirectResponse(url="/", status_code=302)


@router.get("/apagar_notas", summary="Delete every note")
async def delete_notes(db: AsyncSession = Depends(get_db_session)) -> RedirectResponse:
    await note_service.delete_all(db)
    return RedirectResponse(url="/", status_code=302)


@router.get("/ler", response_class=HTMLResponse, summary="Read page")
async def read_notes(request: Request, policy: PolicyContext = Depends(get_policy)):
    # Uses the list loaded by the middleware; no second query
    return templates.TemplateResponse(request, "ler_notas.html", {"notas": policy.notas})
