"""
Notas Backend - Pydantic View Schemas
======================================

What:  Pydantic models for the data handed from the middleware to the routes
       and from the routes to the templates.
Why:   ORM rows are converted once, in the middleware, so handlers and
       templates never touch a live session.
"""

from typing import List

from pydantic import BaseModel, Field


class NoteView(BaseModel):
    """A note as shown on the reading page."""

    id: int = Field(description="Store-assigned note id")
    titulo: str = Field(description="Note title")
    conteudo: str = Field(description="Note body")

    model_config = {"from_attributes": True}


class PolicyContext(BaseModel):
    """
    What:  Per-request result of the access policy.
    Who:   Built by AccessPolicyMiddleware, stored on `request.state.policy`,
           read by every route handler.

    Field names follow the template variables of the views.
    """

    quant_notas: int = Field(ge=0, description="Current number of notes")
    notas: List[NoteView] = Field(default_factory=list, description="All notes, by id")
    cannot_add_notes: bool = Field(description="True once the note cap is reached")
    is_allowed_time: bool = Field(description="True inside the opening hours")
