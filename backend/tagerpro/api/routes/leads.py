from typing import Any

from fastapi import APIRouter, HTTPException, Response

from tagerpro import crud
from tagerpro.api.deps import SessionDep, storage_errors
from tagerpro.models import LeadCreate, LeadPublic, LeadUpdate

router = APIRouter()


@router.get("", response_model=list[LeadPublic])
def read_leads(session: SessionDep) -> Any:
    with storage_errors(session, "fetch leads"):
        return crud.list_leads(session=session)


@router.get("/{id}", response_model=LeadPublic)
def read_lead(id: int, session: SessionDep) -> Any:
    with storage_errors(session, "fetch lead"):
        lead = crud.get_lead(session=session, lead_id=id)
    if not lead:
        raise HTTPException(status_code=404, detail="Lead not found")
    return lead


@router.post("", response_model=LeadPublic, status_code=201)
def create_lead(*, session: SessionDep, lead_in: LeadCreate) -> Any:
    """Store a lead and record a lead_created analytics event for it."""
    with storage_errors(session, "create lead"):
        return crud.create_lead(session=session, lead_in=lead_in)


@router.put("/{id}", response_model=LeadPublic)
def update_lead(*, id: int, session: SessionDep, lead_in: LeadUpdate) -> Any:
    with storage_errors(session, "update lead"):
        lead = crud.update_lead(session=session, lead_id=id, lead_in=lead_in)
    if not lead:
        raise HTTPException(status_code=404, detail="Lead not found")
    return lead


@router.delete("/{id}", status_code=204)
def delete_lead(id: int, session: SessionDep) -> Response:
    with storage_errors(session, "delete lead"):
        deleted = crud.delete_lead(session=session, lead_id=id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Lead not found")
    return Response(status_code=204)
