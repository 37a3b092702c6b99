# slotbook/api/routes/providers.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from slotbook.api.deps import to_http_exception
from slotbook.core.errors import SchedulingError
from slotbook.db.base import get_db
from slotbook.db.models.offering import Offering
from slotbook.db.models.provider import Provider
from slotbook.scheduling.validators import validate_offering
from slotbook.schemas.offering import OfferingCreate, OfferingResponse
from slotbook.schemas.provider import ProviderCreate, ProviderResponse

router = APIRouter(prefix="/providers", tags=["providers"])


@router.post("", response_model=ProviderResponse, status_code=201)
def create_provider(payload: ProviderCreate, db: Session = Depends(get_db)):
    existing = db.query(Provider).filter(Provider.email == payload.email).first()
    if existing:
        raise HTTPException(status_code=400, detail="Email already registered")

    provider = Provider(email=payload.email, name=payload.name)
    db.add(provider)
    db.commit()
    db.refresh(provider)
    return provider


@router.get("/{provider_id}", response_model=ProviderResponse)
def get_provider(provider_id: int, db: Session = Depends(get_db)):
    provider = db.query(Provider).filter(Provider.id == provider_id).first()
    if not provider:
        raise HTTPException(status_code=404, detail="Provider not found")
    return provider


# Offerings define the session/break grid used for slot generation

@router.post("/{provider_id}/offerings", response_model=OfferingResponse, status_code=201)
def create_offering(provider_id: int, payload: OfferingCreate, db: Session = Depends(get_db)):
    provider = db.query(Provider).filter(Provider.id == provider_id).first()
    if not provider:
        raise HTTPException(status_code=404, detail="Provider not found")

    try:
        validate_offering(payload.duration_minutes, payload.break_minutes)
    except SchedulingError as exc:
        raise to_http_exception(exc)
    if payload.price < 0:
        raise HTTPException(status_code=400, detail="price must not be negative")

    offering = Offering(
        provider_id=provider.id,
        name=payload.name,
        description=payload.description,
        duration_minutes=payload.duration_minutes,
        break_minutes=payload.break_minutes,
        price=payload.price,
        is_active=payload.is_active if payload.is_active is not None else True,
    )
    db.add(offering)
    db.commit()
    db.refresh(offering)
    return offering


@router.get("/{provider_id}/offerings", response_model=List[OfferingResponse])
def list_offerings(provider_id: int, db: Session = Depends(get_db)):
    return db.query(Offering).filter(Offering.provider_id == provider_id).all()
