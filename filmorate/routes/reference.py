# filmorate/routes/reference.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Path

from filmorate.dependencies import get_reference_service
from filmorate.schemas import Genre, Mpa
from filmorate.services.reference import ReferenceService

genres_router = APIRouter(prefix="/genres", tags=["reference"])
mpa_router = APIRouter(prefix="/mpa", tags=["reference"])


@genres_router.get("", response_model=List[Genre])
async def list_genres(svc: ReferenceService = Depends(get_reference_service)):
    return await svc.get_all_genres()


@genres_router.get("/{genre_id}", response_model=Genre)
async def get_genre(genre_id: int = Path(...), svc: ReferenceService = Depends(get_reference_service)):
    return await svc.get_genre_by_id(genre_id)


@mpa_router.get("", response_model=List[Mpa])
async def list_mpa(svc: ReferenceService = Depends(get_reference_service)):
    return await svc.get_all_mpa()


@mpa_router.get("/{mpa_id}", response_model=Mpa)
async def get_mpa(mpa_id: int = Path(...), svc: ReferenceService = Depends(get_reference_service)):
    return await svc.get_mpa_by_id(mpa_id)
