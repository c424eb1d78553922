# filmorate/routes/films.py
from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Path, Query, Response

from filmorate.core.settings import settings
from filmorate.dependencies import get_film_service
from filmorate.schemas import Film
from filmorate.services.films import FilmService

log = logging.getLogger(__name__)

router = APIRouter(prefix="/films", tags=["films"])


@router.get("", response_model=List[Film])
async def list_films(svc: FilmService = Depends(get_film_service)):
    return await svc.get_all_films()


@router.post("", response_model=Film, status_code=201)
async def create_film(film: Film = Body(...), svc: FilmService = Depends(get_film_service)):
    log.info("POST /films name=%r", film.name)
    return await svc.create(film)


@router.put("", response_model=Film)
async def update_film(film: Film = Body(...), svc: FilmService = Depends(get_film_service)):
    log.info("PUT /films id=%s", film.id)
    return await svc.update(film)


# declared before /{film_id} so "popular" is not parsed as an id
@router.get("/popular", response_model=List[Film])
async def popular_films(
    count: Optional[int] = Query(default=None),
    svc: FilmService = Depends(get_film_service),
):
    return await svc.get_top_films(settings.top_films_default if count is None else count)


@router.get("/{film_id}", response_model=Film)
async def get_film(film_id: int = Path(...), svc: FilmService = Depends(get_film_service)):
    return await svc.get_film(film_id)


@router.put("/{film_id}/like/{user_id}", status_code=204)
async def add_like(
    film_id: int = Path(...),
    user_id: int = Path(...),
    svc: FilmService = Depends(get_film_service),
):
    await svc.add_like(film_id, user_id)
    return Response(status_code=204)


@router.delete("/{film_id}/like/{user_id}", status_code=204)
async def remove_like(
    film_id: int = Path(...),
    user_id: int = Path(...),
    svc: FilmService = Depends(get_film_service),
):
    await svc.remove_like(film_id, user_id)
    return Response(status_code=204)
