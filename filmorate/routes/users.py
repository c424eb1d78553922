# filmorate/routes/users.py
from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Body, Depends, Path, Response

from filmorate.dependencies import get_user_service
from filmorate.schemas import User
from filmorate.services.users import UserService

log = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=List[User])
async def list_users(svc: UserService = Depends(get_user_service)):
    return await svc.get_all_users()


@router.post("", response_model=User, status_code=201)
async def create_user(user: User = Body(...), svc: UserService = Depends(get_user_service)):
    log.info("POST /users login=%r", user.login)
    return await svc.create(user)


@router.put("", response_model=User)
async def update_user(user: User = Body(...), svc: UserService = Depends(get_user_service)):
    log.info("PUT /users id=%s", user.id)
    return await svc.update(user)


@router.get("/{user_id}", response_model=User)
async def get_user(user_id: int = Path(...), svc: UserService = Depends(get_user_service)):
    return await svc.get_user(user_id)


@router.put("/{user_id}/friends/{friend_id}", status_code=204)
async def add_friend(
    user_id: int = Path(...),
    friend_id: int = Path(...),
    svc: UserService = Depends(get_user_service),
):
    await svc.add_friend(user_id, friend_id)
    return Response(status_code=204)


@router.delete("/{user_id}/friends/{friend_id}", status_code=204)
async def remove_friend(
    user_id: int = Path(...),
    friend_id: int = Path(...),
    svc: UserService = Depends(get_user_service),
):
    await svc.remove_friend(user_id, friend_id)
    return Response(status_code=204)


@router.get("/{user_id}/friends", response_model=List[User])
async def list_friends(user_id: int = Path(...), svc: UserService = Depends(get_user_service)):
    return await svc.get_friends(user_id)


@router.get("/{user_id}/friends/common/{other_id}", response_model=List[User])
async def common_friends(
    user_id: int = Path(...),
    other_id: int = Path(...),
    svc: UserService = Depends(get_user_service),
):
    return await svc.get_common_friends(user_id, other_id)
