"""User endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.models.user import User
from app.schemas.user import UserCreate, UserRead, UserRecord, UserUpdate
from app.services.user_service import (
    UserConflictError,
    UserFetchError,
    UserNotFoundError,
    create_user,
    delete_user,
    fetch_users,
    get_user_by_id,
    list_users,
    update_user,
)

router: APIRouter = APIRouter()


@router.get("/preview", response_model=list[UserRecord], summary="Preview users")
def preview_users(db: Session = Depends(get_db)) -> list[dict[str, Any]]:
    """Return up to ten users for the admin dashboard."""
    result = fetch_users(db)
    try:
        return result.unwrap()
    except UserFetchError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=exc.message) from None


@router.get("/", response_model=list[UserRead], summary="List users")
def list_all_users(db: Session = Depends(get_db)) -> list[dict[str, Any]]:
    try:
        return list_users(db)
    except UserFetchError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=exc.message) from None


@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: int, db: Session = Depends(get_db)) -> User:
    user = get_user_by_id(db, user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user_endpoint(payload: UserCreate, db: Session = Depends(get_db)) -> User:
    try:
        return create_user(db, **payload.model_dump())
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except UserConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc


@router.put("/{user_id}", response_model=UserRead)
def update_user_endpoint(user_id: int, payload: UserUpdate, db: Session = Depends(get_db)) -> User:
    try:
        return update_user(db, user_id, **payload.model_dump())
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except UserNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found") from exc
    except UserConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc


@router.delete("/{user_id}")
def delete_user_endpoint(user_id: int, db: Session = Depends(get_db)) -> dict[str, str]:
    try:
        delete_user(db, user_id)
    except UserNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found") from exc
    return {"message": "User deleted successfully"}
