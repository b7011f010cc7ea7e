from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from loguru import logger
from sqlalchemy.orm import Session

from gymflow.api.schemas import CategoryCreateRequest, CategorySchema, CategoryUpdateRequest, DeleteResponse
from gymflow.db.repository import CategoryRepository
from gymflow.db.session import get_db
from gymflow.errors import CategoryNotFoundError

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=list[CategorySchema])
def list_categories(db: Session = Depends(get_db)) -> list[CategorySchema]:
    """All categories sorted by sort_order."""
    return [CategorySchema.model_validate(c) for c in CategoryRepository.list_all(db)]


@router.post("", response_model=CategorySchema, status_code=status.HTTP_201_CREATED)
def create_category(request: CategoryCreateRequest, db: Session = Depends(get_db)) -> CategorySchema:
    category = CategoryRepository.create(db, request.name, request.color, request.sort_order)
    db.commit()
    return CategorySchema.model_validate(category)


@router.put("/{category_id}", response_model=CategorySchema)
def update_category(category_id: int, request: CategoryUpdateRequest, db: Session = Depends(get_db)) -> CategorySchema:
    if request.name is None and request.color is None and request.sort_order is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update")
    try:
        category = CategoryRepository.update(
            db, category_id, name=request.name, color=request.color, sort_order=request.sort_order
        )
    except CategoryNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    db.commit()
    return CategorySchema.model_validate(category)


@router.delete("/{category_id}", response_model=DeleteResponse)
def delete_category(category_id: int, db: Session = Depends(get_db)) -> DeleteResponse:
    """Delete a category with its exercises and their logs."""
    try:
        CategoryRepository.delete(db, category_id)
    except CategoryNotFoundError as e:
        logger.info(str(e))
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    db.commit()
    return DeleteResponse()
