"""Exercise endpoints.

An exercise's template type is locked once it has logs: PUT requests that
would change it get a 409.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from loguru import logger
from sqlalchemy.orm import Session

from gymflow.api.schemas import DeleteResponse, ExerciseCreateRequest, ExerciseSchema, ExerciseUpdateRequest
from gymflow.db.repository import ExerciseRepository
from gymflow.db.session import get_db
from gymflow.errors import CategoryNotFoundError, ExerciseNotFoundError, TemplateTypeLockedError

router = APIRouter(prefix="/api/exercises", tags=["exercises"])


@router.get("", response_model=list[ExerciseSchema])
def list_exercises(category_id: int = Query(...), db: Session = Depends(get_db)) -> list[ExerciseSchema]:
    """Exercises of a category, most recently used first."""
    return [ExerciseSchema.model_validate(e) for e in ExerciseRepository.list_for_category(db, category_id)]


@router.get("/{exercise_id}", response_model=ExerciseSchema)
def get_exercise(exercise_id: int, db: Session = Depends(get_db)) -> ExerciseSchema:
    try:
        exercise = ExerciseRepository.get(db, exercise_id)
    except ExerciseNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return ExerciseSchema.model_validate(exercise)


@router.post("", response_model=ExerciseSchema, status_code=status.HTTP_201_CREATED)
def create_exercise(request: ExerciseCreateRequest, db: Session = Depends(get_db)) -> ExerciseSchema:
    try:
        exercise = ExerciseRepository.create(db, request.category_id, request.name, request.template_type)
    except CategoryNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    db.commit()
    return ExerciseSchema.model_validate(exercise)


@router.put("/{exercise_id}", response_model=ExerciseSchema)
def update_exercise(exercise_id: int, request: ExerciseUpdateRequest, db: Session = Depends(get_db)) -> ExerciseSchema:
    if request.name is None and request.template_type is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update")
    try:
        exercise = ExerciseRepository.update(db, exercise_id, name=request.name, template_type=request.template_type)
    except ExerciseNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except TemplateTypeLockedError as e:
        logger.warning(str(e))
        db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    db.commit()
    return ExerciseSchema.model_validate(exercise)


@router.delete("/{exercise_id}", response_model=DeleteResponse)
def delete_exercise(exercise_id: int, db: Session = Depends(get_db)) -> DeleteResponse:
    """Delete an exercise and its logs."""
    try:
        ExerciseRepository.delete(db, exercise_id)
    except ExerciseNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    db.commit()
    return DeleteResponse()
