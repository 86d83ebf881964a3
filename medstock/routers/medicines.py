from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from medstock.dependencies import get_db, get_now
from medstock.schemas.medicine import MedicineCreate, MedicineRead, TransactionCreate
from medstock.services.ledger_service import (
    create_medicine,
    delete_medicine,
    get_medicine,
    list_medicines,
    place_reorder,
    record_transaction,
)

router = APIRouter(prefix="/medicines", tags=["Medicines"])


def _load(db: Session, medicine_id: str):
    try:
        return get_medicine(db, medicine_id)
    except LookupError as exc:
        raise HTTPException(status_code=404, detail="Medicine not found.") from exc


@router.get("", response_model=List[MedicineRead])
def read_medicines(db: Session = Depends(get_db)):
    return [MedicineRead.model_validate(medicine) for medicine in list_medicines(db)]


@router.post("", response_model=MedicineRead, status_code=201)
def add_medicine(payload: MedicineCreate, db: Session = Depends(get_db)):
    try:
        medicine = create_medicine(
            db,
            medicine_id=payload.id,
            name=payload.name,
            description=payload.description,
            current_stock=payload.current_stock,
            low_stock_threshold=payload.low_stock_threshold,
        )
    except ValueError as exc:
        status_code = 409 if "already exists" in str(exc) else 400
        raise HTTPException(status_code=status_code, detail=str(exc)) from exc
    return MedicineRead.model_validate(medicine)


@router.get("/{medicine_id}", response_model=MedicineRead)
def read_medicine(medicine_id: str, db: Session = Depends(get_db)):
    return MedicineRead.model_validate(_load(db, medicine_id))


@router.delete("/{medicine_id}", status_code=204)
def remove_medicine(medicine_id: str, db: Session = Depends(get_db)):
    try:
        delete_medicine(db, medicine_id)
    except LookupError as exc:
        raise HTTPException(status_code=404, detail="Medicine not found.") from exc
    return Response(status_code=204)


@router.post("/{medicine_id}/transactions", response_model=MedicineRead, status_code=201)
def add_transaction(
    medicine_id: str,
    payload: TransactionCreate,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    try:
        medicine = record_transaction(
            db,
            medicine_id,
            payload.kind,
            payload.quantity,
            source=payload.source,
            now=now,
        )
    except LookupError as exc:
        raise HTTPException(status_code=404, detail="Medicine not found.") from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return MedicineRead.model_validate(medicine)


@router.post("/{medicine_id}/reorder", response_model=MedicineRead)
def reorder_medicine(medicine_id: str, db: Session = Depends(get_db)):
    try:
        medicine = place_reorder(db, medicine_id)
    except LookupError as exc:
        raise HTTPException(status_code=404, detail="Medicine not found.") from exc
    return MedicineRead.model_validate(medicine)


__all__ = ["router"]
