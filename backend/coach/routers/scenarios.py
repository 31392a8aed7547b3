from __future__ import annotations
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db import get_db
from ..errors import NotFoundError
from ..models import Scenario
from ..schemas import ScenarioOut


router = APIRouter(prefix="/scenarios", tags=["scenarios"])


@router.get("", response_model=List[ScenarioOut])
def list_scenarios(db: Session = Depends(get_db)):
	stmt = select(Scenario).where(Scenario.is_active.is_(True)).order_by(Scenario.created_at, Scenario.title)
	return [ScenarioOut.model_validate(s) for s in db.scalars(stmt)]


@router.get("/{scenario_id}", response_model=ScenarioOut)
def get_scenario(scenario_id: str, db: Session = Depends(get_db)):
	row = db.get(Scenario, scenario_id)
	if row is None:
		raise NotFoundError("Scenario not found")
	return ScenarioOut.model_validate(row)
