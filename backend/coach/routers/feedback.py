from __future__ import annotations
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..dependencies import get_llm_client
from ..evaluation import generate_feedback
from ..llm_client import ChatCompletionClient
from ..schemas import FeedbackOut, FeedbackRequest


router = APIRouter(tags=["feedback"])


@router.post("/feedback", response_model=FeedbackOut)
async def feedback(
	req: FeedbackRequest,
	client: ChatCompletionClient = Depends(get_llm_client),
	db: Session = Depends(get_db),
):
	row = await generate_feedback(db, client, req.session_id)
	return FeedbackOut.model_validate(row)
