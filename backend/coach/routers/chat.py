from __future__ import annotations
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..conversation import generate_reply
from ..db import get_db
from ..dependencies import get_llm_client
from ..llm_client import ChatCompletionClient
from ..schemas import ChatRequest, ChatResponse


router = APIRouter(tags=["chat"])


@router.post("/chat", response_model=ChatResponse)
async def chat(
	req: ChatRequest,
	client: ChatCompletionClient = Depends(get_llm_client),
	db: Session = Depends(get_db),
):
	text = await generate_reply(db, client, req.session_id, req.user_message, is_initial=req.is_initial)
	return ChatResponse(message=text)
