from __future__ import annotations
import logging
from typing import Any, Dict, List

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from .models import Scenario


logger = logging.getLogger(__name__)

SAMPLE_SCENARIOS: List[Dict[str, Any]] = [
	{
		"title": "Job Interview Practice",
		"description": "Practice answering common interview questions with a professional interviewer AI. Perfect for preparing for your next career opportunity.",
		"objective": "Improve clarity and confidence under pressure while demonstrating professional communication skills.",
		"rubric": {"clarity": "Clear, structured responses", "empathy": "Understanding interviewer perspective", "assertiveness": "Confident presentation"},
		"ai_persona": "I am a seasoned HR professional with 15 years of experience conducting interviews. I am professional, encouraging, and will ask follow-up questions to challenge you appropriately.",
		"icon": "briefcase",
		"difficulty_level": "intermediate",
		"estimated_duration": 15,
	},
	{
		"title": "Conflict Resolution",
		"description": "Navigate workplace disagreements and interpersonal conflicts with an AI colleague. Learn to find common ground and maintain professional relationships.",
		"objective": "Build empathy and emotional intelligence while developing skills to resolve conflicts constructively.",
		"rubric": {"clarity": "Clear problem identification", "empathy": "Understanding different perspectives", "assertiveness": "Standing ground while being respectful"},
		"ai_persona": "I am your colleague who has a different working style and sometimes conflicting priorities. I am reasonable but firm about my needs, and I want to find a solution that works for both of us.",
		"icon": "users",
		"difficulty_level": "advanced",
		"estimated_duration": 20,
	},
	{
		"title": "Public Speaking",
		"description": "Practice presenting ideas to a small audience. Build confidence in expressing your thoughts clearly and handling questions effectively.",
		"objective": "Develop assertiveness and self-expression while improving presentation skills and handling audience interaction.",
		"rubric": {"clarity": "Clear message delivery", "empathy": "Engaging with audience", "assertiveness": "Confident presentation"},
		"ai_persona": "I am an attentive audience member who is genuinely interested in your presentation but may ask challenging questions to help you improve. I am supportive but will push you to be your best.",
		"icon": "trending-up",
		"difficulty_level": "intermediate",
		"estimated_duration": 12,
	},
	{
		"title": "Networking Event",
		"description": "Practice introducing yourself and making connections at professional networking events. Learn to start conversations and build meaningful professional relationships.",
		"objective": "Develop social confidence and networking skills while learning to create genuine professional connections.",
		"rubric": {"clarity": "Clear self-introduction", "empathy": "Showing interest in others", "assertiveness": "Initiating conversations"},
		"ai_persona": "I am a fellow professional at a networking event. I am friendly and interested in meeting new people, but I am also focused on making valuable connections for my career.",
		"icon": "message-circle",
		"difficulty_level": "beginner",
		"estimated_duration": 10,
	},
	{
		"title": "Team Leadership",
		"description": "Practice leading team meetings and making decisions. Learn to communicate vision, delegate tasks, and handle team dynamics effectively.",
		"objective": "Develop leadership communication skills, decision-making clarity, and team management abilities.",
		"rubric": {"clarity": "Clear direction and expectations", "empathy": "Understanding team needs", "assertiveness": "Confident leadership"},
		"ai_persona": "I am a team member who looks to you for guidance and direction. I am capable and motivated but sometimes need clear communication about expectations and feedback on my work.",
		"icon": "users",
		"difficulty_level": "advanced",
		"estimated_duration": 18,
	},
	{
		"title": "Customer Service",
		"description": "Handle customer complaints and provide excellent service. Practice de-escalating situations and finding solutions that satisfy customers.",
		"objective": "Develop customer service excellence, problem-solving skills, and emotional regulation in difficult situations.",
		"rubric": {"clarity": "Clear problem-solving approach", "empathy": "Understanding customer frustration", "assertiveness": "Professional boundary setting"},
		"ai_persona": "I am a frustrated customer who has experienced a problem with your service. I am upset but reasonable, and I want to find a solution that addresses my concerns fairly.",
		"icon": "message-circle",
		"difficulty_level": "intermediate",
		"estimated_duration": 14,
	},
]


def seed_scenarios(db: Session) -> int:
	"""Insert the sample scenarios into an empty scenario table."""
	existing = db.scalar(select(func.count()).select_from(Scenario))
	if existing:
		return 0
	db.add_all(Scenario(**data) for data in SAMPLE_SCENARIOS)
	db.commit()
	logger.info("Seeded %d sample scenarios", len(SAMPLE_SCENARIOS))
	return len(SAMPLE_SCENARIOS)
