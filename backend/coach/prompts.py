"""Prompt construction for the role-play and evaluation calls."""

from __future__ import annotations
from typing import Iterable, List, Optional

from .llm_client import ChatMessage
from .models import Message, Scenario


OPENING_INSTRUCTION = "Start the conversation by introducing yourself and the scenario context."
CONTINUE_INSTRUCTION = "Respond as your character would in this situation."

EVALUATOR_SYSTEM_PROMPT = "You are an expert communication coach providing constructive feedback."

SCORE_DIMENSIONS = ("clarity", "empathy", "assertiveness")


def build_persona_prompt(scenario: Scenario, *, is_initial: bool) -> str:
	return (
		f"You are a professional communication coach simulating a real-world {scenario.title} scenario.\n"
		f"Your role: {scenario.ai_persona}\n\n"
		f"Objective: {scenario.objective}\n\n"
		"Your goal is to help the user practice effective conversation and improve their communication skills.\n"
		"Keep responses concise (2-3 sentences), natural, and human-like.\n"
		"Stay in character and create a realistic, challenging but supportive practice environment.\n"
		f"{OPENING_INSTRUCTION if is_initial else CONTINUE_INSTRUCTION}"
	)


def build_chat_messages(
	scenario: Scenario,
	history: Iterable[Message],
	user_message: Optional[str],
	*,
	is_initial: bool,
) -> List[ChatMessage]:
	messages: List[ChatMessage] = [{"role": "system", "content": build_persona_prompt(scenario, is_initial=is_initial)}]
	for msg in history:
		messages.append({
			"role": "assistant" if msg.role == "assistant" else "user",
			"content": msg.content,
		})
	if not is_initial and user_message:
		messages.append({"role": "user", "content": user_message})
	return messages


def render_transcript(history: Iterable[Message]) -> str:
	return "\n\n".join(
		f"{'User' if msg.role == 'user' else 'Coach'}: {msg.content}" for msg in history
	)


def build_feedback_prompt(scenario: Scenario, transcript: str) -> str:
	return (
		"You are an expert communication coach evaluating a practice conversation.\n\n"
		f"Scenario: {scenario.title}\n"
		f"Objective: {scenario.objective}\n\n"
		"Conversation:\n"
		f"{transcript}\n\n"
		"Evaluate the user's communication during this conversation on these metrics (0-5 scale):\n"
		"1. Clarity - Was the message structured, concise, and easy to follow?\n"
		"2. Empathy - Did the user demonstrate understanding and emotional awareness?\n"
		"3. Assertiveness - Did the user communicate confidently and maintain appropriate boundaries?\n\n"
		"Provide your response in the following JSON format:\n"
		"{\n"
		'  "summary": "A brief 2-3 sentence overall assessment of the user\'s performance",\n'
		'  "clarity": <number 0-5>,\n'
		'  "empathy": <number 0-5>,\n'
		'  "assertiveness": <number 0-5>,\n'
		'  "recommendations": "Three specific, actionable recommendations for improvement, each on a new line starting with a bullet point"\n'
		"}\n\n"
		"Respond ONLY with valid JSON, no additional text."
	)


def build_feedback_messages(scenario: Scenario, history: Iterable[Message]) -> List[ChatMessage]:
	return [
		{"role": "system", "content": EVALUATOR_SYSTEM_PROMPT},
		{"role": "user", "content": build_feedback_prompt(scenario, render_transcript(history))},
	]
