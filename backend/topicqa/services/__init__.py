"""
Request pipeline: reference loading, prompts, gating and output cleanup
"""
from topicqa.services.prompt_builder import build_answer_prompt, build_validation_prompt
from topicqa.services.query_gate import AnswerResult, GateState, QueryGate, parse_verdict
from topicqa.services.reference_loader import ReferenceLoader
from topicqa.services.response_sanitizer import NO_RESPONSE_MESSAGE, sanitize

__all__ = [
    "AnswerResult",
    "GateState",
    "QueryGate",
    "ReferenceLoader",
    "NO_RESPONSE_MESSAGE",
    "build_answer_prompt",
    "build_validation_prompt",
    "parse_verdict",
    "sanitize",
]
