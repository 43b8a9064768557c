"""
QueryGate - validate a query against the topic, then answer it

Flow for one request:

    IDLE -> VALIDATING -> REJECTED -> DONE
                       -> ANSWERING -> DONE
    any step -> FAILED

The reference text is loaded before anything else; if it cannot be read
or is empty the LLM is not called at all. Both LLM calls are made sequentially and
never retried.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol

from topicqa.core.errors import DataUnavailableError, UpstreamFailureError
from topicqa.core.logging_config import LoggingConfig
from topicqa.core.topic_config import TopicConfig
from topicqa.services.prompt_builder import build_answer_prompt, build_validation_prompt
from topicqa.services.reference_loader import ReferenceLoader
from topicqa.services.response_sanitizer import sanitize

logger = LoggingConfig.get_logger(__name__)

DEFAULT_QUERY = "Hello"
AFFIRMATIVE_VERDICT = "yes"


class ChatClient(Protocol):
    async def chat(self, model: str, messages: List[Dict[str, str]]) -> Any:
        ...


class GateState(str, Enum):
    """Gate states"""
    IDLE = "idle"
    VALIDATING = "validating"
    REJECTED = "rejected"
    ANSWERING = "answering"
    DONE = "done"
    FAILED = "failed"


@dataclass
class AnswerResult:
    """Outcome of a successful pass through the gate"""
    response: str
    accepted: bool
    state: GateState = GateState.DONE

    def to_dict(self) -> Dict[str, str]:
        return {"response": self.response}


def rejection_message(topic: str) -> str:
    return f"This API only responds to questions about {topic}."


def parse_verdict(reply: str) -> bool:
    """
    True only if the last line of the reply is literally "yes".

    Case and surrounding whitespace are ignored; nothing else is, so a
    localized answer such as "Sí" counts as no.
    """
    last_line = reply.strip().split("\n")[-1]
    return last_line.strip().lower() == AFFIRMATIVE_VERDICT


def _reply_content(reply: Any) -> Optional[str]:
    """Pull message.content out of a ChatResponse or a plain dict"""
    message = reply.get("message") if isinstance(reply, dict) else getattr(reply, "message", None)
    if message is None:
        raise UpstreamFailureError("LLM reply has no message")
    content = message.get("content") if isinstance(message, dict) else getattr(message, "content", None)
    if content is not None and not isinstance(content, str):
        raise UpstreamFailureError("LLM reply content is not text")
    return content


class QueryGate:
    """
    Two-stage pipeline: topic validation, then a grounded answer.

    Holds only read-only collaborators, so a single instance serves all
    concurrent requests.
    """

    def __init__(
        self,
        config: TopicConfig,
        loader: ReferenceLoader,
        llm_client: ChatClient,
        model: str,
    ):
        self.config = config
        self.loader = loader
        self.llm_client = llm_client
        self.model = model

    async def _chat(self, prompt: str, stage: GateState) -> Any:
        try:
            return await self.llm_client.chat(
                self.model,
                [{"role": "user", "content": prompt}],
            )
        except Exception as e:
            self._transition(GateState.FAILED, reason="upstream_error")
            logger.error(
                "LLM call failed",
                exc_info=True,
                extra={"stage": stage.value, "model": self.model, "error_type": type(e).__name__},
            )
            raise UpstreamFailureError(str(e)) from e

    def _transition(self, state: GateState, **extra: Any) -> GateState:
        logger.debug("Query gate transition", extra={"state": state.value, **extra})
        return state

    async def ask(self, user_input: Optional[str]) -> AnswerResult:
        """
        Run a query through the gate.

        Raises:
            DataUnavailableError: the reference text could not be read
            UpstreamFailureError: an LLM call failed at either stage
        """
        user_input = user_input or DEFAULT_QUERY
        self._transition(GateState.IDLE)

        reference_text = await self.loader.load()
        if not reference_text:
            self._transition(GateState.FAILED, reason="data_unavailable")
            raise DataUnavailableError(str(self.loader.path))

        state = self._transition(GateState.VALIDATING)
        validation_reply = await self._chat(
            build_validation_prompt(self.config.topic, self.config.language, user_input),
            state,
        )
        try:
            validation_text = _reply_content(validation_reply)
            if validation_text is None:
                raise UpstreamFailureError("LLM validation reply has no content")
        except UpstreamFailureError:
            self._transition(GateState.FAILED, reason="unusable_validation_reply")
            logger.error("Unusable validation reply", extra={"model": self.model})
            raise

        if not parse_verdict(validation_text):
            self._transition(GateState.REJECTED)
            logger.info("Query rejected as off-topic", extra={"topic": self.config.topic})
            return AnswerResult(
                response=rejection_message(self.config.topic),
                accepted=False,
            )

        state = self._transition(GateState.ANSWERING)
        answer_reply = await self._chat(
            build_answer_prompt(self.config.topic, self.config.language, reference_text, user_input),
            state,
        )
        try:
            answer_text = _reply_content(answer_reply)
        except UpstreamFailureError:
            self._transition(GateState.FAILED, reason="unusable_answer_reply")
            logger.error("Unusable answer reply", extra={"model": self.model})
            raise

        self._transition(GateState.DONE)
        return AnswerResult(response=sanitize(answer_text), accepted=True)
