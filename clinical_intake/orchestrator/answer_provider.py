"""Answer provider contract and the providers the engine ships with.

An answer provider is the UI boundary: every question the interview asks is
an awaited call on it. ``RecordingAnswerProvider`` wraps the real provider,
writes each answer to the session's navigation stack and replays recorded
answers when a phase is re-run (after "back" or when a session is resumed).
"""

from typing import Any, Dict, List, Optional, Protocol, Sequence, Union
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from clinical_intake.models.session import IntakeSession, NavigationStep
from clinical_intake.models.triage import IntakePhase
import logging

logger = logging.getLogger(__name__)

# Generic question kinds accepted by ask_question
BOOLEAN_TYPES = {"boolean", "yes-no", "yes_no"}
SELECT_TYPES = {"select", "single-choice"}
MULTISELECT_TYPES = {"multiselect", "multi-choice"}
NUMERIC_TYPES = {"number", "numeric", "scale"}


class AnswerProvider(Protocol):
    """What the interview needs from the UI."""

    async def ask_yes_no(self, prompt: str) -> bool: ...

    async def ask_multiple_choice(
        self, prompt: str, options: Sequence[str], allow_multiple: bool = False
    ) -> Union[str, List[str]]: ...

    async def ask_numeric(self, prompt: str, min_value: int = 0, max_value: int = 10) -> float: ...

    async def ask_free_text(self, prompt: str) -> str: ...

    async def ask_question(
        self, prompt: str, question_type: str, options: Optional[Sequence[str]] = None
    ) -> Any: ...

    async def show_emergency_alert(self, alert: Dict[str, Any]) -> None: ...

    async def show_progress(self, phase: IntakePhase, percent: int) -> None: ...


class BaseAnswerProvider:
    """Routes the generic ``ask_question`` onto the typed methods."""

    async def ask_yes_no(self, prompt: str) -> bool:
        raise NotImplementedError

    async def ask_multiple_choice(
        self, prompt: str, options: Sequence[str], allow_multiple: bool = False
    ) -> Union[str, List[str]]:
        raise NotImplementedError

    async def ask_numeric(self, prompt: str, min_value: int = 0, max_value: int = 10) -> float:
        raise NotImplementedError

    async def ask_free_text(self, prompt: str) -> str:
        raise NotImplementedError

    async def ask_question(
        self, prompt: str, question_type: str, options: Optional[Sequence[str]] = None
    ) -> Any:
        kind = question_type.lower()
        if kind in BOOLEAN_TYPES:
            return await self.ask_yes_no(prompt)
        if kind in SELECT_TYPES:
            return await self.ask_multiple_choice(prompt, list(options or []))
        if kind in MULTISELECT_TYPES:
            return await self.ask_multiple_choice(prompt, list(options or []), allow_multiple=True)
        if kind in NUMERIC_TYPES:
            return await self.ask_numeric(prompt)
        return await self.ask_free_text(prompt)

    async def show_emergency_alert(self, alert: Dict[str, Any]) -> None:
        logger.warning(f"Emergency alert: {alert.get('title')}")

    async def show_progress(self, phase: IntakePhase, percent: int) -> None:
        logger.debug(f"Progress {phase.value}: {percent}%")


class PrefilledAnswerProvider(BaseAnswerProvider):
    """
    Answers looked up by prompt text, with defaults for anything unlisted.

    Used by the non-interactive encounter endpoint and by tests. Defaults:
    "no" for yes/no, the first option for a single choice, nothing for a
    multi-select, ``default_numeric`` for numbers and an empty string for text.
    """

    def __init__(
        self,
        answers: Optional[Dict[str, Any]] = None,
        default_yes_no: bool = False,
        default_numeric: float = 5,
        default_text: str = "",
    ):
        self.answers = dict(answers or {})
        self.default_yes_no = default_yes_no
        self.default_numeric = default_numeric
        self.default_text = default_text
        self.asked: List[str] = []
        self.alerts: List[Dict[str, Any]] = []
        self.progress: List[tuple] = []

    def _lookup(self, prompt: str, default: Any) -> Any:
        self.asked.append(prompt)
        return self.answers.get(prompt, default)

    async def ask_yes_no(self, prompt: str) -> bool:
        answer = self._lookup(prompt, self.default_yes_no)
        if isinstance(answer, str):
            return answer.strip().lower() in ("yes", "y", "true")
        return bool(answer)

    async def ask_multiple_choice(
        self, prompt: str, options: Sequence[str], allow_multiple: bool = False
    ) -> Union[str, List[str]]:
        if allow_multiple:
            answer = self._lookup(prompt, [])
            return [answer] if isinstance(answer, str) else list(answer)
        return self._lookup(prompt, options[0] if options else "")

    async def ask_numeric(self, prompt: str, min_value: int = 0, max_value: int = 10) -> float:
        answer = self._lookup(prompt, self.default_numeric)
        return max(min_value, min(max_value, answer))

    async def ask_free_text(self, prompt: str) -> str:
        return str(self._lookup(prompt, self.default_text))

    async def show_emergency_alert(self, alert: Dict[str, Any]) -> None:
        self.alerts.append(alert)
        await super().show_emergency_alert(alert)

    async def show_progress(self, phase: IntakePhase, percent: int) -> None:
        self.progress.append((phase, percent))


class RecordingAnswerProvider(BaseAnswerProvider):
    """
    Records every answer as a navigation step and replays recorded answers.

    Replay is per phase and in order: while the next recorded step for the
    current phase has the same prompt and kind, its answer is returned
    without asking. The first mismatch drops the remaining recorded steps
    of that phase and live questioning resumes.
    """

    def __init__(self, inner: AnswerProvider, session: IntakeSession, session_manager):
        self.inner = inner
        self.session = session
        self.session_manager = session_manager
        self.phase: IntakePhase = session.current_phase
        self._replay: List[NavigationStep] = []
        self._messages: List[BaseMessage] = []

    def start_phase(self, phase: IntakePhase) -> None:
        self.phase = phase
        self._replay = [s for s in self.session.navigation_stack if s.phase == phase]

    def drain_messages(self) -> List[BaseMessage]:
        messages, self._messages = self._messages, []
        return messages

    def _drop_pending(self) -> None:
        pending = {s.step_id for s in self._replay}
        self.session.navigation_stack = [
            s for s in self.session.navigation_stack if s.step_id not in pending
        ]
        logger.info(f"Replay diverged in {self.phase.value}, dropped {len(pending)} steps")
        self._replay = []
        self.session_manager.save_session(self.session)

    def _transcript(self, prompt: str, answer: Any) -> None:
        self._messages.append(AIMessage(content=prompt))
        shown = ", ".join(answer) if isinstance(answer, list) else str(answer)
        self._messages.append(HumanMessage(content=shown))

    async def _answer(self, step_type: str, prompt: str, options: Sequence[str], ask) -> Any:
        if self._replay:
            step = self._replay[0]
            if step.prompt == prompt and step.step_type == step_type:
                self._replay.pop(0)
                self._transcript(prompt, step.answer)
                return step.answer
            self._drop_pending()

        answer = await ask()
        self.session_manager.push_step(
            self.session,
            NavigationStep(
                phase=self.phase,
                step_type=step_type,
                prompt=prompt,
                options=list(options),
                answer=answer,
            ),
        )
        self._transcript(prompt, answer)
        return answer

    async def ask_yes_no(self, prompt: str) -> bool:
        return await self._answer("yes-no", prompt, [], lambda: self.inner.ask_yes_no(prompt))

    async def ask_multiple_choice(
        self, prompt: str, options: Sequence[str], allow_multiple: bool = False
    ) -> Union[str, List[str]]:
        kind = "multi-choice" if allow_multiple else "single-choice"
        return await self._answer(
            kind,
            prompt,
            options,
            lambda: self.inner.ask_multiple_choice(prompt, options, allow_multiple),
        )

    async def ask_numeric(self, prompt: str, min_value: int = 0, max_value: int = 10) -> float:
        return await self._answer(
            "numeric", prompt, [], lambda: self.inner.ask_numeric(prompt, min_value, max_value)
        )

    async def ask_free_text(self, prompt: str) -> str:
        return await self._answer("text", prompt, [], lambda: self.inner.ask_free_text(prompt))

    async def show_emergency_alert(self, alert: Dict[str, Any]) -> None:
        await self.inner.show_emergency_alert(alert)

    async def show_progress(self, phase: IntakePhase, percent: int) -> None:
        await self.inner.show_progress(phase, percent)
