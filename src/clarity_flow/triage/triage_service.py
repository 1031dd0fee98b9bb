"""Triage engine classifying task text into Eisenhower quadrants."""

import time
from collections.abc import AsyncIterator, Callable, Mapping, Sequence
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path
from typing import Any

from .config import (
    AI_FEATURES_ENABLED,
    DEFAULT_CONFIG_DATABASE_PATH,
    DEFAULT_MANUAL_ESTIMATED_TIME,
    DEFAULT_PRIMARY_PROVIDER,
    MANUAL_CONFIDENCE,
    PROVIDER_PREFERENCE,
)
from .config_store import ProviderConfigDatabase
from .credentials import CredentialResolver
from .exceptions import (
    AIDisabledError,
    AIFailedError,
    NoAIAPIError,
    NoValidProviderError,
    OfflineError,
    TriageError,
)
from .gate import FeatureGate, OnlineSignal
from .insights import get_productivity_insights
from .interfaces import TriageService
from .language import KEYWORD_PROFILES_VERSION, LanguageDetector
from .logging_utils import get_logger
from .models import (
    AnalysisResult,
    GateReason,
    Language,
    ProductivityInsights,
    Quadrant,
    Task,
    TriageState,
)
from .priority import resolve_priority
from .prompts import PromptContext, build_prompt
from .providers import ProviderAdapter, default_adapters
from .response_parser import parse_response

logger = get_logger(__name__)

GATE_ERRORS: dict[GateReason, type[TriageError]] = {
    GateReason.OFFLINE: OfflineError,
    GateReason.FEATURE_DISABLED: AIDisabledError,
    GateReason.NO_CREDENTIAL: NoAIAPIError,
}

MANUAL_QUADRANT_DESCRIPTIONS = {
    Language.ENGLISH: {
        Quadrant.URGENT_IMPORTANT: "Urgent & Important - Do First",
        Quadrant.NOT_URGENT_IMPORTANT: "Important, Not Urgent - Schedule",
        Quadrant.URGENT_NOT_IMPORTANT: "Urgent, Not Important - Delegate",
        Quadrant.NOT_URGENT_NOT_IMPORTANT: "Neither Urgent nor Important - Eliminate",
    },
    Language.INDONESIAN: {
        Quadrant.URGENT_IMPORTANT: "Mendesak & Penting - Kerjakan Segera",
        Quadrant.NOT_URGENT_IMPORTANT: "Penting, Tidak Mendesak - Jadwalkan",
        Quadrant.URGENT_NOT_IMPORTANT: "Mendesak, Tidak Penting - Delegasikan",
        Quadrant.NOT_URGENT_NOT_IMPORTANT: "Tidak Mendesak & Tidak Penting - Hapus",
    },
}

MANUAL_REASONING_TEMPLATES = {
    Language.ENGLISH: "Manual placement in {description} quadrant",
    Language.INDONESIAN: "Penempatan manual di kuadran {description}",
}


class TriageEngine(TriageService):
    """
    Engine for classifying task text into Eisenhower quadrants.

    Coordinates the gate, credential resolution, language detection, prompt
    building, one provider call and response validation. All collaborators
    are injected; the engine keeps no per-call state, so concurrent analyze()
    calls are independent.
    """

    def __init__(
        self,
        credentials: CredentialResolver,
        adapters: Mapping[str, ProviderAdapter] | None = None,
        online: OnlineSignal = True,
        ai_features_enabled: bool = AI_FEATURES_ENABLED,
        primary_provider: str | None = DEFAULT_PRIMARY_PROVIDER,
        provider_preference: Sequence[str] = PROVIDER_PREFERENCE,
        language_detector: LanguageDetector | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """
        Initialize Triage Engine.

        Args:
            credentials: Credential resolver backed by the provider-config store
            adapters: Provider adapters keyed by provider id
            online: Host connectivity flag, or a callable returning it
            ai_features_enabled: AI feature flag
            primary_provider: Designated primary provider; None picks by preference
            provider_preference: Provider order used when no primary is designated
            language_detector: Detector for prompt language
            clock: Source of the current time rendered into prompts
        """
        self._credentials = credentials
        self._adapters = dict(adapters) if adapters is not None else default_adapters()
        self._gate = FeatureGate(
            credentials, online=online, feature_enabled=ai_features_enabled
        )
        self._primary_provider = primary_provider
        self._provider_preference = list(provider_preference)
        self._language_detector = language_detector or LanguageDetector()
        self._clock = clock

        logger.info(
            f"Triage Engine initialized with providers: {list(self._adapters)}, "
            f"primary: {primary_provider or 'auto'}"
        )

    @property
    def provider_order(self) -> list[str]:
        """Adapters in selection order: preference list first, then the rest."""
        ordered = [p for p in self._provider_preference if p in self._adapters]
        return ordered + [p for p in self._adapters if p not in ordered]

    async def analyze(
        self, text: str, context: PromptContext | None = None
    ) -> AnalysisResult:
        """
        Classify task text with the primary AI provider.

        Args:
            text: Raw task description
            context: Prompt context; current time comes from the engine clock when None

        Returns:
            AnalysisResult from the automated path

        Raises:
            ValueError: If text is empty
            OfflineError: If the host reports no connectivity
            AIDisabledError: If AI features are turned off
            NoAIAPIError: If no provider has a credential
            NoValidProviderError: If provider selection yields nothing
            AIFailedError: If the provider call fails
            ResponseParseError: If the model output is rejected (an AIFailedError)
        """
        if not text or not text.strip():
            raise ValueError("Empty text provided for analysis")

        start_time = time.time()
        state = TriageState.IDLE
        logger.info(f"🤖 Triage started for text: '{text}'")

        try:
            state = TriageState.CHECKING_GATE
            decision = await self._gate.can_analyze()
            if not decision.allowed and decision.reason is not None:
                raise GATE_ERRORS[decision.reason](
                    f"Automated analysis unavailable: {decision.reason.value}"
                )

            state = TriageState.SELECTING_PROVIDER
            provider_id = await self._select_provider()
            api_key = await self._credentials.get_key(provider_id)

            state = TriageState.BUILDING_PROMPT
            language = self._language_detector.detect(text)
            prompt = build_prompt(
                text, context or PromptContext(current_time=self._clock()), language
            )
            logger.debug(f"Prompt built in language '{language.value}'")

            state = TriageState.CALLING_PROVIDER
            try:
                raw_text = await self._adapters[provider_id].call(prompt, api_key)
            except Exception as e:
                code = getattr(e, "code", type(e).__name__)
                logger.error(f"❌ {provider_id} call failed ({code}): {e}")
                raise AIFailedError("AI analysis failed") from e

            state = TriageState.PARSING
            parsed = parse_response(raw_text)

        except TriageError as e:
            self._log_manual_handoff(state, e)
            raise
        except Exception as e:
            logger.error(f"❌ Unexpected triage error in state {state.value}: {e}")
            error = AIFailedError("AI analysis failed")
            self._log_manual_handoff(state, error)
            raise error from e

        inference_time = time.time() - start_time
        result = AnalysisResult(
            quadrant=parsed.quadrant,
            confidence=parsed.confidence,
            reasoning=parsed.reasoning,
            priority=resolve_priority(
                parsed.quadrant, parsed.confidence, parsed.suggested_due_date
            ),
            estimated_time=parsed.estimated_time,
            tags=parsed.tags,
            suggested_due_date=parsed.suggested_due_date,
            metadata={
                "source": "ai",
                "provider": provider_id,
                "language": language.value,
                "keyword_profiles_version": KEYWORD_PROFILES_VERSION,
                "model_priority": parsed.priority.value,
                "inference_time": inference_time,
            },
        )

        logger.info(
            f"✅ Triage {TriageState.DONE.value}: quadrant={result.quadrant.value}, "
            f"priority={result.priority.value}, confidence={result.confidence:.2f}, "
            f"provider={provider_id}, time={inference_time:.3f}s"
        )
        return result

    async def _select_provider(self) -> str:
        """
        Pick exactly one provider for this call.

        Returns:
            Provider id

        Raises:
            NoValidProviderError: If no adapter with a credential is available
        """
        if self._primary_provider:
            if self._primary_provider in self._adapters and await (
                self._credentials.has_credential(self._primary_provider)
            ):
                return self._primary_provider
            raise NoValidProviderError(
                f"Designated primary provider '{self._primary_provider}' is unavailable"
            )

        for provider_id in self.provider_order:
            if await self._credentials.has_credential(provider_id):
                return provider_id

        raise NoValidProviderError("No provider with a credential is available")

    def _log_manual_handoff(self, state: TriageState, error: TriageError) -> None:
        logger.warning(
            f"⚠️ Triage stopped in state {state.value} with {error.code} -> "
            f"{TriageState.MANUAL.value} (manual entry "
            f"{'offered' if error.requires_manual_entry else 'not offered'})"
        )

    def create_manual_result(
        self,
        text: str,
        quadrant: Quadrant | str,
        estimated_time: int | None = None,
        due_date: datetime | None = None,
        tags: list[str] | None = None,
    ) -> AnalysisResult:
        """
        Build a result from a user-selected quadrant.

        Args:
            text: Raw task description
            quadrant: Quadrant chosen by the user
            estimated_time: Estimate in minutes, defaults to 30
            due_date: Optional due date
            tags: Optional tags

        Returns:
            AnalysisResult with confidence 1.0

        Raises:
            ValueError: If quadrant is not one of the four quadrants
        """
        selected = Quadrant(quadrant)
        language = self._language_detector.detect(text or "")
        description = MANUAL_QUADRANT_DESCRIPTIONS[language][selected]

        logger.info(f"📝 Creating manual result for quadrant: {selected.value}")

        return AnalysisResult(
            quadrant=selected,
            confidence=MANUAL_CONFIDENCE,
            reasoning=MANUAL_REASONING_TEMPLATES[language].format(
                description=description
            ),
            priority=resolve_priority(selected, MANUAL_CONFIDENCE, due_date),
            estimated_time=estimated_time or DEFAULT_MANUAL_ESTIMATED_TIME,
            tags=list(tags or []),
            suggested_due_date=due_date,
            metadata={"source": "manual", "language": language.value},
        )

    # Name used by the UI layer
    create_manual_task = create_manual_result

    async def is_ai_enabled(self) -> bool:
        """Check whether any provider resolves a usable key."""
        for provider_id in self.provider_order:
            if await self._credentials.get_key(provider_id):
                return True
        return False

    async def clean_invalid_keys(self) -> int:
        """Disable stored keys that fail format validation."""
        return await self._credentials.clean_invalid_keys()

    def get_productivity_insights(self, tasks: Sequence[Task]) -> ProductivityInsights:
        """Compute insights and recommendations over a task collection."""
        return get_productivity_insights(tasks)

    async def learn_from_correction(
        self,
        original: AnalysisResult,
        corrected_quadrant: Quadrant | str,
        text: str,
    ) -> dict[str, Any]:
        """
        Record a user correction of an automated result.

        Nothing is fed back into a model; the correction is logged for later review.

        Args:
            original: Result the user corrected
            corrected_quadrant: Quadrant the user chose instead
            text: Task text

        Returns:
            The logged correction record
        """
        correction = {
            "original": original.quadrant.value,
            "correction": Quadrant(corrected_quadrant).value,
            "context": text,
            "provider": original.metadata.get("provider"),
            "timestamp": self._clock().isoformat(),
        }
        logger.info(f"AI correction recorded: {correction}")
        return correction


@asynccontextmanager
async def open_triage_engine(
    db_path: str = DEFAULT_CONFIG_DATABASE_PATH,
    **engine_kwargs: Any,
) -> AsyncIterator[TriageEngine]:
    """
    Open the provider-config store and yield a ready Triage Engine.

    Invalid stored keys are cleaned on startup; the store is closed on exit.

    Args:
        db_path: SQLite path for provider configs (":memory:" for in-memory)
        **engine_kwargs: Passed through to TriageEngine

    Yields:
        TriageEngine
    """
    if db_path != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    store = ProviderConfigDatabase(db_path)
    await store.initialize()
    try:
        credentials = CredentialResolver(store)
        engine = TriageEngine(credentials, **engine_kwargs)
        await engine.clean_invalid_keys()
        yield engine
    finally:
        await store.close()
