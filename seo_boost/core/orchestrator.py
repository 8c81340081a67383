"""
Generation orchestrator.

Sequences one generation run:
1. Validate inputs and settings - no network call on failure
2. Filter URLs by liveness - advisory, falls back to the full list
3. Generate - the only step whose failure is a user-visible error state
4. Mark every returned internal link as live
5. Commit the result, record session usage, refresh the history snapshot
   in the background
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, List, Optional, Protocol, Sequence, Set

from .errors import GenerationError, PreconditionError
from .models import SEOResult, SessionUsageRecord
from .providers import AIProvider, get_provider, resolve_model
from .usage import UsageAccountant
from .validation import validate_inputs, validate_settings

logger = logging.getLogger(__name__)


class OrchestratorState(Enum):
    """Lifecycle of the current generation run."""
    IDLE = "idle"
    VALIDATING = "validating"
    LIVENESS_CHECKING = "liveness-checking"
    GENERATING = "generating"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class View(Enum):
    """Which main surface the host should show."""
    INPUT = "input"
    RESULTS = "results"


@dataclass(frozen=True)
class Notice:
    """Transient user-facing message (toast)."""
    level: str  # info, success, warning, error
    title: str
    description: str = ""


_PRECONDITION_TITLES = {
    PreconditionError.CONTENT_TOO_SHORT: "Content too short",
    PreconditionError.KEYWORD_REQUIRED: "Keyword required",
    PreconditionError.SETTINGS_REQUIRED: "Settings required",
    PreconditionError.URLS_REQUIRED: "URLs required",
}


class Generator(Protocol):
    async def generate(self, provider, api_key, content, keyword, urls, model=None) -> SEOResult: ...


class LinkChecker(Protocol):
    async def check(self, urls: Sequence[str]) -> Dict[str, Optional[bool]]: ...


@dataclass
class SessionState:
    """Explicit state container for one UI session.

    Provider, model, API key and URLs are session configuration and
    survive "start over"; the rest is per-generation state.
    """
    provider: Optional[AIProvider] = None
    model: str = ""
    api_key: str = field(default="", repr=False)
    urls: List[str] = field(default_factory=list)
    url_source: str = ""

    content: str = ""
    keyword: str = ""
    result: Optional[SEOResult] = None
    error: Optional[str] = None
    view: View = View.INPUT
    settings_requested: bool = False


class GenerationOrchestrator:
    """Coordinates liveness filtering, generation and usage accounting.

    Only this class transitions generation-related state; the session
    usage log is appended to only from the commit step.
    """

    def __init__(
        self,
        generation_client: Generator,
        link_checker: LinkChecker,
        accountant: UsageAccountant,
        min_content_words: int = 50,
        notify: Optional[Callable[[Notice], None]] = None,
        clock: Callable[[], datetime] = datetime.now,
        session: Optional[SessionState] = None,
    ):
        self.generation_client = generation_client
        self.link_checker = link_checker
        self.accountant = accountant
        self.min_content_words = min_content_words
        self.session = session or SessionState()
        self._notify_callback = notify
        self._clock = clock

        self.state = OrchestratorState.IDLE
        self.precondition_error: Optional[PreconditionError] = None
        self._in_progress = False
        self._background: Set[asyncio.Task] = set()

    @property
    def in_progress(self) -> bool:
        return self._in_progress

    # Session configuration

    def set_provider(self, provider) -> None:
        """Select a provider and reset the model to its default."""
        info = get_provider(provider)
        self.session.provider = info.id
        self.session.model = info.default_model

    def set_model(self, model: str) -> None:
        self.session.model = model.strip()

    def set_api_key(self, api_key: str) -> None:
        self.session.api_key = api_key

    def set_urls(self, urls: Sequence[str], source: str = "") -> None:
        self.session.urls = list(urls)
        self.session.url_source = source

    def set_content(self, content: str) -> None:
        self.session.content = content

    def set_keyword(self, keyword: str) -> None:
        self.session.keyword = keyword

    def close_settings(self) -> None:
        """Acknowledge a settings request raised by a failed precondition."""
        self.session.settings_requested = False

    # Generation lifecycle

    async def generate(self) -> Optional[SEOResult]:
        """Run the full sequence once.

        Returns:
            The committed result, or None if the run was refused, failed a
            precondition or failed to generate
        """
        if self._in_progress:
            logger.warning("Generation already in progress; ignoring request")
            return None

        self._in_progress = True
        try:
            return await self._run()
        finally:
            self._in_progress = False

    async def retry(self) -> Optional[SEOResult]:
        """Clear the error and re-run the whole sequence from validation."""
        self.session.error = None
        return await self.generate()

    def go_back(self) -> None:
        """Leave the failure state and return to input editing."""
        self.session.error = None
        self.session.view = View.INPUT
        self.state = OrchestratorState.IDLE

    def start_over(self) -> None:
        """Reset content, keyword, result and error; keep session configuration."""
        session = self.session
        session.content = ""
        session.keyword = ""
        session.result = None
        session.error = None
        session.view = View.INPUT
        self.precondition_error = None
        self.state = OrchestratorState.IDLE

    async def wait_for_background(self) -> None:
        """Wait for background snapshot refreshes, e.g. before teardown."""
        if self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)

    async def _run(self) -> Optional[SEOResult]:
        session = self.session
        self.state = OrchestratorState.VALIDATING
        self.precondition_error = None
        session.error = None

        try:
            validate_inputs(session.content, session.keyword, self.min_content_words)
            validate_settings(session.provider, session.api_key, session.urls)
        except PreconditionError as e:
            self.precondition_error = e
            if e.requires_settings:
                session.settings_requested = True
            self._notify(Notice("error", _PRECONDITION_TITLES[e.kind], str(e)))
            self.state = OrchestratorState.IDLE
            return None

        provider = session.provider
        original_urls = list(session.urls)

        self.state = OrchestratorState.LIVENESS_CHECKING
        working_urls = await self._select_live_urls(original_urls)

        self.state = OrchestratorState.GENERATING
        try:
            result = await self.generation_client.generate(
                provider,
                session.api_key,
                session.content,
                session.keyword,
                working_urls,
                session.model or None,
            )
        except GenerationError as e:
            return self._fail(str(e))
        except Exception:
            logger.exception("Unexpected error during generation")
            return self._fail("An unknown error occurred")

        # The URL set was already filtered, so liveness is applied uniformly
        result = result.with_all_links_live()

        session.result = result
        session.view = View.RESULTS
        self.state = OrchestratorState.SUCCEEDED
        self._notify(Notice("success", "SEO content generated successfully!"))

        self.accountant.record(SessionUsageRecord(
            provider=provider,
            model=resolve_model(provider, session.model),
            tokens_used=result.tokens_used or 0,
            timestamp=self._clock(),
        ))
        self._spawn_snapshot_refresh()
        return result

    async def _select_live_urls(self, urls: List[str]) -> List[str]:
        """Drop confirmed-dead URLs, falling back to the full list."""
        try:
            statuses = await self.link_checker.check(urls)
        except Exception as e:
            logger.info("URL liveness check unavailable, using all URLs: %s", e)
            return urls

        live = [url for url in urls if statuses.get(url) is not False]
        if live:
            return live

        self._notify(Notice(
            "warning",
            "No live URLs found",
            "All URLs appear to be unreachable. Using all URLs anyway.",
        ))
        return urls

    def _fail(self, message: str) -> None:
        self.session.error = message
        self.state = OrchestratorState.FAILED
        self._notify(Notice("error", "Generation failed", message))
        return None

    def _spawn_snapshot_refresh(self) -> None:
        if self.accountant.is_refreshing:
            return
        task = asyncio.create_task(self.accountant.refresh_snapshot())
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    def _notify(self, notice: Notice) -> None:
        if self._notify_callback is not None:
            self._notify_callback(notice)
            return
        level = {"error": logging.ERROR, "warning": logging.WARNING}.get(notice.level, logging.INFO)
        logger.log(level, "%s: %s", notice.title, notice.description)
