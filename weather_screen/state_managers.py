"""State managers for handling application-wide mutable state.

The weather screen owns a single Query and a single ViewState. Every
state transition is synchronous; the only suspension point is the
outbound weather request inside ``WeatherScreen.load``.
"""

from abc import ABC, abstractmethod

from weather_screen.exceptions import ErrorCode, WeatherScreenException
from weather_screen.logging_config import get_logger, log_with_context
from weather_screen.models.view_state import Error, Loaded, Loading, ScreenSnapshot, ViewState
from weather_screen.protocols import WeatherFetcher

logger = get_logger(__name__)

UNEXPECTED_ERROR_MESSAGE = "Erro inesperado ao buscar dados do clima"


class StateManager(ABC):
    """Base class for all state managers.

    All subclasses must implement lifecycle methods.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize the state manager (called during app startup)."""
        pass

    @abstractmethod
    async def cleanup(self) -> None:
        """Cleanup resources (called during app shutdown)."""
        pass


class WeatherScreen(StateManager):
    """Query and tri-state view model for the single weather screen.

    Each query change issues a ticket. A fetch result is applied only if
    its ticket is still the latest one, so the screen always ends up
    showing the most recently submitted query, whatever order the
    responses arrive in. Superseded requests are not cancelled.
    """

    def __init__(self, fetcher: WeatherFetcher, default_city: str):
        """Initialize the weather screen.

        Args:
            fetcher: Coroutine function returning a WeatherReport for a city
            default_city: Query used when the screen is first mounted
        """
        self._fetcher = fetcher
        self._default_city = default_city
        self._query: str | None = None
        self._state: ViewState | None = None
        self._ticket = 0

    async def initialize(self) -> None:
        """Initialize the weather screen."""
        # Mounting happens on first view so startup never touches the network
        pass

    async def cleanup(self) -> None:
        """Forget the current query; in-flight results will be discarded."""
        self._ticket += 1
        self._query = None
        self._state = None

    @property
    def query(self) -> str | None:
        return self._query

    @property
    def state(self) -> ViewState | None:
        return self._state

    @property
    def mounted(self) -> bool:
        return self._query is not None

    def snapshot(self) -> ScreenSnapshot:
        """Current query and state as a serializable model."""
        return ScreenSnapshot(query=self._query, state=self._state)

    def mount(self) -> int | None:
        """Load the default city the first time the screen is shown.

        Returns:
            Ticket to pass to ``load``, or None if already mounted
        """
        if self.mounted:
            return None
        return self._change_query(self._default_city)

    def submit_query(self, text: str) -> int | None:
        """Handle a city submitted by the user.

        Blank or whitespace-only input is ignored: neither the query nor the
        state changes. Anything else moves the screen to Loading right away,
        before any network call is made.

        Args:
            text: Raw text from the search field

        Returns:
            Ticket to pass to ``load``, or None if the input was ignored
        """
        city = text.strip()
        if not city:
            log_with_context(
                logger,
                "debug",
                "Ignoring blank city submission",
                event_type="query_ignored",
            )
            return None
        return self._change_query(city)

    def _change_query(self, city: str) -> int:
        self._ticket += 1
        self._query = city
        self._state = Loading(query=city)
        log_with_context(
            logger,
            "info",
            "Weather query changed",
            query=city,
            ticket=self._ticket,
            event_type="query_changed",
        )
        return self._ticket

    def is_current(self, ticket: int) -> bool:
        return ticket == self._ticket

    async def load(self, ticket: int) -> ViewState | None:
        """Fetch the report for the query that issued ``ticket`` and apply it.

        Args:
            ticket: Value returned by ``submit_query`` or ``mount``

        Returns:
            The new state, or None if the ticket was superseded
        """
        if not self.is_current(ticket) or self._query is None:
            log_with_context(
                logger,
                "debug",
                "Skipping fetch for superseded query",
                ticket=ticket,
                event_type="fetch_skipped",
            )
            return None

        query = self._query
        new_state: ViewState
        try:
            report = await self._fetcher(query)
        except WeatherScreenException as e:
            log_with_context(
                logger,
                "warning",
                "Failed to get weather data",
                query=query,
                error=e.message,
                error_code=e.code.value,
                event_type="weather_error",
            )
            new_state = Error(
                query=query,
                message=e.message or "Erro desconhecido",
                code=e.code.value,
                relay_rejected=e.code == ErrorCode.RELAY_ACCESS_DENIED,
            )
        except Exception as e:
            log_with_context(
                logger,
                "error",
                "Unexpected error while fetching weather data",
                query=query,
                error=str(e),
                error_type=type(e).__name__,
                event_type="unhandled_error",
            )
            logger.error("Exception traceback:", exc_info=e)
            new_state = Error(query=query, message=UNEXPECTED_ERROR_MESSAGE, code=ErrorCode.INTERNAL_ERROR.value)
        else:
            new_state = Loaded(query=query, report=report)

        if not self.is_current(ticket):
            log_with_context(
                logger,
                "info",
                "Discarding response for superseded query",
                query=query,
                ticket=ticket,
                current_ticket=self._ticket,
                event_type="stale_response_discarded",
            )
            return None

        self._state = new_state
        log_with_context(
            logger,
            "info",
            "Weather screen state updated",
            query=query,
            state=new_state.kind,
            event_type="state_changed",
        )
        return new_state
