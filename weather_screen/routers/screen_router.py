"""JSON API routes mirroring the weather screen's state and query submission."""

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from weather_screen.dependencies import get_weather_screen
from weather_screen.models.view_state import QuerySubmission, ScreenSnapshot
from weather_screen.state_managers import WeatherScreen

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


@router.get(
    "",
    response_model=ScreenSnapshot,
    summary="Get the screen state",
    description="""
    Returns the current query and its view state: `loading`, `error` or `loaded`.

    `query` and `state` are null until the screen has been mounted.
    """,
)
async def get_screen(screen: WeatherScreen = Depends(get_weather_screen)):
    """Get the current query and view state."""
    return screen.snapshot()


@router.post(
    "/query",
    response_model=ScreenSnapshot,
    summary="Submit a city",
    description="""
    Submits a city to the screen. A non-blank city moves the screen to
    `loading` immediately and fetches in the background; poll `GET /api/screen`
    for the result. A blank city is ignored and the current state is returned.

    **Rate Limited:** 30 requests/minute
    """,
    responses={
        200: {
            "description": "State after the submission",
            "content": {
                "application/json": {
                    "example": {"query": "Recife,PE", "state": {"kind": "loading", "query": "Recife,PE"}},
                }
            },
        },
    },
)
@limiter.limit("30/minute")
async def submit_query(
    request: Request,
    submission: QuerySubmission,
    background_tasks: BackgroundTasks,
    screen: WeatherScreen = Depends(get_weather_screen),
):
    """Submit a city query.

    Args:
        request: FastAPI request object (required by the rate limiter)
        submission: Body with the raw city text
        background_tasks: Runs the fetch after the response is sent
        screen: Weather screen from dependency injection

    Returns:
        ScreenSnapshot taken right after the submission
    """
    ticket = screen.submit_query(submission.city)
    if ticket is not None:
        background_tasks.add_task(screen.load, ticket)
    return screen.snapshot()
