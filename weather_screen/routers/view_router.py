"""Page/view routes for serving the weather screen and its HTMX fragment."""

from fastapi import APIRouter, BackgroundTasks, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from slowapi import Limiter
from slowapi.util import get_remote_address

from weather_screen.config import Settings, get_settings
from weather_screen.dependencies import get_weather_screen
from weather_screen.state_managers import WeatherScreen
from weather_screen.views.template_renderer import TemplateRenderer

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


@router.get("/", response_class=HTMLResponse)
async def index(
    request: Request,
    background_tasks: BackgroundTasks,
    screen: WeatherScreen = Depends(get_weather_screen),
    settings: Settings = Depends(get_settings),
):
    """Render the weather screen page, mounting it with the default city on first visit."""
    ticket = screen.mount()
    if ticket is not None:
        background_tasks.add_task(screen.load, ticket)
    return TemplateRenderer.render_index(request, screen, settings)


@router.get("/screen", response_class=HTMLResponse)
async def screen_fragment(
    request: Request,
    background_tasks: BackgroundTasks,
    screen: WeatherScreen = Depends(get_weather_screen),
    settings: Settings = Depends(get_settings),
):
    """Render the screen fragment for the current view state.

    A fragment polled before the page ever mounted the screen (for example
    after a server restart) mounts it here, so a loading fragment is always
    backed by a fetch.
    """
    ticket = screen.mount()
    if ticket is not None:
        background_tasks.add_task(screen.load, ticket)
    return TemplateRenderer.render_screen(request, screen.state, settings)


@router.post("/screen/query", response_class=HTMLResponse)
@limiter.limit("30/minute")
async def submit_query(
    request: Request,
    background_tasks: BackgroundTasks,
    city: str = Form(default="", max_length=100),
    screen: WeatherScreen = Depends(get_weather_screen),
    settings: Settings = Depends(get_settings),
):
    """Submit a city from the search form.

    The response is rendered before the fetch runs, so an accepted city
    always comes back as the loading fragment. Blank input leaves the
    screen untouched. Plain form posts (no HTMX) are redirected to the page.

    **Rate Limited:** 30 requests/minute
    """
    ticket = screen.submit_query(city)
    if ticket is not None:
        background_tasks.add_task(screen.load, ticket)

    if request.headers.get("HX-Request") != "true":
        return RedirectResponse("/", status_code=303)

    return TemplateRenderer.render_screen(request, screen.state, settings)
