"""Tri-state view model for the weather screen.

Exactly one of Loading, Error or Loaded is active at a time. The states are a
closed discriminated union on ``kind`` so a screen can never be loading and
failed at once.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from weather_screen.models.weather import WeatherReport


class Loading(BaseModel):
    """A request for ``query`` is in flight."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["loading"] = "loading"
    query: str


class Error(BaseModel):
    """The last request failed; ``message`` is shown to the user."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["error"] = "error"
    query: str
    message: str = Field(min_length=1)
    code: str
    relay_rejected: bool = False


class Loaded(BaseModel):
    """The last request succeeded."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["loaded"] = "loaded"
    query: str
    report: WeatherReport


ViewState = Annotated[Loading | Error | Loaded, Field(discriminator="kind")]


class ScreenSnapshot(BaseModel):
    """JSON view of the screen: current query and its state."""

    query: str | None
    state: ViewState | None


class QuerySubmission(BaseModel):
    """Body of a JSON query submission."""

    city: str = Field(max_length=100)
