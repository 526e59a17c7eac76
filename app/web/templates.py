from __future__ import annotations

from pathlib import Path

from fastapi.templating import Jinja2Templates

TEMPLATES_DIR = Path(__file__).resolve().parent / "html"

ICON_URL = "https://openweathermap.org/img/wn/{icon}{suffix}.png"


def weather_icon_url(icon: str | None, large: bool = False) -> str:
    if not icon:
        return ""
    return ICON_URL.format(icon=icon, suffix="@2x" if large else "")


templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.globals["weather_icon_url"] = weather_icon_url
