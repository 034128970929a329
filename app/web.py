"""
Resistor Decoder - Web Form

FastAPI front end for the band decoder:

  GET /                 band selection form
  GET /resistance       HTML fragment with the decoded value or error
  GET /api/resistance   same, as JSON
  GET /about, /contact  static pages

Run with:
    python web.py
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

from fastapi import FastAPI, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

import config
from band_code import BAND_CHOICES, BandColor, BandDecodeError, calculate, format_ohms

log = logging.getLogger(__name__)

app = FastAPI(title="Resistor Decoder")
templates = Jinja2Templates(
    directory=os.path.join(os.path.dirname(os.path.abspath(__file__)), "templates")
)

BAND_FIELDS = [
    ("band_a", "Band A", "1st digit"),
    ("band_b", "Band B", "2nd digit"),
    ("band_c", "Band C", "Multiplier"),
    ("band_d", "Band D", "Tolerance"),
]


def _hex(rgb: tuple) -> str:
    return "#%02x%02x%02x" % rgb


def _parse_bands(*names: Optional[str]) -> list[BandColor]:
    """Map form values to colours; raises ValueError on an unknown name."""
    return [BandColor.from_name(name) for name in names]


def _decode(bands: list[BandColor]) -> dict:
    """Decode *bands* into a template/JSON context; errors are reported, not raised."""
    names = [b.label for b in bands]
    try:
        ohms = calculate(*bands)
    except BandDecodeError as exc:
        log.info("Rejected bands %s: %s", "-".join(names), exc)
        return {"bands": names, "error": str(exc), "kind": type(exc).__name__}
    return {"bands": names, "ohms": ohms, "text": format_ohms(ohms)}


@app.get("/", response_class=HTMLResponse)
async def index(request: Request):
    choices = [{"value": b.label, "title": b.title, "hex": _hex(b.rgb)} for b in BAND_CHOICES]
    return templates.TemplateResponse(request, "index.html", {
        "fields": BAND_FIELDS,
        "choices": choices,
        "defaults": dict(zip((f[0] for f in BAND_FIELDS), config.DEFAULT_BANDS)),
    })


@app.get("/resistance", response_class=HTMLResponse)
async def resistance(
    request: Request,
    band_a: Optional[str] = Query(None),
    band_b: Optional[str] = Query(None),
    band_c: Optional[str] = Query(None),
    band_d: Optional[str] = Query(None),
):
    try:
        bands = _parse_bands(band_a, band_b, band_c, band_d)
    except ValueError as exc:
        return templates.TemplateResponse(
            request, "_resistance.html", {"error": str(exc)}, status_code=400
        )
    return templates.TemplateResponse(request, "_resistance.html", _decode(bands))


@app.get("/api/resistance", response_class=JSONResponse)
async def api_resistance(
    band_a: Optional[str] = Query(None),
    band_b: Optional[str] = Query(None),
    band_c: Optional[str] = Query(None),
    band_d: Optional[str] = Query(None),
):
    try:
        bands = _parse_bands(band_a, band_b, band_c, band_d)
    except ValueError as exc:
        return JSONResponse({"error": str(exc)}, status_code=400)
    result = _decode(bands)
    if "error" in result:
        return JSONResponse(result, status_code=422)
    return result


@app.get("/about", response_class=HTMLResponse)
async def about(request: Request):
    return templates.TemplateResponse(request, "page.html", {
        "title": "About",
        "message": "Calculates the resistance of a resistor from its color bands.",
    })


@app.get("/contact", response_class=HTMLResponse)
async def contact(request: Request):
    return templates.TemplateResponse(request, "page.html", {
        "title": "Contact",
        "message": "Wait for the 24th century.",
    })


def main() -> None:
    import uvicorn

    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )
    log.info("Serving on http://%s:%d", config.WEB_HOST, config.WEB_PORT)
    uvicorn.run(app, host=config.WEB_HOST, port=config.WEB_PORT)


if __name__ == "__main__":
    main()
