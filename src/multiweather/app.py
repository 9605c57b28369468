# http front end: turns /weather/<city> into an aggregator call and renders the result as json

from __future__ import annotations
import logging
from fastapi import FastAPI
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse
from .service import Aggregator

logger = logging.getLogger(__name__)

INDEX_HTML = """<html>
<head><title>multi-weather</title></head>
<body>
<h1>multi-weather</h1>
<p>Current temperature averaged over several weather services.</p>
<p>Try <a href="/weather/London">/weather/London</a> or the <a href="/form">form</a>.</p>
</body>
</html>
"""

FORM_HTML = """<html>
<form action="/weather/Chisinau" method="get" id="form1">
</form>
<button type="submit" form="form1" value="Submit">Submit</button>
</html>
"""

def create_app(aggregator: Aggregator) -> FastAPI:
    app = FastAPI(title="multi-weather")

    @app.get("/", response_class=HTMLResponse)
    def index():
        return INDEX_HTML

    @app.get("/hello", response_class=PlainTextResponse)
    def hello():
        return "hello"

    @app.get("/form", response_class=HTMLResponse)
    def form():
        return FORM_HTML

    # must stay a plain def so it runs in fastapi's threadpool, report() blocks up to the deadline
    @app.get("/weather/{city:path}")
    def weather(city: str):
        city = city.strip()
        if not city:
            return PlainTextResponse("city is required", status_code=400)
        try:
            result = aggregator.report(city)
        except Exception as exc:
            # all-or-nothing, and provider exceptions arrive unwrapped whatever their type
            logger.error("weather lookup for %r failed: %s", city, exc)
            return PlainTextResponse(str(exc), status_code=500)
        return JSONResponse({"city": result.city, "temp": result.temp, "took": result.took_str()})

    return app
