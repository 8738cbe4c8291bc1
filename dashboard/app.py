"""
Automation console dashboard.

Provides: the single page with one card per flow, a health indicator and a
manual health check, plus the JSON API the page polls. Flows run as
background tasks; the page follows busy flags and notifications.
"""

from pathlib import Path

from fastapi import BackgroundTasks, FastAPI, HTTPException
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from flowdeck.console import AutomationConsole, build_console
from flowdeck.registry import DASHBOARD_CARDS

APP_DIR = Path(__file__).resolve().parent
STATIC_DIR = APP_DIR / "static"

# One console per process; built on first use so settings come from the environment
_console: AutomationConsole | None = None

app = FastAPI(title="flowdeck Automation Console", version="0.1.0")


def get_console() -> AutomationConsole:
    global _console
    if _console is None:
        _console = build_console()
    return _console


def reset_console(console: AutomationConsole | None = None) -> None:
    """Replace the console (tests, or the CLI handing over its own)."""
    global _console
    _console = console


@app.get("/")
def index():
    """Serve the dashboard page."""
    return FileResponse(STATIC_DIR / "index.html")


@app.get("/api/flows")
def api_flows():
    """Registered flows and the card layout."""
    console = get_console()
    return {
        "base_url": console.base_url,
        "flows": [
            {
                "key": flow.key,
                "label": flow.label,
                "endpoint": flow.path,
                "headed": flow.request_body().headed,
                "description": flow.description,
            }
            for flow in console.registry
        ],
        "cards": [card.model_dump() for card in DASHBOARD_CARDS],
    }


@app.get("/api/status")
def api_status():
    """Health indicator and busy flag per flow."""
    return get_console().snapshot()


@app.post("/api/health/check")
async def api_health_check():
    """Run the health probe now."""
    console = get_console()
    ok = await console.check_health()
    return {"ok": ok, "health": console.health_status.value}


@app.post("/api/flows/{key}/run", status_code=202)
def api_run_flow(key: str, background_tasks: BackgroundTasks):
    """Start a flow in the background; progress shows up in status and notifications."""
    console = get_console()
    if key not in console.registry:
        raise HTTPException(status_code=404, detail="Flow not found")
    background_tasks.add_task(console.run_flow, key)
    return {"accepted": True, "key": key}


@app.get("/api/notifications")
def api_notifications(after: int = 0):
    """Notifications newer than the given id."""
    return {
        "notifications": [
            n.model_dump(mode="json") for n in get_console().notifications.since(after)
        ]
    }


if STATIC_DIR.exists():
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")


if __name__ == "__main__":
    import uvicorn

    from flowdeck.config import get_settings

    settings = get_settings()
    uvicorn.run(app, host=settings.dashboard_host, port=settings.dashboard_port)
