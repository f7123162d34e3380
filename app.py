"""
app.py
──────
Robotic Arm Digital Twin: application entry point.

Startup sequence:
  1. Configure logging
  2. Build the twin engine (window seeded, faults OK, lifetime 100) and start its clock
  3. Create Dash app with DARKLY bootstrap theme and register console callbacks
  4. Mount the HTTP API (events, commands, logs) on the Flask server
  5. Run dev server (or expose `server` for gunicorn in production)
"""
import logging

import dash
import dash_bootstrap_components as dbc

from config.settings import settings
from src.api import routes
from src.layout.main import create_layout
from src.simulation.engine import TwinEngine

# ── 1. Logging ────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
)
logger = logging.getLogger("app")

# ── 2. Engine ─────────────────────────────────────────────────────────────────
engine = TwinEngine()
engine.start()

# ── 3. Dash app ───────────────────────────────────────────────────────────────
app = dash.Dash(
    __name__,
    external_stylesheets=[dbc.themes.DARKLY],
    suppress_callback_exceptions=True,
    meta_tags=[{"name": "viewport", "content": "width=device-width, initial-scale=1"}],
    title="Arm Twin",
)

server = app.server  # gunicorn entry point
app.layout = create_layout()

from src.callbacks import console

console.register(app, engine)

# ── 4. HTTP API ───────────────────────────────────────────────────────────────
routes.register(server, engine)

# ── 5. Run ────────────────────────────────────────────────────────────────────
if __name__ == "__main__":
    logger.info("Digital twin server running on http://%s:%d", settings.HOST, settings.PORT)
    app.run(
        debug=settings.DEBUG,
        host=settings.HOST,
        port=settings.PORT,
        use_reloader=False,
        threaded=True,
    )
