"""
app.py
──────
Equipment Maintenance Dashboard: Application Entry Point.

Startup sequence:
  1. Configure logging
  2. Build the in-memory store with demo records and simulated telemetry history
  3. Create Dash app with DARKLY bootstrap theme
  4. Register all callbacks against the store
  5. Run dev server (or expose `server` for gunicorn in production)
"""
import logging

import dash
import dash_bootstrap_components as dbc

from config.settings import settings
from src.callbacks import alerts, dashboard, equipment, inventory, logs, navigation, reports, schedule
from src.data.store import MaintenanceStore
from src.layout.main import create_layout

# ── 1. Logging ────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# ── 2. Store ──────────────────────────────────────────────────────────────────
store = MaintenanceStore.seeded()

# ── 3. Dash app ───────────────────────────────────────────────────────────────
app = dash.Dash(
    __name__,
    external_stylesheets=[dbc.themes.DARKLY],
    suppress_callback_exceptions=True,
    meta_tags=[{"name": "viewport", "content": "width=device-width, initial-scale=1"}],
    title="Maintenance Dashboard",
)

server = app.server  # gunicorn entry point
app.layout = create_layout(store.list_users())

# ── 4. Register callbacks ─────────────────────────────────────────────────────
for module in (navigation, dashboard, equipment, schedule, alerts, logs, inventory, reports):
    module.register(app, store)

# ── 5. Run ────────────────────────────────────────────────────────────────────
if __name__ == "__main__":
    logger.info("Starting dashboard on %s:%d", settings.HOST, settings.PORT)
    app.run(
        debug=settings.DEBUG,
        host=settings.HOST,
        port=settings.PORT,
    )
