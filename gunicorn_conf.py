"""Gunicorn configuration for the NLP gateway.

Usage:
    gunicorn nlp_gateway.main:app -c gunicorn_conf.py
"""

import multiprocessing
import os

# ── Server Socket ─────────────────────────────
bind = f"0.0.0.0:{os.getenv('SERVICE_PORT', '8080')}"

# ── Worker Processes ──────────────────────────
workers = int(os.getenv("GUNICORN_WORKERS", multiprocessing.cpu_count() * 2 + 1))
worker_class = "uvicorn.workers.UvicornWorker"

# ── Timeouts ──────────────────────────────────
# Longer than UPSTREAM_TIMEOUT so slow upstreams surface as gateway errors
timeout = int(os.getenv("GUNICORN_TIMEOUT", "60"))
graceful_timeout = int(os.getenv("GUNICORN_GRACEFUL_TIMEOUT", "30"))
keepalive = int(os.getenv("GUNICORN_KEEPALIVE", "5"))

# ── Logging ───────────────────────────────────
# Access lines come from the app's request_completed event; the gunicorn.error
# handler is replaced by the structlog root handler when the app loads.
accesslog = None
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

proc_name = os.getenv("SERVICE_NAME", "nlp_gateway")

# ── Server Mechanics ─────────────────────────
max_requests = int(os.getenv("GUNICORN_MAX_REQUESTS", "1000"))
max_requests_jitter = int(os.getenv("GUNICORN_MAX_REQUESTS_JITTER", "50"))
