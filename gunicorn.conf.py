"""
Gunicorn configuration for the reading tracker API.

Env vars that override defaults:
  PORT             — TCP port to bind
  WORKERS          — number of worker processes (default: 2)
  WORKER_TIMEOUT   — seconds before a silent worker is killed (default: 60)
"""
import os

wsgi_app = "reading_tracker.main:app"

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

workers = int(os.environ.get("WORKERS", "2"))

# Each worker runs Uvicorn's ASGI event loop inside Gunicorn's process manager.
worker_class = "uvicorn.workers.UvicornWorker"

keepalive = 5

# Upper bound on any single request; DB calls are bounded tighter in Settings.
timeout = int(os.environ.get("WORKER_TIMEOUT", "60"))

# stdout only; the platform captures it.
loglevel = os.environ.get("LOG_LEVEL", "info").lower()
accesslog = "-"
errorlog = "-"
access_log_format = '%(h)s "%(r)s" %(s)s %(b)sB %(D)sµs'

graceful_timeout = 30
