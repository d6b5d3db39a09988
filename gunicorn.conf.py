"""Gunicorn config for serving the Storm Impact Report API.

Run with: gunicorn -c gunicorn.conf.py storm_report.main:app
"""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Uvicorn async workers, each with its own copy of the event table (~900k rows)
worker_class = "uvicorn.workers.UvicornWorker"
workers = int(os.environ.get("WEB_CONCURRENCY", "2"))

# Startup parses the full compressed CSV; allow for it
timeout = 180

graceful_timeout = 30

keepalive = 65

# Logging
accesslog = "-"
errorlog = "-"
loglevel = "info"
