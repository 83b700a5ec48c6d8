"""Gunicorn config for container deployment.

    gunicorn -c gunicorn.conf.py expense_tracker.main:app
"""
import os

# Bind to the platform's PORT or the service default
bind = f"0.0.0.0:{os.environ.get('PORT', '3000')}"

# Uvicorn async workers. Expenses live in process memory, so every worker
# would hold its own separate store: keep a single worker.
worker_class = "uvicorn.workers.UvicornWorker"
workers = 1

timeout = 30

# Graceful timeout for shutdown (lets the scheduler thread stop)
graceful_timeout = 30

keepalive = 65

# Logging
accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("EXPENSE_TRACKER_LOG_LEVEL", "info").lower()
