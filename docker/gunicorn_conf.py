import os

# gunicorn -c docker/gunicorn_conf.py recipe_form.main:app
bind = f"0.0.0.0:{os.getenv('PORT','8001')}"
# Form state lives in process memory, so more than one worker needs sticky sessions.
workers = int(os.getenv("WEB_CONCURRENCY", "1")) or 1
worker_class = "uvicorn.workers.UvicornWorker"
# Recipe and image generation upstream can be slow
timeout = int(os.getenv("TIMEOUT", "180"))
keepalive = 5
graceful_timeout = 30
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info")
