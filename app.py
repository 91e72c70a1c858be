"""Hosting entry point for the K-Means hospitals dashboard."""

from kmeans_hospitals.config import configure_logging
from kmeans_hospitals.visualization.dash_app import app, main

# gunicorn imports this module and never calls main()
configure_logging()

server = app.server  # expose Flask server for gunicorn

if __name__ == "__main__":
    main()
