"""
main.py

Flask backend that resolves YouTube links and lists their download options
through the RapidAPI ytstream metadata service.

Dependencies:
  - Python packages: Flask, flask-restx, flask-cors, requests
  - Credentials: RAPIDAPI_KEY must be set in the environment

Notes:
  - API v1 endpoints available at /api/v1/ with Swagger docs at /api/v1/docs
  - Uses application factory pattern for better testability
"""

import os

from tubefetch.app_factory import create_app

app = create_app()

if __name__ == "__main__":
    host = os.getenv("FLASK_HOST", "0.0.0.0")
    port = int(os.getenv("FLASK_PORT", 8000))
    debug = os.getenv("FLASK_DEBUG", "true").lower() == "true"

    app.run(host=host, port=port, debug=debug)
