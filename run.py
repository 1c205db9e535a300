"""
Entry point for running the ShareSpace Flask application.

This module loads a local ``.env`` file, builds the app with the
application factory and starts the development server when executed
directly. In production, a WSGI server like gunicorn should serve
``wsgi:app`` instead.
"""
import os

from dotenv import load_dotenv

basedir = os.path.abspath(os.path.dirname(__file__))
load_dotenv(dotenv_path=os.path.join(basedir, ".env"))

from sharespace import create_app, db  # noqa: E402

app = create_app()

if __name__ == "__main__":
    # Only create the database tables automatically in local
    # development when running this module directly. Production
    # deployments should manage migrations separately.
    with app.app_context():
        db.create_all()
    port = int(os.environ.get("PORT", 5000))
    app.run(host="0.0.0.0", port=port, debug=True)
