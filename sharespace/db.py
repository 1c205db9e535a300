"""Database setup utilities.

This module owns the shared Flask-SQLAlchemy object. Models declare
themselves against it and the application factory binds it to the
Flask app, so there is exactly one engine per app and one scoped
session per request. Flask-SQLAlchemy removes the session when the
application context tears down, which closes the connection at the
end of every request.

Services never import ``db`` themselves; the factory hands them
``db.session`` when it builds them.
"""
from __future__ import annotations

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()
