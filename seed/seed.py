"""Seed script for initial data.

Running this script will create the tables and populate the database
with two demo members, a welcome post and a first comment so the feed
is not empty on a fresh install. Invoke it with
``python -m seed.seed`` from the repository root.
"""
from __future__ import annotations

from flask import current_app

from sharespace import create_app, db
from sharespace.models import User

DEMO_PASSWORD = "password"


def insert_seed_data() -> bool:
    """Insert the demo data. Must run inside an application context.

    Returns ``False`` without touching anything when the demo users
    already exist.
    """
    if User.query.filter_by(email="guide@example.com").first():
        return False

    guide = User(
        name="ShareSpace Guide",
        email="guide@example.com",
        bio="Here to help you settle in.",
        profile_picture_url="/pfp/cat.png",
    )
    guide.set_password(DEMO_PASSWORD)
    member = User(
        name="Demo Member",
        email="member@example.com",
        profile_picture_url="/pfp/dog.png",
    )
    member.set_password(DEMO_PASSWORD)
    db.session.add_all([guide, member])
    db.session.commit()

    posts = current_app.services["posts"]
    comments = current_app.services["comments"]
    welcome = posts.create_post(
        guide.id, "Welcome to ShareSpace! Share how your day is going and be kind to each other."
    )
    comments.add_comment(welcome.id, member.id, "Glad to be here!")
    posts.toggle_like(welcome.id, member.id)
    return True


def run_seeds() -> None:
    """Create the tables and insert the demo data."""
    app = create_app()
    with app.app_context():
        db.create_all()
        if insert_seed_data():
            print("Seed data inserted successfully.")
        else:
            print("Seed data already present.")


if __name__ == "__main__":
    run_seeds()
