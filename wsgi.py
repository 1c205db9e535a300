# wsgi.py (at repo root)
from dotenv import load_dotenv

load_dotenv()

from sharespace import create_app  # noqa: E402

app = create_app()
