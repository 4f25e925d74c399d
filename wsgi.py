# wsgi.py
import os

from postflow import create_app

application = create_app()

if __name__ == "__main__":
    application.run(host="0.0.0.0", port=int(os.getenv("PORT", 3000)))
