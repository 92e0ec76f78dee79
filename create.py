# create.py
from pathlib import Path

from feedback import create_app
from feedback.extensions import db


def main():
    app = create_app()
    with app.app_context():
        Path(app.config["UPLOAD_FOLDER"]).mkdir(parents=True, exist_ok=True)
        db.create_all()
        app.logger.info("Database initialized successfully")
        print(f"Admin URL: /admin/{app.config['ADMIN_TOKEN']}/")

if __name__ == "__main__":
    main()
