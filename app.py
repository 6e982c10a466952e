import logging
import os

from flask import Flask
from dotenv import load_dotenv

load_dotenv()

from config import Config  # noqa: E402  (load_dotenv needs to run first)
from extensions import db, login_manager  # noqa: E402  (load_dotenv needs to run first)
from repository import EXTENSION_NAME, MarketRepository  # noqa: E402
from storage import DatabaseRecordStore  # noqa: E402


def create_app(test_config=None, store=None) -> Flask:
    """Application factory for the EcoFinds marketplace.

    ``test_config`` overrides settings before the extensions are bound;
    ``store`` replaces the database-backed record store.
    """

    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # init extensions
    db.init_app(app)
    login_manager.init_app(app)
    login_manager.login_view = "accounts.login"

    # blueprints
    from modules.accounts import bp as accounts_bp
    from modules.listings import bp as listings_bp

    app.register_blueprint(accounts_bp)
    app.register_blueprint(listings_bp)

    # DB
    with app.app_context():
        import models  # noqa: F401  (Record must be registered before create_all)

        db.create_all()

    app.extensions[EXTENSION_NAME] = MarketRepository(store or DatabaseRecordStore())

    # uploads dir, relative paths resolve against the app root
    upload_folder = app.config.get("UPLOAD_FOLDER", os.path.join("static", "uploads"))
    if not os.path.isabs(upload_folder):
        upload_folder = os.path.join(app.root_path, upload_folder)
    app.config["UPLOAD_FOLDER"] = upload_folder
    os.makedirs(upload_folder, exist_ok=True)

    # --- shared template context ---
    from flask_login import current_user
    from modules.listings.views import nav_view
    from utils import image_url

    @app.context_processor
    def inject_nav():
        return dict(
            nav=nav_view(current_user),
            banner_dismiss_ms=app.config["BANNER_DISMISS_MS"],
            image_url=image_url,
        )

    return app

if __name__ == "__main__":
    app = create_app()
    app.run(debug=True)
