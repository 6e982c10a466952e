from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

# Extensions are created unbound and attached in create_app()

# Record table (ecofinds_users, ecofinds_products)
db = SQLAlchemy()

# Session handling for the current user
login_manager = LoginManager()
