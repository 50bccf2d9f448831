import logging

from flask import Flask, jsonify, redirect, url_for
from .extensions import db, migrate, login_manager
from .config import Config
from .errors import register_error_handlers

from .blueprints.auth.routes import auth_bp
from .blueprints.dashboard.routes import dashboard_bp
from .blueprints.transactions.routes import transactions_bp
from .blueprints.budgets.routes import budgets_bp
from .blueprints.insights.routes import insights_bp
from .blueprints.reports.routes import reports_bp
from .blueprints.profile.routes import profile_bp
from .blueprints.functions.routes import functions_bp


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)
    logging.basicConfig(level=app.config["LOG_LEVEL"])

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({"ok": False, "message": "Authentication required"}), 401

    # Ensure tables exist for a smooth first run
    with app.app_context():
        from . import models  # noqa: F401
        db.create_all()

    register_error_handlers(app)

    # Register blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(transactions_bp)
    app.register_blueprint(budgets_bp)
    app.register_blueprint(insights_bp)
    app.register_blueprint(reports_bp)
    app.register_blueprint(profile_bp)
    app.register_blueprint(functions_bp)

    @app.route("/")
    def root():
        return redirect(url_for("dashboard.index"))

    return app
