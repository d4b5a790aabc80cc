from flask import Flask
import logging
import os

from waterpouring.config import ServerConfig


def create_app(config: ServerConfig = None, solver=None):
    """Flask application factory.

    Args:
        config: Server settings (default: read from environment)
        solver: Object with solve(from_state, to_state) (default: BFSSolver)
    """
    config = config or ServerConfig.from_env()

    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    app = Flask(__name__, static_folder='static')

    if solver is None:
        from waterpouring.main.pouring_solver.solver import BFSSolver
        solver = BFSSolver()

    app.config['SERVER_CONFIG'] = config
    app.config['SOLVER'] = solver

    # Create necessary directories
    os.makedirs(config.output_dir, exist_ok=True)

    # Register blueprints
    from waterpouring.main import main_bp
    app.register_blueprint(main_bp)

    return app
