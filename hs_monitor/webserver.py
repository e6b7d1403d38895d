import threading
import logging
from flask import Flask, Response, jsonify


def create_app(board):
    app = Flask(__name__)

    @app.route('/api/live_data')
    def get_live_data():
        app.logger.debug("Serving live board")
        return jsonify(board.to_dict())

    @app.route('/')
    def index():
        app.logger.debug("Serving root endpoint")
        return Response("Hearthstone monitor is running!", status=200)

    return app


def start_server(board, host, port):
    """Run the web server on a daemon thread. Returns False if it could not start."""
    try:
        app = create_app(board)
        server_thread = threading.Thread(target=app.run, kwargs={
            'host': host,
            'port': port,
            'debug': False,
            'use_reloader': False,
            'threaded': True
        })
        server_thread.daemon = True
        server_thread.start()
        logging.info(f"Server started at http://{host}:{port}")
        return True
    except (OSError, RuntimeError) as e:
        logging.error(f"Failed to start server: {e}")
        return False
