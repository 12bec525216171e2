"""
Flask web shell for WebCalc
Serves the calculator page and forwards browser input to the calculator
"""
from flask import Flask, g, jsonify, request, send_from_directory
from flask_cors import CORS
import structlog

from calculator import InvalidTokenError
from keymap import dispatch_key, recognized_keys
from session_manager import SessionManager
import config

logger = structlog.get_logger()

app = Flask(__name__, static_folder='web', static_url_path='')
CORS(app, supports_credentials=True)

session_manager = SessionManager()


def current_session():
    """Get the calculator session for the requesting browser"""
    session = session_manager.get_session(request.cookies.get(config.SESSION_COOKIE_NAME))
    g.calc_session = session
    return session


def state_response(session, **extra):
    data = session.snapshot()
    data.update(extra)
    return jsonify({'success': True, 'data': data})


def error_response(message, status):
    return jsonify({'success': False, 'error': message}), status


def json_body():
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


@app.after_request
def remember_session(response):
    """Issue the session cookie to browsers that do not have it yet"""
    session = g.get('calc_session')
    if session is not None and request.cookies.get(config.SESSION_COOKIE_NAME) != session.session_id:
        response.set_cookie(config.SESSION_COOKIE_NAME, session.session_id,
                            httponly=True, samesite='Lax')
    return response


@app.route('/')
def index():
    """Serve the calculator page"""
    return send_from_directory(config.WEB_DIR, 'index.html')


@app.route('/api')
def api_info():
    """API information page"""
    return f"""
    <html>
    <head><title>{config.APP_NAME} API</title></head>
    <body style="font-family: Arial; padding: 40px;">
        <h1>{config.APP_NAME} API v{config.VERSION}</h1>
        <p>The calculator is at <a href="/">Home</a></p>
        <h2>Available Endpoints:</h2>
        <ul>
            <li>GET /api/state - Current display</li>
            <li>GET /api/keymap - Keyboard bindings</li>
            <li>POST /api/press - Append a token, body {{"token": "7"}}</li>
            <li>POST /api/key - Handle a key, body {{"key": "Enter"}}</li>
            <li>POST /api/clear - Clear the expression</li>
            <li>POST /api/backspace - Delete the last character</li>
            <li>POST /api/evaluate - Evaluate the expression</li>
        </ul>
    </body>
    </html>
    """


@app.route('/api/state')
def get_state():
    """Get the current display state"""
    try:
        return state_response(current_session())
    except Exception as e:
        logger.exception("State request failed")
        return error_response(str(e), 500)


@app.route('/api/keymap')
def get_keymap():
    """Get the keys the page should forward"""
    keys = recognized_keys()
    return jsonify({'success': True, 'data': keys, 'count': len(keys)})


@app.route('/api/press', methods=['POST'])
def press():
    """Append a token from a button"""
    try:
        session = current_session()
        session.calculator.press(json_body().get('token'))
        return state_response(session)
    except InvalidTokenError as e:
        return error_response(str(e), 400)
    except Exception as e:
        logger.exception("Press failed")
        return error_response(str(e), 500)


@app.route('/api/key', methods=['POST'])
def key():
    """Handle a keyboard key"""
    try:
        session = current_session()
        handled = dispatch_key(session.calculator, json_body().get('key'))
        return state_response(session, handled=handled)
    except Exception as e:
        logger.exception("Key handling failed")
        return error_response(str(e), 500)


@app.route('/api/clear', methods=['POST'])
def clear():
    """Clear the expression"""
    try:
        session = current_session()
        session.calculator.clear()
        return state_response(session)
    except Exception as e:
        logger.exception("Clear failed")
        return error_response(str(e), 500)


@app.route('/api/backspace', methods=['POST'])
def backspace():
    """Delete the last character"""
    try:
        session = current_session()
        session.calculator.backspace()
        return state_response(session)
    except Exception as e:
        logger.exception("Backspace failed")
        return error_response(str(e), 500)


@app.route('/api/evaluate', methods=['POST'])
def evaluate():
    """Evaluate the expression"""
    try:
        session = current_session()
        session.calculator.evaluate()
        return state_response(session)
    except Exception as e:
        logger.exception("Evaluate failed")
        return error_response(str(e), 500)
