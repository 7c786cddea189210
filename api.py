"""
Flask REST API for SciCal
Drives a calculator over JSON so a web page or another program can act as its keypad
"""
import threading

from flask import Flask, jsonify, request
from flask_cors import CORS

import config
from calculator import Calculator


class WebSurface:
    """Holds what a screen would show, fed by the calculator callbacks"""

    def __init__(self):
        self.display = "0"
        self.history = ""

    def show(self, text):
        self.display = text

    def show_history(self, text):
        self.history = text

    def clear_history(self):
        self.history = ""


def create_app(calculator=None):
    app = Flask(__name__)
    CORS(app)  # Enable CORS for all routes

    surface = WebSurface()
    if calculator is None:
        calculator = Calculator()
    calculator.on_display_changed = surface.show
    calculator.on_history_changed = surface.show_history
    calculator.on_history_cleared = surface.clear_history

    # The development server is threaded; inputs must still apply one at a time
    lock = threading.Lock()

    app.config['CALCULATOR'] = calculator
    app.config['SURFACE'] = surface

    def state_payload():
        return {
            'success': True,
            'display': surface.display,
            'history': surface.history,
            'expression': calculator.current_expression,
            'last_result': calculator.last_result,
            'should_clear_display': calculator.should_clear_display,
        }

    def bad_request(message):
        return jsonify({'success': False, 'error': message}), 400

    def run_command(action, *args):
        try:
            with lock:
                action(*args)
                return jsonify(state_payload())
        except Exception as e:
            return jsonify({'success': False, 'error': str(e)}), 500

    def json_field(name):
        data = request.get_json(silent=True) or {}
        value = data.get(name)
        return str(value) if value is not None else None

    @app.route('/api')
    def api_info():
        """API information page"""
        return f"""
        <html>
        <head><title>{config.APP_NAME} API</title></head>
        <body style="font-family: Arial; padding: 40px; background: #1a1a2e; color: white;">
            <h1>{config.APP_NAME} API Server</h1>
            <h2>Available Endpoints:</h2>
            <ul>
                <li>GET /api/state - Current display, history line and expression</li>
                <li>POST /api/digit - Body: {{"digit": "7"}}</li>
                <li>POST /api/operator - Body: {{"operator": "+"}}</li>
                <li>POST /api/decimal - Append a decimal point</li>
                <li>POST /api/function - Body: {{"function": "sin"}}</li>
                <li>POST /api/evaluate - Evaluate the expression</li>
                <li>POST /api/clear - Clear everything</li>
                <li>POST /api/delete - Delete the last entry</li>
                <li>POST /api/key - Body: {{"key": "Enter"}}</li>
                <li>GET /api/calculations - Calculation history</li>
                <li>DELETE /api/calculations - Clear calculation history</li>
            </ul>
        </body>
        </html>
        """

    @app.route('/api/state')
    def get_state():
        """Get the calculator state"""
        try:
            with lock:
                return jsonify(state_payload())
        except Exception as e:
            return jsonify({'success': False, 'error': str(e)}), 500

    @app.route('/api/digit', methods=['POST'])
    def post_digit():
        """Append a digit"""
        digit = json_field('digit')
        if digit is None or len(digit) != 1 or digit not in config.DIGITS:
            return bad_request('digit must be one of 0-9')
        return run_command(calculator.append_digit, digit)

    @app.route('/api/operator', methods=['POST'])
    def post_operator():
        """Append an operator"""
        operator = json_field('operator')
        if operator not in config.OPERATORS:
            return bad_request('operator must be one of + - * /')
        return run_command(calculator.append_operator, operator)

    @app.route('/api/decimal', methods=['POST'])
    def post_decimal():
        """Append a decimal point"""
        return run_command(calculator.append_decimal_point)

    @app.route('/api/function', methods=['POST'])
    def post_function():
        """Apply a scientific function to the current value"""
        func = json_field('function')
        known = [name for name, _label in config.FUNCTION_BUTTONS]
        if func not in known:
            return bad_request(f"function must be one of: {', '.join(known)}")
        return run_command(calculator.append_function, func)

    @app.route('/api/evaluate', methods=['POST'])
    def post_evaluate():
        """Evaluate the current expression"""
        return run_command(calculator.calculate)

    @app.route('/api/clear', methods=['POST'])
    def post_clear():
        """Clear the calculator"""
        return run_command(calculator.clear)

    @app.route('/api/delete', methods=['POST'])
    def post_delete():
        """Delete the last character or operator"""
        return run_command(calculator.delete_last)

    @app.route('/api/key', methods=['POST'])
    def post_key():
        """Handle a keyboard key"""
        key = json_field('key')
        if not key:
            return bad_request('key is required')
        try:
            with lock:
                if not calculator.handle_key(key):
                    return bad_request(f"unsupported key: {key}")
                return jsonify(state_payload())
        except Exception as e:
            return jsonify({'success': False, 'error': str(e)}), 500

    @app.route('/api/calculations', methods=['GET'])
    def get_calculations():
        """Get calculation history"""
        try:
            limit = request.args.get('limit', 50, type=int)
            with lock:
                history = calculator.history_manager.get_calculation_history(limit)

            data = [
                {'expression': expr, 'result': result, 'timestamp': timestamp}
                for expr, result, timestamp in history
            ]
            return jsonify({'success': True, 'data': data})
        except Exception as e:
            return jsonify({'success': False, 'error': str(e)}), 500

    @app.route('/api/calculations', methods=['DELETE'])
    def delete_calculations():
        """Clear calculation history"""
        try:
            with lock:
                calculator.history_manager.clear_calculation_history()
            return jsonify({'success': True})
        except Exception as e:
            return jsonify({'success': False, 'error': str(e)}), 500

    return app


def run_server():
    print("\n" + "="*60)
    print(f"{config.APP_NAME} API Server")
    print("="*60)
    print(f"Server starting on http://{config.WEB_HOST}:{config.WEB_PORT}")
    print(f"Access from this device: http://localhost:{config.WEB_PORT}/api")
    if config.WEB_HOST == '0.0.0.0':
        print(f"Access from network: http://<your-ip>:{config.WEB_PORT}/api")
    print("="*60 + "\n")

    create_app().run(host=config.WEB_HOST, port=config.WEB_PORT, debug=False)


if __name__ == '__main__':
    run_server()
