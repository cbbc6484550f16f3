"""
Flask REST API for Royal Calculator
Exposes calculator sessions and the calculation tape as JSON endpoints
"""
from collections import OrderedDict
import uuid

from flask import Flask, jsonify, request
from flask_cors import CORS

from calculator import Calculator
from database import Database
from history_manager import HistoryManager
import config


class SessionStore:
    """In-process calculator sessions, oldest evicted past max_sessions"""

    def __init__(self, db, max_sessions=config.MAX_SESSIONS):
        self.db = db
        self.max_sessions = max_sessions
        self._sessions = OrderedDict()

    def create(self):
        session_id = uuid.uuid4().hex
        history = HistoryManager(self.db, session_id)
        self._sessions[session_id] = Calculator(on_evaluate=history.record)
        while len(self._sessions) > self.max_sessions:
            self._sessions.popitem(last=False)
        return session_id

    def get(self, session_id):
        return self._sessions.get(session_id)

    def remove(self, session_id):
        return self._sessions.pop(session_id, None) is not None

    def __len__(self):
        return len(self._sessions)


def _session_payload(session_id, calc):
    data = calc.snapshot()
    data['session_id'] = session_id
    return data


def _not_found(session_id):
    return jsonify({'success': False, 'error': f'Unknown session: {session_id}'}), 404


def create_app(db_path=None, max_sessions=config.MAX_SESSIONS):
    """Build the API application around one tape database"""
    app = Flask(__name__)
    CORS(app)  # Enable CORS for all routes

    db = Database(db_path or config.DB_PATH)
    sessions = SessionStore(db, max_sessions)
    app.config['SESSIONS'] = sessions

    @app.route('/api')
    def api_info():
        """API information page"""
        return """
        <html>
        <head><title>Royal Calculator API</title></head>
        <body style="font-family: Arial; padding: 40px; background: #15172A; color: white;">
            <h1>Royal Calculator API Server</h1>
            <h2>Available Endpoints:</h2>
            <ul>
                <li>POST /api/sessions - Start a calculator session</li>
                <li>GET /api/sessions/&lt;id&gt; - Current display</li>
                <li>POST /api/sessions/&lt;id&gt;/actions - Apply digit, operator, percent, backspace, clear or equals</li>
                <li>DELETE /api/sessions/&lt;id&gt; - End a session</li>
                <li><a href="/api/calculations" style="color: #F2D675;">/api/calculations</a> - Calculation history</li>
            </ul>
        </body>
        </html>
        """

    @app.route('/api/sessions', methods=['POST'])
    def create_session():
        """Start a new calculator session"""
        try:
            session_id = sessions.create()
            return jsonify({
                'success': True,
                'data': _session_payload(session_id, sessions.get(session_id))
            }), 201
        except Exception as e:
            return jsonify({'success': False, 'error': str(e)}), 500

    @app.route('/api/sessions/<session_id>', methods=['GET'])
    def get_session(session_id):
        """Get the live and history expressions of a session"""
        calc = sessions.get(session_id)
        if calc is None:
            return _not_found(session_id)
        return jsonify({'success': True, 'data': _session_payload(session_id, calc)})

    @app.route('/api/sessions/<session_id>', methods=['DELETE'])
    def delete_session(session_id):
        """End a calculator session"""
        if not sessions.remove(session_id):
            return _not_found(session_id)
        return jsonify({'success': True, 'data': {'session_id': session_id}})

    @app.route('/api/sessions/<session_id>/actions', methods=['POST'])
    def apply_action(session_id):
        """Apply one keypad action to a session"""
        calc = sessions.get(session_id)
        if calc is None:
            return _not_found(session_id)

        payload = request.get_json(silent=True) or {}
        if not isinstance(payload, dict):
            return jsonify({'success': False, 'error': 'Invalid body'}), 400
        action = payload.get('action')
        if not action:
            return jsonify({'success': False, 'error': 'Missing action'}), 400

        try:
            calc.dispatch(action, payload.get('param'))
        except ValueError as e:
            return jsonify({'success': False, 'error': str(e)}), 400
        except Exception as e:
            return jsonify({'success': False, 'error': str(e)}), 500

        return jsonify({'success': True, 'data': _session_payload(session_id, calc)})

    @app.route('/api/calculations', methods=['GET'])
    def get_calculations():
        """Get calculation history"""
        try:
            limit = int(request.args.get('limit', 50))
            calculations = db.get_calculations(limit, request.args.get('session_id'))

            formatted = []
            for c in calculations:
                formatted.append({
                    'expression': c[0],
                    'result': c[1],
                    'timestamp': c[2]
                })

            return jsonify({
                'success': True,
                'data': formatted,
                'count': len(formatted)
            })
        except ValueError as e:
            return jsonify({'success': False, 'error': str(e)}), 400
        except Exception as e:
            return jsonify({'success': False, 'error': str(e)}), 500

    @app.route('/api/calculations', methods=['DELETE'])
    def clear_calculations():
        """Clear the calculation tape, or one session's part of it"""
        try:
            HistoryManager(db, request.args.get('session_id')).clear_calculation_history()
            return jsonify({'success': True, 'data': {'count': db.count_calculations()}})
        except Exception as e:
            return jsonify({'success': False, 'error': str(e)}), 500

    return app


if __name__ == '__main__':
    app = create_app()

    print("\n" + "="*60)
    print("Royal Calculator API Server")
    print("="*60)
    print(f"Server starting on http://{config.WEB_HOST}:{config.WEB_PORT}")
    print(f"Access from this device: http://localhost:{config.WEB_PORT}/api")
    if config.WEB_HOST == '0.0.0.0':
        print(f"Access from network: http://<your-ip>:{config.WEB_PORT}/api")
    print("="*60 + "\n")

    app.run(host=config.WEB_HOST, port=config.WEB_PORT, debug=False)
