"""
History Manager for Royal Calculator
Keeps the tape of evaluated expressions
"""

class HistoryManager:
    def __init__(self, db, session_id=None):
        self.db = db
        self.session_id = session_id

    def add_calculation(self, expression, result):
        """Add a calculation to history"""
        return self.db.add_calculation(expression, result, self.session_id)

    def record(self, expression, result):
        """Calculator.on_evaluate listener: store each successful evaluation"""
        self.add_calculation(expression, result)

    def get_calculation_history(self, limit=50):
        """Get calculation history"""
        return self.db.get_calculations(limit, self.session_id)

    def clear_calculation_history(self):
        """Clear calculation history (this session's only, when bound to one)"""
        self.db.clear_history(self.session_id)

    def format_calculation_history(self):
        """Format calculation history for display"""
        history = self.get_calculation_history()
        formatted = []

        # the archived expression already carries its trailing " ="
        for expr, result, timestamp in history:
            formatted.append(f"{timestamp}: {expr} {result}")

        return formatted
