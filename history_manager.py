"""
History Manager for SciCal
Keeps the calculations of the running session in memory
"""
from collections import deque
from datetime import datetime

import config


class HistoryManager:
    def __init__(self, max_items=config.MAX_HISTORY_ITEMS):
        self._calculations = deque(maxlen=max_items)

    def add_calculation(self, expression, result):
        """Add a calculation to history"""
        timestamp = datetime.now().strftime("%H:%M:%S")
        self._calculations.append((expression, result, timestamp))

    def get_calculation_history(self, limit=50):
        """Get calculation history, newest first"""
        newest_first = list(reversed(self._calculations))
        return newest_first[:limit]

    def clear_calculation_history(self):
        """Clear all calculation history"""
        self._calculations.clear()

    def format_calculation_history(self):
        """Format calculation history for display"""
        history = self.get_calculation_history()
        formatted = []

        for expr, result, timestamp in history:
            formatted.append(f"{timestamp}: {expr} = {result}")

        return formatted

    def __len__(self):
        return len(self._calculations)
