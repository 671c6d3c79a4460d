import threading
from datetime import date, timedelta


def days_from_today(n):
    return date.today() + timedelta(days=n)


def start_in_app_thread(app, target):
    """Run target in a worker thread with its own app context and DB session"""
    outcome = {}

    def run():
        with app.app_context():
            try:
                outcome['result'] = target()
            except Exception as exc:
                outcome['error'] = exc

    worker = threading.Thread(target=run, daemon=True)
    worker.start()
    return worker, outcome
