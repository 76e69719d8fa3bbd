"""WSGI entry point: ``flask --app app run`` or ``python app.py``."""

from hr_timekeeping.main import create_app

app = create_app()

if __name__ == "__main__":
    app.run(debug=app.config["DEBUG"])
