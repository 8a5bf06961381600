from app import app
import console  # Import console to register its CLI command with Flask
import create_admin  # noqa: F401

if __name__ == "__main__":
    with app.app_context():
        console.start_console()
