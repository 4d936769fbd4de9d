"""
Main entrypoint for the Creek River campground reservation API.

Usage:
    Run directly (`python main.py`) or serve the app with uvicorn
    (`uvicorn src.api.app:app --reload`). The database comes from the DB_URL
    environment variable and defaults to a local SQLite file. Tables are
    created, and seeded unless SEED_DATABASE=false, when the app starts up.
"""
import os

import uvicorn

def main():
    """
    Serve the API.
    """
    try:
        host = os.getenv("API_HOST", "0.0.0.0")
        port = int(os.getenv("API_PORT", "8000"))
        print(f"Serving Creek River API on http://{host}:{port}")
        uvicorn.run("src.api.app:app", host=host, port=port)

        return 0
    except Exception as e:
        print(f"An error occurred in the main function: {str(e)}")
        return 1


if __name__ == "__main__":
    exit_code = main()
    print(f"Exiting with code {exit_code}")
