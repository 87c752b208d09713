#!/usr/bin/env python3
"""Standalone Flask application for the charterskg API.

This script provides an easy way to run the backend during development.

Usage:
    python app.py

The API will be available at http://localhost:3000
"""

import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Add the src directory to the Python path
src_path = Path(__file__).parent / "src"
sys.path.insert(0, str(src_path))

load_dotenv()

from charterskg.backend.app import create_app  # noqa: E402


def main():
    """Run the Flask development server."""
    app = create_app()

    # Get configuration from environment variables
    debug = os.getenv('FLASK_DEBUG', '1') == '1'
    host = os.getenv('FLASK_HOST', '0.0.0.0')
    port = int(os.getenv('PORT', '3000'))

    print("Starting Medieval Charters KG backend...")
    print(f"Server will be available at: http://localhost:{port}")
    print(f"Debug mode: {debug}")

    app.run(debug=debug, host=host, port=port)


if __name__ == '__main__':
    main()
