"""Flask backend for the charterskg API."""
