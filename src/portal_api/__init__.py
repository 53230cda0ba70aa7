"""REST API for the hotel booking portal."""
