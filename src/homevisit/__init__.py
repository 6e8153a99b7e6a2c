"""Service-area and home-visit logistics engine."""
