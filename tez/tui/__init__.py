"""Widgets drawn by the router: the results cursor, prompt, and frame."""
