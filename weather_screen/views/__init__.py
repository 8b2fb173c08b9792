"""View rendering module for HTML templates.

This module handles all HTML/template rendering logic, separate from API routers.
The screen fragment is a pure function of the current view state.
"""
