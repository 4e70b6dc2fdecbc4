"""
Playwright Bridge
=================

Debug endpoints that let Playwright end-to-end tests drive a FastAPI backend:
log users in and out, build records through factories, run management
commands and evaluate Python in the application runtime.

Test flow: csrf_token → login / create / artisan / run_python → assert
"""

__version__ = "0.1.0"
