"""HTML views for the weather screen.

The tile renderer is the browser-side PresentationController: it collects the
presenter's single outcome and renders it with Jinja2.
"""
