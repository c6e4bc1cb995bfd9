"""
Contact form intake service.

Accepts contact-form submissions, appends them to a spreadsheet and emails an
operator when something goes wrong.
"""

__version__ = "0.1.0"
