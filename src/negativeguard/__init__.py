"""NegativeGuard.

Audits Google Ads negative keywords and removes the ones that block the
account's own active keywords.
"""

__version__ = "1.0.0"
