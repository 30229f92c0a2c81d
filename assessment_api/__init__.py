"""Fire risk assessment engine API package.

REST API over the outcome resolver, the risk score model and the
recommendations register.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-01-19
Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"

# Made with Bob
