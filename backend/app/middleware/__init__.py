# Middleware package init
"""
Notas Backend - Middleware Package
===================================

Middleware Chain (order matters!):
    Request → [Access Log] → [Access Policy] → Route Handler

    1. Access Log (logging.py): request ID, then one line per request with
       status, duration and the policy outcome
    2. Access Policy (access_policy.py): opening-hours gate, then note count
       and list for the handlers
"""
