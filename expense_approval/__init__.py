"""
Expense Approval Flow.

Multi-stage expense approval: an employee submits an expense and it is
routed through their manager, optionally their senior manager, and a
finance expert until it is approved or rejected.

Typical wiring::

    from expense_approval.config import get_config
    from expense_approval.services import create_services

    services = create_services(config=get_config())
    engine = services["approval_engine"]
"""

__version__ = "0.1.0"
