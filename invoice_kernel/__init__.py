"""
Invoice Kernel

Lifecycle and access-control engine for invoices exchanged between
clients, suppliers and the bank:
- Role-gated create/update/status/delete operations
- Pure validation rules with typed failures
- Role-scoped, paginated invoice search
- Role-specific read projections
"""

__version__ = "0.1.0"
