"""
Orders Infrastructure Layer

Adapters behind the application ports: persistence, email and invoices.
"""
