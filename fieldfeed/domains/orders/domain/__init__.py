"""
Orders Domain Layer

Order aggregate, status state machine, price breakdown and invoice arithmetic.
"""
