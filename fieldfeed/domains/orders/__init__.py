"""
Orders Domain

Bulk order lifecycle: submission, quoting, customer confirmation,
fulfilment tracking and the notifications tied to each step.
"""
