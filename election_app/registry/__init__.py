"""
Candidate registry module.

Ordered candidate roster with stable indices and atomic tally increments.
"""
