"""
Voting session state module.

Holds the election data models and the voting session phase machine.
Handles transitions between SETUP → ACTIVE → ENDED.
"""
