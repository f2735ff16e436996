"""
Sympatico - 11 Virtues compatibility engine.

Compares a user's self-reported virtue profile against a match's inferred
scores and explains where the pair aligns, where friction is expected and
where a mismatch is dangerous.
"""

__version__ = "1.0.0"
