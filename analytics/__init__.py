"""
Training analytics core.

Stateless computations run after every logged set and finished workout:
1RM estimation, load progression, prescribed-vs-actual deviation analysis
and personal record detection.
"""
