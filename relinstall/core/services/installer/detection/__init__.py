"""
L3 Detection — read-only host checks.

These functions READ system state but never WRITE.
"""
