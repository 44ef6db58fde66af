"""
Serenity Infrastructure Layer

Audit emission and metrics. Collaborators of the detection engine
that may perform I/O.
"""
