"""
OPR package (Ordered Pod Reset).

Design goals:
- members are reset one at a time, in ordinal order, never concurrently
- every destructive step is preceded by an audit capture
- run-based artifacts (session log, structured events, status) per execution
"""
