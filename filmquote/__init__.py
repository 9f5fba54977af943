"""
Window film estimate service.

Pricing engine (pricing_engine.py) over a read-only rate table
(rate_table.py), with a thin FastAPI shell (main.py) for previews and
lead submissions.
"""
