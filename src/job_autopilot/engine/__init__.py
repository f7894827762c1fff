"""Orchestration engine for catalog-driven generate-and-submit runs.

Why not a task queue (Celery / Arq)?
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Only one item is ever in flight, and every step talks to a collaborator that
cannot be cancelled (a remote worker context, a third-party generation API).
What matters is not distribution but ordering: one inbox, one event at a
time, one watchdog, and a dispatch ticket on every completion so late
answers are dropped. A single ``asyncio`` pump gives exactly that without a
broker.
"""
